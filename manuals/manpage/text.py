"""Text helpers shared by the man page analyzers."""
from __future__ import annotations

from typing import List, Sequence


def split_lines(text: str) -> List[str]:
    """Split rendered page text into lines.

    Only '\\n' separates lines. Form feeds and the other separators that
    str.splitlines() honours show up inside rendered pages and must stay
    part of their line, otherwise line numbers drift from the raw text.
    """
    return text.split('\n')


def strip_overstrike(text: str) -> str:
    """Remove backspace overstrike sequences (bold and underline)."""
    if '\x08' not in text:
        return text

    result = []
    for char in text:
        if char == '\x08':
            if result:
                result.pop()
        else:
            result.append(char)

    return ''.join(result)


def page_title(lines: Sequence[str]) -> str:
    """Return the page's title line, e.g. 'LS(1)  User Commands  LS(1)'."""
    for line in lines:
        stripped = line.strip()
        if stripped:
            return stripped
    return ''
