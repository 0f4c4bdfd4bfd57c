"""Cross-reference detection in rendered man page text."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from .apropos import ManEntry, parse_apropos_line

# ASCII only: the section is a single digit and names are plain identifiers.
CROSS_REFERENCE_RE = re.compile(r'[a-z][\w-]+\(\d\)', re.ASCII)


@dataclass(frozen=True)
class TextSpan:
    """A run of characters on a single line."""
    line: int
    start_column: int
    length: int

    @property
    def end_column(self) -> int:
        return self.start_column + self.length

    def text_in(self, lines: Sequence[str]) -> str:
        return lines[self.line][self.start_column:self.end_column]


def scan_cross_references(lines: Sequence[str]) -> Iterator[TextSpan]:
    """Yield a span for every `name(section)` reference, line by line.

    Matching is per line. Rendered text wraps long lines, so a reference
    whose name ends one line and whose '(1)' starts the next is never
    seen as a whole; only what is on a single line can match.
    """
    for i, line in enumerate(lines):
        for match in CROSS_REFERENCE_RE.finditer(line):
            yield TextSpan(line=i, start_column=match.start(), length=len(match.group()))


def find_cross_references(lines: Sequence[str]) -> List[Tuple[TextSpan, ManEntry]]:
    """Return each reference span paired with the page it points to."""
    return [
        (span, parse_apropos_line(span.text_in(lines)))
        for span in scan_cross_references(lines)
    ]
