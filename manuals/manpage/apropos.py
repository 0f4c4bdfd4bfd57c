"""Apropos line parsing and page addressing."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from ..config import URI_SCHEME
from .errors import MalformedEntry

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManEntry:
    """A manual page identified by name and section, e.g. ls (1)."""
    name: str
    section: str

    def __str__(self) -> str:
        return f"{self.name} ({self.section})"


def parse_apropos_line(line: str) -> ManEntry:
    """Parse one line of `man -k` output.

    'git-annotate (1) - Annotate file lines' -> ManEntry('git-annotate', '1')

    Raises:
        MalformedEntry: if the line has no '(' or no closing ')', or the
            name or section comes out empty.
    """
    head, paren, tail = line.partition('(')
    if not paren:
        raise MalformedEntry(line)

    name = head.strip()
    if not name:
        raise MalformedEntry(line, "empty name")
    if ')' in name:
        raise MalformedEntry(line, "parenthesis in name")

    section, closing, _ = tail.partition(')')
    if not closing:
        raise MalformedEntry(line, "unterminated section")
    if not section:
        raise MalformedEntry(line, "empty section")

    return ManEntry(name=name, section=section)


def parse_apropos_listing(lines: Iterable[str]) -> List[Tuple[ManEntry, str]]:
    """Parse a whole `man -k` listing, skipping lines that do not parse.

    Returns (entry, line) pairs in listing order.
    """
    entries = []
    skipped = 0
    for line in lines:
        if not line.strip():
            continue
        try:
            entries.append((parse_apropos_line(line), line))
        except MalformedEntry as e:
            skipped += 1
            log.debug("Skipping apropos line: %s", e)

    if skipped:
        log.debug("Skipped %d malformed apropos lines", skipped)
    return entries


def format_address(entry: ManEntry) -> str:
    """Build the address of a page: 'man:ls (1)'."""
    return f"{URI_SCHEME}:{entry.name} ({entry.section})"


def parse_address(address: str) -> ManEntry:
    """Parse a page address. The 'man:' scheme prefix is optional."""
    prefix = URI_SCHEME + ':'
    if address.startswith(prefix):
        address = address[len(prefix):]
    return parse_apropos_line(address)
