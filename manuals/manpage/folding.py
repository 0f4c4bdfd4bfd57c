"""Section folding regions for rendered man pages."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Sequence

from .errors import InvalidPageStructure

# Some perl manuals have unusual section names. IO::Socket::IP(3perl) has
# a section called "IO::Socket::INET" INCOMPATIBILITES, quotes included.
HEADING_RE = re.compile(r'''^[A-Z"_.:'][A-Za-z"_.:' ,-]*$''')

# Line 0 is the title and line 1 is blank, so the first section starts on 2.
FIRST_SECTION_LINE = 2
# Footer block: blank line, footer line, blank line, trailing empty line.
FOOTER_LINES = 4


@dataclass(frozen=True)
class FoldRegion:
    """An inclusive range of lines that can be collapsed."""
    start_line: int
    end_line: int

    def __contains__(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line

    def __len__(self) -> int:
        return self.end_line - self.start_line + 1


def is_heading(line: str) -> bool:
    """Check whether a rendered line is a section heading such as 'SEE ALSO'."""
    return HEADING_RE.match(line) is not None


def fold_regions(lines: Sequence[str]) -> List[FoldRegion]:
    """Partition the body of a page into heading-delimited regions.

    The regions are adjacent and together cover every line from
    FIRST_SECTION_LINE through the footer boundary.

    Raises:
        InvalidPageStructure: if no heading is found, or the last heading
            is not above the footer.
    """
    footer = len(lines) - FOOTER_LINES
    regions = []
    fold_start = FIRST_SECTION_LINE
    found_heading = False

    for i in range(FIRST_SECTION_LINE + 1, len(lines)):
        if is_heading(lines[i]):
            regions.append(FoldRegion(fold_start, i - 1))
            fold_start = i
            found_heading = True

    if not found_heading:
        raise InvalidPageStructure(len(lines), fold_start, "no section heading found")
    if fold_start >= footer:
        raise InvalidPageStructure(len(lines), fold_start, "footer precedes last section")

    regions.append(FoldRegion(fold_start, footer))
    return regions
