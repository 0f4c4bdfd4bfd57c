"""A rendered man page together with its links and folding regions."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .manpage import (
    FoldRegion,
    InvalidPageStructure,
    ManEntry,
    TextSpan,
    fetch_page,
    find_cross_references,
    fold_regions,
    split_lines,
)

log = logging.getLogger(__name__)


@dataclass
class ManualPage:
    """Everything the viewers need to display one page."""
    entry: ManEntry
    text: str
    lines: List[str]
    links: List[Tuple[TextSpan, ManEntry]]
    folds: Optional[List[FoldRegion]] = None  # None when folding is unavailable

    @property
    def can_fold(self) -> bool:
        return self.folds is not None

    def links_on(self, line: int) -> List[Tuple[TextSpan, ManEntry]]:
        return [link for link in self.links if link[0].line == line]

    def link_at(self, line: int, column: int) -> Optional[ManEntry]:
        """Return the page referenced at a position, if any."""
        for span, target in self.links_on(line):
            if span.start_column <= column < span.end_column:
                return target
        return None

    def region_at(self, line: int) -> Optional[FoldRegion]:
        """Return the folding region containing a line, if any."""
        for region in self.folds or []:
            if line in region:
                return region
        return None


def analyze_page(entry: ManEntry, text: str) -> ManualPage:
    """Run the cross-reference and folding analyzers over rendered text."""
    lines = split_lines(text)
    links = find_cross_references(lines)

    try:
        folds: Optional[List[FoldRegion]] = fold_regions(lines)
    except InvalidPageStructure as e:
        log.info("Folding unavailable for %s: %s", entry, e)
        folds = None

    return ManualPage(entry=entry, text=text, lines=lines, links=links, folds=folds)


def load_page(entry: ManEntry, fetch_fn: Callable[[str, Optional[str]], str] = fetch_page) -> ManualPage:
    """Fetch and analyze a page.

    Raises:
        ProcessError: if the page cannot be rendered.
    """
    return analyze_page(entry, fetch_fn(entry.name, entry.section or None))
