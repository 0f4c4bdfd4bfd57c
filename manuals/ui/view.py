"""Screen-independent state for the picker and the pager."""
from __future__ import annotations

from typing import List, Optional, Set, Tuple

from ..manpage import FoldRegion, ManEntry
from ..page import ManualPage

Listing = List[Tuple[ManEntry, str]]


def filter_listing(listing: Listing, query: str) -> Listing:
    """Keep the listing lines containing every word of query (case-insensitive)."""
    words = query.lower().split()
    if not words:
        return list(listing)
    return [item for item in listing if all(w in item[1].lower() for w in words)]


def entry_description(line: str) -> str:
    """Description part of an apropos line: 'ls (1) - list directory' -> 'list directory'."""
    _, _, rest = line.partition(')')
    rest = rest.strip()
    for separator in ['- ', '– ', '— ']:
        if rest.startswith(separator):
            return rest[len(separator):].strip()
    return rest


class PageView:
    """Cursor, scrolling, folding and link selection over one page."""

    def __init__(self, page: ManualPage):
        self.page = page
        self.collapsed: Set[int] = set()  # start lines of collapsed regions
        self.cursor = 0  # index into visible_lines()
        self.top = 0
        self.selected_link: Optional[int] = None  # index into page.links

    def visible_lines(self) -> List[int]:
        """Line numbers shown on screen, with collapsed region bodies hidden."""
        hidden = set()
        for region in self.page.folds or []:
            if region.start_line in self.collapsed:
                hidden.update(range(region.start_line + 1, region.end_line + 1))
        return [i for i in range(len(self.page.lines)) if i not in hidden]

    def current_line(self) -> int:
        visible = self.visible_lines()
        if not visible:
            return 0
        return visible[min(self.cursor, len(visible) - 1)]

    def region_state(self, line: int) -> Optional[bool]:
        """None if line does not start a region, else whether it is collapsed."""
        for region in self.page.folds or []:
            if region.start_line == line:
                return line in self.collapsed
        return None

    def _move_to_line(self, line: int):
        visible = self.visible_lines()
        if line in visible:
            self.cursor = visible.index(line)

    # Movement

    def move(self, delta: int):
        count = len(self.visible_lines())
        self.cursor = max(0, min(self.cursor + delta, count - 1))
        self.selected_link = None

    def go_top(self):
        self.cursor = 0
        self.selected_link = None

    def go_bottom(self):
        self.cursor = max(0, len(self.visible_lines()) - 1)
        self.selected_link = None

    def scroll_into_view(self, height: int):
        """Adjust the first displayed row so the cursor is on screen."""
        if height <= 0:
            return
        if self.cursor < self.top:
            self.top = self.cursor
        elif self.cursor >= self.top + height:
            self.top = self.cursor - height + 1
        self.top = max(0, min(self.top, max(0, len(self.visible_lines()) - height)))

    # Folding

    def toggle_fold(self) -> Optional[FoldRegion]:
        """Collapse or expand the region under the cursor."""
        region = self.page.region_at(self.current_line())
        if region is None:
            return None
        if region.start_line in self.collapsed:
            self.collapsed.discard(region.start_line)
        else:
            self.collapsed.add(region.start_line)
            self._drop_hidden_link()
        self._move_to_line(region.start_line)
        return region

    def toggle_all(self) -> bool:
        """Expand everything if anything is collapsed, else collapse every region."""
        if not self.page.can_fold:
            return False
        line = self.current_line()
        if self.collapsed:
            self.collapsed.clear()
        else:
            self.collapsed = {region.start_line for region in self.page.folds}
            self._drop_hidden_link()
            region = self.page.region_at(line)
            if region is not None:
                line = region.start_line
        self._move_to_line(line)
        return True

    # Links

    def visible_links(self) -> List[int]:
        visible = set(self.visible_lines())
        return [i for i, (span, _) in enumerate(self.page.links) if span.line in visible]

    def _drop_hidden_link(self):
        if self.selected_link is not None and self.selected_link not in self.visible_links():
            self.selected_link = None

    def next_link(self, step: int = 1) -> Optional[ManEntry]:
        """Select the next (or previous, step=-1) visible link, wrapping around."""
        candidates = self.visible_links()
        if not candidates:
            self.selected_link = None
            return None

        if self.selected_link in candidates:
            pos = (candidates.index(self.selected_link) + step) % len(candidates)
        else:
            # Start from the cursor line
            line = self.current_line()
            after = [i for i in candidates if self.page.links[i][0].line >= line]
            before = [i for i in candidates if self.page.links[i][0].line < line]
            if step > 0:
                start = after[0] if after else candidates[0]
            else:
                start = before[-1] if before else candidates[-1]
            pos = candidates.index(start)

        self.selected_link = candidates[pos]
        span, target = self.page.links[self.selected_link]
        self._move_to_line(span.line)
        return target

    def selected_target(self) -> Optional[ManEntry]:
        if self.selected_link is None:
            return None
        return self.page.links[self.selected_link][1]
