"""Main TUI application logic."""
from __future__ import annotations

import curses
from typing import Callable, List, Optional

from ..config import HISTORY_LIMIT, NAME_COLUMN_WIDTH, RENDERER_HINT
from ..init_manager import InitializationManager, InitStage, Listing
from ..manpage import ManEntry, ProcessError, page_title
from ..page import ManualPage
from .view import PageView, entry_description, filter_listing

SPINNER_CHARS = ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']


def _init_colors():
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(1, curses.COLOR_BLUE, -1)         # Title/headers/accents - blue
    curses.init_pair(2, 240, -1)                        # Help text - dim gray
    curses.init_pair(3, curses.COLOR_BLUE, -1)         # Selection text - blue
    curses.init_pair(4, curses.COLOR_BLUE, -1)         # Search label - blue
    curses.init_pair(5, curses.COLOR_RED, -1)          # Errors - red
    curses.init_pair(6, -1, -1)                         # Page text - default terminal color
    curses.init_pair(7, 244, -1)                        # Descriptions - medium gray
    curses.init_pair(8, curses.COLOR_CYAN, -1)         # Links - cyan
    curses.init_pair(9, curses.COLOR_YELLOW, -1)       # Spinner - yellow


def _addstr(stdscr, y: int, x: int, text: str, attr: int = 0):
    """Write text clipped to the screen; curses raises on the last cell."""
    height, width = stdscr.getmaxyx()
    if y < 0 or y >= height or x >= width:
        return
    try:
        stdscr.addstr(y, x, text[:max(0, width - x - 1)], attr)
    except curses.error:
        pass


def _read_query(stdscr, width: int, first_key: Optional[int] = None) -> Optional[str]:
    """Read a search query on the search line. Returns None if cancelled."""
    curses.noecho()  # Disable echo, we'll handle it manually
    curses.curs_set(1)
    _addstr(stdscr, 2, 2, " " * (width - 4))  # Clear line
    _addstr(stdscr, 2, 2, "› ", curses.color_pair(4) | curses.A_BOLD)
    stdscr.refresh()

    input_win = curses.newwin(1, width - 8, 2, 4)
    input_win.keypad(True)

    query = ""
    if first_key is not None:
        query = chr(first_key)
        input_win.addch(chr(first_key))

    while True:
        ch = input_win.getch()
        if ch == 27:  # ESC
            query = None
            break
        elif ch == ord('\n') or ch == 10:  # Enter
            break
        elif ch == curses.KEY_BACKSPACE or ch == 127 or ch == 8:  # Backspace
            if query:
                query = query[:-1]
                y, x = input_win.getyx()
                if x > 0:
                    input_win.move(y, x - 1)
                    input_win.delch()
        elif ch == curses.KEY_DOWN:  # Down arrow - exit to results
            break
        elif 32 <= ch <= 126:  # Printable character
            query += chr(ch)
            input_win.addch(chr(ch))
        input_win.refresh()

    del input_win
    curses.curs_set(0)
    return query


def _draw_page(stdscr, view: PageView, list_start_y: int, list_height: int):
    """Draw the visible part of a page with fold markers and links."""
    page = view.page
    visible = view.visible_lines()
    view.scroll_into_view(list_height)
    selected_span = page.links[view.selected_link][0] if view.selected_link is not None else None

    for row in range(list_height):
        idx = view.top + row
        if idx >= len(visible):
            break
        line_no = visible[idx]
        line = page.lines[line_no]
        y = list_start_y + row

        if idx == view.cursor:
            _addstr(stdscr, y, 0, "▶", curses.color_pair(3) | curses.A_BOLD)

        state = view.region_state(line_no)
        if state is not None:
            marker = "▸" if state else "▾"
            _addstr(stdscr, y, 2, marker, curses.color_pair(1))

        text_x = 4
        _addstr(stdscr, y, text_x, line, curses.color_pair(6))

        for span, _ in page.links_on(line_no):
            attr = curses.color_pair(8) | curses.A_UNDERLINE
            if span == selected_span:
                attr = curses.color_pair(3) | curses.A_REVERSE | curses.A_BOLD
            _addstr(stdscr, y, text_x + span.start_column, span.text_in(page.lines), attr)


def _draw_listing(stdscr, results: Listing, selected_idx: int, current_page: int,
                  list_start_y: int, list_height: int):
    """Draw one page of picker results."""
    page_start = current_page * list_height
    page_end = min(page_start + list_height, len(results))

    for i, result_idx in enumerate(range(page_start, page_end)):
        entry, line = results[result_idx]
        y = list_start_y + i
        is_selected = result_idx == selected_idx

        if is_selected:
            _addstr(stdscr, y, 2, "▶ ", curses.color_pair(3) | curses.A_BOLD)

        name_x = 4
        name_color = curses.color_pair(3) if is_selected else curses.color_pair(6)
        _addstr(stdscr, y, name_x, str(entry), name_color | curses.A_BOLD)

        desc_x = name_x + NAME_COLUMN_WIDTH
        desc_color = curses.color_pair(3) if is_selected else curses.color_pair(7)
        _addstr(stdscr, y, desc_x, entry_description(line), desc_color)


def run_tui(
    open_fn: Callable[[ManEntry], ManualPage],
    init_manager: InitializationManager,
    load_listing_fn: Callable[[], Listing],
    initial_page: Optional[ManualPage] = None,
    initial_query: str = "",
):
    """Run the curses-based TUI.

    Args:
        open_fn: Fetch and analyze a page callback(entry) -> ManualPage
        init_manager: Loads the apropos listing in the background
        load_listing_fn: Listing function handed to init_manager
        initial_page: Page to show first; the picker is shown if None
        initial_query: Initial picker filter
    """
    if open_fn is None:
        raise ValueError("open_fn callback is required")

    def main_loop(stdscr):
        _init_colors()

        query = initial_query
        results: List = []
        results_query = None  # query the results were filtered with
        selected_idx = 0
        current_page = 0
        history: List[PageView] = []
        view: Optional[PageView] = PageView(initial_page) if initial_page else None
        status_message = ""
        if initial_page is not None and not initial_page.can_fold:
            status_message = "folding unavailable for this page"
        spinner_idx = 0

        # Hide cursor by default
        curses.curs_set(0)

        # Non-blocking input so the spinner animates while listing
        stdscr.nodelay(True)
        stdscr.timeout(100)

        def ensure_listing():
            if init_manager.get_status().stage == InitStage.NOT_STARTED:
                init_manager.start_initialization(load_listing_fn)

        def open_entry(entry: ManEntry) -> Optional[PageView]:
            nonlocal status_message
            try:
                page = open_fn(entry)
            except ProcessError as e:
                status_message = f"{entry}: {e} ({RENDERER_HINT})"
                return None
            status_message = "" if page.can_fold else "folding unavailable for this page"
            return PageView(page)

        if view is None:
            ensure_listing()

        while True:
            stdscr.erase()
            height, width = stdscr.getmaxyx()
            list_start_y = 4 if view is None else 2
            list_height = max(1, height - list_start_y - 2)

            is_listing = view is None and not init_manager.is_complete() and not init_manager.is_error()

            if view is None and init_manager.is_complete() and results_query != query:
                results = filter_listing(init_manager.get_listing(), query)
                results_query = query
                selected_idx = 0
                current_page = 0

            # Header
            if view is None:
                _addstr(stdscr, 0, 2, "◉ manuals", curses.color_pair(1) | curses.A_BOLD)
            else:
                _addstr(stdscr, 0, 2, page_title(view.page.lines) or str(view.page.entry),
                        curses.color_pair(1) | curses.A_BOLD)

            if is_listing:
                status = init_manager.get_status()
                spinner = SPINNER_CHARS[spinner_idx % len(SPINNER_CHARS)]
                status_text = f"{spinner} {status.message}"
                _addstr(stdscr, 0, width - len(status_text) - 2, status_text, curses.color_pair(9))
                spinner_idx += 1
            elif view is None and results:
                count_text = f"{len(results)} pages"
                _addstr(stdscr, 0, width - len(count_text) - 2, count_text, curses.color_pair(2))
            elif view is not None:
                position = f"{view.current_line() + 1}/{len(view.page.lines)}"
                _addstr(stdscr, 0, width - len(position) - 2, position, curses.color_pair(2))

            _addstr(stdscr, 1, 0, "-" * width, curses.color_pair(2))
            _addstr(stdscr, height - 2, 0, "-" * width, curses.color_pair(2))

            # Body
            if view is not None:
                _draw_page(stdscr, view, list_start_y, list_height)
                help_text = "⇥ next link  │  ⏎ follow  │  z fold  │  Z fold all  │  b back  │  q list"
            elif init_manager.is_error():
                error = init_manager.get_status().error or "listing failed"
                _addstr(stdscr, height // 2, 2, f"{error} ({RENDERER_HINT})", curses.color_pair(5))
                help_text = "q quit"
            elif is_listing:
                help_text = "Listing...  │  q quit"
            else:
                _addstr(stdscr, 2, 2, "› ", curses.color_pair(4) | curses.A_BOLD)
                query_text = query if query else "(press / to filter)"
                query_color = curses.color_pair(0) if query else curses.color_pair(2)
                _addstr(stdscr, 2, 4, query_text, query_color)
                total_pages = max(1, (len(results) + list_height - 1) // list_height)
                current_page = max(0, min(current_page, total_pages - 1))
                _draw_listing(stdscr, results, selected_idx, current_page,
                              list_start_y, list_height)
                help_text = "/ filter  │  ↑↓ navigate  │  ⏎ open  │  q quit"

            if status_message:
                _addstr(stdscr, height - 1, 2, status_message, curses.color_pair(5))
            else:
                _addstr(stdscr, height - 1, 2, help_text, curses.color_pair(2))

            stdscr.refresh()

            try:
                key = stdscr.getch()
            except KeyboardInterrupt:
                break

            if key == -1:
                continue
            status_message = ""

            # Pager keys
            if view is not None:
                if key == ord('q'):
                    view = None
                    history.clear()
                    ensure_listing()
                elif key in (curses.KEY_DOWN, ord('j')):
                    view.move(1)
                elif key in (curses.KEY_UP, ord('k')):
                    view.move(-1)
                elif key in (curses.KEY_NPAGE, ord(' '), ord('f')):
                    view.move(list_height)
                elif key in (curses.KEY_PPAGE, ord('-')):
                    view.move(-list_height)
                elif key in (curses.KEY_HOME, ord('g')):
                    view.go_top()
                elif key in (curses.KEY_END, ord('G')):
                    view.go_bottom()
                elif key == 9:  # Tab
                    view.next_link(1)
                elif key == curses.KEY_BTAB:
                    view.next_link(-1)
                elif key == ord('z'):
                    if not view.page.can_fold:
                        status_message = "folding unavailable for this page"
                    else:
                        view.toggle_fold()
                elif key == ord('Z'):
                    if not view.toggle_all():
                        status_message = "folding unavailable for this page"
                elif key in (ord('\n'), curses.KEY_ENTER, 10):
                    target = view.selected_target()
                    if target is not None:
                        new_view = open_entry(target)
                        if new_view is not None:
                            history.append(view)
                            del history[:-HISTORY_LIMIT]
                            view = new_view
                elif key in (ord('b'), curses.KEY_BACKSPACE, 127, 8):
                    if history:
                        view = history.pop()
                continue

            # Picker keys
            if key == ord('q'):
                break
            if is_listing or init_manager.is_error():
                continue

            if key == ord('/') or (not results and 32 <= key <= 126):
                first_key = None if key == ord('/') else key
                new_query = _read_query(stdscr, width, first_key)
                if new_query is not None:
                    query = new_query.strip()
            elif key in (curses.KEY_DOWN, ord('j'), ord('n')):
                if results:
                    selected_idx = (selected_idx + 1) % len(results)
                    current_page = selected_idx // list_height
            elif key in (curses.KEY_UP, ord('k'), ord('p')):
                if results:
                    selected_idx = (selected_idx - 1) % len(results)
                    current_page = selected_idx // list_height
            elif key in (curses.KEY_RIGHT, curses.KEY_NPAGE, ord('l'), ord('f')):
                if results:
                    total_pages = (len(results) + list_height - 1) // list_height
                    if current_page < total_pages - 1:
                        current_page += 1
                        selected_idx = current_page * list_height
            elif key in (curses.KEY_LEFT, curses.KEY_PPAGE, ord('h'), ord('b')):
                if results and current_page > 0:
                    current_page -= 1
                    selected_idx = current_page * list_height
            elif key in (ord('\n'), curses.KEY_ENTER, 10):
                if results and 0 <= selected_idx < len(results):
                    view = open_entry(results[selected_idx][0])

    curses.wrapper(main_loop)
