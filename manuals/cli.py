"""Command-line interface for manuals."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import RENDERER_HINT
from .init_manager import InitializationManager, Listing
from .manpage import (
    ManEntry,
    ManualsError,
    MalformedEntry,
    list_all,
    parse_address,
    parse_apropos_listing,
)
from .page import ManualPage, load_page


def load_listing() -> Listing:
    """List every installed page as (entry, apropos line) pairs."""
    return parse_apropos_listing(list_all())


def resolve_entry(page: str, section: Optional[str] = None) -> ManEntry:
    """Turn a command-line page argument into an entry.

    'ls' with section '1', 'ls(1)' and 'man:ls (1)' all resolve to ls (1).
    A bare name without a section resolves to an entry with an empty
    section, which lets `man` pick the first match.
    """
    if '(' in page:
        entry = parse_address(page)
        if section and section != entry.section:
            raise MalformedEntry(page, f"section {section} conflicts with address")
        return entry
    if not page.strip():
        raise MalformedEntry(page, "empty name")
    return ManEntry(name=page.strip(), section=section or '')


def print_listing(listing: Listing):
    """Print every parseable apropos entry (non-TUI mode)."""
    if not listing:
        print("No manual pages found.")
        return
    for entry, _ in listing:
        print(entry)


def print_links(page: ManualPage):
    for span, target in page.links:
        print(f"{span.line + 1}:{span.start_column + 1}\t{target.name}({target.section})")


def print_folds(page: ManualPage):
    if not page.can_fold:
        print("Folding unavailable for this page.", file=sys.stderr)
        return
    for region in page.folds:
        heading = page.lines[region.start_line].strip()
        print(f"{region.start_line + 1}-{region.end_line + 1}\t{heading}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse Unix manual pages with cross-reference links and section folding.",
        epilog="Example: manuals 'git-annotate(1)' --links --no-tui"
    )
    parser.add_argument("page", nargs='?', help="Page name or address (e.g. 'ls', 'ls(1)', 'man:ls (1)')")
    parser.add_argument("-s", "--section", help="Manual section (e.g. 1, 3, 8)")
    parser.add_argument("--list", action="store_true", help="Print every installed page and exit")
    parser.add_argument("--links", action="store_true", help="Print the page's cross-references")
    parser.add_argument("--folds", action="store_true", help="Print the page's section folding regions")
    parser.add_argument("--no-tui", action="store_true", help="Print to stdout instead of launching TUI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s"
    )

    try:
        entry = resolve_entry(args.page, args.section) if args.page else None

        # Non-TUI mode
        if args.list:
            print_listing(load_listing())
            return 0

        if args.no_tui or args.links or args.folds:
            if entry is None:
                print("Error: page required when using --no-tui, --links or --folds")
                print("Usage: manuals PAGE [--links] [--folds] --no-tui")
                return 2
            page = load_page(entry)
            if args.links or args.folds:
                if args.links:
                    print_links(page)
                if args.folds:
                    print_folds(page)
            else:
                sys.stdout.write(page.text)
            return 0

        # TUI mode
        from .ui import run_tui

        if not args.verbose:
            # Keep warnings from drawing over the curses screen
            logging.getLogger().setLevel(logging.CRITICAL)

        initial_page = load_page(entry) if entry else None
        run_tui(
            open_fn=load_page,
            init_manager=InitializationManager(),
            load_listing_fn=load_listing,
            initial_page=initial_page,
        )
        return 0

    except MalformedEntry as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except ManualsError as e:
        print(f"error: {e} ({RENDERER_HINT})", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
