"""Man page processing utilities."""
from __future__ import annotations

from .errors import ManualsError, MalformedEntry, InvalidPageStructure, ProcessError
from .apropos import ManEntry, parse_apropos_line, parse_apropos_listing, format_address, parse_address
from .xrefs import TextSpan, scan_cross_references, find_cross_references
from .folding import FoldRegion, is_heading, fold_regions
from .text import split_lines, strip_overstrike, page_title
from .discovery import fetch_page, list_all

__all__ = [
    'ManualsError',
    'MalformedEntry',
    'InvalidPageStructure',
    'ProcessError',
    'ManEntry',
    'parse_apropos_line',
    'parse_apropos_listing',
    'format_address',
    'parse_address',
    'TextSpan',
    'scan_cross_references',
    'find_cross_references',
    'FoldRegion',
    'is_heading',
    'fold_regions',
    'split_lines',
    'strip_overstrike',
    'page_title',
    'fetch_page',
    'list_all',
]
