"""Error kinds raised while reading and analyzing man pages."""
from __future__ import annotations

from typing import Optional, Sequence


class ManualsError(Exception):
    """Base class for every manuals failure."""


class MalformedEntry(ManualsError, ValueError):
    """Raised when a line has no parseable `name (section)` structure."""

    def __init__(self, line: str, reason: str = "no parenthesized section"):
        self.line = line
        self.reason = reason
        super().__init__(f"malformed entry {line!r}: {reason}")


class InvalidPageStructure(ManualsError, ValueError):
    """Raised when a page has no usable section headings for folding."""

    def __init__(self, line_count: int, fold_start: int, reason: str):
        self.line_count = line_count
        self.fold_start = fold_start
        self.reason = reason
        super().__init__(f"invalid man page structure: {reason}")


class ProcessError(ManualsError, RuntimeError):
    """Raised when the manual renderer cannot be run or exits abnormally."""

    def __init__(self, command: Sequence[str], returncode: Optional[int] = None):
        self.command = list(command)
        self.returncode = returncode
        super().__init__("manual renderer unavailable")
