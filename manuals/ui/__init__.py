"""Terminal user interface."""
from __future__ import annotations

from .tui import run_tui

__all__ = ['run_tui']
