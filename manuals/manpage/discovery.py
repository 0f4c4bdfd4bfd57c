"""Fetching rendered man pages and the apropos listing."""
from __future__ import annotations

import logging
import os
import subprocess
from typing import Dict, List, Optional

from ..config import MAN_COMMAND, MAN_WIDTH, DEFAULT_TIMEOUT
from .errors import ProcessError
from .text import split_lines, strip_overstrike

log = logging.getLogger(__name__)


def _man_environment() -> Dict[str, str]:
    """Environment for running `man` non-interactively."""
    env = os.environ.copy()
    env['MANWIDTH'] = str(MAN_WIDTH)
    env['MANPAGER'] = 'cat'  # Disable pager
    env['GROFF_NO_SGR'] = '1'  # No ANSI escapes, only overstrikes
    env.pop('MAN_KEEP_FORMATTING', None)
    return env


def _run_man(args: List[str], timeout: Optional[float] = DEFAULT_TIMEOUT) -> str:
    """Run `man` with the given arguments and return its stdout.

    Raises:
        ProcessError: if `man` cannot be launched, times out, or exits
            with a non-zero status.
    """
    command = [MAN_COMMAND] + args
    log.debug("Running %s", command)
    try:
        result = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors='replace',
            timeout=timeout,
            env=_man_environment()
        )
    except (OSError, subprocess.SubprocessError) as e:
        log.warning("Could not run %s: %s", command, e)
        raise ProcessError(command) from e

    if result.returncode != 0:
        log.warning("%s exited with status %d: %s", command, result.returncode, result.stderr.strip())
        raise ProcessError(command, result.returncode)

    return result.stdout


def fetch_page(name: str, section: Optional[str] = None, timeout: Optional[float] = DEFAULT_TIMEOUT) -> str:
    """Render a man page to plain text.

    Args:
        name: Page name, e.g. 'ls'
        section: Section, e.g. '1'. If None, `man` picks the first match.
        timeout: Seconds to wait for `man`.

    Returns:
        The rendered page with overstrike formatting removed.
    """
    args = [section, name] if section else [name]
    return strip_overstrike(_run_man(args, timeout=timeout))


def list_all(timeout: Optional[float] = DEFAULT_TIMEOUT) -> List[str]:
    """Return every line of `man -k ''`, the listing of all installed pages."""
    return split_lines(_run_man(['-k', ''], timeout=timeout))
