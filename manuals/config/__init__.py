"""Configuration and constants for manuals."""
from __future__ import annotations

import os

# Manual renderer
MAN_COMMAND = os.environ.get('MANUALS_MAN_COMMAND', 'man')
MAN_WIDTH = int(os.environ.get('MANUALS_WIDTH', '80'))
DEFAULT_TIMEOUT = float(os.environ.get('MANUALS_TIMEOUT', '30'))

# Page addresses look like 'man:ls (1)'
URI_SCHEME = 'man'

# Shown when the renderer cannot be run
RENDERER_HINT = "is man installed?"

# TUI
NAME_COLUMN_WIDTH = 24
HISTORY_LIMIT = 50
