"""orc constants: identifier prefixes, filesystem layout, and tmux conventions."""

from __future__ import annotations

import os
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Platform-specific config directory
# ---------------------------------------------------------------------------


def _default_data_dir() -> Path:
    """
    Return the platform-appropriate orc data directory.

    macOS : ~/Library/Application Support/orc
    Linux : ~/.config/orc  (or $XDG_CONFIG_HOME/orc)
    Other : ~/.orc
    """
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "orc"
    if sys.platform.startswith("linux"):
        xdg = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
        return xdg / "orc"
    return Path.home() / ".orc"


CONFIG_FILENAME = "config.toml"

# ---------------------------------------------------------------------------
# Identifier prefixes (PREFIX-NNN)
# ---------------------------------------------------------------------------

MISSION_PREFIX = "MISSION"
COMMISSION_PREFIX = "COMMISSION"
REPO_PREFIX = "REPO"
PR_PREFIX = "PR"

ID_NUMBER_WIDTH = 3
INVALID_ID_NUMBER = -1

# ---------------------------------------------------------------------------
# Workspace layout
# ---------------------------------------------------------------------------

GROVES_DIR_NAME = "groves"
ORC_DIR_NAME = ".orc"
GROVE_CONFIG_FILENAME = "config.json"
WORKSHOPS_DIR_NAME = "ws"

DIR_MODE = 0o755
FILE_MODE = 0o644

# Version string stamped into generated grove/workbench config.json files.
GROVE_CONFIG_VERSION = "1.0"

# ---------------------------------------------------------------------------
# tmux conventions
# ---------------------------------------------------------------------------

SESSION_PREFIX = "orc-"
GATEHOUSE_WINDOW_NAME = "orc"
EDITOR_PANE = 1
IMP_PANE = 2
DEFAULT_EDITOR_COMMAND = "vim"
DEFAULT_IMP_COMMAND = 'claude "Run the orc prime command to get context"'
