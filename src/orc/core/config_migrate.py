"""
Config format migrations.

The format version is the explicit ``config_version`` key; it is never
guessed from which fields happen to be present. A file without the key
predates versioning and is version 1.

  v1  flat keys:   workspace_dir, worktrees_dir, session_prefix, editor, log_level
  v2  renamed:     workspace_root, worktree_root, session_prefix, editor_command,
                   log_level
  v3  sectioned:   [paths] workspace_root, worktree_root, home_dir
                   [tmux] session_prefix, editor_command, imp_command
                   [logging] level, format

Each step is a pure function from one version's dict to the next. Unknown
keys are carried through untouched.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

from orc.core.exceptions import ConfigError

CURRENT_CONFIG_VERSION = 3

_UNVERSIONED = 1

_V1_RENAMES: dict[str, str] = {
    "workspace_dir": "workspace_root",
    "worktrees_dir": "worktree_root",
    "editor": "editor_command",
}

# v2 flat key → (v3 section, v3 key)
_V3_SECTIONS: dict[str, tuple[str, str]] = {
    "workspace_root": ("paths", "workspace_root"),
    "worktree_root": ("paths", "worktree_root"),
    "home_dir": ("paths", "home_dir"),
    "session_prefix": ("tmux", "session_prefix"),
    "editor_command": ("tmux", "editor_command"),
    "imp_command": ("tmux", "imp_command"),
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
}


def detect_version(data: dict[str, Any]) -> int:
    """Return the declared format version (1 when undeclared)."""
    raw = data.get("config_version", _UNVERSIONED)
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ConfigError(f"config_version must be an integer, got {raw!r}")
    return raw


def _v1_to_v2(data: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in data.items():
        out[_V1_RENAMES.get(key, key)] = value
    return out


def _v2_to_v3(data: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in data.items():
        if key in _V3_SECTIONS:
            section, new_key = _V3_SECTIONS[key]
            out.setdefault(section, {})[new_key] = value
        else:
            out[key] = value
    return out


# from_version → step producing from_version + 1
_MIGRATIONS: dict[int, Callable[[dict[str, Any]], dict[str, Any]]] = {
    1: _v1_to_v2,
    2: _v2_to_v3,
}


def upgrade_config(data: dict[str, Any], from_version: int, to_version: int) -> dict[str, Any]:
    """
    Upgrade *data* one version at a time from *from_version* to *to_version*.

    Returns *data* itself when the versions are equal; otherwise a new dict
    stamped with *to_version*. The input is never mutated.

    Raises:
        ConfigError: on a downgrade request or a missing migration step.
    """
    if from_version == to_version:
        return data
    if from_version > to_version:
        raise ConfigError(
            f"Downgrade from config v{from_version} to v{to_version} is not supported"
        )

    result = copy.deepcopy(data)
    for version in range(from_version, to_version):
        step = _MIGRATIONS.get(version)
        if step is None:
            raise ConfigError(f"No migration path from config v{version} to v{version + 1}")
        result = step(result)
        result["config_version"] = version + 1
    return result
