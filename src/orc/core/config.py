"""orc configuration: Pydantic model, load, save, and format migration."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import Any

import structlog
from pydantic import BaseModel, Field, field_validator

from orc.core.config_migrate import CURRENT_CONFIG_VERSION, detect_version, upgrade_config
from orc.core.constants import (
    CONFIG_FILENAME,
    DEFAULT_EDITOR_COMMAND,
    DEFAULT_IMP_COMMAND,
    SESSION_PREFIX,
    _default_data_dir,
)
from orc.core.exceptions import ConfigError, ConfigNotFoundError

logger = structlog.get_logger()

# ---------------------------------------------------------------------------
# Sub-models
# ---------------------------------------------------------------------------


class PathsConfig(BaseModel):
    workspace_root: str = "~/src/missions"
    worktree_root: str = "~/src/worktrees"
    home_dir: str = ""  # empty → the user's home directory

    @field_validator("workspace_root", "worktree_root")
    @classmethod
    def reject_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("path must not be empty")
        return v


class TmuxConfig(BaseModel):
    session_prefix: str = SESSION_PREFIX
    editor_command: str = DEFAULT_EDITOR_COMMAND
    imp_command: str = DEFAULT_IMP_COMMAND

    @field_validator("session_prefix")
    @classmethod
    def validate_session_prefix(cls, v: str) -> str:
        # ':' and '.' are tmux target separators.
        if not v or any(ch in v for ch in ":. "):
            raise ValueError("session_prefix must be non-empty and contain no ':', '.' or spaces")
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "text"  # "text" | "json"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ("text", "json"):
            raise ValueError("Log format must be 'text' or 'json'")
        return v


# ---------------------------------------------------------------------------
# Root config
# ---------------------------------------------------------------------------


class OrcConfig(BaseModel):
    """Root orc configuration model."""

    config_version: int = CURRENT_CONFIG_VERSION
    paths: PathsConfig = Field(default_factory=PathsConfig)
    tmux: TmuxConfig = Field(default_factory=TmuxConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def home_path(self) -> Path:
        if self.paths.home_dir:
            return Path(self.paths.home_dir).expanduser()
        return Path.home()

    def _expand(self, raw: str) -> str:
        if raw == "~" or raw.startswith("~/"):
            return str(PurePosixPath(self.home_path) / raw[2:])
        return raw

    @property
    def worktree_root(self) -> str:
        return self._expand(self.paths.worktree_root)

    def workspace_path(self, unit_id: str) -> str:
        """``{workspace_root}/{unit_id}`` with ``~`` resolved against ``home_path``."""
        return str(PurePosixPath(self._expand(self.paths.workspace_root)) / unit_id)


# ---------------------------------------------------------------------------
# Load / save
# ---------------------------------------------------------------------------


def _config_file_path() -> Path:
    if env_path := os.environ.get("ORC_CONFIG"):
        return Path(env_path)
    return _default_data_dir() / CONFIG_FILENAME


def load_config(path: Path | str | None = None) -> OrcConfig:
    """
    Load OrcConfig from TOML, overlaid with environment variables.

    Priority (highest to lowest):
      1. Environment variables (ORC_*)
      2. Config file (platform data dir / config.toml, or $ORC_CONFIG)

    Files written by an older format are upgraded in place first.
    """
    import tomllib

    cfg_path = Path(path) if path is not None else _config_file_path()

    if not cfg_path.exists():
        raise ConfigNotFoundError(f"orc is not configured (config file not found: {cfg_path})")

    try:
        with open(cfg_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {cfg_path}: {exc}") from exc

    detected = detect_version(data)
    if detected < CURRENT_CONFIG_VERSION:
        data = upgrade_config(data, detected, CURRENT_CONFIG_VERSION)
        save_config(data, cfg_path)
        logger.info(
            "config_upgraded",
            path=str(cfg_path),
            from_version=detected,
            to_version=CURRENT_CONFIG_VERSION,
        )
    elif detected > CURRENT_CONFIG_VERSION:
        raise ConfigError(
            f"Config {cfg_path} is version {detected}; this orc understands up to "
            f"{CURRENT_CONFIG_VERSION}"
        )

    _apply_env_overrides(data)

    try:
        return OrcConfig.model_validate(data)
    except ValueError as exc:
        raise ConfigError(f"Invalid config at {cfg_path}: {exc}") from exc


def _apply_env_overrides(data: dict[str, Any]) -> None:
    """Overlay ORC_* environment variables onto parsed TOML."""
    overrides: list[tuple[str, str, str]] = [
        ("ORC_WORKSPACE_ROOT", "paths", "workspace_root"),
        ("ORC_WORKTREE_ROOT", "paths", "worktree_root"),
        ("ORC_HOME_DIR", "paths", "home_dir"),
        ("ORC_SESSION_PREFIX", "tmux", "session_prefix"),
        ("ORC_EDITOR", "tmux", "editor_command"),
        ("ORC_IMP_COMMAND", "tmux", "imp_command"),
        ("ORC_LOG_LEVEL", "logging", "level"),
        ("ORC_LOG_FORMAT", "logging", "format"),
    ]
    for env_name, section, key in overrides:
        if value := os.environ.get(env_name, ""):
            data.setdefault(section, {})[key] = value


def save_config(config_data: dict[str, Any], path: Path | None = None) -> Path:
    """Write config dict to TOML file with secure permissions (0600)."""
    import tomli_w

    cfg_path = path or _config_file_path()
    cfg_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

    config_data.setdefault("config_version", CURRENT_CONFIG_VERSION)

    # Write atomically
    tmp_path = cfg_path.with_suffix(".tmp")
    try:
        with open(tmp_path, "wb") as f:
            tomli_w.dump(config_data, f)
        tmp_path.rename(cfg_path)
    except (OSError, TypeError, ValueError) as exc:
        tmp_path.unlink(missing_ok=True)
        raise ConfigError(f"Cannot write config to {cfg_path}: {exc}") from exc

    cfg_path.chmod(0o600)
    return cfg_path
