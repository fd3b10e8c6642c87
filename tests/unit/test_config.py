"""Unit tests for orc.core.config — OrcConfig loading and validation."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from orc.core.config import LoggingConfig, OrcConfig, PathsConfig, load_config, save_config
from orc.core.exceptions import ConfigError, ConfigNotFoundError

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_config(tmp_path: Path, content: str) -> Path:
    p = tmp_path / "config.toml"
    p.write_text(content)
    return p


MINIMAL_TOML = """
config_version = 3

[paths]
workspace_root = "/srv/missions"
worktree_root = "/srv/worktrees"
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "ORC_CONFIG",
        "ORC_WORKSPACE_ROOT",
        "ORC_WORKTREE_ROOT",
        "ORC_HOME_DIR",
        "ORC_SESSION_PREFIX",
        "ORC_EDITOR",
        "ORC_IMP_COMMAND",
        "ORC_LOG_LEVEL",
        "ORC_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Load config
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_minimal_valid(self, tmp_path: Path) -> None:
        cfg = load_config(_write_config(tmp_path, MINIMAL_TOML))
        assert cfg.paths.workspace_root == "/srv/missions"
        assert cfg.tmux.session_prefix == "orc-"
        assert cfg.logging.level == "INFO"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "nonexistent.toml")

    def test_missing_file_is_a_config_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nonexistent.toml")

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        p = _write_config(tmp_path, "this is not valid toml %%% [[[")
        with pytest.raises(ConfigError):
            load_config(p)

    @pytest.mark.parametrize("prefix", ["orc:", "a.b", "has space"])
    def test_session_prefix_rejects_tmux_separators(self, tmp_path: Path, prefix: str) -> None:
        p = _write_config(tmp_path, MINIMAL_TOML + f'\n[tmux]\nsession_prefix = "{prefix}"\n')
        with pytest.raises(ConfigError):
            load_config(p)

    def test_log_level_normalised(self, tmp_path: Path) -> None:
        p = _write_config(tmp_path, MINIMAL_TOML + '\n[logging]\nlevel = "debug"\n')
        assert load_config(p).logging.level == "DEBUG"

    def test_bad_log_format(self, tmp_path: Path) -> None:
        p = _write_config(tmp_path, MINIMAL_TOML + '\n[logging]\nformat = "xml"\n')
        with pytest.raises(ConfigError):
            load_config(p)

    def test_newer_version_rejected(self, tmp_path: Path) -> None:
        p = _write_config(tmp_path, "config_version = 9\n")
        with pytest.raises(ConfigError, match="version 9"):
            load_config(p)

    def test_env_config_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        p = _write_config(tmp_path, MINIMAL_TOML)
        monkeypatch.setenv("ORC_CONFIG", str(p))
        assert load_config().paths.worktree_root == "/srv/worktrees"

    def test_env_override_prefix(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ORC_SESSION_PREFIX", "work-")
        cfg = load_config(_write_config(tmp_path, MINIMAL_TOML))
        assert cfg.tmux.session_prefix == "work-"

    def test_env_override_paths(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ORC_WORKSPACE_ROOT", "/elsewhere")
        monkeypatch.setenv("ORC_LOG_FORMAT", "json")
        cfg = load_config(_write_config(tmp_path, MINIMAL_TOML))
        assert cfg.paths.workspace_root == "/elsewhere"
        assert cfg.logging.format == "json"

    def test_env_override_validated(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ORC_LOG_LEVEL", "chatty")
        with pytest.raises(ConfigError):
            load_config(_write_config(tmp_path, MINIMAL_TOML))


# ---------------------------------------------------------------------------
# Save config
# ---------------------------------------------------------------------------


class TestSaveConfig:
    def test_saves_and_loads(self, tmp_path: Path) -> None:
        data = {"tmux": {"editor_command": "nvim"}}
        path = save_config(data, tmp_path / "config.toml")
        assert load_config(path).tmux.editor_command == "nvim"

    def test_secure_permissions(self, tmp_path: Path) -> None:
        path = save_config({"paths": {"home_dir": "/home/u"}}, tmp_path / "config.toml")
        mode = stat.S_IMODE(path.stat().st_mode)
        assert mode == 0o600, f"Expected 0600, got {oct(mode)}"

    def test_creates_parent_dir(self, tmp_path: Path) -> None:
        path = save_config({}, tmp_path / "nested" / "config.toml")
        assert path.exists()
        assert not path.with_suffix(".tmp").exists()


# ---------------------------------------------------------------------------
# Path derivation
# ---------------------------------------------------------------------------


class TestPaths:
    def test_workspace_path_expands_home(self) -> None:
        cfg = OrcConfig(paths=PathsConfig(home_dir="/home/u"))
        assert cfg.workspace_path("MISSION-001") == "/home/u/src/missions/MISSION-001"

    def test_worktree_root_expands_home(self) -> None:
        cfg = OrcConfig(paths=PathsConfig(home_dir="/home/u"))
        assert cfg.worktree_root == "/home/u/src/worktrees"

    def test_absolute_paths_untouched(self) -> None:
        cfg = OrcConfig(paths=PathsConfig(workspace_root="/srv/m", home_dir="/home/u"))
        assert cfg.workspace_path("COMMISSION-002") == "/srv/m/COMMISSION-002"

    def test_home_defaults_to_user_home(self) -> None:
        assert OrcConfig().home_path == Path.home()

    def test_empty_workspace_root_rejected(self) -> None:
        with pytest.raises(ValueError):
            PathsConfig(workspace_root="  ")


class TestLoggingConfig:
    def test_defaults(self) -> None:
        cfg = LoggingConfig()
        assert cfg.level == "INFO"
        assert cfg.format == "text"

    def test_invalid_level(self) -> None:
        with pytest.raises(ValueError):
            LoggingConfig(level="LOUD")
