"""Unit tests for container assembly."""

from __future__ import annotations

from datetime import UTC, datetime

from orc.app.container import build_container
from orc.app.executor import RecordingExecutor
from orc.core.config import OrcConfig, TmuxConfig


class TestBuildContainer:
    def test_defaults(self):
        container = build_container()
        assert isinstance(container.config, OrcConfig)
        assert isinstance(container.executor, RecordingExecutor)
        assert container.clock().tzinfo is UTC

    def test_overrides(self):
        cfg = OrcConfig(tmux=TmuxConfig(session_prefix="w-"))
        executor = RecordingExecutor()
        fixed = datetime(2026, 1, 1, tzinfo=UTC)
        container = build_container(cfg, executor=executor, clock=lambda: fixed)
        assert container.config is cfg
        assert container.executor is executor
        assert container.clock() == fixed

    def test_each_container_gets_its_own_executor(self):
        assert build_container().executor is not build_container().executor
