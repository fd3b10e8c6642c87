"""
Container — the collaborators a process needs, built once at startup.

Nothing in orc reaches for a module-level singleton: ``build_container()``
is called by the entry point and the resulting ``Container`` is passed to
every service that needs configuration, an executor, a clock or a console.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from rich.console import Console

from orc.app.executor import RecordingExecutor
from orc.app.ports import EffectExecutor
from orc.core.config import OrcConfig
from orc.core.logging import configure_from_config


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class Container:
    config: OrcConfig
    executor: EffectExecutor
    clock: Callable[[], datetime] = _utc_now
    console: Console = field(default_factory=lambda: Console(stderr=True))


def build_container(
    config: OrcConfig | None = None,
    *,
    executor: EffectExecutor | None = None,
    clock: Callable[[], datetime] | None = None,
    console: Console | None = None,
    configure_logs: bool = False,
) -> Container:
    """
    Assemble a Container.

    Missing collaborators fall back to defaults: the default config, a
    RecordingExecutor, the UTC wall clock and a stderr console. With
    ``configure_logs`` the ``[logging]`` section is applied to structlog.
    """
    cfg = config if config is not None else OrcConfig()
    if configure_logs:
        configure_from_config(cfg.logging)
    return Container(
        config=cfg,
        executor=executor if executor is not None else RecordingExecutor(),
        clock=clock if clock is not None else _utc_now,
        console=console if console is not None else Console(stderr=True),
    )
