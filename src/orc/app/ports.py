"""Ports the shell depends on. Real adapters live outside this package."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from orc.core.effects.model import Effect


@dataclass(frozen=True)
class ExecutionReport:
    """Outcome of applying an effect list, reported back to the shell."""

    applied: tuple[Effect, ...]
    skipped: int = 0  # NoEffect entries

    @property
    def applied_count(self) -> int:
        return len(self.applied)


@runtime_checkable
class EffectExecutor(Protocol):
    """
    Applies effects one at a time, in order.

    Raises ``EffectExecutionError`` on the first effect it cannot apply;
    effects before it stay applied (no rollback) and are listed on the
    error's ``applied`` attribute.
    """

    def execute(self, effects: Sequence[Effect]) -> ExecutionReport: ...
