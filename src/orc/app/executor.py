"""
RecordingExecutor — an EffectExecutor that applies effects to in-memory
state instead of the machine.

Used for dry runs and tests. Dispatch is on ``effect.effect_type`` through a
handler table, the same way a real executor would route to its filesystem,
git, tmux and storage adapters.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, cast

import structlog

from orc.app.ports import ExecutionReport
from orc.core.effects.model import (
    Effect,
    EffectKind,
    FileEffect,
    FileOp,
    GitEffect,
    LogEffect,
    PersistEffect,
    QueryEffect,
    TmuxEffect,
    TmuxOp,
    flatten_effects,
)
from orc.core.exceptions import EffectExecutionError

logger = structlog.get_logger()

_LOG_LEVELS = frozenset({"debug", "info", "warning", "error", "critical"})


class RecordingExecutor:
    """Applies effects to dictionaries and remembers everything it saw."""

    def __init__(self) -> None:
        self.applied: list[Effect] = []
        self.directories: set[str] = set()
        self.files: dict[str, bytes] = {}
        self.worktrees: list[tuple[str, tuple[str, ...]]] = []
        self.sessions: dict[str, list[str]] = {}
        self.keys_sent: list[tuple[str, str, str]] = []
        self.persisted: list[PersistEffect] = []
        self.queries: list[QueryEffect] = []
        self._handlers: dict[str, Callable[[Any], None]] = {
            EffectKind.FILE: self._apply_file,
            EffectKind.GIT: self._apply_git,
            EffectKind.TMUX: self._apply_tmux,
            EffectKind.PERSIST: self._apply_persist,
            EffectKind.QUERY: self._apply_query,
            EffectKind.LOG: self._apply_log,
        }

    # ------------------------------------------------------------------
    # EffectExecutor
    # ------------------------------------------------------------------

    def execute(self, effects: Sequence[Effect]) -> ExecutionReport:
        applied: list[Effect] = []
        skipped = 0
        for effect in flatten_effects(effects):
            kind = str(getattr(effect, "effect_type", ""))
            if kind == EffectKind.NONE:
                skipped += 1
                continue
            handler = self._handlers.get(kind)
            if handler is None:
                raise EffectExecutionError(
                    effect, f"unknown effect type {kind!r}", applied=tuple(applied)
                )
            try:
                handler(effect)
            except EffectExecutionError as exc:
                exc.applied = tuple(applied)
                raise
            applied.append(effect)
            self.applied.append(effect)
        return ExecutionReport(applied=tuple(applied), skipped=skipped)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _apply_file(self, effect: FileEffect) -> None:
        if effect.operation == FileOp.MKDIR:
            self.directories.add(effect.path)
        elif effect.operation == FileOp.WRITE:
            self.files[effect.path] = effect.content
        elif effect.operation in (FileOp.READ, FileOp.EXISTS):
            pass  # nothing to change
        else:
            raise EffectExecutionError(effect, f"unsupported file operation {effect.operation!r}")

    def _apply_git(self, effect: GitEffect) -> None:
        self.worktrees.append((effect.repo_path, effect.args))

    def _apply_tmux(self, effect: TmuxEffect) -> None:
        op = effect.operation
        if op == TmuxOp.NEW_SESSION:
            if effect.session_name in self.sessions:
                raise EffectExecutionError(
                    effect, f"duplicate session: {effect.session_name}"
                )
            windows = [effect.window_name] if effect.window_name else []
            self.sessions[effect.session_name] = windows
            return

        windows = self.sessions.setdefault(effect.session_name, [])
        if op == TmuxOp.NEW_WINDOW:
            windows.append(effect.window_name)
        elif op == TmuxOp.SEND_KEYS:
            self.keys_sent.append((effect.session_name, effect.window_name, effect.command))
        elif op not in (TmuxOp.SPLIT_VERTICAL, TmuxOp.SPLIT_HORIZONTAL):
            raise EffectExecutionError(effect, f"unsupported tmux operation {op!r}")

    def _apply_persist(self, effect: PersistEffect) -> None:
        self.persisted.append(effect)

    def _apply_query(self, effect: QueryEffect) -> None:
        self.queries.append(effect)

    def _apply_log(self, effect: LogEffect) -> None:
        level = effect.level.lower()
        if level not in _LOG_LEVELS:
            level = "info"
        method = cast(Callable[..., Any], getattr(logger, level))
        method(effect.message, **dict(effect.fields))
