"""Workbench guards. Creation has no actor check; the workshop must exist."""

from __future__ import annotations

from dataclasses import dataclass

from orc.core.guards.lifecycle import (
    require_exists,
    require_no_active_tasks,
    require_openable,
    require_parent,
)
from orc.core.guards.result import GuardResult

_NOUN = "workbench"


@dataclass(frozen=True)
class CreateWorkbenchContext:
    workshop_id: str
    workshop_exists: bool


@dataclass(frozen=True)
class OpenWorkbenchContext:
    workbench_id: str
    workbench_exists: bool
    path_exists: bool
    in_tmux_session: bool


@dataclass(frozen=True)
class DeleteWorkbenchContext:
    workbench_id: str
    active_task_count: int
    force_delete: bool = False


def can_create_workbench(ctx: CreateWorkbenchContext) -> GuardResult:
    return require_parent(ctx.workshop_exists, _NOUN, "workshop", ctx.workshop_id)


def can_open_workbench(ctx: OpenWorkbenchContext) -> GuardResult:
    return require_openable(
        _NOUN, ctx.workbench_id, ctx.workbench_exists, ctx.path_exists, ctx.in_tmux_session
    )


def can_delete_workbench(ctx: DeleteWorkbenchContext) -> GuardResult:
    return require_no_active_tasks(
        _NOUN, ctx.workbench_id, ctx.active_task_count, ctx.force_delete
    )


def can_rename_workbench(workbench_exists: bool, workbench_id: str) -> GuardResult:
    return require_exists(workbench_exists, _NOUN, workbench_id)
