"""Grove guards.

Evaluation order for open: grove exists → worktree on disk → inside tmux.
"""

from __future__ import annotations

from dataclasses import dataclass

from orc.core.agent import ActorIdentity
from orc.core.guards.lifecycle import (
    require_coordinator,
    require_exists,
    require_no_active_tasks,
    require_openable,
    require_parent,
)
from orc.core.guards.result import GuardResult, first_denial

_NOUN = "grove"


@dataclass(frozen=True)
class CreateGroveContext:
    actor: ActorIdentity
    mission_id: str
    mission_exists: bool


@dataclass(frozen=True)
class OpenGroveContext:
    grove_id: str
    grove_exists: bool
    path_exists: bool
    in_tmux_session: bool


@dataclass(frozen=True)
class DeleteGroveContext:
    grove_id: str
    active_task_count: int
    force_delete: bool = False


def can_create_grove(ctx: CreateGroveContext) -> GuardResult:
    return first_denial(
        require_coordinator(ctx.actor, "create", _NOUN),
        require_parent(ctx.mission_exists, _NOUN, "mission", ctx.mission_id),
    )


def can_open_grove(ctx: OpenGroveContext) -> GuardResult:
    return require_openable(
        _NOUN, ctx.grove_id, ctx.grove_exists, ctx.path_exists, ctx.in_tmux_session
    )


def can_delete_grove(ctx: DeleteGroveContext) -> GuardResult:
    return require_no_active_tasks(_NOUN, ctx.grove_id, ctx.active_task_count, ctx.force_delete)


def can_rename_grove(grove_exists: bool, grove_id: str) -> GuardResult:
    return require_exists(grove_exists, _NOUN, grove_id)
