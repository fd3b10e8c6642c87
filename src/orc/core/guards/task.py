"""Task guards.

Tasks belong to a mission and optionally to one of its shipments. Work runs
``in_progress`` ↔ ``paused``; a task carries at most one tag.
"""

from __future__ import annotations

from dataclasses import dataclass

from orc.core.guards.lifecycle import require_exists, require_status
from orc.core.guards.messages import DenialCode
from orc.core.guards.result import GuardResult, allow, deny

_NOUN = "task"

IN_PROGRESS = "in_progress"
PAUSED = "paused"


@dataclass(frozen=True)
class CreateTaskContext:
    mission_id: str
    mission_exists: bool
    shipment_id: str = ""
    shipment_exists: bool = False


@dataclass(frozen=True)
class TaskStateContext:
    task_id: str
    is_pinned: bool = False
    status: str = ""


@dataclass(frozen=True)
class TagTaskContext:
    task_id: str
    existing_tag_id: str = ""
    existing_tag_name: str = ""


def can_create_task(ctx: CreateTaskContext) -> GuardResult:
    verdict = require_exists(ctx.mission_exists, "mission", ctx.mission_id)
    if verdict.denied or not ctx.shipment_id:
        return verdict
    return require_exists(ctx.shipment_exists, "shipment", ctx.shipment_id)


def can_complete_task(ctx: TaskStateContext) -> GuardResult:
    if ctx.is_pinned:
        return deny(DenialCode.PINNED_WORK, verb="complete", noun=_NOUN, id=ctx.task_id)
    return allow()


def can_pause_task(ctx: TaskStateContext) -> GuardResult:
    return require_status(ctx.status, (IN_PROGRESS,), "pause", "tasks")


def can_resume_task(ctx: TaskStateContext) -> GuardResult:
    return require_status(ctx.status, (PAUSED,), "resume", "tasks")


def can_tag_task(ctx: TagTaskContext) -> GuardResult:
    if ctx.existing_tag_id:
        return deny(DenialCode.TAG_LIMIT, id=ctx.task_id, tag=ctx.existing_tag_name)
    return allow()
