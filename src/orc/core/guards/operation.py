"""Operation (work item) guards."""

from __future__ import annotations

from dataclasses import dataclass

from orc.core.guards.lifecycle import require_exists
from orc.core.guards.messages import DenialCode
from orc.core.guards.result import GuardResult, allow, deny

READY_STATUS = "ready"


@dataclass(frozen=True)
class CreateOperationContext:
    mission_id: str
    mission_exists: bool


@dataclass(frozen=True)
class CompleteOperationContext:
    operation_id: str
    status: str


def can_create_operation(ctx: CreateOperationContext) -> GuardResult:
    return require_exists(ctx.mission_exists, "mission", ctx.mission_id)


def can_complete_operation(ctx: CompleteOperationContext) -> GuardResult:
    # Exact match: "Ready" or "ready " are not ready.
    if ctx.status != READY_STATUS:
        return deny(DenialCode.NOT_READY, status=ctx.status)
    return allow()
