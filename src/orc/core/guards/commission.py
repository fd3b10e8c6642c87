"""Commission guards — the commission-scoped mirror of the mission rules,
counting workbenches where missions count groves."""

from __future__ import annotations

from dataclasses import dataclass

from orc.core.agent import ActorIdentity
from orc.core.guards.lifecycle import (
    require_coordinator,
    require_exists,
    require_no_dependents,
    require_unpinned,
)
from orc.core.guards.result import GuardResult

_NOUN = "commission"


@dataclass(frozen=True)
class GuardContext:
    actor: ActorIdentity
    commission_id: str = ""


@dataclass(frozen=True)
class CommissionStateContext:
    commission_id: str
    is_pinned: bool


@dataclass(frozen=True)
class DeleteContext:
    commission_id: str
    shipment_count: int
    workbench_count: int
    force_delete: bool = False


@dataclass(frozen=True)
class PinContext:
    commission_id: str
    commission_exists: bool
    is_pinned: bool = False


def can_create_commission(ctx: GuardContext) -> GuardResult:
    return require_coordinator(ctx.actor, "create", _NOUN)


def can_start_commission(ctx: GuardContext) -> GuardResult:
    return require_coordinator(ctx.actor, "start", _NOUN)


def can_launch_commission(ctx: GuardContext) -> GuardResult:
    return require_coordinator(ctx.actor, "launch", _NOUN)


def can_complete_commission(ctx: CommissionStateContext) -> GuardResult:
    return require_unpinned(ctx.commission_id, ctx.is_pinned, "complete", _NOUN)


def can_archive_commission(ctx: CommissionStateContext) -> GuardResult:
    return require_unpinned(ctx.commission_id, ctx.is_pinned, "archive", _NOUN)


def can_delete_commission(ctx: DeleteContext) -> GuardResult:
    return require_no_dependents(
        "Commission",
        ctx.commission_id,
        ctx.shipment_count,
        ctx.workbench_count,
        "workbenches",
        ctx.force_delete,
    )


def can_pin_commission(ctx: PinContext) -> GuardResult:
    return require_exists(ctx.commission_exists, "Commission", ctx.commission_id)


def can_unpin_commission(ctx: PinContext) -> GuardResult:
    return require_exists(ctx.commission_exists, "Commission", ctx.commission_id)
