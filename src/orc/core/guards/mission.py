"""Mission guards.

Rules:
  - only ORC may create, start or launch a mission
  - a pinned mission cannot be completed or archived
  - a mission with shipments or groves needs force to delete
  - pin / unpin need the mission to exist (and are otherwise idempotent)
"""

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

_NOUN = "mission"


@dataclass(frozen=True)
class GuardContext:
    actor: ActorIdentity
    mission_id: str = ""


@dataclass(frozen=True)
class MissionStateContext:
    mission_id: str
    is_pinned: bool


@dataclass(frozen=True)
class DeleteContext:
    mission_id: str
    shipment_count: int
    grove_count: int
    force_delete: bool = False


@dataclass(frozen=True)
class PinContext:
    mission_id: str
    mission_exists: bool
    is_pinned: bool = False


def can_create_mission(ctx: GuardContext) -> GuardResult:
    return require_coordinator(ctx.actor, "create", _NOUN)


def can_start_mission(ctx: GuardContext) -> GuardResult:
    return require_coordinator(ctx.actor, "start", _NOUN)


def can_launch_mission(ctx: GuardContext) -> GuardResult:
    return require_coordinator(ctx.actor, "launch", _NOUN)


def can_complete_mission(ctx: MissionStateContext) -> GuardResult:
    return require_unpinned(ctx.mission_id, ctx.is_pinned, "complete", _NOUN)


def can_archive_mission(ctx: MissionStateContext) -> GuardResult:
    return require_unpinned(ctx.mission_id, ctx.is_pinned, "archive", _NOUN)


def can_delete_mission(ctx: DeleteContext) -> GuardResult:
    return require_no_dependents(
        "Mission",
        ctx.mission_id,
        ctx.shipment_count,
        ctx.grove_count,
        "groves",
        ctx.force_delete,
    )


def can_pin_mission(ctx: PinContext) -> GuardResult:
    return require_exists(ctx.mission_exists, "Mission", ctx.mission_id)


def can_unpin_mission(ctx: PinContext) -> GuardResult:
    return require_exists(ctx.mission_exists, "Mission", ctx.mission_id)
