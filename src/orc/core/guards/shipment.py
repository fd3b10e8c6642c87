"""Shipment guards.

A shipment is a batch of tasks under a mission. It moves between ``active``
and ``paused``, and a grove can be assigned to at most one shipment.
"""

from __future__ import annotations

from dataclasses import dataclass

from orc.core.guards.lifecycle import require_exists, require_status
from orc.core.guards.messages import DenialCode
from orc.core.guards.result import GuardResult, allow, deny

_NOUN = "shipment"

ACTIVE = "active"
PAUSED = "paused"


@dataclass(frozen=True)
class CreateShipmentContext:
    mission_id: str
    mission_exists: bool


@dataclass(frozen=True)
class ShipmentStateContext:
    shipment_id: str
    is_pinned: bool = False
    status: str = ""


@dataclass(frozen=True)
class AssignGroveContext:
    shipment_id: str
    grove_id: str
    shipment_exists: bool
    grove_assigned_to: str = ""  # empty when unassigned


def can_create_shipment(ctx: CreateShipmentContext) -> GuardResult:
    return require_exists(ctx.mission_exists, "mission", ctx.mission_id)


def can_complete_shipment(ctx: ShipmentStateContext) -> GuardResult:
    if ctx.is_pinned:
        return deny(DenialCode.PINNED_WORK, verb="complete", noun=_NOUN, id=ctx.shipment_id)
    return allow()


def can_pause_shipment(ctx: ShipmentStateContext) -> GuardResult:
    return require_status(ctx.status, (ACTIVE,), "pause", "shipments")


def can_resume_shipment(ctx: ShipmentStateContext) -> GuardResult:
    return require_status(ctx.status, (PAUSED,), "resume", "shipments")


def can_assign_grove(ctx: AssignGroveContext) -> GuardResult:
    """Re-assigning a grove to the shipment it already belongs to is allowed."""
    if not ctx.shipment_exists:
        return deny(DenialCode.NOT_FOUND, noun=_NOUN, id=ctx.shipment_id)
    if ctx.grove_assigned_to and ctx.grove_assigned_to != ctx.shipment_id:
        return deny(DenialCode.GROVE_ASSIGNED, shipment_id=ctx.grove_assigned_to)
    return allow()
