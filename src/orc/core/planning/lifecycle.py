"""
Lifecycle planners for top-level units: create, status change, pin, delete.

Each composes Guard → Transition → Persist-effect: the caller has already run
the guard; these turn the approved intent into a single persist effect (or
``NoEffect`` when the request changes nothing). ``entity`` defaults to
``mission``; commissions pass ``entity="commission"``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from orc.core.effects.model import Effect, NoEffect, PersistEffect, PersistOp
from orc.core.planning.artifacts import format_timestamp
from orc.core.planning.plan import Plan
from orc.core.transitions import MissionStatus, apply_status_transition, initial_status


@dataclass(frozen=True)
class LifecyclePlan(Plan):
    GROUP_ORDER: ClassVar[tuple[str, ...]] = ("database_ops",)

    unit_id: str
    database_ops: tuple[Effect, ...] = ()


def plan_create_mission(
    mission_id: str, title: str, now: datetime, *, entity: str = "mission"
) -> LifecyclePlan:
    effect = PersistEffect(
        entity=entity,
        operation=PersistOp.CREATE,
        data={
            "id": mission_id,
            "title": title,
            "status": str(initial_status()),
            "pinned": False,
            "created_at": format_timestamp(now),
        },
    )
    return LifecyclePlan(unit_id=mission_id, database_ops=(effect,))


def plan_status_change(
    mission_id: str, new_status: MissionStatus, now: datetime, *, entity: str = "mission"
) -> LifecyclePlan:
    transition = apply_status_transition(new_status, now)
    completed_at = (
        format_timestamp(transition.completed_at) if transition.completed_at is not None else None
    )
    effect = PersistEffect(
        entity=entity,
        operation=PersistOp.UPDATE,
        data={
            "id": mission_id,
            "status": str(transition.new_status),
            "completed_at": completed_at,
        },
    )
    return LifecyclePlan(unit_id=mission_id, database_ops=(effect,))


def plan_pin(
    mission_id: str, pinned: bool, currently_pinned: bool, *, entity: str = "mission"
) -> LifecyclePlan:
    """Pin or unpin. Already in the requested state plans a ``NoEffect``."""
    if pinned == currently_pinned:
        return LifecyclePlan(unit_id=mission_id, database_ops=(NoEffect(),))
    effect = PersistEffect(
        entity=entity,
        operation=PersistOp.UPDATE,
        data={"id": mission_id, "pinned": pinned},
    )
    return LifecyclePlan(unit_id=mission_id, database_ops=(effect,))


def plan_delete(mission_id: str, *, entity: str = "mission") -> LifecyclePlan:
    effect = PersistEffect(
        entity=entity,
        operation=PersistOp.DELETE,
        conditions={"id": mission_id},
    )
    return LifecyclePlan(unit_id=mission_id, database_ops=(effect,))
