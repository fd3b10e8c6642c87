"""Unit tests for lifecycle planners (create / status / pin / delete)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from orc.core.effects import EffectKind, NoEffect, PersistOp
from orc.core.planning.artifacts import format_timestamp
from orc.core.planning.lifecycle import (
    plan_create_mission,
    plan_delete,
    plan_pin,
    plan_status_change,
)
from orc.core.transitions import MissionStatus

NOW = datetime(2026, 4, 1, 10, 0, 5, tzinfo=UTC)


class TestFormatTimestamp:
    def test_utc(self):
        assert format_timestamp(NOW) == "2026-04-01T10:00:05Z"

    def test_naive_taken_as_utc(self):
        assert format_timestamp(datetime(2026, 4, 1, 10, 0, 5)) == "2026-04-01T10:00:05Z"

    def test_offset_converted(self):
        moment = datetime(2026, 4, 1, 12, 0, 5, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(moment) == "2026-04-01T10:00:05Z"


class TestCreate:
    def test_single_create_effect(self):
        plan = plan_create_mission("MISSION-001", "Auth", NOW)
        (effect,) = plan.effects()
        assert effect.operation == PersistOp.CREATE
        assert effect.entity == "mission"
        assert dict(effect.data) == {
            "id": "MISSION-001",
            "title": "Auth",
            "status": "active",
            "pinned": False,
            "created_at": "2026-04-01T10:00:05Z",
        }

    def test_commission_entity(self):
        plan = plan_create_mission("COMMISSION-001", "P", NOW, entity="commission")
        assert plan.effects()[0].entity == "commission"


class TestStatusChange:
    def test_complete_records_completion(self):
        plan = plan_status_change("MISSION-001", MissionStatus.COMPLETE, NOW)
        assert dict(plan.effects()[0].data) == {
            "id": "MISSION-001",
            "status": "complete",
            "completed_at": "2026-04-01T10:00:05Z",
        }

    @pytest.mark.parametrize("status", [MissionStatus.ACTIVE, MissionStatus.ARCHIVED])
    def test_other_clears_completion(self, status: MissionStatus):
        plan = plan_status_change("MISSION-001", status, NOW)
        assert plan.effects()[0].data["completed_at"] is None


class TestPin:
    def test_pin_emits_update(self):
        plan = plan_pin("MISSION-001", pinned=True, currently_pinned=False)
        assert dict(plan.effects()[0].data) == {"id": "MISSION-001", "pinned": True}

    @pytest.mark.parametrize("state", [True, False])
    def test_no_change_is_noop(self, state: bool):
        plan = plan_pin("MISSION-001", pinned=state, currently_pinned=state)
        assert plan.effects() == (NoEffect(),)
        assert plan.effects()[0].effect_type == EffectKind.NONE


class TestDelete:
    def test_delete_by_id(self):
        plan = plan_delete("MISSION-009")
        (effect,) = plan.effects()
        assert effect.operation == PersistOp.DELETE
        assert dict(effect.conditions) == {"id": "MISSION-009"}
