"""Unit tests for shipment and task guards."""

from __future__ import annotations

import pytest

from orc.core.guards.messages import DenialCode
from orc.core.guards.shipment import (
    AssignGroveContext,
    CreateShipmentContext,
    ShipmentStateContext,
    can_assign_grove,
    can_complete_shipment,
    can_create_shipment,
    can_pause_shipment,
    can_resume_shipment,
)
from orc.core.guards.task import (
    CreateTaskContext,
    TagTaskContext,
    TaskStateContext,
    can_complete_task,
    can_create_task,
    can_pause_task,
    can_resume_task,
    can_tag_task,
)


def _assign(**overrides) -> AssignGroveContext:
    defaults = {
        "shipment_id": "SHIP-001",
        "grove_id": "GROVE-001",
        "shipment_exists": True,
        "grove_assigned_to": "",
    }
    defaults.update(overrides)
    return AssignGroveContext(**defaults)


# ---------------------------------------------------------------------------
# Shipments
# ---------------------------------------------------------------------------


class TestCreateShipment:
    def test_mission_exists(self):
        assert can_create_shipment(CreateShipmentContext("MISSION-001", True)).allowed

    def test_missing_mission(self):
        result = can_create_shipment(CreateShipmentContext("MISSION-404", False))
        assert result.code == DenialCode.NOT_FOUND
        assert result.reason == "mission MISSION-404 not found"


class TestCompleteShipment:
    def test_unpinned(self):
        assert can_complete_shipment(ShipmentStateContext("SHIP-001")).allowed

    def test_pinned(self):
        result = can_complete_shipment(ShipmentStateContext("SHIP-001", is_pinned=True))
        assert result.code == DenialCode.PINNED_WORK
        assert result.reason == (
            "cannot complete pinned shipment SHIP-001. "
            "Unpin first with: orc shipment unpin SHIP-001"
        )


class TestShipmentStatus:
    @pytest.mark.parametrize(
        "guard,status,allowed",
        [
            (can_pause_shipment, "active", True),
            (can_pause_shipment, "paused", False),
            (can_pause_shipment, "complete", False),
            (can_pause_shipment, "Active", False),
            (can_resume_shipment, "paused", True),
            (can_resume_shipment, "active", False),
            (can_resume_shipment, "", False),
        ],
    )
    def test_exact_status_required(self, guard, status: str, allowed: bool):
        assert guard(ShipmentStateContext("SHIP-001", status=status)).allowed is allowed

    def test_pause_wording(self):
        result = can_pause_shipment(ShipmentStateContext("SHIP-001", status="complete"))
        assert result.code == DenialCode.WRONG_STATUS
        assert result.reason == "can only pause active shipments (current status: complete)"

    def test_resume_wording(self):
        result = can_resume_shipment(ShipmentStateContext("SHIP-001", status="active"))
        assert result.reason == "can only resume paused shipments (current status: active)"

    def test_pin_does_not_block_pause(self):
        assert can_pause_shipment(
            ShipmentStateContext("SHIP-001", is_pinned=True, status="active")
        ).allowed


class TestAssignGrove:
    @pytest.mark.parametrize("assigned_to", ["", "SHIP-001"])
    def test_unassigned_or_same_shipment(self, assigned_to: str):
        assert can_assign_grove(_assign(grove_assigned_to=assigned_to)).allowed

    def test_assigned_elsewhere(self):
        result = can_assign_grove(_assign(grove_assigned_to="SHIP-007"))
        assert result.code == DenialCode.GROVE_ASSIGNED
        assert result.reason == "grove already assigned to shipment SHIP-007"

    def test_missing_shipment_checked_first(self):
        result = can_assign_grove(
            _assign(shipment_id="SHIP-404", shipment_exists=False, grove_assigned_to="SHIP-007")
        )
        assert result.reason == "shipment SHIP-404 not found"


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


class TestCreateTask:
    def test_mission_only(self):
        assert can_create_task(CreateTaskContext("MISSION-001", True)).allowed

    def test_missing_mission(self):
        result = can_create_task(CreateTaskContext("MISSION-404", False))
        assert result.reason == "mission MISSION-404 not found"

    def test_missing_mission_reported_before_shipment(self):
        result = can_create_task(
            CreateTaskContext("MISSION-404", False, shipment_id="SHIP-404", shipment_exists=False)
        )
        assert result.reason == "mission MISSION-404 not found"

    def test_missing_shipment(self):
        result = can_create_task(
            CreateTaskContext("MISSION-001", True, shipment_id="SHIP-404", shipment_exists=False)
        )
        assert result.code == DenialCode.NOT_FOUND
        assert result.reason == "shipment SHIP-404 not found"

    def test_shipment_existence_ignored_without_id(self):
        assert can_create_task(
            CreateTaskContext("MISSION-001", True, shipment_id="", shipment_exists=False)
        ).allowed


class TestTaskLifecycle:
    def test_complete_pinned(self):
        result = can_complete_task(TaskStateContext("TASK-042", is_pinned=True))
        assert result.reason == (
            "cannot complete pinned task TASK-042. Unpin first with: orc task unpin TASK-042"
        )

    def test_complete_unpinned(self):
        assert can_complete_task(TaskStateContext("TASK-042")).allowed

    @pytest.mark.parametrize(
        "guard,status,expected",
        [
            (can_pause_task, "in_progress", ""),
            (can_pause_task, "ready", "can only pause in_progress tasks (current status: ready)"),
            (
                can_pause_task,
                "paused",
                "can only pause in_progress tasks (current status: paused)",
            ),
            (can_resume_task, "paused", ""),
            (
                can_resume_task,
                "in_progress",
                "can only resume paused tasks (current status: in_progress)",
            ),
        ],
    )
    def test_status_gates(self, guard, status: str, expected: str):
        assert guard(TaskStateContext("TASK-042", status=status)).reason == expected


class TestTagTask:
    def test_untagged(self):
        assert can_tag_task(TagTaskContext("TASK-042")).allowed

    def test_one_tag_limit(self):
        result = can_tag_task(TagTaskContext("TASK-042", "TAG-003", "urgent"))
        assert result.code == DenialCode.TAG_LIMIT
        assert result.reason == (
            "task TASK-042 already has tag 'urgent' (one tag per task limit)\n"
            "Remove existing tag first with: orc task untag TASK-042"
        )
        assert result.params == {"id": "TASK-042", "tag": "urgent"}
