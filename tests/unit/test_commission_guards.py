"""Unit tests for commission guards."""

from __future__ import annotations

import pytest

from orc.core.agent import ActorIdentity
from orc.core.guards.commission import (
    CommissionStateContext,
    DeleteContext,
    GuardContext,
    PinContext,
    can_archive_commission,
    can_complete_commission,
    can_create_commission,
    can_delete_commission,
    can_launch_commission,
    can_pin_commission,
    can_start_commission,
    can_unpin_commission,
)


class TestCoordinatorOnly:
    @pytest.mark.parametrize(
        "guard,verb",
        [
            (can_create_commission, "create"),
            (can_start_commission, "start"),
            (can_launch_commission, "launch"),
        ],
    )
    def test_imp_denied(self, guard, verb: str):
        result = guard(GuardContext(ActorIdentity.imp("IMP-BENCH-003")))
        assert result.reason == (
            f"IMPs cannot {verb} commissions - only ORC can {verb} commissions "
            f"(agent: IMP-BENCH-003)"
        )

    def test_orc_allowed(self):
        assert can_create_commission(GuardContext(ActorIdentity.orc())).allowed


class TestState:
    def test_pinned_complete_denied(self):
        result = can_complete_commission(CommissionStateContext("COMMISSION-002", True))
        assert result.reason == (
            "Cannot complete pinned commission COMMISSION-002. "
            "Unpin first with: orc commission unpin COMMISSION-002"
        )

    def test_pinned_archive_denied(self):
        result = can_archive_commission(CommissionStateContext("COMMISSION-002", True))
        assert result.reason.startswith("Cannot archive pinned commission COMMISSION-002.")

    def test_unpinned_allowed(self):
        assert can_archive_commission(CommissionStateContext("COMMISSION-002", False)).allowed


class TestDelete:
    def test_counts_workbenches(self):
        result = can_delete_commission(DeleteContext("COMMISSION-001", 0, 2))
        assert result.reason == (
            "Commission COMMISSION-001 has 0 shipments and 2 workbenches. "
            "Use --force to delete anyway"
        )

    def test_force(self):
        assert can_delete_commission(DeleteContext("COMMISSION-001", 1, 2, True)).allowed


class TestPin:
    def test_missing(self):
        result = can_pin_commission(PinContext("COMMISSION-009", False))
        assert result.reason == "Commission COMMISSION-009 not found"

    def test_idempotent(self):
        assert can_pin_commission(PinContext("COMMISSION-001", True, True)).allowed
        assert can_unpin_commission(PinContext("COMMISSION-001", True, False)).allowed
