"""Unit tests for grove, workbench and operation guards."""

from __future__ import annotations

import pytest

from orc.core.agent import ActorIdentity
from orc.core.guards.grove import (
    CreateGroveContext,
    DeleteGroveContext,
    OpenGroveContext,
    can_create_grove,
    can_delete_grove,
    can_open_grove,
    can_rename_grove,
)
from orc.core.guards.messages import DenialCode
from orc.core.guards.operation import (
    CompleteOperationContext,
    CreateOperationContext,
    can_complete_operation,
    can_create_operation,
)
from orc.core.guards.workbench import (
    CreateWorkbenchContext,
    DeleteWorkbenchContext,
    OpenWorkbenchContext,
    can_create_workbench,
    can_delete_workbench,
    can_open_workbench,
    can_rename_workbench,
)

ORC = ActorIdentity.orc()
IMP = ActorIdentity.imp("IMP-GROVE-002")


def _open(**overrides) -> OpenGroveContext:
    defaults = {
        "grove_id": "GROVE-001",
        "grove_exists": True,
        "path_exists": True,
        "in_tmux_session": True,
    }
    defaults.update(overrides)
    return OpenGroveContext(**defaults)


class TestCreateGrove:
    def test_orc_with_mission_allowed(self):
        assert can_create_grove(CreateGroveContext(ORC, "MISSION-001", True)).allowed

    def test_imp_denied_first(self):
        # Actor check wins even when the mission is also missing.
        result = can_create_grove(CreateGroveContext(IMP, "MISSION-001", False))
        assert result.reason == (
            "IMPs cannot create groves - only ORC can create groves (agent: IMP-GROVE-002)"
        )

    def test_missing_mission(self):
        result = can_create_grove(CreateGroveContext(ORC, "MISSION-404", False))
        assert result.reason == "cannot create grove: mission MISSION-404 not found"
        assert result.code == DenialCode.PARENT_NOT_FOUND


class TestOpenGrove:
    def test_all_present_allowed(self):
        assert can_open_grove(_open()).allowed

    def test_missing_grove(self):
        result = can_open_grove(_open(grove_exists=False, path_exists=False))
        assert result.reason == "grove GROVE-001 not found"

    def test_missing_worktree(self):
        result = can_open_grove(_open(path_exists=False))
        assert result.reason == (
            "grove worktree not found - run 'orc grove create' to materialize"
        )

    def test_outside_tmux(self):
        result = can_open_grove(_open(in_tmux_session=False))
        assert result.reason == (
            "not in a TMux session - run this command from within a TMux session"
        )
        assert result.code == DenialCode.NOT_IN_TMUX


class TestDeleteRenameGrove:
    def test_active_tasks_denied(self):
        result = can_delete_grove(DeleteGroveContext("GROVE-003", 2))
        assert result.reason == "grove GROVE-003 has 2 active tasks. Use --force to delete anyway"

    @pytest.mark.parametrize("tasks,force", [(0, False), (0, True), (5, True)])
    def test_allowed(self, tasks: int, force: bool):
        assert can_delete_grove(DeleteGroveContext("GROVE-003", tasks, force)).allowed

    def test_rename_missing(self):
        assert can_rename_grove(False, "GROVE-009").reason == "grove GROVE-009 not found"

    def test_rename_existing(self):
        assert can_rename_grove(True, "GROVE-009").allowed


class TestWorkbench:
    def test_create_needs_workshop(self):
        result = can_create_workbench(CreateWorkbenchContext("WORK-001", False))
        assert result.reason == "cannot create workbench: workshop WORK-001 not found"

    def test_create_allowed(self):
        assert can_create_workbench(CreateWorkbenchContext("WORK-001", True)).allowed

    def test_open_missing_worktree(self):
        result = can_open_workbench(OpenWorkbenchContext("BENCH-001", True, False, True))
        assert result.reason == (
            "workbench worktree not found - run 'orc workbench create' to materialize"
        )

    def test_open_missing(self):
        result = can_open_workbench(OpenWorkbenchContext("BENCH-001", False, True, True))
        assert result.reason == "workbench BENCH-001 not found"

    def test_open_outside_tmux(self):
        result = can_open_workbench(OpenWorkbenchContext("BENCH-001", True, True, False))
        assert result.code == DenialCode.NOT_IN_TMUX

    def test_delete_with_tasks(self):
        result = can_delete_workbench(DeleteWorkbenchContext("BENCH-001", 1))
        assert result.reason == (
            "workbench BENCH-001 has 1 active tasks. Use --force to delete anyway"
        )

    def test_rename(self):
        assert can_rename_workbench(False, "BENCH-002").reason == "workbench BENCH-002 not found"
        assert can_rename_workbench(True, "BENCH-002").allowed


class TestOperation:
    def test_create_needs_mission(self):
        result = can_create_operation(CreateOperationContext("MISSION-004", False))
        assert result.reason == "mission MISSION-004 not found"

    def test_create_allowed(self):
        assert can_create_operation(CreateOperationContext("MISSION-004", True)).allowed

    def test_complete_ready(self):
        assert can_complete_operation(CompleteOperationContext("OP-001", "ready")).allowed

    @pytest.mark.parametrize("status", ["complete", "draft", "Ready", "ready ", ""])
    def test_complete_not_ready(self, status: str):
        result = can_complete_operation(CompleteOperationContext("OP-001", status))
        assert not result.allowed
        assert result.reason == (
            f"can only complete ready operations (current status: {status})"
        )
