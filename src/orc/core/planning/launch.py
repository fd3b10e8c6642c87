"""
Launch and start planners for top-level units.

Launch materialises a unit's workspace:

  {workspace}/                         mkdir
  {workspace}/groves/                  mkdir
  {workspace}/groves/{name}/.orc/      mkdir       (per child)
  {workspace}/groves/{name}/.orc/config.json write (per child)

then records each child's path only where it changed, and (optionally) opens
a tmux session ``{prefix}{unit_id}`` with one window per materialised child.

Effect order for ``LaunchPlan``: filesystem → database → tmux.
Effect order for ``StartPlan``: tmux only.

Missions and commissions share one algorithm; they differ only in the parent
key written into child configs and the entity name of the path update.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePosixPath
from typing import ClassVar

from orc.core.constants import (
    DIR_MODE,
    FILE_MODE,
    GROVE_CONFIG_FILENAME,
    GROVES_DIR_NAME,
    ORC_DIR_NAME,
    SESSION_PREFIX,
)
from orc.core.effects.model import (
    FileEffect,
    FileOp,
    PersistEffect,
    PersistOp,
    TmuxEffect,
    TmuxOp,
)
from orc.core.planning.artifacts import grove_config
from orc.core.planning.plan import Plan

# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChildPlanInput:
    """A grove or workbench as known to the caller at planning time."""

    id: str
    name: str
    current_path: str = ""  # path on record; may differ from the desired one
    repos: tuple[str, ...] = ()
    path_exists: bool = False  # worktree present on disk

    def __post_init__(self) -> None:
        object.__setattr__(self, "repos", tuple(self.repos))


GrovePlanInput = ChildPlanInput
WorkbenchPlanInput = ChildPlanInput


@dataclass(frozen=True)
class LaunchPlanInput:
    mission_id: str
    mission_title: str
    workspace_path: str
    created_at: datetime
    create_tmux: bool = False
    groves: tuple[GrovePlanInput, ...] = ()
    session_prefix: str = SESSION_PREFIX


@dataclass(frozen=True)
class CommissionLaunchPlanInput:
    commission_id: str
    commission_title: str
    workspace_path: str
    created_at: datetime
    create_tmux: bool = False
    workbenches: tuple[WorkbenchPlanInput, ...] = ()
    session_prefix: str = SESSION_PREFIX


@dataclass(frozen=True)
class StartPlanInput:
    mission_id: str
    workspace_path: str
    groves: tuple[GrovePlanInput, ...] = ()
    session_prefix: str = SESSION_PREFIX


@dataclass(frozen=True)
class CommissionStartPlanInput:
    commission_id: str
    workspace_path: str
    workbenches: tuple[WorkbenchPlanInput, ...] = ()
    session_prefix: str = SESSION_PREFIX


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LaunchPlan(Plan):
    GROUP_ORDER: ClassVar[tuple[str, ...]] = ("filesystem_ops", "database_ops", "tmux_ops")

    unit_id: str
    workspace_path: str
    filesystem_ops: tuple[FileEffect, ...] = ()
    database_ops: tuple[PersistEffect, ...] = ()
    tmux_ops: tuple[TmuxEffect, ...] = ()


@dataclass(frozen=True)
class StartPlan(Plan):
    GROUP_ORDER: ClassVar[tuple[str, ...]] = ("tmux_ops",)

    unit_id: str
    tmux_ops: tuple[TmuxEffect, ...] = ()


# ---------------------------------------------------------------------------
# Shared algorithm
# ---------------------------------------------------------------------------


def _children_dir(workspace_path: str) -> PurePosixPath:
    return PurePosixPath(workspace_path) / GROVES_DIR_NAME


def _session_ops(
    session_name: str, children_dir: PurePosixPath, children: Sequence[ChildPlanInput]
) -> tuple[TmuxEffect, ...]:
    ops = [TmuxEffect(operation=TmuxOp.NEW_SESSION, session_name=session_name)]
    for child in children:
        # Children without a worktree on disk get no window.
        if not child.path_exists:
            continue
        ops.append(
            TmuxEffect(
                operation=TmuxOp.NEW_WINDOW,
                session_name=session_name,
                window_name=child.name,
                command=str(children_dir / child.name),
            )
        )
    return tuple(ops)


def _launch(
    *,
    unit_id: str,
    parent_key: str,
    child_entity: str,
    workspace_path: str,
    children: Sequence[ChildPlanInput],
    created_at: datetime,
    create_tmux: bool,
    session_prefix: str,
) -> LaunchPlan:
    children_dir = _children_dir(workspace_path)

    fs_ops = [
        FileEffect(operation=FileOp.MKDIR, path=workspace_path, mode=DIR_MODE),
        FileEffect(operation=FileOp.MKDIR, path=str(children_dir), mode=DIR_MODE),
    ]
    db_ops: list[PersistEffect] = []

    for child in children:
        desired = children_dir / child.name
        orc_dir = desired / ORC_DIR_NAME
        fs_ops.append(FileEffect(operation=FileOp.MKDIR, path=str(orc_dir), mode=DIR_MODE))
        fs_ops.append(
            FileEffect(
                operation=FileOp.WRITE,
                path=str(orc_dir / GROVE_CONFIG_FILENAME),
                content=grove_config(
                    child.id, parent_key, unit_id, child.name, child.repos, created_at
                ),
                mode=FILE_MODE,
            )
        )
        if child.current_path != str(desired):
            db_ops.append(
                PersistEffect(
                    entity=child_entity,
                    operation=PersistOp.UPDATE,
                    data={"id": child.id, "path": str(desired)},
                )
            )

    tmux_ops: tuple[TmuxEffect, ...] = ()
    if create_tmux:
        tmux_ops = _session_ops(session_prefix + unit_id, children_dir, children)

    return LaunchPlan(
        unit_id=unit_id,
        workspace_path=workspace_path,
        filesystem_ops=tuple(fs_ops),
        database_ops=tuple(db_ops),
        tmux_ops=tmux_ops,
    )


# ---------------------------------------------------------------------------
# Public planners
# ---------------------------------------------------------------------------


def generate_launch_plan(plan_input: LaunchPlanInput) -> LaunchPlan:
    """Plan the infrastructure for a mission and its groves."""
    return _launch(
        unit_id=plan_input.mission_id,
        parent_key="mission_id",
        child_entity="grove",
        workspace_path=plan_input.workspace_path,
        children=plan_input.groves,
        created_at=plan_input.created_at,
        create_tmux=plan_input.create_tmux,
        session_prefix=plan_input.session_prefix,
    )


def generate_commission_launch_plan(plan_input: CommissionLaunchPlanInput) -> LaunchPlan:
    """Plan the infrastructure for a commission and its workbenches."""
    return _launch(
        unit_id=plan_input.commission_id,
        parent_key="commission_id",
        child_entity="workbench",
        workspace_path=plan_input.workspace_path,
        children=plan_input.workbenches,
        created_at=plan_input.created_at,
        create_tmux=plan_input.create_tmux,
        session_prefix=plan_input.session_prefix,
    )


def generate_start_plan(plan_input: StartPlanInput) -> StartPlan:
    """Plan only the tmux session for an already-launched mission."""
    children_dir = _children_dir(plan_input.workspace_path)
    return StartPlan(
        unit_id=plan_input.mission_id,
        tmux_ops=_session_ops(
            plan_input.session_prefix + plan_input.mission_id, children_dir, plan_input.groves
        ),
    )


def generate_commission_start_plan(plan_input: CommissionStartPlanInput) -> StartPlan:
    children_dir = _children_dir(plan_input.workspace_path)
    return StartPlan(
        unit_id=plan_input.commission_id,
        tmux_ops=_session_ops(
            plan_input.session_prefix + plan_input.commission_id,
            children_dir,
            plan_input.workbenches,
        ),
    )
