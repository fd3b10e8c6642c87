"""
Workshop open planner.

The plan lists *every* piece of workshop infrastructure (gatehouse,
workbench worktrees, tmux session) together with whether it already exists,
so a dry run can show existing and new items side by side. ``effects()``
then emits only what is missing:

  gatehouse dir missing     → mkdir
  gatehouse config missing  → mkdir .orc, write .orc/config.json
  workbench worktree missing → git worktree_add
  workbench config missing  → mkdir .orc, write .orc/config.json
  session missing           → new_session (window 0 at the gatehouse),
                              new_window per workbench

Effect order: filesystem+git per item (gatehouse first, then workbenches in
input order) → tmux.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from orc.core.constants import (
    DIR_MODE,
    FILE_MODE,
    GATEHOUSE_WINDOW_NAME,
    GROVE_CONFIG_FILENAME,
    ORC_DIR_NAME,
    WORKSHOPS_DIR_NAME,
)
from orc.core.effects.model import Effect, FileEffect, FileOp, GitEffect, GitOp, TmuxEffect, TmuxOp
from orc.core.planning.artifacts import place_config

# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


def slugify(name: str) -> str:
    """Lowercase ASCII letters and digits; space, ``-`` and ``_`` become ``-``.

    Everything else is dropped.
    """
    out: list[str] = []
    for ch in name:
        if "a" <= ch <= "z" or "0" <= ch <= "9":
            out.append(ch)
        elif "A" <= ch <= "Z":
            out.append(ch.lower())
        elif ch in " -_":
            out.append("-")
    return "".join(out)


def gatehouse_path(home_dir: str, workshop_id: str, workshop_name: str) -> str:
    """``{home}/.orc/ws/{workshop_id}-{slug}``"""
    dir_name = f"{workshop_id}-{slugify(workshop_name)}"
    return str(PurePosixPath(home_dir) / ORC_DIR_NAME / WORKSHOPS_DIR_NAME / dir_name)


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WorkbenchOpenInput:
    id: str
    name: str
    worktree_path: str
    repo_name: str = ""
    repo_path: str = ""  # local clone the worktree is added from
    home_branch: str = ""
    worktree_exists: bool = False
    config_exists: bool = False
    status: str = "active"


@dataclass(frozen=True)
class OpenPlanInput:
    workshop_id: str
    workshop_name: str
    gatehouse_dir: str
    factory_id: str = ""
    factory_name: str = ""
    gatehouse_id: str = ""
    session_exists: bool = False
    gatehouse_dir_exists: bool = False
    gatehouse_config_exists: bool = False
    workbenches: tuple[WorkbenchOpenInput, ...] = ()


# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class WorkbenchDBState:
    id: str
    name: str
    path: str
    status: str


@dataclass(frozen=True)
class GatehouseOp:
    path: str
    exists: bool
    config_exists: bool
    place_id: str = ""


@dataclass(frozen=True)
class WorkbenchOp:
    id: str
    name: str
    path: str
    exists: bool
    repo_name: str
    repo_path: str
    branch: str
    config_exists: bool


@dataclass(frozen=True)
class TmuxWindowOp:
    index: int
    name: str
    path: str


@dataclass(frozen=True)
class TmuxSessionOp:
    session_name: str
    windows: tuple[TmuxWindowOp, ...]


def _config_effects(directory: str, place_id: str) -> list[Effect]:
    orc_dir = PurePosixPath(directory) / ORC_DIR_NAME
    return [
        FileEffect(operation=FileOp.MKDIR, path=str(orc_dir), mode=DIR_MODE),
        FileEffect(
            operation=FileOp.WRITE,
            path=str(orc_dir / GROVE_CONFIG_FILENAME),
            content=place_config(place_id),
            mode=FILE_MODE,
        ),
    ]


@dataclass(frozen=True)
class OpenWorkshopPlan:
    workshop_id: str
    workshop_name: str
    factory_id: str
    factory_name: str
    session_name: str
    workbenches: tuple[WorkbenchDBState, ...]
    gatehouse_op: GatehouseOp
    workbench_ops: tuple[WorkbenchOp, ...]
    tmux_op: TmuxSessionOp | None
    nothing_to_do: bool

    def effects(self) -> tuple[Effect, ...]:
        """Effects for the missing items only; empty when ``nothing_to_do``."""
        out: list[Effect] = []

        gh = self.gatehouse_op
        if not gh.exists:
            out.append(FileEffect(operation=FileOp.MKDIR, path=gh.path, mode=DIR_MODE))
        if not gh.config_exists:
            out.extend(_config_effects(gh.path, gh.place_id))

        for wb in self.workbench_ops:
            if not wb.exists:
                out.append(
                    GitEffect(
                        operation=GitOp.WORKTREE_ADD,
                        repo_path=wb.repo_path or wb.repo_name,
                        args=(wb.branch, wb.path),
                    )
                )
            if not wb.config_exists:
                out.extend(_config_effects(wb.path, wb.id))

        if self.tmux_op is not None:
            first, *rest = self.tmux_op.windows
            out.append(
                TmuxEffect(
                    operation=TmuxOp.NEW_SESSION,
                    session_name=self.tmux_op.session_name,
                    window_name=first.name,
                    command=first.path,
                )
            )
            for window in rest:
                out.append(
                    TmuxEffect(
                        operation=TmuxOp.NEW_WINDOW,
                        session_name=self.tmux_op.session_name,
                        window_name=window.name,
                        command=window.path,
                    )
                )
        return tuple(out)


def generate_open_plan(plan_input: OpenPlanInput) -> OpenWorkshopPlan:
    """Describe the workshop's infrastructure, existing and missing."""
    workbenches = tuple(
        WorkbenchDBState(id=wb.id, name=wb.name, path=wb.worktree_path, status=wb.status)
        for wb in plan_input.workbenches
    )
    gatehouse = GatehouseOp(
        path=plan_input.gatehouse_dir,
        exists=plan_input.gatehouse_dir_exists,
        config_exists=plan_input.gatehouse_config_exists,
        place_id=plan_input.gatehouse_id,
    )
    workbench_ops = tuple(
        WorkbenchOp(
            id=wb.id,
            name=wb.name,
            path=wb.worktree_path,
            exists=wb.worktree_exists,
            repo_name=wb.repo_name,
            repo_path=wb.repo_path,
            branch=wb.home_branch,
            config_exists=wb.config_exists,
        )
        for wb in plan_input.workbenches
    )

    tmux_op: TmuxSessionOp | None = None
    if not plan_input.session_exists:
        windows = [TmuxWindowOp(index=0, name=GATEHOUSE_WINDOW_NAME, path=plan_input.gatehouse_dir)]
        windows.extend(
            TmuxWindowOp(index=i, name=wb.name, path=wb.worktree_path)
            for i, wb in enumerate(plan_input.workbenches, start=1)
        )
        tmux_op = TmuxSessionOp(session_name=plan_input.workshop_id, windows=tuple(windows))

    gatehouse_ready = plan_input.gatehouse_dir_exists and plan_input.gatehouse_config_exists
    workbenches_ready = all(
        wb.worktree_exists and wb.config_exists for wb in plan_input.workbenches
    )

    return OpenWorkshopPlan(
        workshop_id=plan_input.workshop_id,
        workshop_name=plan_input.workshop_name,
        factory_id=plan_input.factory_id,
        factory_name=plan_input.factory_name,
        session_name=plan_input.workshop_id,
        workbenches=workbenches,
        gatehouse_op=gatehouse,
        workbench_ops=workbench_ops,
        tmux_op=tmux_op,
        nothing_to_do=gatehouse_ready and workbenches_ready and plan_input.session_exists,
    )
