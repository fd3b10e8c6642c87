"""
Grove planners: create (materialise a worktree-backed grove) and open (lay
out a tmux window for an IMP).

Create order: filesystem → git → database.

Open emits exactly five tmux effects, always in this order::

    +-------------------+-------------------+
    |                   | IMP (pane 2)      |
    | editor (pane 1)   +-------------------+
    |                   | shell             |
    +-------------------+-------------------+

    new_window → split_vertical → split_horizontal
    → send_keys {name}.1 editor → send_keys {name}.2 IMP bootstrap
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePosixPath
from typing import ClassVar

from orc.core.constants import (
    DEFAULT_EDITOR_COMMAND,
    DEFAULT_IMP_COMMAND,
    DIR_MODE,
    EDITOR_PANE,
    FILE_MODE,
    GROVE_CONFIG_FILENAME,
    IMP_PANE,
    ORC_DIR_NAME,
)
from orc.core.effects.model import (
    FileEffect,
    FileOp,
    GitEffect,
    GitOp,
    PersistEffect,
    PersistOp,
    TmuxEffect,
    TmuxOp,
)
from orc.core.planning.artifacts import grove_config
from orc.core.planning.plan import Plan


@dataclass(frozen=True)
class CreateGrovePlanInput:
    grove_id: str
    grove_name: str
    mission_id: str
    base_path: str  # worktree root, e.g. ~/src/worktrees
    created_at: datetime
    repos: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "repos", tuple(self.repos))


@dataclass(frozen=True)
class OpenGrovePlanInput:
    grove_id: str
    grove_name: str
    grove_path: str
    session_name: str  # the tmux session the caller is attached to
    editor_command: str = DEFAULT_EDITOR_COMMAND
    imp_command: str = DEFAULT_IMP_COMMAND


@dataclass(frozen=True)
class CreateGrovePlan(Plan):
    GROUP_ORDER: ClassVar[tuple[str, ...]] = ("filesystem_ops", "git_ops", "database_ops")

    grove_id: str
    grove_path: str
    filesystem_ops: tuple[FileEffect, ...] = ()
    git_ops: tuple[GitEffect, ...] = ()
    database_ops: tuple[PersistEffect, ...] = ()


@dataclass(frozen=True)
class OpenGrovePlan(Plan):
    GROUP_ORDER: ClassVar[tuple[str, ...]] = ("tmux_ops",)

    grove_id: str
    grove_path: str
    tmux_ops: tuple[TmuxEffect, ...] = ()


def grove_path_for(base_path: str, mission_id: str, grove_name: str) -> str:
    """``{base_path}/{mission_id}-{grove_name}``"""
    return str(PurePosixPath(base_path) / f"{mission_id}-{grove_name}")


def generate_create_grove_plan(plan_input: CreateGrovePlanInput) -> CreateGrovePlan:
    grove_path = grove_path_for(plan_input.base_path, plan_input.mission_id, plan_input.grove_name)
    orc_dir = PurePosixPath(grove_path) / ORC_DIR_NAME

    fs_ops = (
        FileEffect(operation=FileOp.MKDIR, path=grove_path, mode=DIR_MODE),
        FileEffect(operation=FileOp.MKDIR, path=str(orc_dir), mode=DIR_MODE),
        FileEffect(
            operation=FileOp.WRITE,
            path=str(orc_dir / GROVE_CONFIG_FILENAME),
            content=grove_config(
                plan_input.grove_id,
                "mission_id",
                plan_input.mission_id,
                plan_input.grove_name,
                plan_input.repos,
                plan_input.created_at,
            ),
            mode=FILE_MODE,
        ),
    )
    git_ops = tuple(
        GitEffect(
            operation=GitOp.WORKTREE_ADD,
            repo_path=repo,
            args=(grove_path, "-b", plan_input.grove_name),
        )
        for repo in plan_input.repos
    )
    db_ops = (
        PersistEffect(
            entity="grove",
            operation=PersistOp.UPDATE,
            data={"id": plan_input.grove_id, "path": grove_path},
        ),
    )
    return CreateGrovePlan(
        grove_id=plan_input.grove_id,
        grove_path=grove_path,
        filesystem_ops=fs_ops,
        git_ops=git_ops,
        database_ops=db_ops,
    )


def generate_open_grove_plan(plan_input: OpenGrovePlanInput) -> OpenGrovePlan:
    session = plan_input.session_name
    name = plan_input.grove_name
    path = plan_input.grove_path

    ops = (
        TmuxEffect(TmuxOp.NEW_WINDOW, session, name, path),
        TmuxEffect(TmuxOp.SPLIT_VERTICAL, session, name, path),
        TmuxEffect(TmuxOp.SPLIT_HORIZONTAL, session, name, path),
        TmuxEffect(TmuxOp.SEND_KEYS, session, f"{name}.{EDITOR_PANE}", plan_input.editor_command),
        TmuxEffect(TmuxOp.SEND_KEYS, session, f"{name}.{IMP_PANE}", plan_input.imp_command),
    )
    return OpenGrovePlan(grove_id=plan_input.grove_id, grove_path=path, tmux_ops=ops)
