"""
Services — the imperative shell around the functional core.

Every operation follows the same sequence:

  1. build the guard context from facts the caller already fetched
  2. run the guard; on denial log ``guard_denied``, print the denial to the
     container's console and raise GuardDeniedError
  3. run the planner with the container's clock and config
  4. on ``dry_run`` print the plan table to the console; otherwise hand
     ``plan.effects()`` to the container's executor

The actor is always an explicit argument; nothing is read from ambient state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

import structlog

from orc.app.container import Container
from orc.app.ports import ExecutionReport
from orc.app.render import render_denial, render_plan
from orc.core.agent import ActorIdentity
from orc.core.effects.model import Effect, fingerprint_effects
from orc.core.exceptions import EffectExecutionError
from orc.core.guards import commission as commission_guards
from orc.core.guards import grove as grove_guards
from orc.core.guards import mission as mission_guards
from orc.core.guards.result import GuardResult, allow
from orc.core.ids import generate_commission_id, generate_mission_id
from orc.core.planning.grove import (
    CreateGrovePlanInput,
    OpenGrovePlanInput,
    generate_create_grove_plan,
    generate_open_grove_plan,
)
from orc.core.planning.launch import (
    ChildPlanInput,
    CommissionLaunchPlanInput,
    CommissionStartPlanInput,
    LaunchPlanInput,
    StartPlanInput,
    generate_commission_launch_plan,
    generate_commission_start_plan,
    generate_launch_plan,
    generate_start_plan,
)
from orc.core.planning.lifecycle import (
    plan_create_mission,
    plan_delete,
    plan_pin,
    plan_status_change,
)
from orc.core.planning.workshop import OpenPlanInput, gatehouse_path, generate_open_plan
from orc.core.transitions import MissionStatus

logger = structlog.get_logger()


class SupportsEffects(Protocol):
    def effects(self) -> tuple[Effect, ...]: ...


@dataclass(frozen=True)
class Outcome:
    """A plan and, unless it was a dry run, what the executor reported."""

    plan: SupportsEffects
    report: ExecutionReport | None = None

    @property
    def executed(self) -> bool:
        return self.report is not None


class _Service:
    def __init__(self, container: Container) -> None:
        self._container = container

    def _authorize(self, result: GuardResult, actor: ActorIdentity, **ctx: Any) -> None:
        if not result.allowed:
            logger.warning(
                "guard_denied",
                code=str(result.code),
                reason=result.reason,
                agent_id=actor.agent_id,
                agent_type=str(actor.agent_type),
                **ctx,
            )
            render_denial(result, self._container.console)
        result.raise_if_denied()

    def _run(
        self, event: str, plan: SupportsEffects, *, dry_run: bool, **ctx: Any
    ) -> Outcome:
        effects = plan.effects()
        logger.info(
            event,
            effects=len(effects),
            fingerprint=fingerprint_effects(effects),
            dry_run=dry_run,
            **ctx,
        )
        if dry_run:
            render_plan(plan, self._container.console, title=event)
            return Outcome(plan=plan)

        try:
            report = self._container.executor.execute(effects)
        except EffectExecutionError as exc:
            logger.error(
                "effects_failed",
                effect_type=str(exc.effect.effect_type),
                error=str(exc),
                **ctx,
            )
            raise
        logger.info("effects_executed", applied=report.applied_count, skipped=report.skipped, **ctx)
        return Outcome(plan=plan, report=report)


# ---------------------------------------------------------------------------
# Top-level units
# ---------------------------------------------------------------------------


class _UnitService(_Service, ABC):
    """Lifecycle shared by missions and commissions; subclasses bind the guards."""

    entity: str = ""

    @abstractmethod
    def _next_id(self, current_max: int) -> str:
        """Format the next id from the highest existing sequence number."""

    @abstractmethod
    def _can_create(self, actor: ActorIdentity, unit_id: str) -> GuardResult:
        """Guard for creating a unit."""

    @abstractmethod
    def _can_complete(self, unit_id: str, is_pinned: bool) -> GuardResult:
        """Guard for completing a unit."""

    @abstractmethod
    def _can_archive(self, unit_id: str, is_pinned: bool) -> GuardResult:
        """Guard for archiving a unit."""

    @abstractmethod
    def _can_delete(
        self, unit_id: str, shipment_count: int, child_count: int, force: bool
    ) -> GuardResult:
        """Guard for deleting a unit and, with force, its dependents."""

    @abstractmethod
    def _can_pin(self, unit_id: str, exists: bool, is_pinned: bool) -> GuardResult:
        """Guard for pinning."""

    @abstractmethod
    def _can_unpin(self, unit_id: str, exists: bool, is_pinned: bool) -> GuardResult:
        """Guard for unpinning."""

    def create(
        self, actor: ActorIdentity, title: str, current_max: int, *, dry_run: bool = False
    ) -> Outcome:
        unit_id = self._next_id(current_max)
        self._authorize(self._can_create(actor, unit_id), actor, unit_id=unit_id)
        plan = plan_create_mission(unit_id, title, self._container.clock(), entity=self.entity)
        return self._run(f"{self.entity}_create_planned", plan, dry_run=dry_run, unit_id=unit_id)

    def set_status(
        self,
        actor: ActorIdentity,
        unit_id: str,
        new_status: MissionStatus,
        *,
        is_pinned: bool,
        dry_run: bool = False,
    ) -> Outcome:
        if new_status == MissionStatus.COMPLETE:
            verdict = self._can_complete(unit_id, is_pinned)
        elif new_status == MissionStatus.ARCHIVED:
            verdict = self._can_archive(unit_id, is_pinned)
        else:
            verdict = allow()
        self._authorize(verdict, actor, unit_id=unit_id, status=str(new_status))
        plan = plan_status_change(unit_id, new_status, self._container.clock(), entity=self.entity)
        return self._run(
            f"{self.entity}_status_planned",
            plan,
            dry_run=dry_run,
            unit_id=unit_id,
            status=str(new_status),
        )

    def pin(
        self,
        actor: ActorIdentity,
        unit_id: str,
        *,
        exists: bool,
        is_pinned: bool,
        dry_run: bool = False,
    ) -> Outcome:
        self._authorize(self._can_pin(unit_id, exists, is_pinned), actor, unit_id=unit_id)
        plan = plan_pin(unit_id, True, is_pinned, entity=self.entity)
        return self._run(f"{self.entity}_pin_planned", plan, dry_run=dry_run, unit_id=unit_id)

    def unpin(
        self,
        actor: ActorIdentity,
        unit_id: str,
        *,
        exists: bool,
        is_pinned: bool,
        dry_run: bool = False,
    ) -> Outcome:
        self._authorize(self._can_unpin(unit_id, exists, is_pinned), actor, unit_id=unit_id)
        plan = plan_pin(unit_id, False, is_pinned, entity=self.entity)
        return self._run(f"{self.entity}_unpin_planned", plan, dry_run=dry_run, unit_id=unit_id)

    def delete(
        self,
        actor: ActorIdentity,
        unit_id: str,
        *,
        shipment_count: int,
        child_count: int,
        force: bool = False,
        dry_run: bool = False,
    ) -> Outcome:
        verdict = self._can_delete(unit_id, shipment_count, child_count, force)
        self._authorize(verdict, actor, unit_id=unit_id, force=force)
        plan = plan_delete(unit_id, entity=self.entity)
        return self._run(f"{self.entity}_delete_planned", plan, dry_run=dry_run, unit_id=unit_id)


class MissionService(_UnitService):
    entity = "mission"

    def _next_id(self, current_max: int) -> str:
        return generate_mission_id(current_max)

    def _can_create(self, actor: ActorIdentity, unit_id: str) -> GuardResult:
        return mission_guards.can_create_mission(mission_guards.GuardContext(actor, unit_id))

    def _can_complete(self, unit_id: str, is_pinned: bool) -> GuardResult:
        return mission_guards.can_complete_mission(
            mission_guards.MissionStateContext(unit_id, is_pinned)
        )

    def _can_archive(self, unit_id: str, is_pinned: bool) -> GuardResult:
        return mission_guards.can_archive_mission(
            mission_guards.MissionStateContext(unit_id, is_pinned)
        )

    def _can_delete(
        self, unit_id: str, shipment_count: int, child_count: int, force: bool
    ) -> GuardResult:
        return mission_guards.can_delete_mission(
            mission_guards.DeleteContext(unit_id, shipment_count, child_count, force)
        )

    def _can_pin(self, unit_id: str, exists: bool, is_pinned: bool) -> GuardResult:
        return mission_guards.can_pin_mission(
            mission_guards.PinContext(unit_id, exists, is_pinned)
        )

    def _can_unpin(self, unit_id: str, exists: bool, is_pinned: bool) -> GuardResult:
        return mission_guards.can_unpin_mission(
            mission_guards.PinContext(unit_id, exists, is_pinned)
        )

    def launch(
        self,
        actor: ActorIdentity,
        mission_id: str,
        title: str,
        groves: Sequence[ChildPlanInput] = (),
        *,
        create_tmux: bool = False,
        dry_run: bool = False,
    ) -> Outcome:
        verdict = mission_guards.can_launch_mission(mission_guards.GuardContext(actor, mission_id))
        self._authorize(verdict, actor, mission_id=mission_id)
        cfg = self._container.config
        plan = generate_launch_plan(
            LaunchPlanInput(
                mission_id=mission_id,
                mission_title=title,
                workspace_path=cfg.workspace_path(mission_id),
                created_at=self._container.clock(),
                create_tmux=create_tmux,
                groves=tuple(groves),
                session_prefix=cfg.tmux.session_prefix,
            )
        )
        return self._run("mission_launch_planned", plan, dry_run=dry_run, mission_id=mission_id)

    def start(
        self,
        actor: ActorIdentity,
        mission_id: str,
        groves: Sequence[ChildPlanInput] = (),
        *,
        dry_run: bool = False,
    ) -> Outcome:
        verdict = mission_guards.can_start_mission(mission_guards.GuardContext(actor, mission_id))
        self._authorize(verdict, actor, mission_id=mission_id)
        cfg = self._container.config
        plan = generate_start_plan(
            StartPlanInput(
                mission_id=mission_id,
                workspace_path=cfg.workspace_path(mission_id),
                groves=tuple(groves),
                session_prefix=cfg.tmux.session_prefix,
            )
        )
        return self._run("mission_start_planned", plan, dry_run=dry_run, mission_id=mission_id)


class CommissionService(_UnitService):
    entity = "commission"

    def _next_id(self, current_max: int) -> str:
        return generate_commission_id(current_max)

    def _can_create(self, actor: ActorIdentity, unit_id: str) -> GuardResult:
        return commission_guards.can_create_commission(
            commission_guards.GuardContext(actor, unit_id)
        )

    def _can_complete(self, unit_id: str, is_pinned: bool) -> GuardResult:
        return commission_guards.can_complete_commission(
            commission_guards.CommissionStateContext(unit_id, is_pinned)
        )

    def _can_archive(self, unit_id: str, is_pinned: bool) -> GuardResult:
        return commission_guards.can_archive_commission(
            commission_guards.CommissionStateContext(unit_id, is_pinned)
        )

    def _can_delete(
        self, unit_id: str, shipment_count: int, child_count: int, force: bool
    ) -> GuardResult:
        return commission_guards.can_delete_commission(
            commission_guards.DeleteContext(unit_id, shipment_count, child_count, force)
        )

    def _can_pin(self, unit_id: str, exists: bool, is_pinned: bool) -> GuardResult:
        return commission_guards.can_pin_commission(
            commission_guards.PinContext(unit_id, exists, is_pinned)
        )

    def _can_unpin(self, unit_id: str, exists: bool, is_pinned: bool) -> GuardResult:
        return commission_guards.can_unpin_commission(
            commission_guards.PinContext(unit_id, exists, is_pinned)
        )

    def launch(
        self,
        actor: ActorIdentity,
        commission_id: str,
        title: str,
        workbenches: Sequence[ChildPlanInput] = (),
        *,
        create_tmux: bool = False,
        dry_run: bool = False,
    ) -> Outcome:
        verdict = commission_guards.can_launch_commission(
            commission_guards.GuardContext(actor, commission_id)
        )
        self._authorize(verdict, actor, commission_id=commission_id)
        cfg = self._container.config
        plan = generate_commission_launch_plan(
            CommissionLaunchPlanInput(
                commission_id=commission_id,
                commission_title=title,
                workspace_path=cfg.workspace_path(commission_id),
                created_at=self._container.clock(),
                create_tmux=create_tmux,
                workbenches=tuple(workbenches),
                session_prefix=cfg.tmux.session_prefix,
            )
        )
        return self._run(
            "commission_launch_planned", plan, dry_run=dry_run, commission_id=commission_id
        )

    def start(
        self,
        actor: ActorIdentity,
        commission_id: str,
        workbenches: Sequence[ChildPlanInput] = (),
        *,
        dry_run: bool = False,
    ) -> Outcome:
        verdict = commission_guards.can_start_commission(
            commission_guards.GuardContext(actor, commission_id)
        )
        self._authorize(verdict, actor, commission_id=commission_id)
        cfg = self._container.config
        plan = generate_commission_start_plan(
            CommissionStartPlanInput(
                commission_id=commission_id,
                workspace_path=cfg.workspace_path(commission_id),
                workbenches=tuple(workbenches),
                session_prefix=cfg.tmux.session_prefix,
            )
        )
        return self._run(
            "commission_start_planned", plan, dry_run=dry_run, commission_id=commission_id
        )


# ---------------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------------


class GroveService(_Service):
    def create(
        self,
        actor: ActorIdentity,
        grove_id: str,
        grove_name: str,
        mission_id: str,
        *,
        mission_exists: bool,
        repos: Sequence[str] = (),
        dry_run: bool = False,
    ) -> Outcome:
        verdict = grove_guards.can_create_grove(
            grove_guards.CreateGroveContext(actor, mission_id, mission_exists)
        )
        self._authorize(verdict, actor, grove_id=grove_id, mission_id=mission_id)
        plan = generate_create_grove_plan(
            CreateGrovePlanInput(
                grove_id=grove_id,
                grove_name=grove_name,
                mission_id=mission_id,
                base_path=self._container.config.worktree_root,
                created_at=self._container.clock(),
                repos=tuple(repos),
            )
        )
        return self._run("grove_create_planned", plan, dry_run=dry_run, grove_id=grove_id)

    def open(
        self,
        actor: ActorIdentity,
        grove_id: str,
        grove_name: str,
        grove_path: str,
        session_name: str,
        *,
        grove_exists: bool,
        path_exists: bool,
        in_tmux_session: bool,
        dry_run: bool = False,
    ) -> Outcome:
        verdict = grove_guards.can_open_grove(
            grove_guards.OpenGroveContext(grove_id, grove_exists, path_exists, in_tmux_session)
        )
        self._authorize(verdict, actor, grove_id=grove_id)
        tmux = self._container.config.tmux
        plan = generate_open_grove_plan(
            OpenGrovePlanInput(
                grove_id=grove_id,
                grove_name=grove_name,
                grove_path=grove_path,
                session_name=session_name,
                editor_command=tmux.editor_command,
                imp_command=tmux.imp_command,
            )
        )
        return self._run("grove_open_planned", plan, dry_run=dry_run, grove_id=grove_id)


class WorkshopService(_Service):
    def gatehouse_path(self, workshop_id: str, workshop_name: str) -> str:
        return gatehouse_path(str(self._container.config.home_path), workshop_id, workshop_name)

    def open(
        self, actor: ActorIdentity, plan_input: OpenPlanInput, *, dry_run: bool = False
    ) -> Outcome:
        plan = generate_open_plan(plan_input)
        if plan.nothing_to_do:
            logger.info(
                "workshop_nothing_to_do",
                workshop_id=plan_input.workshop_id,
                agent_id=actor.agent_id,
            )
        return self._run(
            "workshop_open_planned",
            plan,
            dry_run=dry_run,
            workshop_id=plan_input.workshop_id,
            agent_id=actor.agent_id,
        )
