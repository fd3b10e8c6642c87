"""Dry-run rendering of plans and denials with rich."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.table import Table
from rich.text import Text

from orc.core.effects.model import (
    CompositeEffect,
    Effect,
    EffectKind,
    FileEffect,
    GitEffect,
    LogEffect,
    PersistEffect,
    QueryEffect,
    TmuxEffect,
)
from orc.core.guards.result import GuardResult


class _HasEffects(Protocol):
    def effects(self) -> tuple[Effect, ...]: ...


_KIND_STYLE: dict[str, str] = {
    EffectKind.FILE: "green",
    EffectKind.PERSIST: "magenta",
    EffectKind.GIT: "yellow",
    EffectKind.TMUX: "cyan",
    EffectKind.QUERY: "blue",
    EffectKind.LOG: "dim",
    EffectKind.COMPOSITE: "bold",
    EffectKind.NONE: "dim",
}


def describe(effect: Effect) -> tuple[str, str]:
    """Return ``(operation, target)`` for one table row."""
    if isinstance(effect, FileEffect):
        return str(effect.operation), effect.path
    if isinstance(effect, PersistEffect):
        key = effect.data.get("id") or (effect.conditions or {}).get("id", "")
        return str(effect.operation), f"{effect.entity} {key}".strip()
    if isinstance(effect, GitEffect):
        return str(effect.operation), " ".join((effect.repo_path, *effect.args))
    if isinstance(effect, TmuxEffect):
        target = effect.session_name
        if effect.window_name:
            target = f"{target}:{effect.window_name}"
        if effect.command:
            target = f"{target} {effect.command}"
        return str(effect.operation), target
    if isinstance(effect, QueryEffect):
        return "query", effect.entity
    if isinstance(effect, LogEffect):
        return effect.level, effect.message
    if isinstance(effect, CompositeEffect):
        return "bundle", f"{len(effect.effects)} effects"
    return "-", ""


def render_plan(plan: _HasEffects, console: Console, *, title: str | None = None) -> None:
    effects = plan.effects()
    if not effects:
        console.print("[dim]Nothing to do.[/dim]")
        return

    table = Table(title=title or "Planned effects", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", no_wrap=True)
    table.add_column("Operation", style="bold")
    table.add_column("Target")

    for i, effect in enumerate(effects, start=1):
        kind = str(effect.effect_type)
        op, target = describe(effect)
        style = _KIND_STYLE.get(kind, "")
        # Text() keeps paths and commands from being parsed as markup.
        table.add_row(str(i), Text(kind, style=style), Text(op), Text(target))

    console.print(table)


def render_denial(result: GuardResult, console: Console) -> None:
    if result.allowed:
        return
    line = Text("Denied: ", style="bold red")
    line.append(result.reason)
    if result.code is not None:
        line.append(f"  [{result.code}]", style="dim")
    console.print(line)
