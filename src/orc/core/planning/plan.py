"""Plan — an ordered, deterministic bundle of effects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from orc.core.effects.model import Effect, fingerprint_effects


@dataclass(frozen=True)
class Plan:
    """
    Base for planner outputs.

    Subclasses hold their effects in per-kind groups (tuples) and name those
    groups in ``GROUP_ORDER``; ``effects()`` concatenates them in exactly that
    order. Each planner documents its own order.
    """

    GROUP_ORDER: ClassVar[tuple[str, ...]] = ()

    def effect_groups(self) -> tuple[tuple[Effect, ...], ...]:
        return tuple(tuple(getattr(self, name)) for name in self.GROUP_ORDER)

    def effects(self) -> tuple[Effect, ...]:
        """All effects flattened into the execution order."""
        return tuple(e for group in self.effect_groups() for e in group)

    def is_empty(self) -> bool:
        return not any(self.effect_groups())

    def to_dict(self) -> dict[str, Any]:
        return {
            "plan": type(self).__name__,
            "effects": [e.to_dict() for e in self.effects()],
        }

    def fingerprint(self) -> str:
        """sha256 over the canonical JSON of ``effects()``; stable across runs."""
        return fingerprint_effects(self.effects())
