"""
Status transitions for top-level work units (missions and commissions).

Pure and total. No existence or permission checks happen here; callers run
the guard first, then the transition, then emit the persist effect.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class MissionStatus(StrEnum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETE = "complete"
    ARCHIVED = "archived"


@dataclass(frozen=True)
class StatusTransition:
    new_status: MissionStatus
    completed_at: datetime | None = None


def apply_status_transition(new_status: MissionStatus, now: datetime) -> StatusTransition:
    """``completed_at`` is ``now`` exactly when entering ``complete``."""
    completed_at = now if new_status == MissionStatus.COMPLETE else None
    return StatusTransition(new_status=new_status, completed_at=completed_at)


def initial_status() -> MissionStatus:
    return MissionStatus.ACTIVE
