"""
Human-readable entity identifiers: ``{PREFIX}-{NNN}``.

``generate_id`` formats the successor of the current maximum, zero-padded to
three digits and growing naturally past 999. ``parse_number`` is total over
arbitrary strings: anything that is not exactly ``PREFIX-<digits>`` yields
``INVALID_ID_NUMBER`` instead of raising.
"""

from __future__ import annotations

import re

from orc.core.constants import (
    COMMISSION_PREFIX,
    ID_NUMBER_WIDTH,
    INVALID_ID_NUMBER,
    MISSION_PREFIX,
    PR_PREFIX,
    REPO_PREFIX,
)

_DIGITS_RE = re.compile(r"[0-9]+")


def generate_id(prefix: str, current_max: int) -> str:
    """Return the identifier following ``current_max`` (e.g. ``MISSION-004`` after 3)."""
    return f"{prefix}-{current_max + 1:0{ID_NUMBER_WIDTH}d}"


def parse_number(prefix: str, entity_id: str) -> int:
    """Return the numeric suffix of ``entity_id``, or ``INVALID_ID_NUMBER``."""
    head = f"{prefix}-"
    if not entity_id.startswith(head):
        return INVALID_ID_NUMBER
    suffix = entity_id[len(head) :]
    # ASCII digits only; str.isdigit() would accept superscripts.
    if not _DIGITS_RE.fullmatch(suffix):
        return INVALID_ID_NUMBER
    return int(suffix)


# ---------------------------------------------------------------------------
# Prefixed helpers
# ---------------------------------------------------------------------------


def generate_mission_id(current_max: int) -> str:
    return generate_id(MISSION_PREFIX, current_max)


def parse_mission_number(mission_id: str) -> int:
    return parse_number(MISSION_PREFIX, mission_id)


def generate_commission_id(current_max: int) -> str:
    return generate_id(COMMISSION_PREFIX, current_max)


def parse_commission_number(commission_id: str) -> int:
    return parse_number(COMMISSION_PREFIX, commission_id)


def generate_repo_id(current_max: int) -> str:
    return generate_id(REPO_PREFIX, current_max)


def parse_repo_number(repo_id: str) -> int:
    return parse_number(REPO_PREFIX, repo_id)


def generate_pr_id(current_max: int) -> str:
    return generate_id(PR_PREFIX, current_max)


def parse_pr_number(pr_id: str) -> int:
    return parse_number(PR_PREFIX, pr_id)
