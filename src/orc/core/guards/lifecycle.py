"""
Rules shared by the guard families: top-level units (missions, commissions),
their workspaces, and the work tracked under them.

Each rule is a pure function of plain facts returning a ``GuardResult``. The
family modules bind the nouns and verbs; the wording lives in ``messages``.
"""

from __future__ import annotations

from orc.core.agent import ActorIdentity
from orc.core.guards.messages import DenialCode
from orc.core.guards.result import GuardResult, allow, deny


def require_coordinator(actor: ActorIdentity, verb: str, noun: str) -> GuardResult:
    """Deny lifecycle control to IMPs."""
    if actor.is_imp:
        return deny(DenialCode.IMP_FORBIDDEN, verb=verb, noun=noun, agent_id=actor.agent_id)
    return allow()


def require_unpinned(unit_id: str, is_pinned: bool, verb: str, noun: str) -> GuardResult:
    if is_pinned:
        return deny(DenialCode.PINNED, verb=verb, noun=noun, id=unit_id)
    return allow()


def require_no_dependents(
    unit: str,
    unit_id: str,
    shipment_count: int,
    child_count: int,
    children: str,
    force_delete: bool,
) -> GuardResult:
    """Deny deletion while dependents exist, unless forced.

    Both counts are always named in the sentence, even when one is zero.
    """
    if force_delete:
        return allow()
    if shipment_count > 0 or child_count > 0:
        return deny(
            DenialCode.HAS_DEPENDENTS,
            unit=unit,
            id=unit_id,
            shipment_count=shipment_count,
            child_count=child_count,
            children=children,
        )
    return allow()


def require_exists(exists: bool, noun: str, unit_id: str) -> GuardResult:
    if not exists:
        return deny(DenialCode.NOT_FOUND, noun=noun, id=unit_id)
    return allow()


def require_parent(exists: bool, noun: str, parent: str, parent_id: str) -> GuardResult:
    if not exists:
        return deny(DenialCode.PARENT_NOT_FOUND, noun=noun, parent=parent, parent_id=parent_id)
    return allow()


def require_openable(
    noun: str, unit_id: str, exists: bool, path_exists: bool, in_tmux_session: bool
) -> GuardResult:
    """Existence, then worktree on disk, then a live tmux session."""
    if not exists:
        return deny(DenialCode.NOT_FOUND, noun=noun, id=unit_id)
    if not path_exists:
        return deny(DenialCode.WORKTREE_MISSING, noun=noun)
    if not in_tmux_session:
        return deny(DenialCode.NOT_IN_TMUX)
    return allow()


def require_no_active_tasks(
    noun: str, unit_id: str, active_task_count: int, force_delete: bool
) -> GuardResult:
    if active_task_count > 0 and not force_delete:
        return deny(DenialCode.HAS_ACTIVE_TASKS, noun=noun, id=unit_id, count=active_task_count)
    return allow()


def require_status(
    status: str, allowed: tuple[str, ...], verb: str, nouns: str
) -> GuardResult:
    """Exact-match status gate; the sentence lists the allowed statuses joined by "or"."""
    if status not in allowed:
        return deny(
            DenialCode.WRONG_STATUS,
            verb=verb,
            required=" or ".join(allowed),
            nouns=nouns,
            status=status,
        )
    return allow()
