"""Denial codes and the sentences they render to.

Guards deny with a ``DenialCode`` plus string parameters. The sentence is
rendered from the template table below; the wording is the user-facing CLI
contract and must not drift (remediation commands included).
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum


class DenialCode(StrEnum):
    """Machine-readable reason codes for guard denials."""

    IMP_FORBIDDEN = "imp_forbidden"
    PINNED = "pinned"
    HAS_DEPENDENTS = "has_dependents"
    NOT_FOUND = "not_found"
    PARENT_NOT_FOUND = "parent_not_found"
    WORKTREE_MISSING = "worktree_missing"
    NOT_IN_TMUX = "not_in_tmux"
    HAS_ACTIVE_TASKS = "has_active_tasks"
    NOT_READY = "not_ready"
    PINNED_WORK = "pinned_work"
    WRONG_STATUS = "wrong_status"
    SHIPMENT_NOT_ACTIVE = "shipment_not_active"
    GROVE_ASSIGNED = "grove_assigned"
    TAG_LIMIT = "tag_limit"
    NAME_EMPTY = "name_empty"
    NAME_TAKEN = "name_taken"
    HAS_ACTIVE_PRS = "has_active_prs"
    HAS_PR = "has_pr"


_TEMPLATES: dict[DenialCode, str] = {
    DenialCode.IMP_FORBIDDEN: (
        "IMPs cannot {verb} {noun}s - only ORC can {verb} {noun}s (agent: {agent_id})"
    ),
    DenialCode.PINNED: "Cannot {verb} pinned {noun} {id}. Unpin first with: orc {noun} unpin {id}",
    DenialCode.HAS_DEPENDENTS: (
        "{unit} {id} has {shipment_count} shipments and {child_count} {children}. "
        "Use --force to delete anyway"
    ),
    DenialCode.NOT_FOUND: "{noun} {id} not found",
    DenialCode.PARENT_NOT_FOUND: "cannot create {noun}: {parent} {parent_id} not found",
    DenialCode.WORKTREE_MISSING: (
        "{noun} worktree not found - run 'orc {noun} create' to materialize"
    ),
    DenialCode.NOT_IN_TMUX: "not in a TMux session - run this command from within a TMux session",
    DenialCode.HAS_ACTIVE_TASKS: (
        "{noun} {id} has {count} active tasks. Use --force to delete anyway"
    ),
    DenialCode.NOT_READY: "can only complete ready operations (current status: {status})",
    # Work items (shipments, tasks) use the lowercase form.
    DenialCode.PINNED_WORK: (
        "cannot {verb} pinned {noun} {id}. Unpin first with: orc {noun} unpin {id}"
    ),
    DenialCode.WRONG_STATUS: "can only {verb} {required} {nouns} (current status: {status})",
    DenialCode.SHIPMENT_NOT_ACTIVE: (
        "can only create PR for active shipments (current status: {status})"
    ),
    DenialCode.GROVE_ASSIGNED: "grove already assigned to shipment {shipment_id}",
    DenialCode.TAG_LIMIT: (
        "task {id} already has tag '{tag}' (one tag per task limit)\n"
        "Remove existing tag first with: orc task untag {id}"
    ),
    DenialCode.NAME_EMPTY: "{noun} name cannot be empty",
    DenialCode.NAME_TAKEN: "{noun} with name {quoted_name} already exists",
    DenialCode.HAS_ACTIVE_PRS: "cannot delete {noun} {id} with active pull requests",
    DenialCode.HAS_PR: "{noun} {id} already has a PR",
}


def render_reason(code: DenialCode, params: Mapping[str, str]) -> str:
    """Render the user-facing sentence for a denial.

    Raises KeyError if a template placeholder has no matching parameter.
    """
    return _TEMPLATES[code].format_map(params)


def template_for(code: DenialCode) -> str:
    return _TEMPLATES[code]
