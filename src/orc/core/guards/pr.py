"""Pull request guards.

A shipment gets at most one PR, and only while it is active. PR status
runs draft → open → approved → merged, with closed reachable from open or
approved.

Evaluation order for create: shipment exists → shipment active → shipment
has no PR → repository exists.
"""

from __future__ import annotations

from dataclasses import dataclass

from orc.core.guards.lifecycle import require_exists, require_status
from orc.core.guards.messages import DenialCode
from orc.core.guards.result import GuardResult, allow, deny
from orc.core.guards.shipment import ACTIVE as SHIPMENT_ACTIVE

_NOUNS = "PRs"

DRAFT = "draft"
OPEN = "open"
APPROVED = "approved"

_REVIEWABLE = (OPEN, APPROVED)


@dataclass(frozen=True)
class CreatePRContext:
    shipment_id: str
    repo_id: str
    shipment_exists: bool
    shipment_status: str
    shipment_has_pr: bool
    repo_exists: bool


@dataclass(frozen=True)
class PRStateContext:
    pr_id: str
    status: str


def can_create_pr(ctx: CreatePRContext) -> GuardResult:
    if not ctx.shipment_exists:
        return deny(DenialCode.NOT_FOUND, noun="shipment", id=ctx.shipment_id)
    if ctx.shipment_status != SHIPMENT_ACTIVE:
        return deny(DenialCode.SHIPMENT_NOT_ACTIVE, status=ctx.shipment_status)
    if ctx.shipment_has_pr:
        return deny(DenialCode.HAS_PR, noun="shipment", id=ctx.shipment_id)
    return require_exists(ctx.repo_exists, "repository", ctx.repo_id)


def can_open_pr(ctx: PRStateContext) -> GuardResult:
    return require_status(ctx.status, (DRAFT,), "open", _NOUNS)


def can_approve_pr(ctx: PRStateContext) -> GuardResult:
    return require_status(ctx.status, (OPEN,), "approve", _NOUNS)


def can_merge_pr(ctx: PRStateContext) -> GuardResult:
    return require_status(ctx.status, _REVIEWABLE, "merge", _NOUNS)


def can_close_pr(ctx: PRStateContext) -> GuardResult:
    return require_status(ctx.status, _REVIEWABLE, "close", _NOUNS)
