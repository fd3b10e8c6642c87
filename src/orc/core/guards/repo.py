"""Repository guards."""

from __future__ import annotations

import json
from dataclasses import dataclass

from orc.core.guards.lifecycle import require_status
from orc.core.guards.messages import DenialCode
from orc.core.guards.result import GuardResult, allow, deny

_NOUN = "repository"

ACTIVE = "active"
ARCHIVED = "archived"


@dataclass(frozen=True)
class CreateRepoContext:
    name: str
    name_exists: bool


@dataclass(frozen=True)
class RepoStateContext:
    repo_id: str
    status: str


@dataclass(frozen=True)
class DeleteRepoContext:
    repo_id: str
    has_active_prs: bool


def _quoted(name: str) -> str:
    # Double-quoted with backslash escapes, e.g. "api" or "my \"repo\"".
    return json.dumps(name, ensure_ascii=False)


def can_create_repo(ctx: CreateRepoContext) -> GuardResult:
    """Whitespace-only names count as empty; the name check uses the raw name."""
    if not ctx.name.strip():
        return deny(DenialCode.NAME_EMPTY, noun=_NOUN)
    if ctx.name_exists:
        return deny(DenialCode.NAME_TAKEN, noun=_NOUN, quoted_name=_quoted(ctx.name))
    return allow()


def can_archive_repo(ctx: RepoStateContext) -> GuardResult:
    return require_status(ctx.status, (ACTIVE,), "archive", "repositories")


def can_restore_repo(ctx: RepoStateContext) -> GuardResult:
    return require_status(ctx.status, (ARCHIVED,), "restore", "repositories")


def can_delete_repo(ctx: DeleteRepoContext) -> GuardResult:
    if ctx.has_active_prs:
        return deny(DenialCode.HAS_ACTIVE_PRS, noun=_NOUN, id=ctx.repo_id)
    return allow()
