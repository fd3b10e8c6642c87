"""
Effect vocabulary — immutable descriptions of side effects.

An effect says *what* should happen (create this directory, add that
worktree, open a tmux window) and never *how*. Planners build tuples of
effects; an executor in the shell interprets them in order, dispatching on
the constant ``effect_type`` discriminator rather than on Python type.

The set of kinds is closed: a new I/O category gets a new ``EffectKind`` and
a new record, never a subclass of an existing record.
"""

from __future__ import annotations

import base64
import hashlib
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from dataclasses import fields as dataclass_fields
from enum import StrEnum
from types import MappingProxyType
from typing import Any, ClassVar

# ---------------------------------------------------------------------------
# Discriminators and operations
# ---------------------------------------------------------------------------


class EffectKind(StrEnum):
    LOG = "log"
    PERSIST = "persist"
    QUERY = "query"
    FILE = "file"
    GIT = "git"
    TMUX = "tmux"
    COMPOSITE = "composite"
    NONE = "none"


class FileOp(StrEnum):
    MKDIR = "mkdir"
    WRITE = "write"
    READ = "read"
    EXISTS = "exists"


class PersistOp(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class GitOp(StrEnum):
    CLONE = "clone"
    WORKTREE_ADD = "worktree_add"
    COMMIT = "commit"
    PUSH = "push"


class TmuxOp(StrEnum):
    NEW_SESSION = "new_session"
    NEW_WINDOW = "new_window"
    SPLIT_VERTICAL = "split_vertical"
    SPLIT_HORIZONTAL = "split_horizontal"
    SEND_KEYS = "send_keys"


def _freeze(mapping: Mapping[str, Any] | None) -> Mapping[str, Any] | None:
    if mapping is None:
        return None
    return MappingProxyType(dict(mapping))


def _plain(value: Any) -> Any:
    """Convert a payload value into JSON-compatible plain data."""
    if isinstance(value, Mapping):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    return value


# ---------------------------------------------------------------------------
# Effect records
# ---------------------------------------------------------------------------


class Effect:
    """Base for every effect record. Subclasses are frozen dataclasses."""

    effect_type: ClassVar[EffectKind]

    def to_dict(self) -> dict[str, Any]:
        """Canonical plain-data form: discriminator first, then fields."""
        body: dict[str, Any] = {"effect_type": str(self.effect_type)}
        for f in dataclass_fields(self):  # type: ignore[arg-type]
            body[f.name] = _plain(getattr(self, f.name))
        return body


@dataclass(frozen=True)
class LogEffect(Effect):
    effect_type: ClassVar[EffectKind] = EffectKind.LOG

    level: str
    message: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", _freeze(self.fields))


@dataclass(frozen=True)
class PersistEffect(Effect):
    """Create, update or delete one persisted entity."""

    effect_type: ClassVar[EffectKind] = EffectKind.PERSIST

    entity: str
    operation: PersistOp
    data: Mapping[str, Any] = field(default_factory=dict)
    conditions: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _freeze(self.data))
        object.__setattr__(self, "conditions", _freeze(self.conditions))


@dataclass(frozen=True)
class QueryEffect(Effect):
    effect_type: ClassVar[EffectKind] = EffectKind.QUERY

    entity: str
    conditions: Mapping[str, Any] | None = None
    order_by: str = ""
    limit: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "conditions", _freeze(self.conditions))


@dataclass(frozen=True)
class FileEffect(Effect):
    """A filesystem operation. ``content`` is only meaningful for writes."""

    effect_type: ClassVar[EffectKind] = EffectKind.FILE

    operation: FileOp
    path: str
    content: bytes = b""
    mode: int = 0


@dataclass(frozen=True)
class GitEffect(Effect):
    effect_type: ClassVar[EffectKind] = EffectKind.GIT

    operation: GitOp
    repo_path: str
    args: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))


@dataclass(frozen=True)
class TmuxEffect(Effect):
    """
    A tmux operation.

    For ``new_window`` and the splits, ``command`` carries the working
    directory; for ``send_keys`` it is the literal keystrokes and
    ``window_name`` addresses the pane (``{window}.{pane}``).
    """

    effect_type: ClassVar[EffectKind] = EffectKind.TMUX

    operation: TmuxOp
    session_name: str
    window_name: str = ""
    command: str = ""


@dataclass(frozen=True)
class CompositeEffect(Effect):
    """A bundle treated as one unit by the caller's bookkeeping."""

    effect_type: ClassVar[EffectKind] = EffectKind.COMPOSITE

    effects: tuple[Effect, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "effects", tuple(self.effects))

    def to_dict(self) -> dict[str, Any]:
        return {
            "effect_type": str(self.effect_type),
            "effects": [e.to_dict() for e in self.effects],
        }


@dataclass(frozen=True)
class NoEffect(Effect):
    """Explicitly nothing to do."""

    effect_type: ClassVar[EffectKind] = EffectKind.NONE


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def flatten_effects(effects: Iterable[Effect]) -> tuple[Effect, ...]:
    """Expand composites depth-first, preserving order. ``NoEffect`` is kept."""
    out: list[Effect] = []
    for effect in effects:
        if isinstance(effect, CompositeEffect):
            out.extend(flatten_effects(effect.effects))
        else:
            out.append(effect)
    return tuple(out)


def serialize_effects(effects: Iterable[Effect]) -> str:
    """Canonical JSON for a sequence of effects (sorted keys, compact)."""
    return json.dumps(
        [e.to_dict() for e in effects],
        sort_keys=True,
        separators=(",", ":"),
    )


def fingerprint_effects(effects: Iterable[Effect]) -> str:
    """sha256 hex digest of ``serialize_effects``; equal lists give equal digests."""
    return hashlib.sha256(serialize_effects(effects).encode("utf-8")).hexdigest()
