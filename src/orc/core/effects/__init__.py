"""Effect vocabulary shared by planners and executors."""

from orc.core.effects.model import (
    CompositeEffect,
    Effect,
    EffectKind,
    FileEffect,
    FileOp,
    GitEffect,
    GitOp,
    LogEffect,
    NoEffect,
    PersistEffect,
    PersistOp,
    QueryEffect,
    TmuxEffect,
    TmuxOp,
    fingerprint_effects,
    flatten_effects,
    serialize_effects,
)

__all__ = [
    "CompositeEffect",
    "Effect",
    "EffectKind",
    "FileEffect",
    "FileOp",
    "GitEffect",
    "GitOp",
    "LogEffect",
    "NoEffect",
    "PersistEffect",
    "PersistOp",
    "QueryEffect",
    "TmuxEffect",
    "TmuxOp",
    "fingerprint_effects",
    "flatten_effects",
    "serialize_effects",
]
