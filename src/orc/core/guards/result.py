"""GuardResult — the single verdict shape shared by every guard family."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from orc.core.exceptions import GuardDeniedError
from orc.core.guards.messages import DenialCode, render_reason


@dataclass(frozen=True)
class GuardResult:
    """
    Allow/deny verdict.

    ``reason`` is empty exactly when ``allowed`` is true. A denial also keeps
    the structured ``code`` and ``params`` it was rendered from, so callers
    and tests can branch on fields instead of parsing the sentence.
    """

    allowed: bool
    reason: str = ""
    code: DenialCode | None = None
    params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.allowed == bool(self.reason):
            raise ValueError("reason must be non-empty iff the result is a denial")
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @property
    def denied(self) -> bool:
        return not self.allowed

    def raise_if_denied(self) -> None:
        """Convert a denial into ``GuardDeniedError``. Shell-side only."""
        if not self.allowed:
            raise GuardDeniedError(self)


_ALLOWED = GuardResult(allowed=True)


def allow() -> GuardResult:
    return _ALLOWED


def deny(code: DenialCode, **params: object) -> GuardResult:
    """Build a denial, rendering its sentence from ``code`` and ``params``."""
    str_params = {k: str(v) for k, v in params.items()}
    return GuardResult(
        allowed=False,
        reason=render_reason(code, str_params),
        code=code,
        params=str_params,
    )


def first_denial(*results: GuardResult) -> GuardResult:
    """Return the first denying result, or an allow if every result allows."""
    for result in results:
        if not result.allowed:
            return result
    return _ALLOWED
