"""orc exception hierarchy.

The functional core never raises these for policy outcomes — a denial is a
``GuardResult`` and an unparsable id is a sentinel. They exist for the shell:
config loading, the denial-to-error conversion at the presentation boundary,
and effect execution.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from orc.core.effects.model import Effect
    from orc.core.guards.result import GuardResult


class OrcError(Exception):
    """Base exception for all orc errors."""


class ConfigError(OrcError):
    """Raised when the configuration is invalid or cannot be read."""


class ConfigNotFoundError(ConfigError):
    """Raised when the configuration file does not exist."""


class GuardDeniedError(OrcError):
    """Raised by the shell when a guard denied the requested operation.

    The structured result stays attached so callers can branch on
    ``result.code`` instead of matching the rendered sentence.
    """

    def __init__(self, result: GuardResult) -> None:
        super().__init__(result.reason)
        self.result = result


class EffectExecutionError(OrcError):
    """Raised when an executor cannot apply an effect.

    ``applied`` holds the effects of the same batch that were applied before
    the failure. There is no rollback, so callers use it to report or clean
    up partial work.
    """

    def __init__(
        self, effect: Effect, message: str, applied: tuple[Effect, ...] = ()
    ) -> None:
        super().__init__(f"failed to execute {effect.effect_type} effect: {message}")
        self.effect = effect
        self.applied = applied
