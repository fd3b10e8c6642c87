"""Actor identity — who is asking, supplied explicitly by the caller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class AgentType(StrEnum):
    ORC = "ORC"  # the single orchestrator
    IMP = "IMP"  # an implementation agent confined to a grove


@dataclass(frozen=True)
class ActorIdentity:
    """
    The resolved identity of the calling agent.

    Built once by the shell (from whatever identity source it uses) and
    passed as an argument to every operation that needs it. ``agent_id`` is
    opaque to the core and is only echoed back in denial reasons.
    """

    agent_type: AgentType
    agent_id: str

    @property
    def is_imp(self) -> bool:
        return self.agent_type == AgentType.IMP

    @classmethod
    def orc(cls, agent_id: str = "ORC") -> ActorIdentity:
        return cls(agent_type=AgentType.ORC, agent_id=agent_id)

    @classmethod
    def imp(cls, agent_id: str) -> ActorIdentity:
        return cls(agent_type=AgentType.IMP, agent_id=agent_id)
