"""Guard engine — pure allow/deny predicates, one module per entity family.

Every guard is total: it never raises and never performs I/O. A denial is an
ordinary ``GuardResult``; the shell converts it with ``raise_if_denied()``.
"""

from orc.core.guards.messages import DenialCode, render_reason
from orc.core.guards.result import GuardResult, allow, deny, first_denial

__all__ = [
    "DenialCode",
    "GuardResult",
    "allow",
    "deny",
    "first_denial",
    "render_reason",
]
