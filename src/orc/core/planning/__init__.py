"""Planners — pure functions from pre-fetched input to a Plan of effects."""

from orc.core.planning.plan import Plan

__all__ = ["Plan"]
