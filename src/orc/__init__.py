"""
orc — functional core for the ORC/IMP mission orchestrator.

ORC (the single orchestrator agent) plans missions, commissions, groves and
workbenches; IMPs (implementation agents) execute inside a grove. This package
decides whether a requested transition is allowed and describes, as plain
data, the side effects that carry it out. Nothing here touches the disk,
git, tmux, or the database — an executor in the shell does that.

Package layout (src/orc/):
  core/guards/    — pure allow/deny predicates per entity family
  core/planning/  — pure planners: pre-fetched input → Plan of effects
  core/effects/   — the closed effect vocabulary
  core/           — ids, status transitions, config, logging, exceptions
  app/            — imperative shell seam: container, services, executor, render
"""

__version__ = "0.4.0"
__all__ = ["__version__"]
