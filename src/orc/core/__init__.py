"""Functional core — guards, transitions, effects and planners. No I/O."""
