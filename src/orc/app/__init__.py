"""Imperative shell — container, services, executor and rendering."""
