"""Deterministic content for generated ``.orc/config.json`` files."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from orc.core.constants import GROVE_CONFIG_VERSION


def format_timestamp(moment: datetime) -> str:
    """RFC 3339 in UTC with second precision. Naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def _dump(document: dict[str, Any]) -> bytes:
    # Insertion order is the on-disk key order.
    return json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8")


def grove_config(
    grove_id: str,
    parent_key: str,
    parent_id: str,
    name: str,
    repos: Sequence[str],
    created_at: datetime,
) -> bytes:
    """
    Config for a grove-shaped workspace.

    ``parent_key`` is ``mission_id`` for mission groves and ``commission_id``
    for commission workbenches; the rest of the document is identical.
    """
    return _dump(
        {
            "version": GROVE_CONFIG_VERSION,
            "type": "grove",
            "grove": {
                "grove_id": grove_id,
                parent_key: parent_id,
                "name": name,
                "repos": list(repos),
                "created_at": format_timestamp(created_at),
            },
        }
    )


def place_config(place_id: str) -> bytes:
    """Identity-only config stamped into gatehouses and workbenches."""
    return _dump({"version": GROVE_CONFIG_VERSION, "place_id": place_id})
