"""Ordered field extraction for provider payloads whose schema drifts between revisions."""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

from macrosnap.domain.models.macro import to_decimal

# Path of keys into a nested JSON object, e.g. ("data", "priceUsd")
FieldPath = tuple[str, ...]


def dig(payload: Any, path: FieldPath) -> Any:
    """Follow ``path`` through nested dicts; None as soon as a key is missing."""
    node = payload
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def first_positive(payload: Any, paths: Sequence[FieldPath]) -> Decimal | None:
    """Try each candidate path in order; the first value parsing to a positive number wins."""
    for path in paths:
        value = to_decimal(dig(payload, path))
        if value is not None and value > 0:
            return value
    return None
