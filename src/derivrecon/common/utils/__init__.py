"""Shared utilities."""

from .type_coercion import (
    CENT,
    is_missing,
    safe_decimal,
    parse_decimal,
    safe_str,
    to_cents,
    normalize_participant_id,
)

__all__ = [
    "CENT",
    "is_missing",
    "safe_decimal",
    "parse_decimal",
    "safe_str",
    "to_cents",
    "normalize_participant_id",
]
