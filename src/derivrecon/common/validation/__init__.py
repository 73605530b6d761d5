"""Reconciliation error types."""

from .exceptions import (
    ReconciliationError,
    UnresolvedParticipant,
    CurrencyConversionError,
    RateNotFound,
    AmbiguousRate,
    UnknownSource,
    DuplicateRecord,
    ConfigurationError,
    ReconciliationInputError,
)

__all__ = [
    "ReconciliationError",
    "UnresolvedParticipant",
    "CurrencyConversionError",
    "RateNotFound",
    "AmbiguousRate",
    "UnknownSource",
    "DuplicateRecord",
    "ConfigurationError",
    "ReconciliationInputError",
]
