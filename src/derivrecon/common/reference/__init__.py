"""Read-only reference data lookups."""

from .participant_resolver import ParticipantMapping, ParticipantResolver
from .currency_converter import ExchangeRate, CurrencyConverter

__all__ = [
    "ParticipantMapping",
    "ParticipantResolver",
    "ExchangeRate",
    "CurrencyConverter",
]
