"""Custom exceptions for the reconciliation engine."""

from datetime import date
from typing import Any, Optional


class ReconciliationError(Exception):
    """
    Base exception for reconciliation errors.

    Provides structured error information for skip reporting and logging.
    """

    def __init__(
        self,
        message: str,
        source_system: Optional[str] = None,
        record_id: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None
    ):
        """
        Initialize ReconciliationError with detailed error information.

        Args:
            message: Human-readable error message
            source_system: Source feed the failing record belongs to
            record_id: Identifier of the failing record
            field: Specific field that caused the failure
            value: The value that caused the failure
        """
        super().__init__(message)
        self.source_system = source_system
        self.record_id = record_id
        self.field = field
        self.value = value

    @property
    def message(self) -> str:
        """Return the bare error message."""
        return str(self.args[0]) if self.args else "Reconciliation error"

    def __str__(self) -> str:
        """Return detailed error message."""
        parts = [self.message]

        if self.source_system:
            parts.append(f"Source: {self.source_system}")

        if self.record_id:
            parts.append(f"Record: {self.record_id}")

        if self.field:
            parts.append(f"Field: {self.field}")

        if self.value is not None:
            parts.append(f"Value: {self.value}")

        return " | ".join(parts)


class UnresolvedParticipant(ReconciliationError):
    """No participant mapping exists for a file reference."""

    def __init__(self, file_reference: str, **kwargs):
        """
        Initialize unresolved participant error.

        Args:
            file_reference: File reference that has no mapping
            **kwargs: Additional arguments passed to ReconciliationError
        """
        super().__init__(
            f"No participant mapping for file reference '{file_reference}'",
            field="file_reference",
            value=file_reference,
            **kwargs
        )
        self.file_reference = file_reference


class CurrencyConversionError(ReconciliationError):
    """Base class for exchange rate lookup failures."""

    def __init__(
        self,
        message: str,
        source_currency: str,
        target_currency: str,
        business_date: date,
        rate_type: str,
        **kwargs
    ):
        """
        Initialize currency conversion error.

        Args:
            message: Error message
            source_currency: Currency converted from
            target_currency: Currency converted to
            business_date: Business date of the lookup
            rate_type: Rate type of the lookup (e.g. NEW_YORK)
            **kwargs: Additional arguments passed to ReconciliationError
        """
        super().__init__(message, **kwargs)
        self.source_currency = source_currency
        self.target_currency = target_currency
        self.business_date = business_date
        self.rate_type = rate_type

    @property
    def rate_key(self) -> str:
        """Human-readable lookup key."""
        return (
            f"{self.source_currency}->{self.target_currency} "
            f"{self.business_date.isoformat()} {self.rate_type}"
        )

    def __str__(self) -> str:
        """Return conversion error message with the lookup key."""
        return f"{super().__str__()} | Key: {self.rate_key}"


class RateNotFound(CurrencyConversionError):
    """No exchange rate row matches the lookup key."""


class AmbiguousRate(CurrencyConversionError):
    """More than one exchange rate row matches the lookup key."""

    def __init__(self, *args, match_count: int = 2, **kwargs):
        """
        Initialize ambiguous rate error.

        Args:
            *args: Positional arguments passed to CurrencyConversionError
            match_count: Number of rows that matched the key
            **kwargs: Keyword arguments passed to CurrencyConversionError
        """
        super().__init__(*args, **kwargs)
        self.match_count = match_count


class UnknownSource(ReconciliationError):
    """A record is tagged with a source system the engine does not handle."""

    def __init__(self, tag: Any, **kwargs):
        super().__init__(
            f"Unrecognized source system '{tag}'",
            field="sourceSystem",
            value=tag,
            **kwargs
        )
        self.tag = tag


class DuplicateRecord(ReconciliationError):
    """A record id was already used by an earlier record of the same source."""

    def __init__(self, record_id: str, **kwargs):
        super().__init__(
            f"Record id '{record_id}' already used by an earlier record",
            field="record_id",
            value=record_id,
            **kwargs
        )


class ConfigurationError(ReconciliationError):
    """Run configuration is missing or malformed. Fatal to the whole run."""


class ReconciliationInputError(ReconciliationError):
    """Run inputs are structurally unusable (e.g. missing sanitized total)."""
