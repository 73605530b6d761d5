"""Raw record model for the CLS currency settlement feed."""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


class CLSSettlementRecord(BaseModel):
    """Represents one CLS pay-in/pay-out settlement row.

    Amounts are in the record's settlement currency (the configured source
    currency, CAD by default, when the feed leaves it blank) and are
    converted to USD by the adapter.
    """

    model_config = ConfigDict(
        frozen=True,  # Immutable once read from the feed
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    record_id: str = Field(..., description="Unique identifier for this record")
    payin_amount: Optional[Decimal] = Field(None, description="Pay-in amount")
    payout_amount: Optional[Decimal] = Field(None, description="Pay-out amount")
    business_date: Optional[date] = Field(None, description="Business date reported by the feed")
    currency: Optional[str] = Field(
        None,
        min_length=3,
        max_length=3,
        description="Settlement currency; the configured source currency when absent",
    )

    @field_validator("currency")
    @classmethod
    def _upper_currency(cls, value: Optional[str]) -> Optional[str]:
        return value.upper() if value is not None else None

    @property
    def base_amount(self) -> Decimal:
        """Pay-out when pay-in is zero, otherwise pay-in. Absent counts as zero."""
        payin = self.payin_amount if self.payin_amount is not None else Decimal("0")
        if payin == 0:
            return self.payout_amount if self.payout_amount is not None else Decimal("0")
        return payin

    def __str__(self) -> str:
        return (
            f"CLSSettlementRecord({self.record_id}: in={self.payin_amount} "
            f"out={self.payout_amount})"
        )
