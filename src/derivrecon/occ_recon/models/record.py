"""Raw record model for the OCC options clearing feed."""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class OCCClearingRecord(BaseModel):
    """Represents one OCC net settlement row for a clearing member."""

    model_config = ConfigDict(
        frozen=True,  # Immutable once read from the feed
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    record_id: str = Field(..., description="Unique identifier for this record")
    cmo_code: str = Field(..., description="Clearing member organization code")
    net_settlement_amount: Optional[Decimal] = Field(
        None, description="Net settlement amount, already in USD"
    )

    @property
    def net_settlement(self) -> Decimal:
        """Net settlement with absent treated as zero."""
        if self.net_settlement_amount is None:
            return Decimal("0")
        return self.net_settlement_amount

    def __str__(self) -> str:
        return f"OCCClearingRecord({self.record_id}: {self.cmo_code} {self.net_settlement_amount})"
