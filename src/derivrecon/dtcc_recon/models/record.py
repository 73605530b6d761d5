"""Raw record model for the DTCC intraday settlement feed."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


class DTCCIntradayRecord(BaseModel):
    """Represents one DTCC/NSCC intraday settlement balance row.

    Only the fields the reconciliation rules read are modelled. Credit
    and debit are optional because the feed leaves them blank when a
    participant has no activity on that side.
    """

    model_config = ConfigDict(
        frozen=True,  # Immutable once read from the feed
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    record_id: str = Field(..., description="Unique identifier for this record")
    balance_type: str = Field(..., description="Balance type label (baltype)")
    file_reference: str = Field(..., description="Internal file reference")
    credit_amount: Optional[Decimal] = Field(None, description="Credit amount in USD")
    debit_amount: Optional[Decimal] = Field(None, description="Debit amount in USD")
    timestamp: datetime = Field(..., description="Local time the balance was reported")

    @field_validator("balance_type")
    @classmethod
    def _upper_balance_type(cls, value: str) -> str:
        return " ".join(value.upper().split())

    @property
    def credit(self) -> Decimal:
        """Credit amount with absent treated as zero."""
        return self.credit_amount if self.credit_amount is not None else Decimal("0")

    @property
    def debit(self) -> Decimal:
        """Debit amount with absent treated as zero."""
        return self.debit_amount if self.debit_amount is not None else Decimal("0")

    def __str__(self) -> str:
        return (
            f"DTCCIntradayRecord({self.record_id}: {self.balance_type} "
            f"ref={self.file_reference} cr={self.credit_amount} dr={self.debit_amount} "
            f"@ {self.timestamp.isoformat()})"
        )
