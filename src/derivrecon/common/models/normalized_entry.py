"""Normalized ledger entry produced by source adapters."""

from datetime import date
from decimal import Decimal
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict

from .source_system import SourceSystem


class BucketLabel(str, Enum):
    """Ledger bucket an entry is booked into."""

    NR_C = "NR-C"  # DTCC credit, positive side
    CP_D = "CP-D"  # DTCC credit, mirrored side
    CP_C = "CP-C"  # DTCC debit, positive side
    NR_D = "NR-D"  # DTCC debit, mirrored side
    DEFAULT = "DEFAULT"  # single bucket for CLS and OCC


DTCC_BUCKETS = (BucketLabel.NR_C, BucketLabel.CP_D, BucketLabel.CP_C, BucketLabel.NR_D)


class NormalizedEntry(BaseModel):
    """A single signed USD amount booked into a ledger bucket.

    Entries are created by a SourceAdapter from one raw record. The
    record_id ties the entry back to that record so the aggregator can
    count distinct records rather than entries.
    """

    model_config = ConfigDict(
        frozen=True,  # Immutable once emitted
        validate_assignment=True,
    )

    source_system: SourceSystem = Field(..., description="Feed the entry came from")
    record_id: str = Field(..., description="Raw record that produced this entry")
    bucket: BucketLabel = Field(..., description="Ledger bucket label")
    amount: Decimal = Field(..., description="Signed amount in USD")
    business_date: date = Field(..., description="Business date being reconciled")

    def __str__(self) -> str:
        """String representation for debugging."""
        return (
            f"NormalizedEntry({self.source_system.value}:{self.record_id} "
            f"{self.bucket.value} {self.amount} USD)"
        )
