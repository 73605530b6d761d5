"""Aggregated and sanitized per-source totals."""

from decimal import Decimal
from typing import Any
from pydantic import BaseModel, Field, ConfigDict, field_validator

from ...common.models import BucketLabel, SourceSystem
from ...common.utils import safe_decimal


class SourceTotal(BaseModel):
    """Totals computed from one source's normalized entries.

    Partial totals over disjoint record batches merge by plain addition.
    """

    model_config = ConfigDict(frozen=True)

    source_system: SourceSystem = Field(..., description="Feed these totals belong to")
    record_count: int = Field(0, ge=0, description="Distinct records that produced entries")
    total_amount: Decimal = Field(Decimal("0"), description="Sum of entry amounts in USD")
    bucket_totals: dict[BucketLabel, Decimal] = Field(
        default_factory=dict, description="Sum of entry amounts per bucket"
    )
    filtered_count: int = Field(0, ge=0, description="Records excluded by filtering")
    skip_count: int = Field(0, ge=0, description="Records dropped by data errors")

    def merge(self, other: "SourceTotal") -> "SourceTotal":
        """Add another partial total of the same source.

        Raises:
            ValueError: If the totals belong to different sources
        """
        if other.source_system != self.source_system:
            raise ValueError(
                f"Cannot merge {other.source_system.value} totals into "
                f"{self.source_system.value} totals"
            )

        buckets = dict(self.bucket_totals)
        for bucket, amount in other.bucket_totals.items():
            buckets[bucket] = buckets.get(bucket, Decimal("0")) + amount

        return SourceTotal(
            source_system=self.source_system,
            record_count=self.record_count + other.record_count,
            total_amount=self.total_amount + other.total_amount,
            bucket_totals=buckets,
            filtered_count=self.filtered_count + other.filtered_count,
            skip_count=self.skip_count + other.skip_count,
        )

    def __add__(self, other: "SourceTotal") -> "SourceTotal":
        return self.merge(other)


class SanitizedTotal(BaseModel):
    """Ground-truth totals for one source, supplied by the ledger."""

    model_config = ConfigDict(frozen=True)

    source_system: SourceSystem = Field(..., description="Feed these totals belong to")
    record_count: int = Field(..., ge=0, description="Sanitized record count")
    total_amount: Decimal = Field(..., description="Sanitized amount in USD")

    @field_validator("source_system", mode="before")
    @classmethod
    def _coerce_source(cls, value: Any) -> Any:
        if isinstance(value, str):
            return SourceSystem.from_tag(value)
        return value

    @field_validator("total_amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> Any:
        converted = safe_decimal(value)
        return converted if converted is not None else value
