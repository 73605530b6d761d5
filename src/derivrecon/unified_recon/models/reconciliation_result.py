"""Per-source reconciliation results and the run summary."""

from datetime import date
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, computed_field

from ...common.adapters import RecordSkip
from ...common.models import SourceSystem
from .recon_status import ReconStatus
from .totals import SanitizedTotal, SourceTotal


class ReconciliationResult(BaseModel):
    """Comparison of one source's computed totals against the ledger."""

    model_config = ConfigDict(frozen=True)

    source_system: SourceSystem = Field(..., description="Feed being reconciled")
    count_delta: int = Field(..., description="source count - sanitized count")
    amount_delta: Decimal = Field(..., description="source amount - sanitized amount")
    status: ReconStatus = Field(..., description="MATCH or MISMATCH")
    source_total: SourceTotal = Field(..., description="Totals computed from the feed")
    sanitized_total: SanitizedTotal = Field(..., description="Ledger totals")
    tolerance: Decimal = Field(Decimal("0"), ge=0, description="Amount tolerance applied")

    @property
    def is_match(self) -> bool:
        return self.status == ReconStatus.MATCH

    @property
    def skip_count(self) -> int:
        """Records dropped by data errors. Reported even when totals MATCH."""
        return self.source_total.skip_count

    @property
    def summary_line(self) -> str:
        """Get a one-line summary of this result for display."""
        return (
            f"{self.source_system.value}: {self.status.value} | "
            f"count {self.source_total.record_count} vs {self.sanitized_total.record_count} "
            f"(delta {self.count_delta}) | amount {self.source_total.total_amount} vs "
            f"{self.sanitized_total.total_amount} (delta {self.amount_delta}) | "
            f"skipped {self.skip_count}"
        )

    def __str__(self) -> str:
        return f"ReconciliationResult({self.source_system.value}: {self.status.value})"


class RunSummary(BaseModel):
    """All per-source results of one reconciliation run."""

    model_config = ConfigDict(frozen=True)

    business_date: date = Field(..., description="Business date reconciled")
    results: list[ReconciliationResult] = Field(default_factory=list)
    skipped_records: list[RecordSkip] = Field(
        default_factory=list, description="Records dropped by data errors"
    )
    failed_sources: dict[SourceSystem, str] = Field(
        default_factory=dict, description="Sources whose processing aborted, with the error"
    )
    unrouted_count: int = Field(0, ge=0, description="Records with an unknown source tag")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_match(self) -> bool:
        """True only when every source reconciled and matched."""
        if self.failed_sources or not self.results:
            return False
        return all(result.is_match for result in self.results)

    @property
    def total_skipped(self) -> int:
        return len(self.skipped_records)

    def get_result(self, source_system: SourceSystem) -> Optional[ReconciliationResult]:
        """Get the result for a specific source, or None if it failed."""
        for result in self.results:
            if result.source_system == source_system:
                return result
        return None

    def skips_for(self, source_system: SourceSystem) -> list[RecordSkip]:
        """Get the skipped records of one source."""
        return [skip for skip in self.skipped_records if skip.source_system == source_system]
