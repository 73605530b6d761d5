"""Comparison of computed totals against sanitized totals."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional
import logging

from ...common.adapters import RecordSkip
from ...common.models import SourceSystem
from ...common.utils import safe_decimal
from ...common.validation import ConfigurationError
from ..models import (
    ReconStatus,
    ReconciliationResult,
    RunSummary,
    SanitizedTotal,
    SourceTotal,
)

logger = logging.getLogger(__name__)


class Reconciler:
    """Classifies each source as MATCH or MISMATCH.

    A MISMATCH is a normal result returned to the caller; the reconciler
    never raises on it.
    """

    def __init__(self, tolerance: Decimal = Decimal("0")):
        """Initialize reconciler.

        Args:
            tolerance: Largest |amount delta| still treated as a MATCH

        Raises:
            ConfigurationError: If the tolerance is negative or not a number
        """
        converted = safe_decimal(tolerance)
        if converted is None:
            raise ConfigurationError(
                "Tolerance must be a number", field="tolerance", value=tolerance
            )
        tolerance = converted
        if tolerance.is_nan() or tolerance < 0:
            raise ConfigurationError(
                "Tolerance must be zero or positive", field="tolerance", value=tolerance
            )
        self.tolerance = tolerance

    def reconcile(
        self, source_total: SourceTotal, sanitized_total: SanitizedTotal
    ) -> ReconciliationResult:
        """Compare one source's totals against the ledger.

        Raises:
            ValueError: If the two totals belong to different sources
        """
        if source_total.source_system != sanitized_total.source_system:
            raise ValueError(
                f"Cannot reconcile {source_total.source_system.value} totals against "
                f"{sanitized_total.source_system.value} sanitized totals"
            )

        count_delta = source_total.record_count - sanitized_total.record_count
        amount_delta = source_total.total_amount - sanitized_total.total_amount

        if count_delta == 0 and abs(amount_delta) <= self.tolerance:
            status = ReconStatus.MATCH
        else:
            status = ReconStatus.MISMATCH

        result = ReconciliationResult(
            source_system=source_total.source_system,
            count_delta=count_delta,
            amount_delta=amount_delta,
            status=status,
            source_total=source_total,
            sanitized_total=sanitized_total,
            tolerance=self.tolerance,
        )

        if status == ReconStatus.MISMATCH:
            logger.warning(result.summary_line)
        else:
            logger.info(result.summary_line)
        if result.skip_count:
            logger.warning(
                f"{result.source_system.value} skipped {result.skip_count} records"
            )
        return result

    def summarize(
        self,
        business_date: date,
        results: Iterable[ReconciliationResult],
        skipped_records: Iterable[RecordSkip] = (),
        failed_sources: Optional[Mapping[SourceSystem, str]] = None,
        unrouted_count: int = 0,
    ) -> RunSummary:
        """Build the run-level summary with results in source order."""
        order = list(SourceSystem)
        ordered = sorted(results, key=lambda r: order.index(r.source_system))
        skips = sorted(
            skipped_records,
            key=lambda s: (
                order.index(s.source_system) if s.source_system else len(order),
                s.record_id or "",
            ),
        )
        summary = RunSummary(
            business_date=business_date,
            results=ordered,
            skipped_records=skips,
            failed_sources=dict(failed_sources or {}),
            unrouted_count=unrouted_count,
        )
        logger.info(
            f"Run {business_date.isoformat()}: all_match={summary.all_match}, "
            f"skipped={summary.total_skipped}, failed={len(summary.failed_sources)}"
        )
        return summary
