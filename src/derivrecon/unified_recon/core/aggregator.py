"""Aggregation of normalized entries into per-source totals."""

from decimal import Decimal
from functools import reduce
from typing import Iterable, Optional
import logging

from ...common.adapters import AdapterOutput
from ...common.models import NormalizedEntry, SourceSystem
from ..models import SourceTotal

logger = logging.getLogger(__name__)


class Aggregator:
    """Sums normalized entries into count/amount totals per source.

    The record count is the number of distinct records that produced at
    least one entry, not the number of entries. Decimal addition keeps
    the result independent of entry order.
    """

    def aggregate(
        self,
        entries: Iterable[NormalizedEntry],
        source_system: Optional[SourceSystem] = None,
        filtered_count: int = 0,
        skip_count: int = 0,
    ) -> SourceTotal:
        """Aggregate one source's entries.

        Args:
            entries: Normalized entries, all from the same source
            source_system: Source to total. Required when entries is empty.
            filtered_count: Records excluded by filtering, carried through
            skip_count: Records dropped by data errors, carried through

        Returns:
            SourceTotal for the source

        Raises:
            ValueError: If entries span more than one source, or the source
                cannot be determined
        """
        record_ids: set[str] = set()
        total = Decimal("0")
        buckets: dict = {}

        for entry in entries:
            if source_system is None:
                source_system = entry.source_system
            elif entry.source_system != source_system:
                raise ValueError(
                    f"Entry from {entry.source_system.value} passed to "
                    f"{source_system.value} aggregation"
                )
            record_ids.add(entry.record_id)
            total += entry.amount
            buckets[entry.bucket] = buckets.get(entry.bucket, Decimal("0")) + entry.amount

        if source_system is None:
            raise ValueError("source_system is required when aggregating no entries")

        source_total = SourceTotal(
            source_system=source_system,
            record_count=len(record_ids),
            total_amount=total,
            bucket_totals=buckets,
            filtered_count=filtered_count,
            skip_count=skip_count,
        )
        logger.info(
            f"Aggregated {source_system.value}: {source_total.record_count} records, "
            f"{source_total.total_amount} USD"
        )
        return source_total

    def aggregate_output(self, output: AdapterOutput) -> SourceTotal:
        """Aggregate everything an adapter produced, keeping its counters."""
        return self.aggregate(
            output.entries,
            source_system=output.source_system,
            filtered_count=output.filtered_count,
            skip_count=output.skip_count,
        )

    def merge(self, totals: Iterable[SourceTotal]) -> SourceTotal:
        """Merge partial totals of one source computed over disjoint batches.

        Raises:
            ValueError: If no totals are given or they span sources
        """
        totals = list(totals)
        if not totals:
            raise ValueError("At least one partial total is required")
        return reduce(lambda left, right: left.merge(right), totals)
