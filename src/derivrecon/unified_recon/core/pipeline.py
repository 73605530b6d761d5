"""End-to-end reconciliation pipeline for one business date."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Union
import logging

from ...common.adapters import AdapterOutput, RecordSkip, SourceAdapter
from ...common.models import SourceSystem
from ...common.reference import (
    CurrencyConverter,
    ExchangeRate,
    ParticipantMapping,
    ParticipantResolver,
)
from ...common.validation import ReconciliationInputError
from ...dtcc_recon import DTCCIntradayAdapter, DTCCIntradayRecord
from ...cls_recon import CLSSettlementAdapter, CLSSettlementRecord
from ...occ_recon import OCCClearingAdapter, OCCClearingRecord
from ..config import RunConfig
from ..models import ReconciliationResult, RunSummary, SanitizedTotal, SourceTotal
from .aggregator import Aggregator
from .reconciler import Reconciler

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationInputs:
    """Everything a run reads. Treated as read-only for the run."""

    dtcc_records: Sequence[DTCCIntradayRecord] = field(default_factory=list)
    cls_records: Sequence[CLSSettlementRecord] = field(default_factory=list)
    occ_records: Sequence[OCCClearingRecord] = field(default_factory=list)
    participant_mappings: Union[Iterable[ParticipantMapping], Mapping[str, Any]] = field(
        default_factory=list
    )
    exchange_rates: Iterable[ExchangeRate] = field(default_factory=list)
    sanitized_totals: Union[Iterable[SanitizedTotal], Mapping[SourceSystem, SanitizedTotal]] = field(
        default_factory=list
    )
    # Records dropped before reaching an adapter (e.g. unknown source tag)
    unrouted: List[RecordSkip] = field(default_factory=list)
    # Rows a record factory could not build, tagged with their source
    rejected: List[RecordSkip] = field(default_factory=list)

    def records_for(self, source_system: SourceSystem) -> Sequence[Any]:
        return {
            SourceSystem.DTCC: self.dtcc_records,
            SourceSystem.CLS: self.cls_records,
            SourceSystem.OCC: self.occ_records,
        }[source_system]

    def rejected_for(self, source_system: SourceSystem) -> List[RecordSkip]:
        return [skip for skip in self.rejected if skip.source_system == source_system]


class ReconciliationPipeline:
    """Runs every source adapter, aggregates and reconciles the results.

    Sources share only read-only reference data, so they are processed as
    independent tasks on a thread pool. An unexpected failure in one
    source is recorded on the summary and does not affect the others.
    """

    def __init__(self, run_config: RunConfig):
        """Initialize pipeline.

        Args:
            run_config: Validated configuration for this run
        """
        self.run_config = run_config
        self.aggregator = Aggregator()
        self.reconciler = Reconciler(run_config.tolerance)

    def build_adapters(
        self,
        participant_resolver: ParticipantResolver,
        currency_converter: CurrencyConverter,
    ) -> Dict[SourceSystem, SourceAdapter]:
        """Build the adapter registry for this run."""
        business_date = self.run_config.business_date
        return {
            SourceSystem.DTCC: DTCCIntradayAdapter(
                business_date, participant_resolver, self.run_config.dtcc_settings
            ),
            SourceSystem.CLS: CLSSettlementAdapter(
                business_date, currency_converter, self.run_config.cls_settings
            ),
            SourceSystem.OCC: OCCClearingAdapter(
                business_date, self.run_config.occ_settings
            ),
        }

    def run(self, inputs: ReconciliationInputs) -> RunSummary:
        """Reconcile all sources for the configured business date.

        Args:
            inputs: Raw records, reference data and sanitized totals

        Returns:
            RunSummary with one result per successfully processed source

        Raises:
            ReconciliationInputError: If a sanitized total is missing or
                duplicated, or the participant mapping has duplicates
        """
        business_date = self.run_config.business_date
        logger.info(f"Starting reconciliation for {business_date.isoformat()}")

        sanitized = self._index_sanitized_totals(inputs.sanitized_totals)
        participant_resolver = ParticipantResolver(inputs.participant_mappings)
        currency_converter = CurrencyConverter(inputs.exchange_rates)
        adapters = self.build_adapters(participant_resolver, currency_converter)

        results: List[ReconciliationResult] = []
        skipped: List[RecordSkip] = list(inputs.unrouted)
        failed: Dict[SourceSystem, str] = {}

        with ThreadPoolExecutor(
            max_workers=self.run_config.max_workers, thread_name_prefix="recon"
        ) as executor:
            futures = {
                source: executor.submit(
                    self._process_source,
                    adapter,
                    inputs.records_for(source),
                    inputs.rejected_for(source),
                )
                for source, adapter in adapters.items()
            }

            for source, future in futures.items():
                try:
                    output, source_total = future.result()
                except Exception as e:
                    logger.error(
                        f"Processing of {source.value} aborted: {e}", exc_info=True
                    )
                    failed[source] = f"{type(e).__name__}: {e}"
                    skipped.extend(inputs.rejected_for(source))
                    continue

                skipped.extend(output.skipped)
                results.append(self.reconciler.reconcile(source_total, sanitized[source]))

        return self.reconciler.summarize(
            business_date,
            results,
            skipped_records=skipped,
            failed_sources=failed,
            unrouted_count=len(inputs.unrouted),
        )

    def _process_source(
        self,
        adapter: SourceAdapter,
        records: Sequence[Any],
        rejected: Sequence[RecordSkip] = (),
    ) -> tuple[AdapterOutput, SourceTotal]:
        """Run one adapter and aggregate its entries.

        Rows rejected before reaching the adapter count as skips of the source.
        """
        output = adapter.process(records)
        output.skipped[:0] = rejected
        return output, self.aggregator.aggregate_output(output)

    def _index_sanitized_totals(
        self,
        sanitized_totals: Union[Iterable[SanitizedTotal], Mapping[SourceSystem, SanitizedTotal]],
    ) -> Dict[SourceSystem, SanitizedTotal]:
        """Key sanitized totals by source and check every source has one."""
        if isinstance(sanitized_totals, Mapping):
            rows = list(sanitized_totals.values())
        else:
            rows = list(sanitized_totals)

        indexed: Dict[SourceSystem, SanitizedTotal] = {}
        for row in rows:
            if row.source_system in indexed:
                raise ReconciliationInputError(
                    "Duplicate sanitized total",
                    source_system=row.source_system.value,
                )
            indexed[row.source_system] = row

        missing = [source.value for source in SourceSystem if source not in indexed]
        if missing:
            raise ReconciliationInputError(
                f"Missing sanitized totals for {', '.join(missing)}",
                field="sanitized_totals",
            )
        return indexed
