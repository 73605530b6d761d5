"""Service layer for the reconciliation API."""

import asyncio
from pathlib import Path
from datetime import date
from typing import Any, Dict, List, Optional
import logging

from ...common.reference import CurrencyConverter, ParticipantResolver
from ..config import ReconConfigManager
from ..core import ReconciliationPipeline
from ..loaders import PayloadLoader
from ..utils import summary_to_records
from .models import ReconciliationRequest, ReconciliationResponse

logger = logging.getLogger(__name__)


class ReconciliationService:
    """Service for processing reconciliation requests."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self.config_manager = ReconConfigManager(config_path)
        self.loader = PayloadLoader()

    async def process_reconciliation(
        self, request: ReconciliationRequest
    ) -> ReconciliationResponse:
        """
        Process reconciliation request asynchronously.
        """
        return await asyncio.to_thread(self._process_sync, request)

    def _process_sync(self, request: ReconciliationRequest) -> ReconciliationResponse:
        """
        Synchronous processing of a reconciliation request.
        """
        run_config = self.config_manager.build_run_config(
            request.businessDate, request.config or {}
        )
        inputs = self.loader.build_inputs(request.model_dump())
        summary = ReconciliationPipeline(run_config).run(inputs)

        records = summary_to_records(summary)
        logger.info(
            f"Processed reconciliation for {summary.business_date.isoformat()}: "
            f"{len(records)} source results, all_match={summary.all_match}"
        )
        return ReconciliationResponse(
            businessDate=summary.business_date,
            allMatch=summary.all_match,
            unroutedCount=summary.unrouted_count,
            results=records,
            skippedRecords=[skip.model_dump(mode="json") for skip in summary.skipped_records],
        )

    def describe_rules(self, business_date: date) -> List[Dict[str, Any]]:
        """Rule descriptions of every source adapter under the file config."""
        run_config = self.config_manager.build_run_config(business_date)
        adapters = ReconciliationPipeline(run_config).build_adapters(
            ParticipantResolver({}), CurrencyConverter([])
        )
        return [adapter.get_rule_info() for adapter in adapters.values()]
