"""Payload loader turning JSON reconciliation requests into run inputs."""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping
import logging

from pydantic import ValidationError

from ...common.adapters import RecordSkip
from ...common.models import SourceSystem
from ...common.reference import ExchangeRate, ParticipantMapping
from ...common.validation import ReconciliationInputError
from ...dtcc_recon import DTCCRecordFactory
from ...cls_recon import CLSRecordFactory
from ...occ_recon import OCCRecordFactory
from ..core.pipeline import ReconciliationInputs
from ..core.source_router import SourceRouter
from ..models import SanitizedTotal

logger = logging.getLogger(__name__)


class PayloadLoader:
    """Loader for JSON payloads with field mapping for reference data.

    Payload shape::

        {
          "businessDate": "2024-03-15",
          "records": [{"sourceSystem": "OCC", "cmo": "WFCSLLC", "netSettle": 250}, ...],
          "participantMappings": [{"fileReference": "F1", "participantId": "0250"}],
          "exchangeRates": [{"sourceCurrency": "CAD", "targetCurrency": "USD",
                             "businessDate": "2024-03-15", "rateType": "NEW_YORK",
                             "rate": "0.73"}],
          "sanitizedTotals": [{"sourceSystem": "OCC", "recordCount": 1,
                               "totalAmount": "250.00"}],
          "config": {"tolerance": "0.01"}
        }
    """

    def __init__(self) -> None:
        """Initialize the loader with field mappings and record factories."""
        # JSON field -> model field
        self.mapping_field_mappings = {
            "fileReference": "file_reference",
            "fileRef": "file_reference",
            "participantId": "participant_id",
        }
        self.rate_field_mappings = {
            "sourceCurrency": "source_currency",
            "targetCurrency": "target_currency",
            "businessDate": "business_date",
            "rateType": "rate_type",
        }
        self.total_field_mappings = {
            "sourceSystem": "source_system",
            "recordCount": "record_count",
            "totalAmount": "total_amount",
        }
        self.router = SourceRouter()
        self.factories = {
            SourceSystem.DTCC: DTCCRecordFactory(),
            SourceSystem.CLS: CLSRecordFactory(),
            SourceSystem.OCC: OCCRecordFactory(),
        }

    def load_file(self, json_path: Path) -> Dict[str, Any]:
        """Read a JSON payload file.

        Raises:
            FileNotFoundError: If the file does not exist
            ReconciliationInputError: If the file is not a JSON object
        """
        if not json_path.exists():
            raise FileNotFoundError(f"Payload file not found: {json_path}")

        try:
            with open(json_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ReconciliationInputError(f"Invalid JSON in {json_path}: {e}") from e

        if not isinstance(payload, dict):
            raise ReconciliationInputError(f"Payload root must be an object: {json_path}")

        logger.info(f"Loaded payload from {json_path}")
        return payload

    def build_inputs(self, payload: Mapping[str, Any]) -> ReconciliationInputs:
        """Route and validate a payload into ReconciliationInputs.

        Raises:
            ReconciliationInputError: If reference data or sanitized totals
                do not validate
        """
        routed = self.router.route(payload.get("records", []))

        records: Dict[SourceSystem, List[Any]] = {}
        rejected: List[RecordSkip] = []
        for source_system, factory in self.factories.items():
            try:
                batch = factory.from_json(routed.by_source[source_system])
            except ValueError as e:
                raise ReconciliationInputError(
                    f"Unusable {source_system.value} records: {e}",
                    source_system=source_system.value,
                ) from e
            records[source_system] = batch.records
            rejected.extend(batch.rejected)

        return ReconciliationInputs(
            dtcc_records=records[SourceSystem.DTCC],
            cls_records=records[SourceSystem.CLS],
            occ_records=records[SourceSystem.OCC],
            participant_mappings=self._build_mappings(payload.get("participantMappings", [])),
            exchange_rates=self._build_rows(
                payload.get("exchangeRates", []), ExchangeRate, self.rate_field_mappings
            ),
            sanitized_totals=self._build_rows(
                payload.get("sanitizedTotals", []), SanitizedTotal, self.total_field_mappings
            ),
            unrouted=routed.unrouted,
            rejected=rejected,
        )

    def _build_mappings(self, raw: Any) -> List[ParticipantMapping]:
        if isinstance(raw, Mapping):
            raw = [{"file_reference": k, "participant_id": v} for k, v in raw.items()]
        return self._build_rows(raw, ParticipantMapping, self.mapping_field_mappings)

    def _build_rows(
        self, rows: List[Dict[str, Any]], model: Any, field_mappings: Dict[str, str]
    ) -> List[Any]:
        built = []
        for index, row in enumerate(rows):
            mapped = {field_mappings.get(key, key): value for key, value in row.items()}
            try:
                built.append(model(**mapped))
            except ValidationError as e:
                raise ReconciliationInputError(
                    f"Invalid {model.__name__} row {index}: {e.error_count()} error(s)",
                    value=row,
                ) from e
        return built
