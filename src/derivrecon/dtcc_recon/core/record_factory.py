"""Record factory for DTCC intraday settlement rows."""

import logging

import pandas as pd

from ...common.core import BaseRecordFactory
from ...common.models import SourceSystem
from ...common.utils import is_missing, parse_decimal, safe_str
from ..models import DTCCIntradayRecord

logger = logging.getLogger(__name__)


class DTCCRecordFactory(BaseRecordFactory[DTCCIntradayRecord]):
    """Creates DTCCIntradayRecord objects from DataFrames, CSV or JSON."""

    source_system = SourceSystem.DTCC
    field_mappings = {
        "recordId": "record_id",
        "baltype": "balance_type",
        "balanceType": "balance_type",
        "fileReference": "file_reference",
        "fileRef": "file_reference",
        "creditAmount": "credit_amount",
        "credit": "credit_amount",
        "debitAmount": "debit_amount",
        "debit": "debit_amount",
        "timestamp": "timestamp",
        "reportedAt": "timestamp",
    }
    required_fields = ["balance_type", "file_reference", "timestamp"]

    def _create_record(self, row: pd.Series, index: int) -> DTCCIntradayRecord:
        timestamp = row.get("timestamp")
        if is_missing(timestamp) or timestamp is pd.NaT:
            raise ValueError("Missing timestamp")
        if isinstance(timestamp, str):
            try:
                timestamp = pd.Timestamp(timestamp.strip()).to_pydatetime()
            except ValueError as e:
                raise ValueError(f"Unparseable timestamp {timestamp!r}") from e
        elif isinstance(timestamp, pd.Timestamp):
            timestamp = timestamp.to_pydatetime()

        return DTCCIntradayRecord(
            record_id=self._record_id(row, index),
            balance_type=safe_str(row.get("balance_type"), default=""),
            file_reference=safe_str(row.get("file_reference"), default=""),
            credit_amount=parse_decimal(row.get("credit_amount")),
            debit_amount=parse_decimal(row.get("debit_amount")),
            timestamp=timestamp,
        )
