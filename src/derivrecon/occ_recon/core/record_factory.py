"""Record factory for OCC clearing rows."""

import pandas as pd

from ...common.core import BaseRecordFactory
from ...common.models import SourceSystem
from ...common.utils import parse_decimal, safe_str
from ..models import OCCClearingRecord


class OCCRecordFactory(BaseRecordFactory[OCCClearingRecord]):
    """Creates OCCClearingRecord objects from DataFrames, CSV or JSON."""

    source_system = SourceSystem.OCC
    field_mappings = {
        "recordId": "record_id",
        "cmo": "cmo_code",
        "cmoCode": "cmo_code",
        "netSettle": "net_settlement_amount",
        "net_settle": "net_settlement_amount",
        "netSettlementAmount": "net_settlement_amount",
    }
    required_fields = ["cmo_code"]

    def _create_record(self, row: pd.Series, index: int) -> OCCClearingRecord:
        return OCCClearingRecord(
            record_id=self._record_id(row, index),
            cmo_code=safe_str(row.get("cmo_code"), default=""),
            net_settlement_amount=parse_decimal(row.get("net_settlement_amount")),
        )
