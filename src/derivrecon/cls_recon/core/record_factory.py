"""Record factory for CLS settlement rows."""

import pandas as pd

from ...common.core import BaseRecordFactory
from ...common.models import SourceSystem
from ...common.utils import is_missing, parse_decimal, safe_str
from ..models import CLSSettlementRecord


class CLSRecordFactory(BaseRecordFactory[CLSSettlementRecord]):
    """Creates CLSSettlementRecord objects from DataFrames, CSV or JSON."""

    source_system = SourceSystem.CLS
    field_mappings = {
        "recordId": "record_id",
        "payin": "payin_amount",
        "payinAmount": "payin_amount",
        "payout": "payout_amount",
        "payoutAmount": "payout_amount",
        "businessDate": "business_date",
        "busDate": "business_date",
        "currency": "currency",
        "ccy": "currency",
    }
    required_fields: list[str] = []

    def _create_record(self, row: pd.Series, index: int) -> CLSSettlementRecord:
        business_date = row.get("business_date")
        if is_missing(business_date):
            business_date = None
        elif isinstance(business_date, str):
            try:
                business_date = pd.Timestamp(business_date.strip()).date()
            except ValueError as e:
                raise ValueError(f"Unparseable business date {business_date!r}") from e
        elif isinstance(business_date, pd.Timestamp):
            business_date = business_date.date()

        return CLSSettlementRecord(
            record_id=self._record_id(row, index),
            payin_amount=parse_decimal(row.get("payin_amount")),
            payout_amount=parse_decimal(row.get("payout_amount")),
            business_date=business_date,
            currency=safe_str(row.get("currency")),
        )
