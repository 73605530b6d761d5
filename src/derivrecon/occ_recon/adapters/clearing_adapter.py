"""OCC options clearing adapter."""

from datetime import date
from typing import Any, Optional

from ...common.adapters import SourceAdapter
from ...common.models import BucketLabel, NormalizedEntry, SourceSystem
from ..config import OCCSettings
from ..models import OCCClearingRecord


class OCCClearingAdapter(SourceAdapter[OCCClearingRecord]):
    """Keeps non-zero net settlements of the configured clearing member."""

    source_system = SourceSystem.OCC
    rule_name = "OCC clearing member net settlement"

    def __init__(self, business_date: date, settings: Optional[OCCSettings] = None):
        super().__init__(business_date)
        self.settings = settings or OCCSettings()

    def accepts(self, record: OCCClearingRecord) -> bool:
        return record.cmo_code == self.settings.cmo_code and record.net_settlement != 0

    def transform(self, record: OCCClearingRecord) -> list[NormalizedEntry]:
        # Net settlement is already USD
        return [
            self.make_entry(record.record_id, BucketLabel.DEFAULT, record.net_settlement)
        ]

    def get_rule_info(self) -> dict[str, Any]:
        """Describe the OCC rules for display."""
        return {
            "source": self.source_system.value,
            "rule_name": self.rule_name,
            "description": "Net settlement taken as-is (USD)",
            "requirements": [
                f"CMO code = {self.settings.cmo_code}",
                "Net settlement != 0",
            ],
        }
