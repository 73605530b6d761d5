"""CLS currency settlement adapter."""

from datetime import date
from typing import Any, Optional
import logging

from ...common.adapters import SourceAdapter
from ...common.models import BucketLabel, NormalizedEntry, SourceSystem
from ...common.reference import CurrencyConverter
from ...common.utils import to_cents
from ..config import CLSSettings
from ..models import CLSSettlementRecord

logger = logging.getLogger(__name__)


class CLSSettlementAdapter(SourceAdapter[CLSSettlementRecord]):
    """Converts CLS pay-in/pay-out amounts to USD.

    Every record is eligible. The converted amount is rounded to cents
    here; the converter itself never rounds. Conversion failures raise
    RateNotFound / AmbiguousRate, which the shared process loop turns
    into per-record skips.
    """

    source_system = SourceSystem.CLS
    rule_name = "CLS currency normalization"

    def __init__(
        self,
        business_date: date,
        currency_converter: CurrencyConverter,
        settings: Optional[CLSSettings] = None,
    ):
        super().__init__(business_date)
        self.currency_converter = currency_converter
        self.settings = settings or CLSSettings()

    def accepts(self, record: CLSSettlementRecord) -> bool:
        return True

    def transform(self, record: CLSSettlementRecord) -> list[NormalizedEntry]:
        """Convert the base amount at the run's business date rate."""
        converted = self.currency_converter.convert(
            record.base_amount,
            record.currency or self.settings.source_currency,
            self.settings.target_currency,
            self.business_date,
            self.settings.rate_type,
        )
        return [self.make_entry(record.record_id, BucketLabel.DEFAULT, to_cents(converted))]

    def get_rule_info(self) -> dict[str, Any]:
        """Describe the CLS rules for display."""
        return {
            "source": self.source_system.value,
            "rule_name": self.rule_name,
            "description": "Pay-in (or pay-out when pay-in is zero) converted to USD",
            "requirements": [
                f"Rate {self.settings.source_currency}->{self.settings.target_currency} "
                f"{self.settings.rate_type} on {self.business_date.isoformat()}",
                "Exactly one matching rate row",
            ],
        }
