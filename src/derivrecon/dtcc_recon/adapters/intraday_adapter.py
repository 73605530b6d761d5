"""DTCC intraday settlement adapter."""

from datetime import date
from decimal import Decimal
from typing import Any, Optional
import logging

from ...common.adapters import SourceAdapter
from ...common.models import BucketLabel, NormalizedEntry, SourceSystem
from ...common.reference import ParticipantResolver
from ..config import CutoffPolicy, DTCCSettings
from ..models import DTCCIntradayRecord

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


class DTCCIntradayAdapter(SourceAdapter[DTCCIntradayRecord]):
    """Filters and mirrors DTCC intraday balances into four ledger buckets.

    Rules:
    - Balance type must be one of the eligible legal entity totals.
    - The participant resolved from the file reference must be eligible.
    - Records reported strictly after the cutoff time book
      NR-C = +credit, CP-D = -credit, CP-C = +debit, NR-D = -debit.
    - Eligible records at or before the cutoff follow the cutoff policy.
    """

    source_system = SourceSystem.DTCC
    rule_name = "DTCC intraday mirrored buckets"

    def __init__(
        self,
        business_date: date,
        participant_resolver: ParticipantResolver,
        settings: Optional[DTCCSettings] = None,
    ):
        """Initialize DTCC adapter.

        Args:
            business_date: Business date being reconciled
            participant_resolver: Lookup for file reference -> participant
            settings: Filter and cutoff settings. Defaults if None.
        """
        super().__init__(business_date)
        self.participant_resolver = participant_resolver
        self.settings = settings or DTCCSettings()

    def accepts(self, record: DTCCIntradayRecord) -> bool:
        """Balance type and resolved participant must both be eligible.

        The balance type is checked first so ineligible rows never need a
        participant lookup.

        Raises:
            UnresolvedParticipant: If the record's file reference has no mapping
        """
        if record.balance_type not in self.settings.eligible_balance_types:
            return False

        participant_id = self.participant_resolver.resolve(record.file_reference)
        return participant_id in self.settings.eligible_participants

    def is_after_cutoff(self, record: DTCCIntradayRecord) -> bool:
        """Check whether the record was reported strictly after the cutoff."""
        return record.timestamp.time() > self.settings.cutoff_time

    def transform(self, record: DTCCIntradayRecord) -> list[NormalizedEntry]:
        """Mirror credit and debit into the four ledger buckets."""
        if self.is_after_cutoff(record):
            credit = record.credit
            debit = record.debit
        elif self.settings.cutoff_policy == CutoffPolicy.ZERO_FILL:
            logger.debug(f"DTCC record {record.record_id} before cutoff, zero-filled")
            credit = debit = ZERO
        else:
            logger.debug(f"DTCC record {record.record_id} before cutoff, excluded")
            return []

        return [
            self.make_entry(record.record_id, BucketLabel.NR_C, credit),
            self.make_entry(record.record_id, BucketLabel.CP_D, ZERO - credit),
            self.make_entry(record.record_id, BucketLabel.CP_C, debit),
            self.make_entry(record.record_id, BucketLabel.NR_D, ZERO - debit),
        ]

    def get_rule_info(self) -> dict[str, Any]:
        """Describe the DTCC rules for display."""
        return {
            "source": self.source_system.value,
            "rule_name": self.rule_name,
            "description": "Mirror post-cutoff credit/debit into NR-C/CP-D and CP-C/NR-D pairs",
            "requirements": [
                f"Balance type in {sorted(self.settings.eligible_balance_types)}",
                f"Participant in {sorted(self.settings.eligible_participants)}",
                f"Reported after {self.settings.cutoff_time.isoformat()}",
                f"Before-cutoff policy: {self.settings.cutoff_policy.value}",
            ],
        }
