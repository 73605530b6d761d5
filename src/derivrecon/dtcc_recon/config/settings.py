"""Configuration for DTCC intraday reconciliation rules."""

from datetime import time
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict, field_validator

from ...common.utils import normalize_participant_id


class CutoffPolicy(str, Enum):
    """What to do with eligible records reported at or before the cutoff."""

    EXCLUDE = "exclude"  # drop from count and amount
    ZERO_FILL = "zero_fill"  # count the record, book zero in all four buckets


class DTCCSettings(BaseModel):
    """Filter and cutoff settings for the DTCC intraday adapter."""

    model_config = ConfigDict(
        frozen=True,  # Immutable configuration
        validate_assignment=True,
    )

    cutoff_time: time = Field(
        default=time(18, 34, 0),
        description="Records must be reported strictly after this local time",
    )
    cutoff_policy: CutoffPolicy = Field(
        default=CutoffPolicy.EXCLUDE,
        description="Handling of eligible records at or before the cutoff",
    )
    eligible_participants: frozenset[str] = Field(
        default=frozenset({"0250", "0141"}),
        description="Participant identifiers that participate",
    )
    eligible_balance_types: frozenset[str] = Field(
        default=frozenset({"DTC LEGAL ENTITY TOTALS", "NSCC LEGAL ENTITY TOTALS"}),
        description="Balance type labels that participate",
    )

    @field_validator("eligible_participants", mode="before")
    @classmethod
    def _normalize_participants(cls, value):
        return frozenset(normalize_participant_id(v) for v in value)

    @field_validator("eligible_balance_types", mode="before")
    @classmethod
    def _normalize_balance_types(cls, value):
        return frozenset(" ".join(str(v).upper().split()) for v in value)
