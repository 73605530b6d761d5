"""Base source adapter with shared filter/transform processing."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Generic, Iterable, Optional, TypeVar
import logging

from pydantic import BaseModel, ConfigDict, Field

from ..models import NormalizedEntry, SourceSystem, BucketLabel
from ..validation import DuplicateRecord, ReconciliationError

# Module logger
logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class RecordSkip(BaseModel):
    """A raw record dropped because of a record-level data problem."""

    model_config = ConfigDict(frozen=True)

    source_system: Optional[SourceSystem] = Field(None, description="Feed the record came from")
    record_id: Optional[str] = Field(None, description="Identifier of the dropped record")
    error_type: str = Field(..., description="Exception class name, e.g. RateNotFound")
    reason: str = Field(..., description="Human-readable reason")

    @classmethod
    def from_error(
        cls,
        source_system: Optional[SourceSystem],
        record_id: Optional[str],
        error: ReconciliationError,
    ) -> "RecordSkip":
        """Build a skip entry from a reconciliation error."""
        return cls(
            source_system=source_system,
            record_id=record_id,
            error_type=type(error).__name__,
            reason=str(error),
        )


@dataclass
class AdapterOutput:
    """Everything one adapter run produced for its source."""

    source_system: SourceSystem
    entries: list[NormalizedEntry] = field(default_factory=list)
    skipped: list[RecordSkip] = field(default_factory=list)
    filtered_count: int = 0
    input_count: int = 0

    @property
    def skip_count(self) -> int:
        return len(self.skipped)


class SourceAdapter(ABC, Generic[RecordT]):
    """Base class for all source adapters.

    An adapter is a small rule set: a filter predicate deciding which raw
    records participate and a transform turning a surviving record into
    one or more NormalizedEntry instances. The shared ``process`` loop
    applies both and turns record-level ReconciliationErrors into skips,
    so one bad record never aborts the rest of its source.
    """

    source_system: SourceSystem
    rule_name: str = "Source rules"

    def __init__(self, business_date: date):
        """Initialize adapter for one business date."""
        self.business_date = business_date

    @abstractmethod
    def accepts(self, record: RecordT) -> bool:
        """Filter predicate. Must be implemented by subclasses.

        Args:
            record: Raw record to evaluate

        Returns:
            True if the record participates in reconciliation
        """
        pass

    @abstractmethod
    def transform(self, record: RecordT) -> list[NormalizedEntry]:
        """Turn an accepted record into normalized entries.

        Returning an empty list excludes the record from totals.
        """
        pass

    @abstractmethod
    def get_rule_info(self) -> dict[str, Any]:
        """Describe this adapter's rules for display."""
        pass

    def make_entry(
        self, record_id: str, bucket: BucketLabel, amount
    ) -> NormalizedEntry:
        """Create an entry stamped with this adapter's source and date."""
        return NormalizedEntry(
            source_system=self.source_system,
            record_id=record_id,
            bucket=bucket,
            amount=amount,
            business_date=self.business_date,
        )

    def process(self, records: Iterable[RecordT]) -> AdapterOutput:
        """Filter and transform every record of this source.

        Args:
            records: Raw records for this source

        Returns:
            AdapterOutput with entries, skips and the filtered count
        """
        output = AdapterOutput(source_system=self.source_system)
        seen_ids: set[str] = set()

        for record in records:
            output.input_count += 1
            record_id = getattr(record, "record_id", None)
            try:
                # Record ids key counts and skip reports, so each may appear once
                if record_id is not None:
                    if record_id in seen_ids:
                        raise DuplicateRecord(record_id)
                    seen_ids.add(record_id)

                if not self.accepts(record):
                    output.filtered_count += 1
                    logger.debug(f"{self.source_system.value} record {record_id} filtered out")
                    continue

                entries = self.transform(record)
            except ReconciliationError as e:
                e.source_system = e.source_system or self.source_system.value
                e.record_id = e.record_id or record_id
                output.skipped.append(
                    RecordSkip.from_error(self.source_system, record_id, e)
                )
                logger.warning(f"Skipping {self.source_system.value} record {record_id}: {e}")
                continue

            if not entries:
                output.filtered_count += 1
                logger.debug(f"{self.source_system.value} record {record_id} produced no entries")
                continue

            output.entries.extend(entries)

        logger.info(
            f"{self.source_system.value}: {output.input_count} records in, "
            f"{len(output.entries)} entries, {output.filtered_count} filtered, "
            f"{output.skip_count} skipped"
        )
        return output
