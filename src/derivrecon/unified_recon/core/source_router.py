"""Routing of source-tagged raw records to their source adapters."""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List
import logging

from ...common.adapters import RecordSkip
from ...common.models import SourceSystem
from ...common.validation import UnknownSource

logger = logging.getLogger(__name__)

SOURCE_TAG_FIELDS = ("sourceSystem", "source_system", "source")


@dataclass
class RoutedRecords:
    """Raw records grouped by source, plus the ones no source claimed."""

    by_source: Dict[SourceSystem, List[Dict[str, Any]]] = field(
        default_factory=lambda: {source: [] for source in SourceSystem}
    )
    unrouted: List[RecordSkip] = field(default_factory=list)

    def count(self, source_system: SourceSystem) -> int:
        return len(self.by_source.get(source_system, []))


class SourceRouter:
    """Routes tagged records to DTCC, CLS or OCC processing.

    Records carry their feed in a ``sourceSystem`` field (case-insensitive).
    A record with a missing or unknown tag is skipped and counted; it
    never stops routing of the remaining records.
    """

    def route(self, records: Iterable[Dict[str, Any]]) -> RoutedRecords:
        """Group records by source system.

        Args:
            records: Raw record dictionaries, each tagged with its source

        Returns:
            RoutedRecords with the tag field removed from each routed record
        """
        routed = RoutedRecords()

        for index, record in enumerate(records):
            record_id = record.get("recordId") or record.get("record_id")
            try:
                source_system = self._resolve_source(record)
            except UnknownSource as e:
                e.record_id = str(record_id) if record_id is not None else f"row_{index}"
                routed.unrouted.append(RecordSkip.from_error(None, e.record_id, e))
                logger.warning(f"Skipping record {e.record_id}: {e}")
                continue

            payload = {k: v for k, v in record.items() if k not in SOURCE_TAG_FIELDS}
            routed.by_source[source_system].append(payload)

        logger.info(
            "Routed records: "
            + ", ".join(f"{s.value}={routed.count(s)}" for s in SourceSystem)
            + f", unrouted={len(routed.unrouted)}"
        )
        return routed

    def _resolve_source(self, record: Dict[str, Any]) -> SourceSystem:
        """Read the source tag of a record.

        Raises:
            UnknownSource: If the tag is missing or names no known source
        """
        tag = None
        for tag_field in SOURCE_TAG_FIELDS:
            if record.get(tag_field) not in (None, ""):
                tag = record[tag_field]
                break

        if tag is None:
            raise UnknownSource(tag)
        try:
            return SourceSystem.from_tag(tag)
        except ValueError as e:
            raise UnknownSource(tag) from e
