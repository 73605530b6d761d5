"""Source system identifiers for the reconciliation engine."""

from enum import Enum


class SourceSystem(str, Enum):
    """Upstream feed a raw record was reported by."""

    DTCC = "DTCC"  # DTCC intraday settlement feed
    CLS = "CLS"  # CLS currency settlement feed
    OCC = "OCC"  # OCC options clearing feed

    @classmethod
    def from_tag(cls, tag: str) -> "SourceSystem":
        """Resolve a source tag case-insensitively.

        Args:
            tag: Raw tag value (e.g. "dtcc", " OCC ")

        Returns:
            Matching SourceSystem

        Raises:
            ValueError: If the tag does not name a known source
        """
        if isinstance(tag, cls):
            return tag
        cleaned = str(tag).strip().upper()
        for member in cls:
            if member.value == cleaned:
                return member
        raise ValueError(f"Unknown source system tag: {tag!r}")
