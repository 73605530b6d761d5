"""Shared reconciliation models."""

from .source_system import SourceSystem
from .normalized_entry import NormalizedEntry, BucketLabel, DTCC_BUCKETS

__all__ = [
    "SourceSystem",
    "NormalizedEntry",
    "BucketLabel",
    "DTCC_BUCKETS",
]
