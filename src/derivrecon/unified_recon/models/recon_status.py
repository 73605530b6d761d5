"""Reconciliation status enum for per-source results."""

from enum import Enum


class ReconStatus(str, Enum):
    """Outcome of comparing a computed total against its sanitized total.

    - MATCH: counts equal and amount delta within tolerance
    - MISMATCH: anything else; a normal result to surface, not an error
    """

    MATCH = "MATCH"
    MISMATCH = "MISMATCH"
