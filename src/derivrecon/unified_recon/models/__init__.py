"""Unified reconciliation models."""

from .recon_status import ReconStatus
from .totals import SourceTotal, SanitizedTotal
from .reconciliation_result import ReconciliationResult, RunSummary

__all__ = [
    "ReconStatus",
    "SourceTotal",
    "SanitizedTotal",
    "ReconciliationResult",
    "RunSummary",
]
