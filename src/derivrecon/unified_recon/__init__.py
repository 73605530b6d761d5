"""Unified reconciliation across the DTCC, CLS and OCC feeds."""

from .config import RunConfig, ReconConfigManager
from .core import (
    Aggregator,
    Reconciler,
    SourceRouter,
    ReconciliationPipeline,
    ReconciliationInputs,
)
from .models import (
    ReconStatus,
    SourceTotal,
    SanitizedTotal,
    ReconciliationResult,
    RunSummary,
)

__all__ = [
    "RunConfig",
    "ReconConfigManager",
    "Aggregator",
    "Reconciler",
    "SourceRouter",
    "ReconciliationPipeline",
    "ReconciliationInputs",
    "ReconStatus",
    "SourceTotal",
    "SanitizedTotal",
    "ReconciliationResult",
    "RunSummary",
]
