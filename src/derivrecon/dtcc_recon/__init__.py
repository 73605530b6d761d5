"""DTCC intraday settlement reconciliation rules."""

from .models import DTCCIntradayRecord
from .config import DTCCSettings, CutoffPolicy
from .adapters import DTCCIntradayAdapter
from .core import DTCCRecordFactory

__all__ = [
    "DTCCIntradayRecord",
    "DTCCSettings",
    "CutoffPolicy",
    "DTCCIntradayAdapter",
    "DTCCRecordFactory",
]
