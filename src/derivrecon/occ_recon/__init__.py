"""OCC options clearing reconciliation rules."""

from .models import OCCClearingRecord
from .config import OCCSettings
from .adapters import OCCClearingAdapter
from .core import OCCRecordFactory

__all__ = [
    "OCCClearingRecord",
    "OCCSettings",
    "OCCClearingAdapter",
    "OCCRecordFactory",
]
