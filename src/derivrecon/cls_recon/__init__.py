"""CLS currency settlement reconciliation rules."""

from .models import CLSSettlementRecord
from .config import CLSSettings
from .adapters import CLSSettlementAdapter
from .core import CLSRecordFactory

__all__ = [
    "CLSSettlementRecord",
    "CLSSettings",
    "CLSSettlementAdapter",
    "CLSRecordFactory",
]
