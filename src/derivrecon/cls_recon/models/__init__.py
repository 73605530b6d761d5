"""CLS settlement models module."""

from .record import CLSSettlementRecord

__all__ = ["CLSSettlementRecord"]
