"""DTCC intraday models module."""

from .record import DTCCIntradayRecord

__all__ = ["DTCCIntradayRecord"]
