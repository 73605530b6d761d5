"""OCC clearing models module."""

from .record import OCCClearingRecord

__all__ = ["OCCClearingRecord"]
