"""Shared record factory."""

from .base_record_factory import BaseRecordFactory, RecordBatch

__all__ = ["BaseRecordFactory", "RecordBatch"]
