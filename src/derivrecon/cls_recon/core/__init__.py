from .record_factory import CLSRecordFactory

__all__ = ["CLSRecordFactory"]
