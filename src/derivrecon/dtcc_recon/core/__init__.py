from .record_factory import DTCCRecordFactory

__all__ = ["DTCCRecordFactory"]
