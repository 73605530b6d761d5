from .record_factory import OCCRecordFactory

__all__ = ["OCCRecordFactory"]
