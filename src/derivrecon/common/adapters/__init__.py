"""Source adapter base classes."""

from .base_adapter import SourceAdapter, AdapterOutput, RecordSkip

__all__ = ["SourceAdapter", "AdapterOutput", "RecordSkip"]
