from .unified_display import UnifiedDisplay

__all__ = ["UnifiedDisplay"]
