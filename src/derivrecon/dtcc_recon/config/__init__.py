from .settings import DTCCSettings, CutoffPolicy

__all__ = ["DTCCSettings", "CutoffPolicy"]
