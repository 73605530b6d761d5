from .clearing_adapter import OCCClearingAdapter

__all__ = ["OCCClearingAdapter"]
