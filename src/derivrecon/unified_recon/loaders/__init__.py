from .payload_loader import PayloadLoader

__all__ = ["PayloadLoader"]
