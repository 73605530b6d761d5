from .intraday_adapter import DTCCIntradayAdapter

__all__ = ["DTCCIntradayAdapter"]
