from .settlement_adapter import CLSSettlementAdapter

__all__ = ["CLSSettlementAdapter"]
