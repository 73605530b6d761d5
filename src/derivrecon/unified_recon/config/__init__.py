from .config_manager import RunConfig, ReconConfigManager

__all__ = ["RunConfig", "ReconConfigManager"]
