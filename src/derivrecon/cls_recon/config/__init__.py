from .settings import CLSSettings

__all__ = ["CLSSettings"]
