from .settings import OCCSettings

__all__ = ["OCCSettings"]
