from .client import ProductClient

__all__ = ["ProductClient"]
