"""Service modules."""

from src.services.product_registry import (
    NotFoundError,
    ProductRegistry,
    RegistryError,
    ValidationError,
)

__all__ = [
    "NotFoundError",
    "ProductRegistry",
    "RegistryError",
    "ValidationError",
]
