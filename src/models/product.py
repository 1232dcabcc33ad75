"""Product model for the in-memory registry."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Product:
    """Product record held by the registry.

    Records are immutable; replacing a product swaps in a new record
    with the same id.
    """

    id: int  # Assigned by the registry, never reused
    name: str
    price: Decimal  # Non-negative, e.g. Decimal("199.90")
