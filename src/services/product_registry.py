"""In-memory product registry.

Holds the ordered collection of products and the id counter:
- Ids are issued from a counter starting at 1 and never reused
- Validation failures leave the registry untouched
- Every operation runs under a single lock
"""

import logging
import threading
from decimal import Decimal
from typing import List, Optional

from ..models import Product

logger = logging.getLogger(__name__)

NAME_REQUIRED_MESSAGE = "Name is required."
INVALID_PRICE_MESSAGE = "Invalid price."
NOT_FOUND_MESSAGE = "Product not found."


class RegistryError(Exception):
    """Base class for product registry errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RegistryError):
    """Raised when a product name or price is invalid."""
    pass


class NotFoundError(RegistryError):
    """Raised when no product has the requested id."""
    pass


def validate_product(name: Optional[str], price: Decimal) -> None:
    """Check product fields, name first.

    Raises:
        ValidationError: If the name is empty/whitespace or the price is negative.
    """
    if name is None or not name.strip():
        raise ValidationError(NAME_REQUIRED_MESSAGE)
    if price is None or price < 0:
        raise ValidationError(INVALID_PRICE_MESSAGE)


class ProductRegistry:
    """Ordered in-memory collection of products."""

    def __init__(self, first_id: int = 1):
        """Initialize an empty registry.

        Args:
            first_id: Id assigned to the first created product.
        """
        self._products: List[Product] = []
        self._next_id = first_id
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def _index_of(self, product_id: int) -> int:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        raise NotFoundError(NOT_FOUND_MESSAGE)

    def list(self) -> List[Product]:
        """Return all products in insertion order."""
        with self._lock:
            return list(self._products)

    def get(self, product_id: int) -> Product:
        """Get a product by its id.

        Args:
            product_id: Registry-assigned product id.

        Returns:
            The matching Product.

        Raises:
            NotFoundError: If no product has this id.
        """
        with self._lock:
            product = self._products[self._index_of(product_id)]

        logger.debug(f"Found product {product_id}")
        return product

    def create(self, name: str, price: Decimal) -> Product:
        """Create a product with the next id.

        Args:
            name: Product name, must not be blank.
            price: Product price, must not be negative.

        Returns:
            The created Product with its assigned id.

        Raises:
            ValidationError: If name or price is invalid.
        """
        validate_product(name, price)

        with self._lock:
            product = Product(id=self._next_id, name=name, price=price)
            self._next_id += 1
            self._products.append(product)

        logger.info(f"Created product {product.id}: {product.name}")
        return product

    def replace(self, product_id: int, name: str, price: Decimal) -> Product:
        """Overwrite the name and price of an existing product.

        The id and the position in the listing are kept.

        Raises:
            NotFoundError: If no product has this id.
            ValidationError: If name or price is invalid.
        """
        with self._lock:
            index = self._index_of(product_id)
            validate_product(name, price)
            product = Product(id=product_id, name=name, price=price)
            self._products[index] = product

        logger.info(f"Replaced product {product_id}: {product.name}")
        return product

    def delete(self, product_id: int) -> None:
        """Remove a product.

        Raises:
            NotFoundError: If no product has this id.
        """
        with self._lock:
            del self._products[self._index_of(product_id)]

        logger.info(f"Deleted product {product_id}")
