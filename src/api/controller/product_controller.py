"""REST controller for the product registry."""

import logging
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, Field, field_serializer

from src.models import Product
from src.services import ProductRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])

PRICE_MAX_DIGITS = 15
PRICE_DECIMAL_PLACES = 4


class ProductPayload(BaseModel):
    """Incoming product body for create and replace.

    Missing fields fall back to an empty name and a zero price, so a
    missing name is rejected by the registry like a blank one. Prices are
    limited to 15 significant digits so they render exactly as JSON numbers.
    """

    name: str = ""
    price: Decimal = Field(default=Decimal(0), max_digits=PRICE_MAX_DIGITS, decimal_places=PRICE_DECIMAL_PLACES)


class ProductResponse(BaseModel):
    """Outgoing product representation."""

    id: int
    name: str
    price: Decimal

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(id=product.id, name=product.name, price=product.price)


def get_registry(request: Request) -> ProductRegistry:
    """Registry owned by the running application."""
    return request.app.state.registry


@router.get("", response_model=List[ProductResponse])
async def list_products(registry: ProductRegistry = Depends(get_registry)) -> List[ProductResponse]:
    """List all products in creation order."""
    return [ProductResponse.from_product(product) for product in registry.list()]


@router.get("/{product_id:int}", response_model=ProductResponse, name="get_product")
async def get_product(
    product_id: int,
    registry: ProductRegistry = Depends(get_registry),
) -> ProductResponse:
    """Get a single product; 404 if it does not exist."""
    return ProductResponse.from_product(registry.get(product_id))


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: ProductPayload,
    request: Request,
    response: Response,
    registry: ProductRegistry = Depends(get_registry),
) -> ProductResponse:
    """
    Create a product.

    Responds 201 with the created product and a Location header pointing
    at GET /products/{id}. Responds 400 if the name is blank or the price
    is negative.
    """
    product = registry.create(payload.name, payload.price)
    response.headers["Location"] = request.app.url_path_for("get_product", product_id=product.id)
    return ProductResponse.from_product(product)


@router.put("/{product_id:int}", response_model=ProductResponse)
async def replace_product(
    product_id: int,
    payload: ProductPayload,
    registry: ProductRegistry = Depends(get_registry),
) -> ProductResponse:
    """Replace name and price of a product; 404 if absent, 400 if invalid."""
    return ProductResponse.from_product(registry.replace(product_id, payload.name, payload.price))


@router.delete("/{product_id:int}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_product(
    product_id: int,
    registry: ProductRegistry = Depends(get_registry),
) -> Response:
    registry.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
