"""Data models module."""

from src.models.product import Product

__all__ = ["Product"]
