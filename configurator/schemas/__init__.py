"""Pydantic schemas for order configuration."""

from .catalog import CatalogSnapshot, DishSnapshot, IngredientSnapshot, SizeSnapshot
from .order import (
    OrderCreate,
    OrderCreated,
    OrderDeletionResult,
    OrderIngredientItem,
    OrderQuote,
    OrderResponse,
)
from .violation import OrderViolation, ViolationKind

__all__ = [
    "CatalogSnapshot",
    "DishSnapshot",
    "IngredientSnapshot",
    "SizeSnapshot",
    "OrderCreate",
    "OrderCreated",
    "OrderDeletionResult",
    "OrderIngredientItem",
    "OrderQuote",
    "OrderResponse",
    "OrderViolation",
    "ViolationKind",
]
