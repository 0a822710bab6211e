from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field, field_validator

from .base import BaseSchema


class OrderCreate(BaseModel):
    """Schema for submitting a configured dish"""
    dish_id: int = Field(..., ge=1, description="Base dish ID")
    size_id: int = Field(..., ge=1, description="Size ID")
    ingredient_ids: List[int] = Field(default_factory=list, description="Selected ingredient IDs, in selection order")

    @field_validator("ingredient_ids")
    @classmethod
    def ingredient_ids_unique(cls, value: List[int]) -> List[int]:
        if len(set(value)) != len(value):
            raise ValueError("ingredient_ids must not contain duplicates")
        return value


class OrderQuote(BaseModel):
    """Result of an advisory check: the order is valid at this price"""
    dish_id: int
    size_id: int
    ingredient_ids: List[int]
    total: Decimal


class OrderCreated(BaseModel):
    order_id: int
    total: Decimal


class OrderDeletionResult(BaseModel):
    """Outcome of a deletion; zero rows means not found or not owned"""
    order_id: int
    rows_affected: int = Field(..., ge=0, le=1)

    @property
    def deleted(self) -> bool:
        return self.rows_affected > 0


class OrderIngredientItem(BaseSchema):
    id: int
    name: str
    price: Decimal


class OrderResponse(BaseSchema):
    """Schema for an order in the user's history"""
    id: int
    dish_id: int
    dish: str
    size_id: int
    size: str
    size_price: Decimal
    total: Decimal
    ingredients: List[OrderIngredientItem]
