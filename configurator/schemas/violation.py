from enum import Enum
from typing import Optional

from .base import FrozenSchema


class ViolationKind(str, Enum):
    UNKNOWN_DISH = "unknown_dish"
    UNKNOWN_SIZE = "unknown_size"
    UNKNOWN_INGREDIENT = "unknown_ingredient"
    OUT_OF_STOCK = "out_of_stock"
    SIZE_LIMIT_EXCEEDED = "size_limit_exceeded"
    MISSING_DEPENDENCY = "missing_dependency"
    INCOMPATIBLE = "incompatible"


class OrderViolation(FrozenSchema):
    """A client-correctable reason an ingredient combination was rejected."""

    kind: ViolationKind
    ingredient_id: Optional[int] = None
    ingredient_name: Optional[str] = None
    related_name: Optional[str] = None
    size_name: Optional[str] = None
    limit: Optional[int] = None

    @classmethod
    def unknown_dish(cls) -> "OrderViolation":
        return cls(kind=ViolationKind.UNKNOWN_DISH)

    @classmethod
    def unknown_size(cls) -> "OrderViolation":
        return cls(kind=ViolationKind.UNKNOWN_SIZE)

    @classmethod
    def unknown_ingredient(cls, ingredient_id: int) -> "OrderViolation":
        return cls(kind=ViolationKind.UNKNOWN_INGREDIENT, ingredient_id=ingredient_id)

    @classmethod
    def out_of_stock(cls, ingredient_id: int, name: str) -> "OrderViolation":
        return cls(kind=ViolationKind.OUT_OF_STOCK, ingredient_id=ingredient_id, ingredient_name=name)

    @classmethod
    def size_limit_exceeded(cls, size_name: str, limit: int) -> "OrderViolation":
        return cls(kind=ViolationKind.SIZE_LIMIT_EXCEEDED, size_name=size_name, limit=limit)

    @classmethod
    def missing_dependency(cls, ingredient_id: int, name: str, required_name: str) -> "OrderViolation":
        return cls(
            kind=ViolationKind.MISSING_DEPENDENCY,
            ingredient_id=ingredient_id,
            ingredient_name=name,
            related_name=required_name,
        )

    @classmethod
    def incompatible(cls, ingredient_id: int, name: str, conflicting_name: str) -> "OrderViolation":
        return cls(
            kind=ViolationKind.INCOMPATIBLE,
            ingredient_id=ingredient_id,
            ingredient_name=name,
            related_name=conflicting_name,
        )

    @property
    def message(self) -> str:
        """Human-readable reason shown to the customer."""
        if self.kind is ViolationKind.UNKNOWN_DISH:
            return "Invalid dish selected"
        if self.kind is ViolationKind.UNKNOWN_SIZE:
            return "Invalid size selected"
        if self.kind is ViolationKind.UNKNOWN_INGREDIENT:
            return f"Ingredient with id {self.ingredient_id} not found"
        if self.kind is ViolationKind.OUT_OF_STOCK:
            return f"{self.ingredient_name} is not available"
        if self.kind is ViolationKind.SIZE_LIMIT_EXCEEDED:
            return f"{self.size_name} dishes can only have up to {self.limit} ingredients"
        if self.kind is ViolationKind.MISSING_DEPENDENCY:
            return f"{self.ingredient_name} requires {self.related_name}"
        return f"{self.ingredient_name} is incompatible with {self.related_name}"
