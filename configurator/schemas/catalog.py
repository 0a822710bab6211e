from decimal import Decimal
from typing import Dict, Optional, Tuple

from pydantic import Field

from .base import FrozenSchema


class DishSnapshot(FrozenSchema):
    id: int
    name: str


class SizeSnapshot(FrozenSchema):
    id: int
    name: str
    price: Decimal = Field(..., ge=0)
    max_ingredients: int = Field(..., ge=0)


class IngredientSnapshot(FrozenSchema):
    id: int
    name: str
    price: Decimal = Field(..., ge=0)
    availability: Optional[int] = Field(None, description="Remaining units; None means unlimited")

    @property
    def is_tracked(self) -> bool:
        return self.availability is not None


class CatalogSnapshot(FrozenSchema):
    """
    Catalog state needed to evaluate one candidate order.

    `ingredients` holds every candidate that exists plus every ingredient
    referenced by their dependency and incompatibility edges, so violation
    messages can always name both sides. `incompatibilities` is already
    symmetric: if A lists B, B lists A.
    """
    dish: Optional[DishSnapshot] = None
    size: Optional[SizeSnapshot] = None
    ingredients: Dict[int, IngredientSnapshot] = Field(default_factory=dict)
    dependencies: Dict[int, Tuple[int, ...]] = Field(default_factory=dict)
    incompatibilities: Dict[int, Tuple[int, ...]] = Field(default_factory=dict)

    def ingredient_name(self, ingredient_id: int) -> str:
        ingredient = self.ingredients.get(ingredient_id)
        return ingredient.name if ingredient else f"ingredient ID {ingredient_id}"
