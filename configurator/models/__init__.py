"""Database models."""

# Import all models here to ensure they're recognized by SQLAlchemy
from configurator.models.base_dish import BaseDish
from configurator.models.ingredient import Ingredient, IngredientDependency, IngredientIncompatibility
from configurator.models.order import Order, OrderIngredient
from configurator.models.size import Size
from configurator.models.user import User

__all__ = [
    "User",
    "BaseDish",
    "Size",
    "Ingredient",
    "IngredientDependency",
    "IngredientIncompatibility",
    "Order",
    "OrderIngredient",
]
