from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, CheckConstraint

from configurator.db.base_class import Base


class Ingredient(Base):
    __tablename__ = "ingredients"

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_ingredient_price_non_negative"),
        CheckConstraint("availability IS NULL OR availability >= 0", name="ck_ingredient_availability_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    # NULL means the ingredient is not tracked (unlimited)
    availability = Column(Integer, nullable=True)


class IngredientDependency(Base):
    __tablename__ = "ingredient_dependencies"

    ingredient_id = Column(Integer, ForeignKey("ingredients.id", ondelete="CASCADE"), primary_key=True)
    depends_on_id = Column(Integer, ForeignKey("ingredients.id", ondelete="CASCADE"), primary_key=True)


class IngredientIncompatibility(Base):
    """One orientation of an incompatible pair; lookups check both columns."""

    __tablename__ = "ingredient_incompatibilities"

    ingredient1_id = Column(Integer, ForeignKey("ingredients.id", ondelete="CASCADE"), primary_key=True)
    ingredient2_id = Column(Integer, ForeignKey("ingredients.id", ondelete="CASCADE"), primary_key=True)
