from sqlalchemy import Column, Integer, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from configurator.db.base_class import Base


class Order(Base):
    __tablename__ = "orders"

    # Ids of deleted orders are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    dish_id = Column(Integer, ForeignKey("base_dishes.id"), nullable=False)
    size_id = Column(Integer, ForeignKey("sizes.id"), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)

    # Relationships
    dish = relationship("BaseDish")
    size = relationship("Size")
    order_ingredients = relationship("OrderIngredient", back_populates="order")


class OrderIngredient(Base):
    __tablename__ = "order_ingredients"

    order_id = Column(Integer, ForeignKey("orders.id"), primary_key=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), primary_key=True)

    order = relationship("Order", back_populates="order_ingredients")
    ingredient = relationship("Ingredient")
