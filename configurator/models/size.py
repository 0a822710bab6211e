from sqlalchemy import Column, Integer, String, Numeric, CheckConstraint

from configurator.db.base_class import Base


class Size(Base):
    __tablename__ = "sizes"

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_size_price_non_negative"),
        CheckConstraint("max_ingredients >= 0", name="ck_size_max_ingredients_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    max_ingredients = Column(Integer, nullable=False)
