from sqlalchemy import Column, Integer, String

from configurator.db.base_class import Base


class BaseDish(Base):
    __tablename__ = "base_dishes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
