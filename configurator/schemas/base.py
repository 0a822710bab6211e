from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema for values read off ORM rows."""
    model_config = ConfigDict(from_attributes=True)


class FrozenSchema(BaseSchema):
    """Immutable schema for values handed to pure evaluation code."""
    model_config = ConfigDict(from_attributes=True, frozen=True)
