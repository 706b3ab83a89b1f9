"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable, compared by value. Rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")
