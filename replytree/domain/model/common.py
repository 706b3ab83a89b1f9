"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for entities with identity (posts, comments).

    Entities are frozen; changes go through ``model_copy(update=...)`` and a
    repository ``save``.
    """

    model_config = ConfigDict(frozen=True)
