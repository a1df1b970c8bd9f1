"""Shared base for forum entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for forum entities.

    Entities are frozen; changes are made with ``model_copy(update=...)``
    and saved back through their repository.
    """

    model_config = ConfigDict(frozen=True)
