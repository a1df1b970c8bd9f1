"""Shared base for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable value compared field by field.

    Badge criteria and notification data are stored as JSON and validated
    back into these models on read.
    """

    model_config = ConfigDict(frozen=True)
