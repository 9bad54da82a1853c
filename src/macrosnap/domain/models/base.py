"""Base classes for domain models."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable value object compared by its attributes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)
