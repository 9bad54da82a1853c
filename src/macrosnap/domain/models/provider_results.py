"""Per-candidate fetch outcome models."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


# Outcome of one candidate source, as seen by the aggregator
class ProviderResult(BaseModel, Generic[T]):
    """Result of a candidate fetch; ``data`` is None when the provider had nothing usable."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    metric: str = Field(..., description="Metric the candidate was fetched for")
    provider: str = Field(..., description="Provider identifier (e.g. 'fred')")
    data: T | None = Field(default=None, description="Fetched value, None when absent")
    error: str | None = Field(default=None, description="Unexpected error, if one was raised")

    @property
    def success(self) -> bool:
        return self.data is not None
