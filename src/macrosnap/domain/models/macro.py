"""Macroeconomic and market domain models."""

from __future__ import annotations

import datetime as dt
import math
from decimal import Decimal
from typing import Annotated

from pydantic import Field, PlainSerializer, field_validator

from macrosnap.domain.models.base import ValueObject

# Decimals are published as JSON numbers, not strings.
JsonDecimal = Annotated[
    Decimal, PlainSerializer(lambda v: float(v), return_type=float, when_used="json")
]


def _require_finite(value: Decimal) -> Decimal:
    if not value.is_finite():
        raise ValueError("value must be a finite number")
    return value


class TimePoint(ValueObject):
    """Value object representing a single dated observation of a series."""

    date: dt.date = Field(..., description="Observation date (day precision)")
    value: JsonDecimal = Field(..., description="Observation value")

    @field_validator("value")
    @classmethod
    def _finite(cls, value: Decimal) -> Decimal:
        return _require_finite(value)


class SpotQuote(ValueObject):
    """Single current price for one asset."""

    value: JsonDecimal = Field(..., gt=0, description="Spot price in USD")
    as_of: dt.date = Field(..., description="Quote date")


class MetalPair(ValueObject):
    """Gold and silver spot prices taken from one provider."""

    gold: JsonDecimal = Field(..., gt=0, description="Gold spot price in USD per troy ounce")
    silver: JsonDecimal = Field(..., gt=0, description="Silver spot price in USD per troy ounce")
    date: dt.date = Field(..., description="Date the pair was observed")


class FxBasket(ValueObject):
    """Exchange rates for a currency basket, quoted as units of currency per USD."""

    rates: dict[str, JsonDecimal] = Field(..., description="Currency code -> units per USD")
    as_of: dt.date = Field(..., description="Rate fixing date reported by the provider")

    @field_validator("rates")
    @classmethod
    def _positive_rates(cls, rates: dict[str, Decimal]) -> dict[str, Decimal]:
        for code, rate in rates.items():
            if not rate.is_finite() or rate <= 0:
                raise ValueError(f"rate for {code} must be a positive finite number")
        return rates

    def missing(self, codes: tuple[str, ...]) -> list[str]:
        return [code for code in codes if code not in self.rates]


class IndexValue(ValueObject):
    """Synthetic index value rounded to two decimal places."""

    value: JsonDecimal = Field(..., description="Index level")
    date: dt.date = Field(..., description="Date of the underlying rates")

    @field_validator("value")
    @classmethod
    def _finite(cls, value: Decimal) -> Decimal:
        return _require_finite(value)


def to_decimal(raw: object) -> Decimal | None:
    """Parse a provider value into a finite Decimal, or None when it is not numeric."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, float) and not math.isfinite(raw):
        return None
    try:
        value = Decimal(str(raw).strip())
    except ArithmeticError:
        return None
    if not value.is_finite():
        return None
    return value
