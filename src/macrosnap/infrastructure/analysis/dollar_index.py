"""Synthetic US dollar index from FX cross rates.

Approximates the ICE U.S. Dollar Index (DXY) with its published geometric
weighting:

    DXY = 50.14348112 * EURUSD^-0.576 * USDJPY^0.136 * GBPUSD^-0.119
                      * USDCAD^0.091  * USDSEK^0.042 * USDCHF^0.036

Quoting convention: every pair is taken in its market quote. Providers return
all rates as units of foreign currency per USD, which already matches the
USDJPY, USDCAD, USDSEK and USDCHF quotes; EUR and GBP are market-quoted as USD
per unit of foreign currency, so exactly those two are inverted.

The result is a reference approximation computed from a fixed basket and
frozen weights. It tracks the published index closely but is not calibrated in
real time, so small deviations from the official print are expected.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

import structlog

from macrosnap.domain.models.macro import FxBasket, IndexValue

logger = structlog.get_logger(__name__)

DXY_CONSTANT = 50.14348112

# Currency -> exponent applied to its market-quoted rate
BASKET_WEIGHTS: dict[str, float] = {
    "EUR": -0.576,
    "JPY": 0.136,
    "GBP": -0.119,
    "CAD": 0.091,
    "SEK": 0.042,
    "CHF": 0.036,
}

BASKET_CURRENCIES: tuple[str, ...] = tuple(BASKET_WEIGHTS)

# Currencies whose market quote is USD per foreign unit (provider value inverted)
INVERTED_QUOTES: frozenset[str] = frozenset({"EUR", "GBP"})

_TWO_PLACES = Decimal("0.01")


def market_quote(currency: str, units_per_usd: Decimal) -> float:
    """Convert a units-per-USD rate into the market quote used by the index."""
    rate = float(units_per_usd)
    return 1.0 / rate if currency in INVERTED_QUOTES else rate


def compute_dollar_index(basket: FxBasket) -> IndexValue | None:
    """Compute the synthetic dollar index, or None when a basket member is missing."""
    missing = basket.missing(BASKET_CURRENCIES)
    if missing:
        logger.warning("dollar index skipped; basket incomplete", missing=missing)
        return None

    value = DXY_CONSTANT
    quotes: dict[str, float] = {}
    for currency, weight in BASKET_WEIGHTS.items():
        quote = market_quote(currency, basket.rates[currency])
        quotes[currency] = quote
        value *= math.pow(quote, weight)

    rounded = Decimal(repr(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    logger.info(
        "dollar index computed",
        eurusd=round(quotes["EUR"], 4),
        usdjpy=round(quotes["JPY"], 2),
        value=float(rounded),
        as_of=basket.as_of.isoformat(),
    )
    return IndexValue(value=rounded, date=basket.as_of)
