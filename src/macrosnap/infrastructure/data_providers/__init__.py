"""Data provider implementations."""

from macrosnap.infrastructure.data_providers.alpha_vantage import AlphaVantageProvider
from macrosnap.infrastructure.data_providers.coincap import CoinCapProvider
from macrosnap.infrastructure.data_providers.fred import FredMacroeconomicProvider
from macrosnap.infrastructure.data_providers.fx import (
    FrankfurterProvider,
    OpenExchangeRatesProvider,
)
from macrosnap.infrastructure.data_providers.goldapi import GoldApiComProvider, GoldApiProvider

__all__ = [
    "AlphaVantageProvider",
    "CoinCapProvider",
    "FrankfurterProvider",
    "FredMacroeconomicProvider",
    "GoldApiComProvider",
    "GoldApiProvider",
    "OpenExchangeRatesProvider",
]
