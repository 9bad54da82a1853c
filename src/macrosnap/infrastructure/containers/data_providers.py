"""Data provider container configuration."""

from __future__ import annotations

from dependency_injector import providers

from macrosnap.infrastructure.aggregation.registry import (
    ProviderRegistry,
    SeriesSelection,
    SourcePlan,
)
from macrosnap.infrastructure.config import Settings
from macrosnap.infrastructure.data_providers import (
    AlphaVantageProvider,
    CoinCapProvider,
    FrankfurterProvider,
    FredMacroeconomicProvider,
    GoldApiComProvider,
    GoldApiProvider,
    OpenExchangeRatesProvider,
)
from macrosnap.infrastructure.http_client import JsonFetcher


def configure_data_providers(
    settings: providers.Provider[Settings],
) -> dict[str, providers.Provider]:
    """Configure data provider providers.

    Args:
        settings: Provider of the application settings. Credentials, endpoints and
                  the HTTP timeout are read from it when the providers are built.

    Returns:
        Dictionary of data provider providers (all share one JSON fetcher)
    """
    fetcher = providers.Singleton(
        JsonFetcher,
        timeout_seconds=settings.provided.http_timeout_seconds,
    )

    return {
        "json_fetcher": fetcher,
        "fred_provider": providers.Singleton(
            FredMacroeconomicProvider,
            api_key=settings.provided.fred_api_key,
            fetcher=fetcher,
            base_url=settings.provided.fred_base_url,
        ),
        "alpha_vantage_provider": providers.Singleton(
            AlphaVantageProvider,
            api_key=settings.provided.alpha_vantage_api_key,
            fetcher=fetcher,
            base_url=settings.provided.alpha_vantage_base_url,
        ),
        "goldapi_provider": providers.Singleton(
            GoldApiProvider,
            api_key=settings.provided.goldapi_api_key,
            fetcher=fetcher,
            base_url=settings.provided.goldapi_base_url,
        ),
        "gold_api_com_provider": providers.Singleton(
            GoldApiComProvider,
            fetcher=fetcher,
            base_url=settings.provided.gold_api_com_base_url,
        ),
        "coincap_provider": providers.Singleton(
            CoinCapProvider,
            fetcher=fetcher,
            base_url=settings.provided.coincap_base_url,
            history_years=settings.provided.btc_history_years,
        ),
        "frankfurter_provider": providers.Singleton(
            FrankfurterProvider,
            fetcher=fetcher,
            base_url=settings.provided.frankfurter_base_url,
        ),
        "open_er_api_provider": providers.Singleton(
            OpenExchangeRatesProvider,
            fetcher=fetcher,
            base_url=settings.provided.open_er_api_base_url,
        ),
    }


def build_source_plan(registry: ProviderRegistry, settings: Settings) -> SourcePlan:
    """Bind the configured provider order to the registered provider clients."""
    selection = SeriesSelection(
        economic_series={
            "m2": settings.m2_series_id,
            "cpi": settings.cpi_series_id,
            "hpi": settings.hpi_series_id,
        },
        economic_limit=settings.economic_limit,
        gold_history_limit=settings.gold_history_limit,
        btc_history_months=settings.btc_history_months,
    )
    return registry.build_plan(settings.provider_order, selection)
