"""Main dependency injection container configuration.

This module composes the data provider configuration, the aggregation pipeline
and the snapshot writer into a single Container class. Settings are injected
once at construction, so a pipeline run depends only on (settings, current time).
"""

from __future__ import annotations

from dependency_injector import containers, providers

from macrosnap.infrastructure.aggregation.aggregator import SnapshotAggregator
from macrosnap.infrastructure.aggregation.registry import ProviderRegistry
from macrosnap.infrastructure.config import Settings, get_settings
from macrosnap.infrastructure.containers.data_providers import (
    build_source_plan,
    configure_data_providers,
)
from macrosnap.infrastructure.storage.snapshot_writer import SnapshotWriter


class Container(containers.DeclarativeContainer):
    """Dependency injection container for macrosnap.

    To run with explicit settings (library integrators, tests):
        settings = Settings(fred_api_key="your-key", output_path="out/data.json")
        container = get_container(settings=settings)

    Or override after creation:
        container = Container()
        container.settings.override(providers.Object(settings))
    """

    settings = providers.Singleton(get_settings)

    # Data providers (singletons sharing one HTTP client, can be overridden)
    # Note: assigned individually so that each can be overridden by name
    _data_providers_config = configure_data_providers(settings)
    json_fetcher = _data_providers_config["json_fetcher"]
    fred_provider = _data_providers_config["fred_provider"]
    alpha_vantage_provider = _data_providers_config["alpha_vantage_provider"]
    goldapi_provider = _data_providers_config["goldapi_provider"]
    gold_api_com_provider = _data_providers_config["gold_api_com_provider"]
    coincap_provider = _data_providers_config["coincap_provider"]
    frankfurter_provider = _data_providers_config["frankfurter_provider"]
    open_er_api_provider = _data_providers_config["open_er_api_provider"]

    provider_registry = providers.Singleton(
        ProviderRegistry,
        providers=providers.List(
            fred_provider,
            alpha_vantage_provider,
            goldapi_provider,
            gold_api_com_provider,
            coincap_provider,
            frankfurter_provider,
            open_er_api_provider,
        ),
    )

    source_plan = providers.Singleton(
        build_source_plan,
        registry=provider_registry,
        settings=settings,
    )

    snapshot_aggregator = providers.Factory(
        SnapshotAggregator,
        plan=source_plan,
        economic_limit=settings.provided.economic_limit,
        gold_history_limit=settings.provided.gold_history_limit,
        btc_history_months=settings.provided.btc_history_months,
    )

    snapshot_writer = providers.Factory(
        SnapshotWriter,
        path=settings.provided.output_path,
    )


# Global container instance (can be overridden for testing)
_container: Container | None = None


def get_container(settings: Settings | None = None) -> Container:
    """Get the global dependency injection container.

    Args:
        settings: Optional explicit settings. When given, a new container bound to
                  them is returned and the global instance is left untouched.

    Returns:
        Container instance
    """
    global _container
    if settings is not None:
        container_instance = Container()
        container_instance.settings.override(providers.Object(settings))
        return container_instance
    if _container is None:
        _container = Container()
    return _container


def set_container(container: Container) -> None:
    """Set a custom container (useful for testing).

    Args:
        container: Container instance to use
    """
    global _container
    _container = container


def reset_container() -> None:
    """Reset the global container (useful for testing)."""
    global _container
    _container = None
