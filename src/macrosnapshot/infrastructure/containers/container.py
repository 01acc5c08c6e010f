"""Dependency injection container configuration.

Wires the FRED provider from Settings and hands its factory to the indicator
aggregator. Tests and library integrators can swap the provider:

    container = get_container()
    container.macro_data_provider.override(providers.Factory(MyProvider))
"""

from dependency_injector import containers, providers

from macrosnapshot.infrastructure.aggregation.indicators import MacroIndicatorAggregator
from macrosnapshot.infrastructure.config import Settings, get_settings
from macrosnapshot.infrastructure.data_providers.fred import FredMacroeconomicProvider


class Container(containers.DeclarativeContainer):
    """Dependency injection container for macrosnapshot."""

    settings = providers.Singleton(get_settings)

    # Called per aggregation run with api_key=...
    macro_data_provider = providers.Factory(
        FredMacroeconomicProvider,
        base_url=settings.provided.fred_base_url,
        timeout_seconds=settings.provided.fred_timeout_seconds,
    )

    indicator_aggregator = providers.Factory(
        MacroIndicatorAggregator,
        provider_factory=macro_data_provider.provider,
    )


# Global container instance (can be overridden for testing)
_container: Container | None = None


def get_container(settings: Settings | None = None) -> Container:
    """Get the global dependency injection container.

    Args:
        settings: Optional settings to use instead of MACROSNAPSHOT_* environment
                  values. Passing settings always builds a fresh container.

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
    """Set a custom container (useful for testing)."""
    global _container
    _container = container


def reset_container() -> None:
    """Reset the global container (useful for testing)."""
    global _container
    _container = None
