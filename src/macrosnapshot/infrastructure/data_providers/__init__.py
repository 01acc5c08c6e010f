"""Data provider implementations."""

from macrosnapshot.infrastructure.data_providers.fred import (
    FredMacroeconomicProvider,
    build_series_summary,
    get_observation_start,
)

__all__ = ["FredMacroeconomicProvider", "build_series_summary", "get_observation_start"]
