"""Data provider interfaces."""

from abc import ABC, abstractmethod

from macrosnapshot.domain.models.macro import SeriesSummary
from macrosnapshot.domain.models.results import FetchResult


class MacroeconomicDataProvider(ABC):
    """Source of per-series macroeconomic summaries."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the provider name (e.g., 'fred')."""
        pass

    @abstractmethod
    async def fetch_series(self, series_id: str) -> FetchResult[SeriesSummary]:
        """Fetch the latest summary for one series.

        Implementations must not raise: transport and parsing faults are
        reported through ``FetchResult(success=False, ...)``.

        Args:
            series_id: Provider series identifier

        Returns:
            FetchResult carrying a SeriesSummary, or no data if the series
            has no usable latest observation
        """
        pass

    async def close(self) -> None:
        """Release any network resources held by the provider."""
        return None
