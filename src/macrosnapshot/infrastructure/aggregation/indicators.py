"""Macro indicator aggregation.

Fans the series catalog out to a MacroeconomicDataProvider concurrently, waits
for every fetch to settle and keeps whichever series produced data.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

import structlog

from macrosnapshot.domain.models.macro import IndicatorSnapshot, SeriesSummary
from macrosnapshot.domain.ports.data_providers import MacroeconomicDataProvider
from macrosnapshot.domain.series_catalog import SERIES_IDS

logger = structlog.get_logger(__name__)

API_KEY_NAME = "FRED_API_KEY"


def resolve_api_key(env: Any) -> str | None:
    """Read the FRED API key from a mapping or attribute-style environment object.

    Blank values count as missing.
    """
    if env is None:
        return None
    if isinstance(env, Mapping):
        value = env.get(API_KEY_NAME)
    else:
        value = getattr(env, API_KEY_NAME, None)
    if not isinstance(value, str) or not value.strip():
        return None
    return value


class MacroIndicatorAggregator:
    """Builds an IndicatorSnapshot from every series in the catalog."""

    def __init__(
        self,
        provider_factory: Callable[..., MacroeconomicDataProvider],
        series: Mapping[str, str] = SERIES_IDS,
    ) -> None:
        """Initialize the aggregator.

        Args:
            provider_factory: Called as ``provider_factory(api_key=...)`` once per
                aggregation run
            series: Snapshot key to provider series id
        """
        self._provider_factory = provider_factory
        self._series = series

    async def fetch_indicators(self, env: Any) -> IndicatorSnapshot | None:
        """Fetch all catalog series and return a snapshot of the ones that succeeded.

        Args:
            env: Environment object supplying ``FRED_API_KEY``

        Returns:
            IndicatorSnapshot, or None if the key is missing or no series
            produced data
        """
        try:
            api_key = resolve_api_key(env)
            if api_key is None:
                logger.warning("FRED API key not configured", key_name=API_KEY_NAME)
                return None

            provider = self._provider_factory(api_key=api_key)
            try:
                indicators = await self._collect(provider)
            finally:
                await provider.close()

            if not indicators:
                logger.warning("All FRED series fetches failed", series_count=len(self._series))
                return None

            logger.info(
                "Fetched macro indicators",
                provider=provider.get_provider_name(),
                fetched=len(indicators),
                requested=len(self._series),
            )
            return IndicatorSnapshot(indicators=indicators, timestamp=datetime.now(UTC))
        except Exception as e:
            logger.error("Macro indicator fetch failed", error=str(e), exc_info=True)
            return None

    async def _collect(self, provider: MacroeconomicDataProvider) -> dict[str, SeriesSummary]:
        keys = list(self._series)
        outcomes = await asyncio.gather(
            *(provider.fetch_series(self._series[key]) for key in keys),
            return_exceptions=True,
        )

        indicators: dict[str, SeriesSummary] = {}
        for key, outcome in zip(keys, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                logger.debug("Series fetch raised", key=key, error=str(outcome))
                continue
            if outcome.success and outcome.data is not None:
                indicators[key] = outcome.data
            else:
                logger.debug("Series produced no data", key=key)
        return indicators


async def fetch_macro_indicators(env: Any) -> dict[str, Any] | None:
    """Fetch the macro indicator snapshot as a JSON-ready dict.

    Args:
        env: Environment object supplying ``FRED_API_KEY`` (mapping or attributes)

    Returns:
        ``{"indicators": {...}, "timestamp": "..."}`` or None
    """
    # Imported here; the container module imports this one.
    from macrosnapshot.infrastructure.containers import get_container

    try:
        aggregator = get_container().indicator_aggregator()
    except Exception as e:
        logger.error("Macro indicator aggregator unavailable", error=str(e), exc_info=True)
        return None

    snapshot = await aggregator.fetch_indicators(env)
    return snapshot.to_payload() if snapshot is not None else None
