"""FRED (Federal Reserve Economic Data) series summary provider implementation."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import UTC, date, datetime
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from macrosnapshot.domain.models.macro import Observation, SeriesSummary
from macrosnapshot.domain.models.results import FetchResult
from macrosnapshot.domain.ports.data_providers import MacroeconomicDataProvider
from macrosnapshot.domain.series_catalog import get_series_unit

logger = structlog.get_logger(__name__)

MISSING_VALUE = "."
OBSERVATION_LIMIT = 24
LOOKBACK_YEARS = 2


def get_observation_start(today: date | None = None) -> str:
    """Return the same month/day ``LOOKBACK_YEARS`` calendar years before ``today``.

    A 29 February start rolls forward to 1 March when the target year has no
    leap day.
    """
    if today is None:
        today = datetime.now(UTC).date()
    try:
        start = today.replace(year=today.year - LOOKBACK_YEARS)
    except ValueError:
        start = date(today.year - LOOKBACK_YEARS, 3, 1)
    return start.isoformat()


def _previous_value(raw: dict[str, Any] | Observation | None) -> float | None:
    try:
        previous = Observation.model_validate(raw)
    except ValidationError:
        return None
    if not previous.value or previous.value == MISSING_VALUE:
        return None
    try:
        value = float(previous.value)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def build_series_summary(
    observations: Sequence[dict[str, Any] | Observation | None], series_id: str
) -> SeriesSummary | None:
    """Reduce a newest-first observation list to a SeriesSummary.

    Returns None when there is no usable latest observation. A malformed or
    non-numeric previous observation leaves the summary without a baseline.
    """
    if not observations:
        return None

    latest = Observation.model_validate(observations[0])
    if not latest.value or latest.value == MISSING_VALUE or not latest.date:
        return None

    current_value = float(latest.value)
    if not math.isfinite(current_value):
        return None
    previous_value = _previous_value(observations[1]) if len(observations) > 1 else None

    change: float | None = None
    change_percent: float | None = None
    # A zero baseline is treated like a missing one.
    if previous_value:
        change = current_value - previous_value
        change_percent = change / previous_value * 100

    return SeriesSummary(
        series_id=series_id,
        current_value=current_value,
        date=latest.date,
        previous_value=previous_value,
        change=change,
        change_percent=change_percent,
        unit=get_series_unit(series_id),
    )


class FredMacroeconomicProvider(MacroeconomicDataProvider):
    """FRED implementation of MacroeconomicDataProvider."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.stlouisfed.org/fred",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def get_provider_name(self) -> str:
        return "fred"

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    def _build_params(self, series_id: str) -> dict[str, Any]:
        return {
            "series_id": series_id,
            "api_key": self._api_key,
            "file_type": "json",
            "observation_start": get_observation_start(),
            "sort_order": "desc",
            "limit": OBSERVATION_LIMIT,
        }

    async def fetch_series(self, series_id: str) -> FetchResult[SeriesSummary]:
        try:
            client = await self._get_client()
            resp = await client.get("/series/observations", params=self._build_params(series_id))

            if not resp.is_success:
                logger.warning(
                    "FRED series request failed",
                    series_id=series_id,
                    status_code=resp.status_code,
                )
                return FetchResult(
                    success=False,
                    error=f"FRED series {series_id} returned {resp.status_code}",
                    metadata={"series_id": series_id, "status_code": resp.status_code},
                )

            payload = resp.json()
            observations = payload.get("observations")
            if not observations:
                logger.debug("FRED series has no observations", series_id=series_id)
                return FetchResult(success=True, data=None, metadata={"series_id": series_id})

            summary = build_series_summary(observations, series_id)
            if summary is None:
                logger.debug("FRED series latest value not available", series_id=series_id)
            return FetchResult(success=True, data=summary, metadata={"series_id": series_id})
        except Exception as e:
            logger.warning(
                "FRED series fetch failed",
                series_id=series_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return FetchResult(
                success=False,
                error=f"FRED series {series_id} fetch failed: {str(e)}",
                metadata={"series_id": series_id, "error_type": type(e).__name__},
            )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
