"""Unit tests for macro indicator aggregation."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from datetime import datetime
from types import SimpleNamespace
from typing import Any

import httpx
import pytest
from dependency_injector import providers

from macrosnapshot.domain.models.macro import SeriesSummary
from macrosnapshot.domain.models.results import FetchResult
from macrosnapshot.domain.ports.data_providers import MacroeconomicDataProvider
from macrosnapshot.domain.series_catalog import SERIES_IDS
from macrosnapshot.infrastructure.aggregation.indicators import (
    MacroIndicatorAggregator,
    fetch_macro_indicators,
    resolve_api_key,
)
from macrosnapshot.infrastructure.containers import get_container, reset_container
from macrosnapshot.infrastructure.data_providers.fred import FredMacroeconomicProvider

ENV = {"FRED_API_KEY": "test-key"}


def _summary(series_id: str, value: float = 1.0) -> SeriesSummary:
    return SeriesSummary(series_id=series_id, current_value=value, date="2024-02-01")


class _StubMacroProvider(MacroeconomicDataProvider):
    """Returns data only for the series ids in ``succeed``; raises for ``explode``."""

    def __init__(
        self,
        api_key: str,
        succeed: set[str] | None = None,
        explode: set[str] | None = None,
    ) -> None:
        self.api_key = api_key
        self.succeed = succeed if succeed is not None else set(SERIES_IDS.values())
        self.explode = explode or set()
        self.requested: list[str] = []
        self.closed = False

    def get_provider_name(self) -> str:
        return "stub"

    async def fetch_series(self, series_id: str) -> FetchResult[SeriesSummary]:
        self.requested.append(series_id)
        if series_id in self.explode:
            raise RuntimeError(f"{series_id} exploded")
        if series_id in self.succeed:
            return FetchResult(success=True, data=_summary(series_id))
        return FetchResult(success=False, error=f"FRED series {series_id} returned 500")

    async def close(self) -> None:
        self.closed = True


class _RecordingFactory:
    def __init__(self, **provider_kwargs: Any) -> None:
        self.provider_kwargs = provider_kwargs
        self.instances: list[_StubMacroProvider] = []

    def __call__(self, api_key: str) -> _StubMacroProvider:
        provider = _StubMacroProvider(api_key, **self.provider_kwargs)
        self.instances.append(provider)
        return provider


@pytest.mark.unit
class TestResolveApiKey:
    def test_reads_mapping(self) -> None:
        assert resolve_api_key({"FRED_API_KEY": "abc"}) == "abc"

    def test_reads_attribute(self) -> None:
        assert resolve_api_key(SimpleNamespace(FRED_API_KEY="abc")) == "abc"

    @pytest.mark.parametrize(
        "env",
        [
            None,
            {},
            {"FRED_API_KEY": ""},
            {"FRED_API_KEY": "   "},
            {"FRED_API_KEY": 42},
            SimpleNamespace(),
        ],
    )
    def test_missing_or_blank_is_none(self, env: Any) -> None:
        assert resolve_api_key(env) is None


@pytest.mark.unit
class TestMacroIndicatorAggregator:
    @pytest.mark.parametrize("env", [None, {}, SimpleNamespace(FRED_API_KEY="")])
    async def test_missing_key_makes_no_provider(self, env: Any) -> None:
        factory = _RecordingFactory()
        aggregator = MacroIndicatorAggregator(factory)

        assert await aggregator.fetch_indicators(env) is None
        assert factory.instances == []

    async def test_all_series_succeed(self) -> None:
        factory = _RecordingFactory()
        aggregator = MacroIndicatorAggregator(factory)

        snapshot = await aggregator.fetch_indicators(ENV)

        assert snapshot is not None
        assert set(snapshot.indicators) == set(SERIES_IDS)
        assert snapshot.indicators["CPI"].series_id == "CPIAUCSL"
        assert snapshot.timestamp.tzinfo is not None
        provider = factory.instances[0]
        assert provider.api_key == "test-key"
        assert sorted(provider.requested) == sorted(SERIES_IDS.values())
        assert provider.closed is True

    async def test_only_cpi_succeeds(self) -> None:
        factory = _RecordingFactory(succeed={"CPIAUCSL"})
        aggregator = MacroIndicatorAggregator(factory)

        snapshot = await aggregator.fetch_indicators(ENV)

        assert snapshot is not None
        assert list(snapshot.indicators) == ["CPI"]
        payload = snapshot.to_payload()
        assert list(payload["indicators"]) == ["CPI"]
        assert payload["indicators"]["CPI"]["seriesId"] == "CPIAUCSL"
        assert datetime.fromisoformat(payload["timestamp"]).utcoffset() is not None

    async def test_all_series_fail_returns_none(self) -> None:
        factory = _RecordingFactory(succeed=set())
        aggregator = MacroIndicatorAggregator(factory)

        assert await aggregator.fetch_indicators(ENV) is None
        assert len(factory.instances[0].requested) == len(SERIES_IDS)
        assert factory.instances[0].closed is True

    async def test_raising_series_does_not_affect_siblings(self) -> None:
        factory = _RecordingFactory(explode={"GDP", "UNRATE"})
        aggregator = MacroIndicatorAggregator(factory)

        snapshot = await aggregator.fetch_indicators(ENV)

        assert snapshot is not None
        assert set(snapshot.indicators) == set(SERIES_IDS) - {"GDP", "UNEMPLOYMENT"}

    async def test_absent_data_is_skipped(self) -> None:
        class _NoDataProvider(_StubMacroProvider):
            async def fetch_series(self, series_id: str) -> FetchResult[SeriesSummary]:
                if series_id == "INDPRO":
                    return FetchResult(success=True, data=_summary(series_id, 102.5))
                return FetchResult(success=True, data=None)

        aggregator = MacroIndicatorAggregator(lambda api_key: _NoDataProvider(api_key))

        snapshot = await aggregator.fetch_indicators(ENV)

        assert snapshot is not None
        assert list(snapshot.indicators) == ["INDUSTRIAL_PROD"]
        assert snapshot.indicators["INDUSTRIAL_PROD"].current_value == 102.5

    async def test_fetches_run_concurrently(self) -> None:
        started = 0
        all_started = asyncio.Event()

        class _BarrierProvider(_StubMacroProvider):
            async def fetch_series(self, series_id: str) -> FetchResult[SeriesSummary]:
                nonlocal started
                started += 1
                if started == len(SERIES_IDS):
                    all_started.set()
                # Completes only if every fetch is in flight at the same time.
                await asyncio.wait_for(all_started.wait(), timeout=1.0)
                return FetchResult(success=True, data=_summary(series_id))

        aggregator = MacroIndicatorAggregator(lambda api_key: _BarrierProvider(api_key))

        snapshot = await aggregator.fetch_indicators(ENV)

        assert snapshot is not None
        assert len(snapshot.indicators) == len(SERIES_IDS)

    async def test_provider_factory_fault_returns_none(self) -> None:
        def _broken_factory(api_key: str) -> MacroeconomicDataProvider:
            raise RuntimeError("cannot build provider")

        aggregator = MacroIndicatorAggregator(_broken_factory)

        assert await aggregator.fetch_indicators(ENV) is None

    async def test_custom_series_catalog(self) -> None:
        factory = _RecordingFactory(succeed={"DGS10"})
        aggregator = MacroIndicatorAggregator(factory, series={"TEN_YEAR": "DGS10"})

        snapshot = await aggregator.fetch_indicators(ENV)

        assert snapshot is not None
        assert list(snapshot.indicators) == ["TEN_YEAR"]
        assert factory.instances[0].requested == ["DGS10"]


@pytest.fixture
def fresh_container() -> Iterator[None]:
    reset_container()
    yield
    reset_container()


@pytest.mark.unit
@pytest.mark.usefixtures("fresh_container")
class TestFetchMacroIndicators:
    @staticmethod
    def _override_transport(handler: Any) -> None:
        get_container().macro_data_provider.override(
            providers.Factory(
                FredMacroeconomicProvider,
                base_url="https://example.com/fred",
                transport=httpx.MockTransport(handler),
            )
        )

    async def test_missing_key_issues_no_network_reads(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(200, json={"observations": []})

        self._override_transport(handler)

        assert await fetch_macro_indicators({}) is None
        assert await fetch_macro_indicators(SimpleNamespace()) is None
        assert calls == 0

    async def test_returns_payload_for_successful_series(self) -> None:
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            series_id = request.url.params["series_id"]
            requested.append(series_id)
            if series_id != "CPIAUCSL":
                return httpx.Response(500)
            return httpx.Response(
                200,
                json={
                    "observations": [
                        {"date": "2024-02-01", "value": "310.0"},
                        {"date": "2024-01-01", "value": "300.0"},
                    ]
                },
            )

        self._override_transport(handler)

        payload = await fetch_macro_indicators(ENV)

        assert sorted(requested) == sorted(SERIES_IDS.values())
        assert payload is not None
        assert set(payload) == {"indicators", "timestamp"}
        cpi = payload["indicators"]["CPI"]
        assert list(payload["indicators"]) == ["CPI"]
        assert cpi["currentValue"] == 310.0
        assert cpi["previousValue"] == 300.0
        assert cpi["change"] == pytest.approx(10.0)
        assert cpi["changePercent"] == pytest.approx(3.3333, rel=1e-4)
        assert cpi["unit"] == "Index 1982-84=100"
        datetime.fromisoformat(payload["timestamp"])

    async def test_all_non_success_returns_none(self) -> None:
        self._override_transport(lambda request: httpx.Response(503))

        assert await fetch_macro_indicators(ENV) is None

    async def test_container_fault_returns_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _broken_get_container() -> Any:
            raise RuntimeError("container misconfigured")

        monkeypatch.setattr(
            "macrosnapshot.infrastructure.containers.get_container", _broken_get_container
        )

        assert await fetch_macro_indicators(ENV) is None
