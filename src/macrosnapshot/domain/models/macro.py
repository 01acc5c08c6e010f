"""Macroeconomic domain models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field, field_validator, model_validator

from macrosnapshot.domain.models.base import ValueObject


class Observation(ValueObject):
    """Raw (date, value) pair as published by the upstream series feed."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    date: str | None = Field(default=None, description="Observation date (YYYY-MM-DD)")
    value: str | None = Field(default=None, description="Observation value; '.' when missing")


class SeriesSummary(ValueObject):
    """Latest observation of one series with its change from the prior one."""

    series_id: str = Field(..., description="Provider series identifier (e.g., FRED series id)")
    current_value: float = Field(..., description="Latest observed value")
    date: str = Field(..., description="Date of the latest observation")
    previous_value: float | None = Field(default=None, description="Prior observed value")
    change: float | None = Field(default=None, description="current_value - previous_value")
    change_percent: float | None = Field(
        default=None, description="change as a percentage of previous_value"
    )
    unit: str = Field(default="", description="Unit label for the series")

    @model_validator(mode="after")
    def _no_change_without_baseline(self) -> SeriesSummary:
        if not self.previous_value and (self.change is not None or self.change_percent is not None):
            raise ValueError("change requires a non-zero previous_value")
        return self


class IndicatorSnapshot(ValueObject):
    """Summaries of every series fetched successfully in one aggregation run."""

    indicators: dict[str, SeriesSummary] = Field(
        ..., description="Series summaries keyed by catalog key (e.g., 'CPI')"
    )
    timestamp: datetime = Field(..., description="Snapshot creation time (UTC)")

    @field_validator("indicators")
    @classmethod
    def _not_empty(cls, v: dict[str, SeriesSummary]) -> dict[str, SeriesSummary]:
        if not v:
            raise ValueError("snapshot requires at least one indicator")
        return v

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready ``{"indicators": ..., "timestamp": ...}`` dict."""
        return {
            "indicators": {
                key: summary.model_dump(by_alias=True) for key, summary in self.indicators.items()
            },
            "timestamp": self.timestamp.isoformat(),
        }
