"""Domain models for macrosnapshot."""

from macrosnapshot.domain.models.macro import IndicatorSnapshot, Observation, SeriesSummary
from macrosnapshot.domain.models.results import FetchResult

__all__ = [
    "Observation",
    "SeriesSummary",
    "IndicatorSnapshot",
    "FetchResult",
]
