"""Indicator aggregation across the FRED series catalog."""

from macrosnapshot.infrastructure.aggregation.indicators import (
    API_KEY_NAME,
    MacroIndicatorAggregator,
    fetch_macro_indicators,
    resolve_api_key,
)

__all__ = [
    "API_KEY_NAME",
    "MacroIndicatorAggregator",
    "fetch_macro_indicators",
    "resolve_api_key",
]
