"""
macrosnapshot - analysis-ready snapshots of key US macroeconomic indicators.

Fetches a fixed set of FRED series concurrently and reduces each one to its
latest value, prior value and period-over-period change.
"""

from macrosnapshot.infrastructure.aggregation import (
    MacroIndicatorAggregator,
    fetch_macro_indicators,
)

__version__ = "0.1.0"

__all__ = ["MacroIndicatorAggregator", "fetch_macro_indicators"]
