"""Static FRED series tables.

``SERIES_IDS`` maps the short keys used in snapshots to FRED series ids;
``SERIES_UNITS`` maps FRED series ids to their published unit labels.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

SERIES_IDS: Mapping[str, str] = MappingProxyType(
    {
        "GDP": "GDP",  # Real Gross Domestic Product
        "CPI": "CPIAUCSL",  # Consumer Price Index
        "UNEMPLOYMENT": "UNRATE",  # Unemployment Rate
        "FED_FUNDS": "FEDFUNDS",  # Effective Federal Funds Rate
        "RETAIL_SALES": "RSAFS",  # Retail Sales
        "INDUSTRIAL_PROD": "INDPRO",  # Industrial Production
    }
)

SERIES_UNITS: Mapping[str, str] = MappingProxyType(
    {
        "GDP": "Bil. Chained 2017 USD",
        "CPIAUCSL": "Index 1982-84=100",
        "UNRATE": "Percent",
        "FEDFUNDS": "Percent",
        "RSAFS": "Mil. USD",
        "INDPRO": "Index 2017=100",
    }
)


def get_series_unit(series_id: str) -> str:
    """Return the unit label for a FRED series id, or ``""`` if unknown."""
    return SERIES_UNITS.get(series_id, "")
