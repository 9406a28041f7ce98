"""
Cell coercion for the reference workbook.

Spreadsheet cells arrive as whatever the reader produced (str, int, float,
bool, datetime, NaN). Each value is converted according to the column it
belongs to. Nothing here raises: unparseable numbers become ``nan`` and
unparseable dates become ``pandas.NaT``.
"""
import math
import numbers
import re
from datetime import datetime
from typing import Any, Dict

import numpy as np
import pandas as pd
import pytz

INTEGER_FIELDS = frozenset({"id", "country_id", "continent_id", "mobile_code", "elevation_ft"})
BOOLEAN_FIELDS = frozenset({"is_active"})
FLOAT_FIELDS = frozenset({"latitude_deg", "longitude_deg", "lat", "long"})
DATE_FIELDS = frozenset({"created_at", "updated_at"})

TRUE_STRINGS = frozenset({"true", "True"})

FLOAT_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def is_empty(value: Any) -> bool:
    """Falsy cell: None, blank string, False, zero, NaN or NaT."""
    if value is None or value is pd.NaT:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (bool, np.bool_)):
        return not value
    if isinstance(value, numbers.Number):
        return value == 0 or (isinstance(value, numbers.Real) and math.isnan(value))
    return False


def _to_number(value: Any):
    if isinstance(value, (bool, np.bool_)):
        return int(value)
    if isinstance(value, numbers.Integral):
        return int(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return math.nan
    return int(number) if number.is_integer() else number


def _to_float(value: Any) -> float:
    if isinstance(value, str):
        # Longest leading numeric prefix, so "51.47°" reads as 51.47
        match = FLOAT_PREFIX.match(value)
        return float(match.group(0)) if match else math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _to_datetime(value: Any):
    if isinstance(value, datetime) and value is not pd.NaT:
        return value.to_pydatetime() if isinstance(value, pd.Timestamp) else value
    parsed = pd.to_datetime(value, errors="coerce")
    if parsed is pd.NaT:
        return pd.NaT
    return parsed.to_pydatetime()


def _to_bool(value: Any) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, str):
        return value in TRUE_STRINGS
    if isinstance(value, numbers.Real):
        return bool(value == 1)
    return False


def coerce_value(value: Any, field: str) -> Any:
    # Strings are trimmed before any typed conversion
    if isinstance(value, str):
        value = value.strip()

    if field in INTEGER_FIELDS:
        return None if is_empty(value) else _to_number(value)
    if field in BOOLEAN_FIELDS:
        return _to_bool(value)
    if field in FLOAT_FIELDS:
        return None if is_empty(value) else _to_float(value)
    if field in DATE_FIELDS:
        return datetime.now(pytz.UTC) if is_empty(value) else _to_datetime(value)
    return value


def coerce_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """Coerce every cell of a sheet row, keyed by its column header."""
    return {field: coerce_value(value, field) for field, value in row.items()}
