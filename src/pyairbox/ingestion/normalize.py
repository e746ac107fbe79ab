"""Normalization helpers.

Centralizes defensive parsing of sensor channel values.
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    """Coerce a sensor channel to float.

    Returns ``None`` for missing values, the feed's ``"--"`` placeholder,
    booleans, unparseable strings and non-finite numbers.
    """
    if value is None or value == "" or value == "--":
        return None
    if isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result
