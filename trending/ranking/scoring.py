from __future__ import annotations

import logging
from collections.abc import Mapping
from numbers import Real
from typing import Any

import pandas as pd

from .config import TrendingConfig
from .fields import (
    WEIGHTED_NUMERIC_SIGNALS,
    RecordReader,
    Signal,
    bind_signals,
    read_signal,
)

logger = logging.getLogger(__name__)

SCORE_FIELD = "trending_score"


def age_penalty(age_hours: float, factor: float, cap: float) -> float:
    """Penalty growing linearly per 24 hours of age, never above ``cap``."""
    return min((age_hours / 24) * factor, cap)


def _numeric(signal: Signal, value: Any) -> float:
    """Numeric value of a signal; anything non-numeric or NaN counts as 0."""
    if (isinstance(value, Real) or pd.api.types.is_bool(value)) and not pd.isna(value):
        return float(value)
    logger.debug(
        "Signal %r has non-numeric value %r, scoring it as 0", signal.value, value
    )
    return 0.0


def score_record(
    record: Mapping[str, Any],
    config: TrendingConfig,
    readers: Mapping[Signal, RecordReader] | None = None,
) -> float:
    """Compute the trending score of a single record.

    boolean bonuses + weighted counts - capped age penalty, floored at 0.
    """
    readers = readers or bind_signals(config.fields)
    w = config.weights

    score = 0.0
    if read_signal(readers, Signal.last_24hrs, record):
        score += w.last_24hrs
    if read_signal(readers, Signal.updated_recently, record):
        score += w.updated_recently

    for signal in WEIGHTED_NUMERIC_SIGNALS:
        value = _numeric(signal, read_signal(readers, signal, record))
        score += value * getattr(w, signal.value)

    age = _numeric(Signal.age_hours, read_signal(readers, Signal.age_hours, record))
    score -= age_penalty(age, w.age_penalty_factor, w.max_age_penalty)

    return max(0.0, score)
