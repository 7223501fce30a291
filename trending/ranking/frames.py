from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pandas as pd

from .config import DEFAULT_RANKING_SETTINGS, RankingSettings
from .fields import bind_signals
from .models import ConfigOverride
from .pipeline import effective_config, rank
from .scoring import SCORE_FIELD, score_record


def _records(frame: pd.DataFrame) -> list[dict[str, Any]]:
    """Frame rows as plain dicts, with NaN cells turned into None."""
    return frame.astype(object).where(frame.notna(), None).to_dict(orient="records")


def score_frame(
    frame: pd.DataFrame,
    config: ConfigOverride | Mapping[str, Any] | None = None,
    *,
    preset: str | None = None,
    settings: RankingSettings = DEFAULT_RANKING_SETTINGS,
) -> pd.Series:
    """Trending score of every row, aligned to the frame index. No filtering."""
    final = effective_config(config, preset=preset, settings=settings)
    readers = bind_signals(final.fields)
    scores = [score_record(row, final, readers) for row in _records(frame)]
    return pd.Series(scores, index=frame.index, dtype=float, name=SCORE_FIELD)


def rank_frame(
    frame: pd.DataFrame,
    config: ConfigOverride | Mapping[str, Any] | None = None,
    *,
    preset: str | None = None,
    settings: RankingSettings = DEFAULT_RANKING_SETTINGS,
) -> pd.DataFrame:
    """Run ``rank`` over the rows of ``frame`` and return the result as a frame."""
    ranked = rank(_records(frame), config, preset=preset, settings=settings)
    return pd.DataFrame(ranked)
