"""
Trending ranking pipeline.

Responsibilities:
- Merge defaults, an optional preset and the caller's override into one config.
- Filter the candidate records with a single exact-equality predicate.
- Score every candidate on a copy, never touching the caller's records.
- Stable-sort by score, keep the top N and shape the output.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from operator import itemgetter
from typing import Any

from ..presets.presets import get_preset
from .config import (
    DEFAULT_RANKING_SETTINGS,
    DEFAULT_TRENDING_CONFIG,
    RankingSettings,
    TrendingConfig,
    merge_config,
)
from .exceptions import InvalidInputError
from .fields import bind_signals
from .filters import filter_records
from .models import ConfigOverride, parse_override
from .scoring import SCORE_FIELD, score_record

logger = logging.getLogger(__name__)


def _validate_records(records: Any) -> list[Mapping[str, Any]]:
    if isinstance(records, (str, bytes, Mapping)) or not isinstance(records, Iterable):
        raise InvalidInputError(
            f"records must be a sequence of mappings, got {type(records).__name__}"
        )
    items = list(records)
    for position, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise InvalidInputError(
                f"record at position {position} is a {type(item).__name__}, not a mapping"
            )
    return items


def effective_config(
    config: ConfigOverride | Mapping[str, Any] | None = None,
    preset: str | None = None,
    settings: RankingSettings = DEFAULT_RANKING_SETTINGS,
) -> TrendingConfig:
    """Resolve ``defaults -> preset -> config`` into a complete config."""
    override = parse_override(config)
    layers: list[ConfigOverride] = []

    if preset is not None:
        layers.append(get_preset(preset))
    elif settings.default_preset:
        try:
            layers.append(get_preset(settings.default_preset))
        except InvalidInputError:
            logger.warning(
                "Default preset %r is not registered, using built-in defaults",
                settings.default_preset,
            )

    layers.append(override)
    return merge_config(DEFAULT_TRENDING_CONFIG, *layers)


def _shape(item: dict[str, Any], config: TrendingConfig) -> dict[str, Any]:
    if config.return_fields is not None:
        shaped = {name: item[name] for name in config.return_fields if name in item}
        if config.include_score:
            shaped[SCORE_FIELD] = item[SCORE_FIELD]
        return shaped
    if not config.include_score:
        return {key: value for key, value in item.items() if key != SCORE_FIELD}
    return item


def rank(
    records: Iterable[Mapping[str, Any]],
    config: ConfigOverride | Mapping[str, Any] | None = None,
    *,
    preset: str | None = None,
    settings: RankingSettings = DEFAULT_RANKING_SETTINGS,
) -> list[dict[str, Any]]:
    """Return the top trending records, highest score first.

    Records with equal scores keep their input order. Raises
    ``InvalidInputError`` before producing anything if the records or the
    config are malformed.
    """
    items = _validate_records(records)
    final = effective_config(config, preset=preset, settings=settings)

    candidates = filter_records(items, final)
    readers = bind_signals(final.fields)
    scored = [
        {**item, SCORE_FIELD: score_record(item, final, readers)}
        for item in candidates
    ]
    # sort() is stable, reverse=True included.
    scored.sort(key=itemgetter(SCORE_FIELD), reverse=True)
    top = scored[: max(0, final.top_count)]

    logger.debug(
        "Ranked %d records: %d passed the filter, returning %d (preset=%s)",
        len(items),
        len(candidates),
        len(top),
        preset or settings.default_preset,
    )
    return [_shape(item, final) for item in top]
