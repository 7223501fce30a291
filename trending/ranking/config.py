from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .models import Accessor, ConfigOverride, given_values

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class TrendingWeights:
    last_24hrs: float = 50
    updated_recently: float = 30
    impressions_per_user: float = 10
    impressions: float = 2
    user_count: float = 5
    recent_count: float = 3
    age_penalty_factor: float = 1
    max_age_penalty: float = 24


@dataclass(frozen=True)
class FieldMappings:
    """Where each canonical signal lives on a record.

    Entries are record keys or callables taking the record. ``filter_field``,
    when set, takes precedence over ``TrendingConfig.filter_field``.
    """

    last_24hrs: Accessor | None = "last_24hrs"
    updated_recently: Accessor | None = "updated_recently"
    impressions_per_user: Accessor | None = "impressions_per_user"
    impressions: Accessor | None = "impressions"
    user_count: Accessor | None = "user_count"
    recent_count: Accessor | None = "recent_count"
    age_hours: Accessor | None = "age_hours"
    filter_field: Accessor | None = "belongs_to_market"


@dataclass(frozen=True)
class TrendingConfig:
    filter_field: str | None = "belongs_to_market"
    filter_value: Any = True
    top_count: int = 5
    weights: TrendingWeights = field(default_factory=TrendingWeights)
    fields: FieldMappings = field(default_factory=FieldMappings)
    include_score: bool = True
    return_fields: tuple[str, ...] | None = None


DEFAULT_TRENDING_CONFIG = TrendingConfig()


@dataclass(frozen=True)
class RankingSettings:
    default_preset: str | None = os.getenv("TRENDING_DEFAULT_PRESET") or None


DEFAULT_RANKING_SETTINGS = RankingSettings()


# Scalars where None means "not given" rather than "switch off".
_NON_NULLABLE = ("top_count", "include_score")


def _apply(base: TrendingConfig, override: ConfigOverride) -> TrendingConfig:
    changes = {
        key: value
        for key, value in given_values(override).items()
        if key not in ("weights", "field_map")
    }
    for key in _NON_NULLABLE:
        if key in changes and changes[key] is None:
            del changes[key]
    if override.weights is not None:
        # A None weight means "not given"; the table always stays numeric.
        weights = {
            key: value
            for key, value in given_values(override.weights).items()
            if value is not None
        }
        changes["weights"] = replace(base.weights, **weights)
    if override.field_map is not None:
        changes["fields"] = replace(
            base.fields, **given_values(override.field_map)
        )
    return replace(base, **changes)


def merge_config(base: TrendingConfig, *overrides: ConfigOverride) -> TrendingConfig:
    """Return ``base`` with each override applied in order.

    Never mutates its inputs: every step builds new frozen values.
    """
    merged = base
    for override in overrides:
        merged = _apply(merged, override)
    return merged
