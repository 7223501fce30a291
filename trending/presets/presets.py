"""
Ranking presets
===============

Named partial configs for the trending engine.  Each preset overrides a
subset of the default weights, field mappings or output options; the
pipeline layers them as ``defaults -> preset -> caller override``.

Registries
----------

* **PRESET_CONFIGS** - general-purpose weightings:
  ``recent_activity``, ``user_engagement``, ``balanced`` and the
  ``top10_minimal`` projection.

* **SCENARIO_CONFIGS** - tuned for a concrete business question:

  ``viral_discovery``
      Markets exploding right now.  Heavy 24h and recency bonuses,
      steep age penalty (factor 4, cap 50).
  ``investment_opportunity``
      Consistently growing markets.  User base and sustained interest
      dominate; age barely matters (factor 0.3, cap 10).
  ``crisis_response``
      Sudden crowd spikes.  Only the last day counts (factor 6, cap 100).
  ``customer_acquisition``
      Highly engaged communities.  Impressions per user lead.
  ``business_intelligence``
      Broad market review, top 20 with every field returned.

* **INDUSTRY_CONFIGS** - scenarios adjusted for an industry, e.g.
  ``real_estate`` is ``investment_opportunity`` with almost no age decay.

Helpers
-------

``combine_scenarios`` blends scenario weight tables by share,
``urgency_config`` and ``market_size_config`` return small overrides for
a time sensitivity or a target market size.

Every registry is read-only; presets are frozen ``ConfigOverride`` values
so a merge can never patch them in place.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from ..ranking.exceptions import InvalidInputError
from ..ranking.models import ConfigOverride, WeightsOverride, combine_overrides, given_values


@dataclass(frozen=True)
class Preset:
    label: str
    description: str
    config: ConfigOverride


def _preset(label: str, description: str, **config: Any) -> Preset:
    return Preset(label, description, ConfigOverride.model_validate(config))


# ---------------------------------------------------------------------------
# General presets
# ---------------------------------------------------------------------------

PRESET_CONFIGS: Mapping[str, Preset] = MappingProxyType({
    "recent_activity": _preset(
        "Recent activity",
        "Favour markets that were active in the last day",
        weights={
            "last_24hrs": 80,
            "updated_recently": 50,
            "impressions_per_user": 5,
            "impressions": 1,
            "user_count": 3,
            "recent_count": 10,
            "age_penalty_factor": 2,
            "max_age_penalty": 24,
        },
    ),
    "user_engagement": _preset(
        "User engagement",
        "Favour markets whose visitors come back",
        weights={
            "last_24hrs": 20,
            "updated_recently": 10,
            "impressions_per_user": 25,
            "impressions": 5,
            "user_count": 15,
            "recent_count": 5,
            "age_penalty_factor": 0.5,
            "max_age_penalty": 24,
        },
    ),
    "balanced": _preset(
        "Balanced",
        "Even mix of recency and engagement",
        weights={
            "last_24hrs": 40,
            "updated_recently": 25,
            "impressions_per_user": 8,
            "impressions": 3,
            "user_count": 6,
            "recent_count": 4,
            "age_penalty_factor": 1,
            "max_age_penalty": 24,
        },
    ),
    "top10_minimal": _preset(
        "Top 10, minimal fields",
        "Default weights, ten results, compact projection",
        top_count=10,
        return_fields=["name", "address", "user_count", "impressions", "trending_score"],
    ),
})

# ---------------------------------------------------------------------------
# Business scenarios
# ---------------------------------------------------------------------------

SCENARIO_CONFIGS: Mapping[str, Preset] = MappingProxyType({
    "viral_discovery": _preset(
        "Viral discovery",
        "Markets with explosive recent growth and high engagement",
        top_count=8,
        weights={
            "last_24hrs": 120,
            "updated_recently": 80,
            "recent_count": 25,
            "impressions_per_user": 15,
            "user_count": 8,
            "impressions": 3,
            "age_penalty_factor": 4,
            "max_age_penalty": 50,
        },
        return_fields=[
            "name", "address", "user_count", "impressions",
            "recent_count", "last_24hrs", "trending_score",
        ],
    ),
    "investment_opportunity": _preset(
        "Investment opportunity",
        "Stable, growing markets with strong fundamentals",
        top_count=12,
        weights={
            "user_count": 20,
            "impressions": 12,
            "impressions_per_user": 18,
            "recent_count": 10,
            "updated_recently": 15,
            "last_24hrs": 25,
            "age_penalty_factor": 0.3,
            "max_age_penalty": 10,
        },
        return_fields=[
            "name", "address", "user_count", "impressions",
            "impressions_per_user", "age_hours", "trending_score",
        ],
    ),
    "crisis_response": _preset(
        "Crisis response",
        "Markets with sudden activity spikes requiring attention",
        top_count=15,
        weights={
            "last_24hrs": 150,
            "recent_count": 40,
            "user_count": 30,
            "updated_recently": 60,
            "impressions_per_user": 5,
            "impressions": 8,
            "age_penalty_factor": 6,
            "max_age_penalty": 100,
        },
        include_score=True,
        return_fields=[
            "name", "address", "user_count", "recent_count",
            "last_24hrs", "updated_recently", "age_hours", "trending_score",
        ],
    ),
    "customer_acquisition": _preset(
        "Customer acquisition",
        "Highly engaged markets with acquisition potential",
        top_count=10,
        weights={
            "impressions_per_user": 35,
            "user_count": 15,
            "recent_count": 20,
            "last_24hrs": 30,
            "updated_recently": 20,
            "impressions": 5,
            "age_penalty_factor": 1.5,
            "max_age_penalty": 20,
        },
        return_fields=[
            "name", "address", "user_count", "impressions_per_user",
            "recent_count", "last_24hrs", "trending_score",
        ],
    ),
    "business_intelligence": _preset(
        "Business intelligence",
        "Comprehensive market analysis with all key metrics",
        top_count=20,
        weights={
            "impressions": 15,
            "user_count": 18,
            "impressions_per_user": 12,
            "recent_count": 8,
            "updated_recently": 10,
            "last_24hrs": 20,
            "age_penalty_factor": 0.8,
            "max_age_penalty": 15,
        },
        include_score=True,
        return_fields=None,
    ),
})

# ---------------------------------------------------------------------------
# Industry templates
# ---------------------------------------------------------------------------


def _derived(label: str, description: str, base: str, **patch: Any) -> Preset:
    config = combine_overrides(SCENARIO_CONFIGS[base].config, patch)
    return Preset(label, description, config)


INDUSTRY_CONFIGS: Mapping[str, Preset] = MappingProxyType({
    "food_and_beverage": _derived(
        "Food & beverage",
        "Food trends move fast and are highly shareable",
        "viral_discovery",
        top_count=6,
        weights={"impressions_per_user": 20, "recent_count": 30},
    ),
    "real_estate": _derived(
        "Real estate",
        "Location value is long-term; population density matters",
        "investment_opportunity",
        weights={"age_penalty_factor": 0.1, "user_count": 25},
    ),
    "retail": _preset(
        "Retail",
        "Foot traffic and current shopping activity",
        top_count=8,
        weights={
            "user_count": 22,
            "impressions": 15,
            "last_24hrs": 40,
            "impressions_per_user": 12,
            "recent_count": 18,
            "updated_recently": 25,
            "age_penalty_factor": 1.2,
            "max_age_penalty": 18,
        },
    ),
    "entertainment": _derived(
        "Entertainment",
        "Entertainment trends are immediate and viral",
        "viral_discovery",
        weights={"impressions_per_user": 30, "last_24hrs": 100},
    ),
})

_REGISTRIES = (PRESET_CONFIGS, SCENARIO_CONFIGS, INDUSTRY_CONFIGS)


def list_presets() -> list[str]:
    return [name for registry in _REGISTRIES for name in registry]


def get_preset(name: str) -> ConfigOverride:
    """Return the partial config registered under *name* in any registry."""
    for registry in _REGISTRIES:
        if name in registry:
            return registry[name].config
    raise InvalidInputError(f"unknown preset {name!r}")


# ---------------------------------------------------------------------------
# Scenario helpers
# ---------------------------------------------------------------------------

_URGENCY_LEVELS: Mapping[str, dict[str, float]] = MappingProxyType({
    "low": {"age_penalty_factor": 0.2, "last_24hrs": 10},
    "medium": {"age_penalty_factor": 1, "last_24hrs": 30},
    "high": {"age_penalty_factor": 2, "last_24hrs": 60},
    "critical": {"age_penalty_factor": 5, "last_24hrs": 100},
})

_MARKET_SIZES: Mapping[str, dict[str, Any]] = MappingProxyType({
    "niche": {"top_count": 5, "weights": {"impressions_per_user": 25, "user_count": 5}},
    "medium": {"top_count": 10, "weights": {"impressions_per_user": 15, "user_count": 12}},
    "mass": {"top_count": 15, "weights": {"impressions_per_user": 8, "user_count": 20}},
})


def combine_scenarios(
    names: Sequence[str],
    shares: Sequence[float] | None = None,
) -> ConfigOverride:
    """Blend the weight tables of several scenarios.

    Each weight is the share-weighted sum across the named scenarios.
    Without matching ``shares`` every scenario gets an equal share.
    """
    if not names:
        return ConfigOverride()
    if shares is None or len(shares) != len(names):
        shares = [1 / len(names)] * len(names)

    totals = dict.fromkeys(WeightsOverride.model_fields, 0.0)
    for name, share in zip(names, shares):
        if name not in SCENARIO_CONFIGS:
            raise InvalidInputError(f"unknown scenario {name!r}")
        weights = SCENARIO_CONFIGS[name].config.weights
        if weights is None:
            continue
        for key, value in given_values(weights).items():
            if value is not None:
                totals[key] += value * share

    return ConfigOverride(weights=WeightsOverride(**totals))


def urgency_config(level: str) -> ConfigOverride:
    """Time-sensitivity override for ``low``, ``medium``, ``high`` or ``critical``."""
    if level not in _URGENCY_LEVELS:
        raise InvalidInputError(f"unknown urgency level {level!r}")
    return ConfigOverride(weights=WeightsOverride(**_URGENCY_LEVELS[level]))


def market_size_config(size: str) -> ConfigOverride:
    """Override for a ``niche``, ``medium`` or ``mass`` target market."""
    if size not in _MARKET_SIZES:
        raise InvalidInputError(f"unknown market size {size!r}")
    return ConfigOverride.model_validate(_MARKET_SIZES[size])
