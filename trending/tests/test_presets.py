from __future__ import annotations

import pytest

from trending.presets.presets import (
    INDUSTRY_CONFIGS,
    PRESET_CONFIGS,
    SCENARIO_CONFIGS,
    combine_scenarios,
    get_preset,
    list_presets,
    market_size_config,
    urgency_config,
)
from trending.ranking.config import DEFAULT_TRENDING_CONFIG, merge_config
from trending.ranking.exceptions import InvalidInputError


def test_list_presets_covers_every_registry():
    names = list_presets()
    assert "recent_activity" in names
    assert "viral_discovery" in names
    assert "real_estate" in names
    assert len(names) == len(PRESET_CONFIGS) + len(SCENARIO_CONFIGS) + len(INDUSTRY_CONFIGS)


def test_get_preset_unknown_name():
    with pytest.raises(InvalidInputError, match="hot_spots"):
        get_preset("hot_spots")


def test_registries_are_read_only():
    with pytest.raises(TypeError):
        PRESET_CONFIGS["mine"] = PRESET_CONFIGS["balanced"]


def test_recent_activity_weights():
    merged = merge_config(DEFAULT_TRENDING_CONFIG, get_preset("recent_activity"))
    assert merged.weights.last_24hrs == 80
    assert merged.weights.age_penalty_factor == 2
    assert merged.top_count == 5


def test_top10_minimal_keeps_default_weights():
    merged = merge_config(DEFAULT_TRENDING_CONFIG, get_preset("top10_minimal"))
    assert merged.top_count == 10
    assert merged.weights == DEFAULT_TRENDING_CONFIG.weights
    assert merged.return_fields == ("name", "address", "user_count", "impressions", "trending_score")


def test_business_intelligence_returns_all_fields():
    merged = merge_config(
        DEFAULT_TRENDING_CONFIG,
        get_preset("top10_minimal"),
        get_preset("business_intelligence"),
    )
    assert merged.return_fields is None
    assert merged.top_count == 20


def test_industry_templates_inherit_from_scenarios():
    food = get_preset("food_and_beverage")
    assert food.top_count == 6
    assert food.weights.impressions_per_user == 20
    assert food.weights.recent_count == 30
    assert food.weights.last_24hrs == 120
    assert food.return_fields == SCENARIO_CONFIGS["viral_discovery"].config.return_fields

    real_estate = get_preset("real_estate")
    assert real_estate.top_count == 12
    assert real_estate.weights.age_penalty_factor == 0.1
    assert real_estate.weights.user_count == 25
    assert real_estate.weights.impressions == 12


def test_deriving_industries_left_scenarios_untouched():
    viral = SCENARIO_CONFIGS["viral_discovery"].config
    assert viral.top_count == 8
    assert viral.weights.impressions_per_user == 15


def test_combine_scenarios_equal_shares():
    combined = combine_scenarios(["viral_discovery", "crisis_response"])
    assert combined.weights.last_24hrs == pytest.approx((120 + 150) / 2)
    assert combined.weights.max_age_penalty == pytest.approx((50 + 100) / 2)


def test_combine_scenarios_explicit_shares():
    combined = combine_scenarios(["viral_discovery", "investment_opportunity"], [0.75, 0.25])
    assert combined.weights.user_count == pytest.approx(8 * 0.75 + 20 * 0.25)


def test_combine_scenarios_mismatched_shares_fall_back_to_equal():
    combined = combine_scenarios(["viral_discovery"], [0.1, 0.9])
    assert combined.weights.last_24hrs == pytest.approx(120)


def test_combine_scenarios_empty():
    assert combine_scenarios([]).model_dump(exclude_unset=True) == {}


def test_combine_scenarios_unknown_name():
    with pytest.raises(InvalidInputError):
        combine_scenarios(["viral_discovery", "moon_landing"])


@pytest.mark.parametrize(
    "level, factor, bonus",
    [("low", 0.2, 10), ("medium", 1, 30), ("high", 2, 60), ("critical", 5, 100)],
)
def test_urgency_config(level, factor, bonus):
    merged = merge_config(DEFAULT_TRENDING_CONFIG, urgency_config(level))
    assert merged.weights.age_penalty_factor == factor
    assert merged.weights.last_24hrs == bonus
    assert merged.weights.user_count == 5


@pytest.mark.parametrize("size, count", [("niche", 5), ("medium", 10), ("mass", 15)])
def test_market_size_config(size, count):
    assert market_size_config(size).top_count == count


def test_helpers_reject_unknown_names():
    with pytest.raises(InvalidInputError):
        urgency_config("whenever")
    with pytest.raises(InvalidInputError):
        market_size_config("galactic")
