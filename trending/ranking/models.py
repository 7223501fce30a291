from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .exceptions import InvalidInputError

# A field mapping entry: the record key to read, or a function of the record.
Accessor = Union[str, Callable[[Any], Any]]


class WeightsOverride(BaseModel):
    """Partial weight table. Unset keys keep the value of the layer below."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    last_24hrs: float | None = None
    updated_recently: float | None = None
    impressions_per_user: float | None = None
    impressions: float | None = None
    user_count: float | None = None
    recent_count: float | None = None
    age_penalty_factor: float | None = None
    max_age_penalty: float | None = None


class FieldsOverride(BaseModel):
    """Partial field mapping. ``None`` on ``filter_field`` clears the filter override."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    last_24hrs: Accessor | None = None
    updated_recently: Accessor | None = None
    impressions_per_user: Accessor | None = None
    impressions: Accessor | None = None
    user_count: Accessor | None = None
    recent_count: Accessor | None = None
    age_hours: Accessor | None = None
    filter_field: Accessor | None = None


class ConfigOverride(BaseModel):
    """A partial ranking config as supplied by a caller, a preset or the builder.

    Accepts both snake_case and camelCase keys (``top_count`` / ``topCount``).
    Only keys that were explicitly given take part in a merge.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    filter_field: str | None = Field(
        default=None, validation_alias=AliasChoices("filter_field", "filterField")
    )
    filter_value: Any = Field(
        default=None, validation_alias=AliasChoices("filter_value", "filterValue")
    )
    top_count: int | None = Field(
        default=None, validation_alias=AliasChoices("top_count", "topCount")
    )
    weights: WeightsOverride | None = None
    field_map: FieldsOverride | None = Field(
        default=None, validation_alias=AliasChoices("field_map", "fields")
    )
    include_score: bool | None = Field(
        default=None, validation_alias=AliasChoices("include_score", "includeScore")
    )
    return_fields: tuple[str, ...] | None = Field(
        default=None, validation_alias=AliasChoices("return_fields", "returnFields")
    )


def given_values(model: BaseModel) -> dict[str, Any]:
    """The fields explicitly supplied on ``model``, read as-is."""
    return {name: getattr(model, name) for name in model.model_fields_set}


def parse_override(config: ConfigOverride | Mapping[str, Any] | None) -> ConfigOverride:
    """Validate a caller-supplied partial config."""
    if config is None:
        return ConfigOverride()
    if isinstance(config, ConfigOverride):
        return config
    if not isinstance(config, Mapping):
        raise InvalidInputError(
            f"config must be a mapping, got {type(config).__name__}"
        )
    try:
        return ConfigOverride.model_validate(dict(config))
    except ValidationError as exc:
        raise InvalidInputError(f"invalid ranking config: {exc}") from exc


def combine_overrides(*overrides: ConfigOverride | Mapping[str, Any]) -> ConfigOverride:
    """Layer partial configs on top of each other without resolving defaults.

    Scalars are replaced wholesale; ``weights`` and ``fields`` merge per key.
    """
    merged: dict[str, Any] = {}
    for override in overrides:
        for key, value in given_values(parse_override(override)).items():
            if key in ("weights", "field_map") and isinstance(value, BaseModel):
                merged[key] = {**(merged.get(key) or {}), **given_values(value)}
            else:
                merged[key] = value
    return parse_override(merged)
