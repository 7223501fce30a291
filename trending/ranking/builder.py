from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class ConfigBuilder:
    """Fluent, immutable accumulator for a partial ranking config.

    Every step returns a new builder; none of them validate or fill in
    defaults. That happens when ``rank`` merges the built config.

    Example::

        config = (
            ConfigBuilder()
            .top_count(8)
            .weights({"last_24hrs": 80, "impressions_per_user": 15})
            .return_fields(["name", "address", "trending_score"])
            .filter_by("belongs_to_market", True)
            .build()
        )
    """

    values: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def _with(self, **changes: Any) -> ConfigBuilder:
        return ConfigBuilder(MappingProxyType({**self.values, **changes}))

    def _merged(self, key: str, partial: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType({**self.values.get(key, {}), **partial})

    def filter_by(self, field_name: str, value: Any) -> ConfigBuilder:
        return self._with(filter_field=field_name, filter_value=value)

    def top_count(self, count: int) -> ConfigBuilder:
        return self._with(top_count=count)

    def weights(self, weights: Mapping[str, Any]) -> ConfigBuilder:
        return self._with(weights=self._merged("weights", weights))

    def fields(self, fields: Mapping[str, Any]) -> ConfigBuilder:
        return self._with(fields=self._merged("fields", fields))

    def return_fields(self, names: Iterable[str]) -> ConfigBuilder:
        return self._with(return_fields=tuple(names))

    def include_score(self, include: bool) -> ConfigBuilder:
        return self._with(include_score=include)

    def build(self) -> dict[str, Any]:
        return {
            key: dict(value) if isinstance(value, Mapping) else value
            for key, value in self.values.items()
        }


def create_config_builder() -> ConfigBuilder:
    return ConfigBuilder()
