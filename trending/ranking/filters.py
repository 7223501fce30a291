from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .config import TrendingConfig
from .fields import field_reader


def _same_value(value: Any, target: Any) -> bool:
    # No coercion: True must not match 1 or "true".
    return type(value) is type(target) and value == target


def filter_records(
    records: Sequence[Mapping[str, Any]],
    config: TrendingConfig,
) -> list[Mapping[str, Any]]:
    """Keep records whose filter field equals ``config.filter_value`` exactly.

    The field mapping's ``filter_field`` wins over the top-level one. With no
    filter field or a ``None`` filter value every record passes.
    """
    if not config.filter_field or config.filter_value is None:
        return list(records)

    read = field_reader(config.fields.filter_field or config.filter_field)
    return [r for r in records if _same_value(read(r), config.filter_value)]
