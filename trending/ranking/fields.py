from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable

from .config import FieldMappings
from .models import Accessor

logger = logging.getLogger(__name__)

RecordReader = Callable[[Mapping[str, Any]], Any]


class Signal(str, Enum):
    last_24hrs = "last_24hrs"
    updated_recently = "updated_recently"
    impressions_per_user = "impressions_per_user"
    impressions = "impressions"
    user_count = "user_count"
    recent_count = "recent_count"
    age_hours = "age_hours"


BOOLEAN_SIGNALS = (Signal.last_24hrs, Signal.updated_recently)
WEIGHTED_NUMERIC_SIGNALS = (
    Signal.impressions_per_user,
    Signal.impressions,
    Signal.user_count,
    Signal.recent_count,
)

_BOOLEAN_NAMES = frozenset(s.value for s in BOOLEAN_SIGNALS)
_MAPPED_NAMES = frozenset(f.name for f in dataclasses.fields(FieldMappings))


def field_reader(accessor: Accessor | None, name: str | None = None) -> RecordReader:
    """Turn a field mapping entry into a function of the record.

    ``None`` falls back to reading ``name`` directly.
    """
    if callable(accessor):
        return accessor
    key = accessor if accessor is not None else name

    def read(record: Mapping[str, Any]) -> Any:
        return record.get(key)

    return read


def default_for(name: str) -> Any:
    return False if name in _BOOLEAN_NAMES else 0


def bind_signals(fields: FieldMappings) -> dict[Signal, RecordReader]:
    """Resolve every canonical signal to a reader once per merged config."""
    return {
        signal: field_reader(getattr(fields, signal.value), signal.value)
        for signal in Signal
    }


def read_signal(
    readers: Mapping[Signal, RecordReader],
    signal: Signal,
    record: Mapping[str, Any],
) -> Any:
    value = readers[signal](record)
    if value is None:
        return default_for(signal.value)
    return value


def resolve(
    signal: Signal | str,
    record: Mapping[str, Any],
    fields: FieldMappings,
) -> Any:
    """Read one signal from ``record``, defaulting absent values.

    Booleans default to ``False``, everything else to ``0``. Names that are
    not in the field mapping are read from the record as-is.
    """
    name = signal.value if isinstance(signal, Signal) else signal
    if name in _MAPPED_NAMES:
        reader = field_reader(getattr(fields, name), name)
    else:
        logger.debug("Signal %r has no field mapping, reading it directly", name)
        reader = field_reader(name)
    value = reader(record)
    if value is None:
        return default_for(name)
    return value
