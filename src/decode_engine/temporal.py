"""Leaf conversions for calendar and clock values.

References to ``datetime.date``, ``datetime.naive_datetime`` and
``datetime.datetime`` are intercepted by the decoder before any catalog lookup.
Each converter accepts an ISO 8601 string or a value that already has the
target's native type.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Optional, Tuple

from .exceptions import ConvertError

TEMPORAL_MODULE = "datetime"

Converter = Callable[[Any], Any]


def to_date(value: Any) -> date:
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError as exc:
            raise ConvertError("ISO 8601 date string or date", value, f"invalid string format for date: {exc}") from exc
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    raise ConvertError("ISO 8601 date string or date", value)


def to_naive_datetime(value: Any) -> datetime:
    if isinstance(value, str):
        if "T" not in value and " " not in value:
            raise ConvertError(
                "ISO 8601 date-time string or naive datetime",
                value,
                "invalid string format for naive datetime: missing time",
            )
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as exc:
            raise ConvertError(
                "ISO 8601 date-time string or naive datetime",
                value,
                f"invalid string format for naive datetime: {exc}",
            ) from exc
        # An offset in the string is dropped, the wall-clock time is kept.
        return parsed.replace(tzinfo=None)
    if isinstance(value, datetime) and value.tzinfo is None:
        return value
    raise ConvertError("ISO 8601 date-time string or naive datetime", value)


def to_datetime(value: Any) -> datetime:
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as exc:
            raise ConvertError(
                "ISO 8601 date-time string or datetime",
                value,
                f"invalid string format for datetime: {exc}",
            ) from exc
        if parsed.utcoffset() is None:
            raise ConvertError(
                "ISO 8601 date-time string or datetime",
                value,
                "invalid string format for datetime: missing offset",
            )
        try:
            return parsed.astimezone(timezone.utc)
        except OverflowError as exc:
            raise ConvertError(
                "ISO 8601 date-time string or datetime",
                value,
                "datetime out of range once normalised to UTC",
            ) from exc
    if isinstance(value, datetime) and value.utcoffset() is not None:
        return value
    raise ConvertError("ISO 8601 date-time string or datetime", value)


TEMPORAL_CONVERTERS: Dict[Tuple[str, str], Converter] = {
    (TEMPORAL_MODULE, "date"): to_date,
    (TEMPORAL_MODULE, "naive_datetime"): to_naive_datetime,
    (TEMPORAL_MODULE, "datetime"): to_datetime,
}


def converter_for(module: str, name: str) -> Optional[Converter]:
    """Return the leaf converter for a temporal reference, or None."""
    return TEMPORAL_CONVERTERS.get((module, name))


__all__ = [
    "TEMPORAL_MODULE",
    "TEMPORAL_CONVERTERS",
    "converter_for",
    "to_date",
    "to_datetime",
    "to_naive_datetime",
]
