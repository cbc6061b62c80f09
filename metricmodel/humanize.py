"""Human readable renderings of durations and timestamps."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Any

_MAX_INT64_AS_FLOAT = float(2**63)
_MIN_INT64_AS_FLOAT = -float(2**63)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_PREFIXES = ("m", "u", "n", "p", "f", "a", "z", "y")


class _NaNOrInfError(ValueError):
    pass


def _parse_float(text: str) -> float:
    if not text or any(ch.isspace() or ch == "_" for ch in text):
        raise ValueError(f"invalid float syntax: {text!r}")
    unsigned = text.lstrip("+-")
    if unsigned.lower().startswith("0x"):
        if "p" not in unsigned.lower():
            raise ValueError(f"invalid float syntax: {text!r}")
        return float.fromhex(text)
    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        raise ValueError(f"value out of range: {text!r}")
    return value


def convert_to_float(value: Any) -> float:
    """Convert a number, numeric string or timedelta to float seconds."""
    if isinstance(value, bool):
        raise TypeError(f"can't convert {type(value).__name__} to float")
    if isinstance(value, float):
        return value
    if isinstance(value, str):
        return _parse_float(value)
    if isinstance(value, int):
        return float(value)
    if isinstance(value, timedelta):
        return value.total_seconds()
    raise TypeError(f"can't convert {type(value).__name__} to float")


def float_to_time(value: float) -> datetime:
    """Turn seconds since the epoch into a UTC datetime of millisecond precision."""
    if math.isnan(value) or math.isinf(value):
        raise _NaNOrInfError("value is NaN or Inf")
    timestamp = value * 1e9
    if timestamp > _MAX_INT64_AS_FLOAT or timestamp < _MIN_INT64_AS_FLOAT:
        raise ValueError(
            f"{value} cannot be represented as a nanoseconds timestamp "
            "since it overflows int64"
        )
    nanos = int(timestamp)
    millis = abs(nanos) // 1_000_000
    if nanos < 0:
        millis = -millis
    return _EPOCH + timedelta(milliseconds=millis)


def _format_g(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return "%.4g" % value


def humanize_duration(value: Any) -> str:
    """Render a number of seconds as a short duration such as '1d 2h 3m 4s'."""
    v = convert_to_float(value)
    if math.isnan(v) or math.isinf(v):
        return _format_g(v)
    if v == 0:
        return _format_g(v) + "s"
    if abs(v) >= 1:
        sign = ""
        if v < 0:
            sign = "-"
            v = -v
        duration = int(v)
        seconds = duration % 60
        minutes = (duration // 60) % 60
        hours = (duration // 3600) % 24
        days = duration // 86400
        if days:
            return f"{sign}{days}d {hours}h {minutes}m {seconds}s"
        if hours:
            return f"{sign}{hours}h {minutes}m {seconds}s"
        if minutes:
            return f"{sign}{minutes}m {seconds}s"
        return f"{sign}{_format_g(v)}s"
    prefix = ""
    for candidate in _PREFIXES:
        if abs(v) >= 1:
            break
        prefix = candidate
        v *= 1000
    return f"{_format_g(v)}{prefix}s"


def _format_time(moment: datetime) -> str:
    fraction = f"{moment.microsecond:06d}".rstrip("0")
    text = moment.strftime("%Y-%m-%d %H:%M:%S")
    if fraction:
        text += "." + fraction
    return text + " +0000 UTC"


def humanize_timestamp(value: Any) -> str:
    """Render seconds since the epoch as a UTC date and time."""
    v = convert_to_float(value)
    try:
        moment = float_to_time(v)
    except _NaNOrInfError:
        return _format_g(v)
    return _format_time(moment)