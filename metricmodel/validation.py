"""Validation of metric names, label names and label values."""

from __future__ import annotations

import enum
import re
from contextlib import contextmanager
from dataclasses import dataclass
from string import ascii_letters, digits
from typing import Iterable, Iterator, Union

NameLike = Union[str, bytes]

ALERT_NAME_LABEL = "alertname"
EXPORTED_LABEL_PREFIX = "exported_"
METRIC_NAME_LABEL = "__name__"
SCHEME_LABEL = "__scheme__"
ADDRESS_LABEL = "__address__"
METRICS_PATH_LABEL = "__metrics_path__"
SCRAPE_INTERVAL_LABEL = "__scrape_interval__"
SCRAPE_TIMEOUT_LABEL = "__scrape_timeout__"
RESERVED_LABEL_PREFIX = "__"
META_LABEL_PREFIX = "__meta_"
TMP_LABEL_PREFIX = "__tmp_"
PARAM_LABEL_PREFIX = "__param_"
JOB_LABEL = "job"
INSTANCE_LABEL = "instance"
BUCKET_LABEL = "le"
QUANTILE_LABEL = "quantile"

LABEL_NAME_RE = re.compile(r"\A[a-zA-Z_][a-zA-Z0-9_]*\Z")
METRIC_NAME_RE = re.compile(r"\A[a-zA-Z_:][a-zA-Z0-9_:]*\Z")

_LABEL_START = frozenset(ascii_letters + "_")
_LABEL_CONTINUE = _LABEL_START | frozenset(digits)
_METRIC_START = _LABEL_START | {":"}
_METRIC_CONTINUE = _LABEL_CONTINUE | {":"}


class ValidationError(ValueError):
    """Raised when a name, value or scheme is not acceptable."""


class ValidationScheme(enum.Enum):
    """How metric and label names are validated."""

    LEGACY = "legacy"
    UTF8 = "utf8"


class MetadataType(str, enum.Enum):
    """Metric type values as they appear in metadata."""

    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"
    GAUGE_HISTOGRAM = "gaugehistogram"
    SUMMARY = "summary"
    INFO = "info"
    STATESET = "stateset"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class LabelPair:
    """A label name with its value; sorts by name, then by value."""

    name: str
    value: str


_scheme = ValidationScheme.LEGACY


def get_validation_scheme() -> ValidationScheme:
    """Return the scheme currently used for name validation."""
    return _scheme


def set_validation_scheme(scheme: ValidationScheme) -> None:
    """Select the scheme used for name validation."""
    global _scheme
    if not isinstance(scheme, ValidationScheme):
        raise ValueError(f"invalid name validation scheme requested: {scheme!r}")
    _scheme = scheme


@contextmanager
def validation_scheme(scheme: ValidationScheme) -> Iterator[ValidationScheme]:
    """Use a validation scheme for the duration of a with-block."""
    previous = get_validation_scheme()
    set_validation_scheme(scheme)
    try:
        yield scheme
    finally:
        set_validation_scheme(previous)


def _decode(value: NameLike) -> tuple[str, bool]:
    """Return the text of a value and whether it is valid UTF-8."""
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8"), True
        except UnicodeDecodeError:
            return value.decode("utf-8", "surrogateescape"), False
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return value, False
    return value, True


def _matches(text: str, start: frozenset, rest: frozenset) -> bool:
    if not text or text[0] not in start:
        return False
    return all(ch in rest for ch in text[1:])


def is_valid_label_name(name: NameLike) -> bool:
    """Tell whether a label name is valid under the current scheme."""
    text, valid_utf8 = _decode(name)
    if not text:
        return False
    if _scheme is ValidationScheme.LEGACY:
        return valid_utf8 and _matches(text, _LABEL_START, _LABEL_CONTINUE)
    if _scheme is ValidationScheme.UTF8:
        return valid_utf8
    raise ValueError(f"invalid name validation scheme requested: {_scheme!r}")


def is_valid_label_value(value: NameLike) -> bool:
    """Tell whether a label value is valid UTF-8."""
    return _decode(value)[1]


def is_valid_legacy_metric_name(name: NameLike) -> bool:
    """Tell whether a metric name follows the legacy character rules."""
    text, valid_utf8 = _decode(name)
    return valid_utf8 and _matches(text, _METRIC_START, _METRIC_CONTINUE)


def is_valid_metric_name(name: NameLike) -> bool:
    """Tell whether a metric name is valid under the current scheme."""
    if _scheme is ValidationScheme.LEGACY:
        return is_valid_legacy_metric_name(name)
    if _scheme is ValidationScheme.UTF8:
        text, valid_utf8 = _decode(name)
        return bool(text) and valid_utf8
    raise ValueError(f"invalid name validation scheme requested: {_scheme!r}")


def join_label_names(names: Iterable[str]) -> str:
    """Render label names as a comma separated list."""
    return ", ".join(names)