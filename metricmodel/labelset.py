"""Label sets and metrics: mappings from label names to label values."""

from __future__ import annotations

import json
from typing import Union

from metricmodel.signature import (
    Fingerprint,
    label_set_to_fast_fingerprint,
    label_set_to_fingerprint,
)
from metricmodel.validation import (
    METRIC_NAME_LABEL,
    ValidationError,
    is_valid_label_name,
    is_valid_label_value,
)

_SIMPLE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def _quote(text: str) -> str:
    """Quote a string with double quotes and backslash escapes."""
    parts = ['"']
    for ch in text:
        code = ord(ch)
        if ch in _SIMPLE_ESCAPES:
            parts.append(_SIMPLE_ESCAPES[ch])
        elif 0xDC80 <= code <= 0xDCFF:
            # A byte that was not valid UTF-8, carried as a surrogate escape.
            parts.append(f"\\x{code - 0xDC00:02x}")
        elif ch.isprintable():
            parts.append(ch)
        elif code < 0x80:
            parts.append(f"\\x{code:02x}")
        elif code < 0x10000:
            parts.append(f"\\u{code:04x}")
        else:
            parts.append(f"\\U{code:08x}")
    parts.append('"')
    return "".join(parts)


class LabelSet(dict):
    """A collection of label name and label value pairs."""

    def validate(self) -> None:
        """Raise ValidationError if any name or value is invalid."""
        for name, value in self.items():
            if not is_valid_label_name(name):
                raise ValidationError(f"invalid name {_quote(name)}")
            if not is_valid_label_value(value):
                raise ValidationError(f"invalid value {_quote(value)}")

    def before(self, other: "LabelSet") -> bool:
        """Tell whether this set sorts before another.

        Fewer labels come first. With equally many labels, the union of the
        names is walked in sorted order and the first difference decides: a
        set lacking the name comes first, otherwise the values are compared.
        Equal sets return False.
        """
        if len(self) < len(other):
            return True
        if len(self) > len(other):
            return False
        for name in sorted([*self, *other]):
            if name not in self:
                return True
            if name not in other:
                return False
            mine, theirs = self[name], other[name]
            if mine < theirs:
                return True
            if mine > theirs:
                return False
        return False

    def clone(self) -> "LabelSet":
        """Return a copy of the label set."""
        return type(self)(self)

    def merge(self, other: "LabelSet") -> "LabelSet":
        """Return a new set holding both; values from other win."""
        result = LabelSet(self)
        result.update(other)
        return result

    def fingerprint(self) -> Fingerprint:
        """Return the fingerprint of the label set."""
        return label_set_to_fingerprint(self)

    def fast_fingerprint(self) -> Fingerprint:
        """Return a cheaper fingerprint, more prone to collisions."""
        return label_set_to_fast_fingerprint(self)

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "LabelSet":
        """Build a label set from a JSON object of strings."""
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise ValidationError(f"invalid JSON: {exc}") from exc
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValidationError("label set must be a JSON object")
        for name, value in data.items():
            if not isinstance(value, str):
                raise ValidationError(
                    f"label value for {_quote(name)} must be a string"
                )
        for name in data:
            if not is_valid_label_name(name):
                raise ValidationError(f"{_quote(name)} is not a valid label name")
        return cls(data)

    def __str__(self) -> str:
        pairs = (f"{name}={_quote(self[name])}" for name in sorted(self))
        return "{" + ", ".join(pairs) + "}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict.__repr__(self)})"


class Metric(LabelSet):
    """A label set that identifies exactly one stream of samples."""

    def clone(self) -> "Metric":
        """Return a copy of the metric."""
        return Metric(self)

    def __str__(self) -> str:
        metric_name = self.get(METRIC_NAME_LABEL, "")
        labels = sorted(
            f"{name}={_quote(value)}"
            for name, value in self.items()
            if name != METRIC_NAME_LABEL
        )
        if not labels:
            return metric_name if METRIC_NAME_LABEL in self else "{}"
        return f"{metric_name}{{{', '.join(labels)}}}"