"""FNV-1a based signatures and fingerprints of label sets."""

from __future__ import annotations

import re
from typing import AbstractSet, Iterable, Mapping, Optional, Union

Text = Union[str, bytes]

OFFSET64 = 14695981039346656037
PRIME64 = 1099511628211
SEPARATOR_BYTE = 255

_MASK64 = (1 << 64) - 1
_HEX_RE = re.compile(r"\A[0-9a-fA-F]+\Z")

EMPTY_LABEL_SIGNATURE = OFFSET64


class Fingerprint(int):
    """A 64-bit hash identifying a metric; prints as 16 hex digits."""

    def __new__(cls, value: int = 0) -> "Fingerprint":
        value = int(value)
        if not 0 <= value <= _MASK64:
            raise ValueError(f"fingerprint {value} out of range for 64 bits")
        return super().__new__(cls, value)

    def __str__(self) -> str:
        return f"{int(self):016x}"

    def __repr__(self) -> str:
        return f"Fingerprint(0x{int(self):016x})"


def parse_fingerprint(s: str) -> Fingerprint:
    """Parse a hexadecimal string into a fingerprint."""
    if not _HEX_RE.match(s):
        raise ValueError(f"invalid fingerprint {s!r}")
    value = int(s, 16)
    if value > _MASK64:
        raise ValueError(f"fingerprint {s!r} out of range for 64 bits")
    return Fingerprint(value)


def fingerprint_from_string(s: str) -> Fingerprint:
    """Transform a hexadecimal string representation into a fingerprint."""
    return parse_fingerprint(s)


def _to_bytes(value: Text) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8", "surrogateescape")


def _hash_add(h: int, data: bytes) -> int:
    for byte in data:
        h ^= byte
        h = (h * PRIME64) & _MASK64
    return h


def _hash_add_byte(h: int, byte: int) -> int:
    return ((h ^ byte) * PRIME64) & _MASK64


def _signature(pairs: Iterable[tuple[bytes, bytes]]) -> int:
    total = OFFSET64
    for name, value in sorted(pairs):
        total = _hash_add(total, name)
        total = _hash_add_byte(total, SEPARATOR_BYTE)
        total = _hash_add(total, value)
        total = _hash_add_byte(total, SEPARATOR_BYTE)
    return total


def labels_to_signature(labels: Optional[Mapping[Text, Text]]) -> int:
    """Return a quasi-unique signature for a label mapping."""
    if not labels:
        return EMPTY_LABEL_SIGNATURE
    return _signature((_to_bytes(k), _to_bytes(v)) for k, v in labels.items())


def label_set_to_fingerprint(labels: Optional[Mapping[Text, Text]]) -> Fingerprint:
    """Return the fingerprint of a label set."""
    return Fingerprint(labels_to_signature(labels))


def label_set_to_fast_fingerprint(
    labels: Optional[Mapping[Text, Text]],
) -> Fingerprint:
    """Return a cheaper, order-independent fingerprint of a label set."""
    if not labels:
        return Fingerprint(EMPTY_LABEL_SIGNATURE)
    result = 0
    for name, value in labels.items():
        total = _hash_add(OFFSET64, _to_bytes(name))
        total = _hash_add_byte(total, SEPARATOR_BYTE)
        total = _hash_add(total, _to_bytes(value))
        result ^= total
    return Fingerprint(result)


def signature_for_labels(metric: Mapping[Text, Text], *labels: Text) -> int:
    """Signature over only the named labels; missing labels count as empty."""
    if not labels:
        return EMPTY_LABEL_SIGNATURE
    return _signature(
        (_to_bytes(label), _to_bytes(metric.get(label, ""))) for label in labels
    )


def signature_without_labels(
    metric: Mapping[Text, Text], labels: Optional[AbstractSet[Text]]
) -> int:
    """Signature over all labels of a metric except the excluded ones."""
    if not metric:
        return EMPTY_LABEL_SIGNATURE
    excluded = labels or set()
    pairs = [
        (_to_bytes(name), _to_bytes(value))
        for name, value in metric.items()
        if name not in excluded
    ]
    if not pairs:
        return EMPTY_LABEL_SIGNATURE
    return _signature(pairs)