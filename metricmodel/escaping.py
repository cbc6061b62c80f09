"""Escaping of names that do not follow the legacy character rules."""

from __future__ import annotations

import enum
from string import ascii_letters, digits

from metricmodel.validation import ValidationError, is_valid_legacy_metric_name

ESCAPING_KEY = "escaping"

_START = frozenset(ascii_letters + "_:")
_CONTINUE = _START | frozenset(digits)
_HEX = frozenset("0123456789abcdef")


class EscapingScheme(enum.Enum):
    """How names are presented to systems without UTF-8 support."""

    NONE = "allow-utf-8"
    UNDERSCORES = "underscores"
    DOTS = "dots"
    VALUES = "values"

    def __str__(self) -> str:
        return self.value


DEFAULT_ESCAPING_SCHEME = EscapingScheme.VALUES


def _legacy_char(ch: str, index: int) -> bool:
    return ch in (_CONTINUE if index > 0 else _START)


def _escape_values(name: str) -> str:
    parts = ["U__"]
    for index, ch in enumerate(name):
        code = ord(ch)
        if _legacy_char(ch, index):
            parts.append(ch)
        elif 0xD800 <= code <= 0xDFFF:
            parts.append("_FFFD_")
        elif code < 0x100:
            parts.append(f"_{code:02x}_")
        elif code < 0x10000:
            parts.append(f"_{code:04x}_")
    return "".join(parts)


def escape_name(name: str, scheme: EscapingScheme) -> str:
    """Escape a name with the given scheme; the name is not validated."""
    if not name:
        return name
    if scheme is EscapingScheme.NONE:
        return name
    if scheme is EscapingScheme.UNDERSCORES:
        if is_valid_legacy_metric_name(name):
            return name
        return "".join(
            ch if _legacy_char(ch, index) else "_" for index, ch in enumerate(name)
        )
    if scheme is EscapingScheme.DOTS:
        parts = []
        for index, ch in enumerate(name):
            if ch == "_":
                parts.append("__")
            elif ch == ".":
                parts.append("_dot_")
            elif _legacy_char(ch, index):
                parts.append(ch)
            else:
                parts.append("_")
        return "".join(parts)
    if scheme is EscapingScheme.VALUES:
        if is_valid_legacy_metric_name(name):
            return name
        return _escape_values(name)
    raise ValueError(f"invalid escaping scheme {scheme!r}")


def _lower(ch: str) -> str:
    code = ord(ch)
    return chr(code | 0x20) if code < 0x80 else ch


def _unescape_values(name: str) -> str:
    if not name.startswith("U__"):
        return name
    escaped = name[3:]
    out = []
    pos = 0
    while pos < len(escaped):
        ch = escaped[pos]
        if ch != "_":
            out.append(ch)
            pos += 1
            continue
        pos += 1
        if pos >= len(escaped):
            return name
        if escaped[pos] == "_":
            out.append("_")
            pos += 1
            continue
        end = escaped.find("_", pos)
        if end == -1:
            return name
        hex_digits = "".join(_lower(c) for c in escaped[pos:end])
        if len(hex_digits) > 4 or not set(hex_digits) <= _HEX:
            return name
        code = int(hex_digits, 16)
        if 0xD800 <= code <= 0xDFFF:
            return name
        out.append(chr(code))
        pos = end + 1
    return "".join(out)


def unescape_name(name: str, scheme: EscapingScheme) -> str:
    """Undo escaping where possible; on malformed input return it unchanged."""
    if not name:
        return name
    if scheme in (EscapingScheme.NONE, EscapingScheme.UNDERSCORES):
        return name
    if scheme is EscapingScheme.DOTS:
        return name.replace("_dot_", ".").replace("__", "_")
    if scheme is EscapingScheme.VALUES:
        return _unescape_values(name)
    raise ValueError(f"invalid escaping scheme {scheme!r}")


def to_escaping_scheme(s: str) -> EscapingScheme:
    """Look up the escaping scheme named by a header parameter value."""
    if s == "":
        raise ValidationError("got empty string instead of escaping scheme")
    try:
        return EscapingScheme(s)
    except ValueError:
        raise ValidationError("unknown format scheme " + s) from None