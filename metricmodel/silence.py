"""Silences and the label matchers they are made of."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Union

from metricmodel.validation import (
    ValidationError,
    is_valid_label_name,
    is_valid_label_value,
)

Text = Union[str, bytes]


def _is_valid_regex(pattern: Text) -> bool:
    try:
        re.compile(pattern)
    except (re.error, TypeError):
        return False
    return True


@dataclass
class Matcher:
    """Matches the value of a given label, literally or by regular expression."""

    name: Text
    value: Text
    is_regex: bool = False

    def validate(self) -> None:
        """Raise ValidationError if any field is invalid."""
        if not is_valid_label_name(self.name):
            raise ValidationError(f"invalid name {self.name!r}")
        if self.is_regex:
            if not _is_valid_regex(self.value):
                raise ValidationError(f"invalid regular expression {self.value!r}")
        elif not is_valid_label_value(self.value) or len(self.value) == 0:
            raise ValidationError(f"invalid value {self.value!r}")

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "Matcher":
        """Build a matcher from its JSON form."""
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise ValidationError(f"invalid JSON: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValidationError("matcher must be a JSON object")

        name = data.get("name")
        value = data.get("value")
        is_regex = data.get("isRegex")
        if name is None:
            name = ""
        elif not isinstance(name, str):
            raise ValidationError("matcher name must be a string")
        elif not is_valid_label_name(name):
            raise ValidationError(f"{name!r} is not a valid label name")
        if value is None:
            value = ""
        elif not isinstance(value, str):
            raise ValidationError("matcher value must be a string")
        if is_regex is None:
            is_regex = False
        elif not isinstance(is_regex, bool):
            raise ValidationError("matcher isRegex must be a boolean")

        if not name:
            raise ValidationError("label name in matcher must not be empty")
        if is_regex:
            try:
                re.compile(value)
            except re.error as exc:
                raise ValidationError(str(exc)) from exc
        return cls(name=name, value=value, is_regex=is_regex)


@dataclass
class Silence:
    """A silence definition: matchers, a time range and its provenance."""

    matchers: List[Matcher] = field(default_factory=list)
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    created_by: str = ""
    comment: str = ""
    id: int = 0

    def validate(self) -> None:
        """Raise ValidationError if any field is invalid."""
        if not self.matchers:
            raise ValidationError("at least one matcher required")
        for matcher in self.matchers:
            try:
                matcher.validate()
            except ValidationError as exc:
                raise ValidationError(f"invalid matcher: {exc}") from exc
        if self.starts_at is None:
            raise ValidationError("start time missing")
        if self.ends_at is None:
            raise ValidationError("end time missing")
        if self.ends_at < self.starts_at:
            raise ValidationError("start time must be before end time")
        if not self.created_by:
            raise ValidationError("creator information missing")
        if not self.comment:
            raise ValidationError("comment missing")
        if self.created_at is None:
            raise ValidationError("creation timestamp missing")