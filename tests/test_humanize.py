import math
from datetime import datetime, timedelta, timezone

import pytest

from metricmodel.humanize import (
    convert_to_float,
    float_to_time,
    humanize_duration,
    humanize_timestamp,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "0s"),
        (1, "1s"),
        (60, "1m 0s"),
        (3600, "1h 0m 0s"),
        (86400, "1d 0h 0m 0s"),
        (86400 + 3600, "1d 1h 0m 0s"),
        (-(86400 * 2 + 3600 * 3 + 60 * 4 + 5), "-2d 3h 4m 5s"),
        (899.99, "14m 59s"),
        (0.1, "100ms"),
        (0.0001, "100us"),
        (0.12345, "123.5ms"),
        (60.1, "1m 0s"),
        (60.5, "1m 0s"),
        (1.2345, "1.234s"),
        (12.345, "12.35s"),
        ("0", "0s"),
        ("1", "1s"),
        ("60", "1m 0s"),
        ("3600", "1h 0m 0s"),
        ("86400", "1d 0h 0m 0s"),
        (".1", "100ms"),
        (".0001", "100us"),
        (".12345", "123.5ms"),
        ("60.1", "1m 0s"),
        ("60.5", "1m 0s"),
        ("1.2345", "1.234s"),
        ("12.345", "12.35s"),
        (-1, "-1s"),
        (1234567, "14d 6h 56m 7s"),
    ],
)
def test_humanize_duration(value, expected):
    assert humanize_duration(value) == expected


def test_humanize_duration_error_string():
    with pytest.raises(ValueError):
        humanize_duration("one")


def test_humanize_duration_timedelta():
    assert humanize_duration(timedelta(minutes=1)) == "1m 0s"


def test_humanize_duration_nan():
    assert humanize_duration(math.nan) == "NaN"


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "1970-01-01 00:00:00 +0000 UTC"),
        (-1, "1969-12-31 23:59:59 +0000 UTC"),
        (1, "1970-01-01 00:00:01 +0000 UTC"),
        (1234567, "1970-01-15 06:56:07 +0000 UTC"),
        (9223372036, "2262-04-11 23:47:16 +0000 UTC"),
        ("+Inf", "+Inf"),
        ("-Inf", "-Inf"),
        ("NaN", "NaN"),
        (math.inf, "+Inf"),
        (-math.inf, "-Inf"),
        (math.nan, "NaN"),
        (1435065584.128, "2015-06-23 13:19:44.128 +0000 UTC"),
        ("1435065584.128", "2015-06-23 13:19:44.128 +0000 UTC"),
    ],
)
def test_humanize_timestamp(value, expected):
    assert humanize_timestamp(value) == expected


def test_humanize_timestamp_overflow():
    with pytest.raises(ValueError):
        humanize_timestamp(2**63 - 1)


def test_float_to_time_value():
    assert float_to_time(1.5) == datetime(
        1970, 1, 1, 0, 0, 1, 500000, tzinfo=timezone.utc
    )


def test_float_to_time_rejects_nan():
    with pytest.raises(ValueError):
        float_to_time(math.nan)


@pytest.mark.parametrize("bad", [[1], None, True])
def test_convert_to_float_rejects_types(bad):
    with pytest.raises(TypeError):
        convert_to_float(bad)


@pytest.mark.parametrize("bad", ["1_000", " 1", "0x1", "1e400"])
def test_convert_to_float_rejects_strings(bad):
    with pytest.raises(ValueError):
        convert_to_float(bad)


def test_convert_to_float_hex():
    assert convert_to_float("0x1p-3") == 0.125