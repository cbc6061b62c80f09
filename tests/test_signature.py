import pytest

from metricmodel.signature import (
    Fingerprint,
    fingerprint_from_string,
    label_set_to_fast_fingerprint,
    label_set_to_fingerprint,
    labels_to_signature,
    parse_fingerprint,
    signature_for_labels,
    signature_without_labels,
)

EMPTY = 14695981039346656037
GARLAND = {"name": "garland, briggs", "fear": "love is not enough"}


@pytest.mark.parametrize(
    "labels, expected",
    [
        ({}, EMPTY),
        (None, EMPTY),
        (GARLAND, 5799056148416392346),
        ({"first-label": "first-label-value"}, 5146282821936882169),
        (
            {"first-label": "first-label-value", "second-label": "second-label-value"},
            3195800080984914717,
        ),
        (
            {
                "first-label": "first-label-value",
                "second-label": "second-label-value",
                "third-label": "third-label-value",
            },
            13843036195897128121,
        ),
    ],
)
def test_labels_to_signature(labels, expected):
    assert labels_to_signature(labels) == expected


@pytest.mark.parametrize(
    "labels, expected",
    [
        ({}, EMPTY),
        (GARLAND, 5799056148416392346),
        ({"x": "y"}, 8241431561484471700),
        ({"a": "bb", "b": "c"}, 3016285359649981711),
        ({"a": "b", "bb": "c"}, 7122421792099404749),
        (
            {
                "first_name": "electro",
                "occupation": "robot",
                "manufacturer": "westinghouse",
            },
            5911716720268894962,
        ),
    ],
)
def test_label_set_to_fingerprint(labels, expected):
    result = label_set_to_fingerprint(labels)
    assert isinstance(result, Fingerprint)
    assert result == expected


@pytest.mark.parametrize(
    "labels, expected",
    [
        ({}, EMPTY),
        (GARLAND, 12952432476264840823),
        ({"x": "y"}, 13948396922932177635),
        ({"a": "bb", "b": "c"}, 3198632812309449502),
        ({"a": "b", "bb": "c"}, 5774953389407657638),
        ({"first-label": "first-label-value"}, 5147259542624943964),
        (
            {"first-label": "first-label-value", "second-label": "second-label-value"},
            18269973311206963528,
        ),
        (
            {
                "first-label": "first-label-value",
                "second-label": "second-label-value",
                "third-label": "third-label-value",
            },
            15738406913934009676,
        ),
    ],
)
def test_label_set_to_fast_fingerprint(labels, expected):
    assert label_set_to_fast_fingerprint(labels) == expected


@pytest.mark.parametrize(
    "metric, labels, expected",
    [
        ({}, (), EMPTY),
        ({}, ("empty",), 7187873163539638612),
        (GARLAND, ("empty",), 7187873163539638612),
        (GARLAND, ("fear", "name"), 5799056148416392346),
        (dict(GARLAND, foo="bar"), ("fear", "name"), 5799056148416392346),
        (GARLAND, ("name", "fear"), 5799056148416392346),
        (GARLAND, (), EMPTY),
    ],
)
def test_signature_for_labels(metric, labels, expected):
    assert signature_for_labels(metric, *labels) == expected


@pytest.mark.parametrize(
    "metric, labels, expected",
    [
        ({}, None, EMPTY),
        (GARLAND, {"fear", "name"}, EMPTY),
        (dict(GARLAND, foo="bar"), {"foo"}, 5799056148416392346),
        (GARLAND, set(), 5799056148416392346),
        (GARLAND, None, 5799056148416392346),
    ],
)
def test_signature_without_labels(metric, labels, expected):
    assert signature_without_labels(metric, labels) == expected


def test_fingerprint_from_string():
    assert fingerprint_from_string("4294967295") == 285960729237
    assert parse_fingerprint("4294967295") == 285960729237


def test_fingerprint_string_round_trip():
    fp = Fingerprint(285960729237)
    assert str(fp) == "0000004294967295"
    assert parse_fingerprint(str(fp)) == fp


@pytest.mark.parametrize("text", ["", "xyz", "0x12", "-1", "1_0", "10000000000000000"])
def test_parse_fingerprint_errors(text):
    with pytest.raises(ValueError):
        parse_fingerprint(text)


def test_fingerprint_range():
    with pytest.raises(ValueError):
        Fingerprint(-1)
    with pytest.raises(ValueError):
        Fingerprint(1 << 64)


def test_fingerprints_sort():
    fingerprints = [
        Fingerprint(v)
        for v in (
            14695981039346656037,
            285960729237,
            0,
            4294967295,
            285960729237,
            18446744073709551615,
        )
    ]
    assert sorted(fingerprints) == [
        0,
        4294967295,
        285960729237,
        285960729237,
        14695981039346656037,
        18446744073709551615,
    ]


def test_bytes_and_str_agree():
    assert labels_to_signature({b"x": b"y"}) == labels_to_signature({"x": "y"})