# metricmodel

A small, dependency-free data model for monitoring metrics. It covers metric
and label names, label sets, fingerprints, silences and human-readable
durations and timestamps.

## Modules

- `metricmodel.validation`: checks for names and values.
  `is_valid_label_name`, `is_valid_metric_name`,
  `is_valid_legacy_metric_name` and `is_valid_label_value` are the checks.
  Names are checked under `ValidationScheme.LEGACY`, which is the default, or
  under `ValidationScheme.UTF8`. Choose the scheme globally with
  `set_validation_scheme` and read it back with `get_validation_scheme`, or
  use the `validation_scheme` context manager to set it for one `with` block.
  The module also defines `LabelPair`, an ordered name/value pair, and
  `MetadataType`, the metric type names used in metadata.
  `ValidationError`, a subclass of `ValueError`, is the error the package
  raises for invalid data.
- `metricmodel.escaping`: `escape_name` and `unescape_name`, with the
  schemes of `EscapingScheme`: `NONE`, `UNDERSCORES`, `DOTS` and `VALUES`.
  `to_escaping_scheme` maps a header value such as `"dots"` to its scheme.
- `metricmodel.signature`: FNV-1a signatures.
  - `labels_to_signature`, `signature_for_labels` and
    `signature_without_labels` return signatures.
  - `label_set_to_fingerprint` and `label_set_to_fast_fingerprint` return a
    `Fingerprint`, an `int` subclass that prints as 16 hex digits.
  - `parse_fingerprint` and `fingerprint_from_string` read a fingerprint
    back from hex.
- `metricmodel.labelset`: `LabelSet` and `Metric`, both `dict` subclasses.
  Their methods are `validate`, `before`, `clone`, `merge`, `fingerprint`,
  `fast_fingerprint` and `from_json`. Each has a canonical string form.
- `metricmodel.silence`: `Matcher` and `Silence`. Each has a `validate()`
  method that raises `ValidationError`. `Matcher.from_json` builds a matcher
  from JSON.
- `metricmodel.humanize`: `humanize_duration`, `humanize_timestamp`,
  `convert_to_float` and `float_to_time`.

## Installation

```
pip install metricmodel
```

## Examples

Label sets and fingerprints:

```python
from metricmodel.labelset import LabelSet, Metric

labels = LabelSet({"job": "api", "instance": "host:9090"})
print(labels)                    # {instance="host:9090", job="api"}
print(labels.fingerprint())      # 16 hex digits

metric = Metric({"__name__": "up", "job": "api"})
print(metric)                    # up{job="api"}

LabelSet.from_json('{"1bad": "x"}')   # raises ValidationError
```

Validation schemes:

```python
from metricmodel.validation import (
    ValidationScheme, is_valid_label_name, validation_scheme,
)

is_valid_label_name("colon:in:name")          # False
with validation_scheme(ValidationScheme.UTF8):
    is_valid_label_name("colon:in:name")      # True
```

Escaping:

```python
from metricmodel.escaping import EscapingScheme, escape_name, unescape_name

escape_name("mysystem.prod", EscapingScheme.VALUES)   # 'U__mysystem_2e_prod'
unescape_name("U__mysystem_2e_prod", EscapingScheme.VALUES)  # 'mysystem.prod'
escape_name("http.status:sum", EscapingScheme.DOTS)   # 'http_dot_status:sum'
```

Signatures:

```python
from metricmodel.signature import labels_to_signature, signature_for_labels

labels_to_signature({})                                # 14695981039346656037
signature_for_labels({"a": "1", "b": "2"}, "a")        # uses label "a" only
```

Silences:

```python
from datetime import datetime, timezone
from metricmodel.silence import Matcher, Silence

now = datetime.now(timezone.utc)
silence = Silence(
    matchers=[Matcher(name="job", value="api")],
    starts_at=now,
    ends_at=now,
    created_at=now,
    created_by="ops",
    comment="maintenance",
)
silence.validate()   # raises ValidationError when a field is invalid
```

Humanizing:

```python
from metricmodel.humanize import humanize_duration, humanize_timestamp

humanize_duration(86400 + 3600)   # '1d 1h 0m 0s'
humanize_duration(0.12345)        # '123.5ms'
humanize_timestamp(0)             # '1970-01-01 00:00:00 +0000 UTC'
```

## What it does not do

This package has no parser for the text exposition format. It has no alert
objects and no metric family or sample types. It does not scrape, store or
serve metrics, and it has no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```