"""Metric and label data model: validation, escaping, signatures, label sets, silences and humanizing."""

__version__ = "0.1.0"