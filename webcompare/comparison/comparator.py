"""
Comparator for webcompare.
Decides whether a freshly extracted value still matches its stored snapshot.
"""

from collections.abc import Mapping
from typing import Any

from webcompare.comparison.values import ComparableValue


def _same(expected: Any, actual: Any) -> bool:
    """Structural equality over JSON-like data with no type coercion."""
    # Containers compare by JSON shape: any Mapping is an object, list or tuple an array
    if isinstance(expected, Mapping) or isinstance(actual, Mapping):
        if not (isinstance(expected, Mapping) and isinstance(actual, Mapping)):
            return False
        if sorted(expected) != sorted(actual):
            return False
        return all(_same(expected[key], actual[key]) for key in sorted(expected))

    if isinstance(expected, (list, tuple)) or isinstance(actual, (list, tuple)):
        if not (isinstance(expected, (list, tuple)) and isinstance(actual, (list, tuple))):
            return False
        if len(expected) != len(actual):
            return False
        return all(_same(e, a) for e, a in zip(expected, actual))

    if type(expected) is not type(actual):
        return False
    return expected == actual


class Comparator:
    """
    Structural comparison of two comparable values.

    Values of different variants never match. Mappings match when they hold
    the same keys with matching values, regardless of insertion order. None and
    the empty string are different values. The result always agrees with
    comparing canonical_encoding() strings.
    """

    def equal(self, expected: ComparableValue, actual: ComparableValue) -> bool:
        if type(expected) is not type(actual):
            return False
        return _same(expected.payload(), actual.payload())

    def fingerprint(self, value: ComparableValue) -> str:
        """Canonical encoding of a value, for logs and snapshot bookkeeping."""
        return value.canonical_encoding()
