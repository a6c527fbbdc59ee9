"""Assertion helpers for JSON payloads in test suites."""

from __future__ import annotations

from typing import Any, Optional

from .engine import DiffEngine
from .models import ComparisonResult, Difference, Options
from .presets import skipped_array_elements, skipped_object_properties

_REPORT_OPTIONS = Options(
    skip_matches=True,
    skipped_array_element=skipped_array_elements,
    skipped_object_property=skipped_object_properties,
)


def assert_json_matches(
    actual: Any,
    expected: Any,
    *,
    allow_superset: bool = True,
    options: Optional[Options] = None
) -> ComparisonResult:
    """
    Assert that actual matches expected.

    Each argument is handled on its own: strings and bytes are decoded as
    JSON, anything else is compared as an already decoded value. Extra content in actual is tolerated unless
    allow_superset is False; "<<PRESENCE>>" values in expected only require
    a non-null value in actual.

    Args:
        actual: The payload under test
        expected: The expected payload
        allow_superset: Accept SupersetMatch as well as FullMatch
        options: Options for the rendered diff in the failure message

    Returns:
        The ComparisonResult on success

    Raises:
        AssertionError: With the classification and the rendered differences
    """
    engine = DiffEngine(options or _REPORT_OPTIONS)
    result = engine.compare_any(actual, expected)

    accepted = {Difference.FULL_MATCH}
    if allow_superset:
        accepted.add(Difference.SUPERSET_MATCH)

    if result.difference not in accepted:
        raise AssertionError(f"JSON payloads differ ({result.difference}):\n{result.text}")
    return result
