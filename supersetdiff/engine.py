"""Entry points of the supersetdiff engine."""

from __future__ import annotations

import logging
from typing import Any, BinaryIO, Optional, TextIO, Union

from .decoder import Source, decode, decode_stream, from_python, load
from .differ import Differ
from .exceptions import InvalidJSONError
from .jsonpath_utils import excluded_paths
from .models import ComparisonResult, Difference, Options

logger = logging.getLogger(__name__)

Stream = Union[BinaryIO, TextIO]

BOTH_INVALID_MESSAGE = "both arguments are invalid json"
FIRST_INVALID_MESSAGE = "first argument is invalid json"
SECOND_INVALID_MESSAGE = "second argument is invalid json"


class DiffEngine:
    """
    Compares two JSON documents and renders their differences.

    The first document is the subject, the second the expectation:

    - FullMatch: both documents are equal under the options
    - SupersetMatch: the first document holds everything the second does,
      plus extra keys or trailing array elements
    - NoMatch: anything else

    A "<<PRESENCE>>" string in the second document only asserts that the
    first has a non-null value at that position.
    """

    def __init__(self, options: Optional[Options] = None):
        """
        Initialize the engine.

        Args:
            options: Rendering and comparison options (uses defaults if not provided)
        """
        self.options = options or Options()

    def compare(self, first: Source, second: Source) -> ComparisonResult:
        """
        Decode and compare two JSON documents.

        Args:
            first: The document under test
            second: The expected document

        Returns:
            ComparisonResult with the classification and the rendered text
        """
        return self._compare_decoded(
            lambda: decode(first, "first"),
            lambda: decode(second, "second"),
        )

    def compare_streams(self, first: Stream, second: Stream) -> ComparisonResult:
        """Same as compare, reading both documents from binary or text streams."""
        return self._compare_decoded(
            lambda: decode_stream(first, "first"),
            lambda: decode_stream(second, "second"),
        )

    def compare_values(self, first: Any, second: Any) -> ComparisonResult:
        """Compare two already decoded Python values (dicts, lists, scalars)."""
        return self._compare_decoded(
            lambda: from_python(first),
            lambda: from_python(second),
        )

    def compare_any(self, first: Any, second: Any) -> ComparisonResult:
        """
        Compare two inputs that may each be JSON text or a decoded value.

        Each side is handled on its own: str and bytes are decoded as JSON
        documents, anything else is converted as an already decoded value.
        """
        return self._compare_decoded(
            lambda: load(first, "first"),
            lambda: load(second, "second"),
        )

    def _compare_decoded(self, load_first, load_second) -> ComparisonResult:
        first, first_error = _load(load_first)
        second, second_error = _load(load_second)

        if first_error is not None and second_error is not None:
            logger.debug("Both documents failed to decode: %s; %s", first_error, second_error)
            return ComparisonResult(Difference.BOTH_INVALID, BOTH_INVALID_MESSAGE)
        if first_error is not None:
            logger.debug("First document failed to decode: %s", first_error)
            return ComparisonResult(Difference.FIRST_INVALID, FIRST_INVALID_MESSAGE)
        if second_error is not None:
            logger.debug("Second document failed to decode: %s", second_error)
            return ComparisonResult(Difference.SECOND_INVALID, SECOND_INVALID_MESSAGE)

        return self.diff(first, second)

    def diff(self, first: Any, second: Any) -> ComparisonResult:
        """Compare two value trees produced by the decoder."""
        ignored = excluded_paths(first, second, self.options.ignore_paths)
        if ignored:
            logger.debug("Excluding paths: %s", sorted(ignored))

        differ = Differ(self.options, ignored)
        text = differ.run(first, second)

        logger.debug(
            "Compared %d nodes: %s", differ.nodes_compared, differ.difference
        )
        return ComparisonResult(differ.difference, text)


def _load(loader) -> tuple[Any, Optional[InvalidJSONError]]:
    try:
        return loader(), None
    except InvalidJSONError as e:
        return None, e


def compare(
    first: Source,
    second: Source,
    options: Optional[Options] = None
) -> ComparisonResult:
    """
    Convenience function to compare two JSON documents.

    Args:
        first: The document under test (bytes or str)
        second: The expected document (bytes or str)
        options: Optional rendering and comparison options

    Returns:
        ComparisonResult, which also unpacks as (difference, text)
    """
    return DiffEngine(options).compare(first, second)


def compare_streams(
    first: Stream,
    second: Stream,
    options: Optional[Options] = None
) -> ComparisonResult:
    """Convenience function to compare two JSON documents read from streams."""
    return DiffEngine(options).compare_streams(first, second)


def compare_values(
    first: Any,
    second: Any,
    options: Optional[Options] = None
) -> ComparisonResult:
    """Convenience function to compare two decoded Python values."""
    return DiffEngine(options).compare_values(first, second)
