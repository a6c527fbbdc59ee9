"""JSONPath utilities for excluding subtrees from comparison."""

from __future__ import annotations

from typing import Any, Iterable

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError
from jsonpath_ng.jsonpath import Child, Fields, Index, Slice

from .exceptions import ConfigurationError


class JSONPathMatcher:
    """Resolves JSONPath expressions to the key paths the differ reports."""

    # Cache for compiled JSONPath expressions
    _cache: dict = {}

    @classmethod
    def compile(cls, path: str):
        """
        Compile and cache a JSONPath expression.

        Key paths carry no array indices, so an expression that selects
        particular elements ("$.items[0].id", "$.items[1:3]") cannot be
        honoured and is refused. Wildcards such as "$.items[*].id" are fine.
        """
        if path not in cls._cache:
            try:
                compiled = jsonpath_parse(path)
            except (JsonPathLexerError, JsonPathParserError) as e:
                raise ConfigurationError(
                    f"Invalid JSONPath expression '{path}': {e}", "ignore_paths"
                ) from e
            if _selects_elements(compiled):
                raise ConfigurationError(
                    f"JSONPath expression '{path}' selects array elements by position, "
                    "use [*] to exclude a field in every element",
                    "ignore_paths",
                )
            cls._cache[path] = compiled
        return cls._cache[path]

    @classmethod
    def key_paths(cls, data: Any, expressions: Iterable[str]) -> set[str]:
        """
        Find the dotted key paths of all object members matched in data.

        Array indices are dropped from the paths. Matches that end on an
        array element rather than an object member are not reported.

        Args:
            data: A decoded document
            expressions: JSONPath expressions

        Returns:
            Set of paths such as "user.address.zip"
        """
        paths = set()
        for expression in expressions:
            for match in cls.compile(expression).find(data):
                segments = _segments(match.full_path)
                if segments and segments[-1] is not None:
                    paths.add(".".join(s for s in segments if s is not None))
        return paths


def _selects_elements(node) -> bool:
    """True if any step of a parsed expression picks elements by position."""
    if isinstance(node, Index):
        return True
    if isinstance(node, Slice):
        return any(v is not None for v in (node.start, node.end, node.step))
    return any(
        _selects_elements(getattr(node, side))
        for side in ("left", "right")
        if hasattr(node, side)
    )


def _segments(path) -> list:
    """Flatten a jsonpath-ng path into field names, with None for other steps."""
    if isinstance(path, Child):
        return _segments(path.left) + _segments(path.right)
    if isinstance(path, Fields):
        return list(path.fields)
    return [None]


def excluded_paths(first: Any, second: Any, expressions: Iterable[str]) -> frozenset[str]:
    """Resolve expressions against both documents."""
    expressions = list(expressions)
    if not expressions:
        return frozenset()
    return frozenset(
        JSONPathMatcher.key_paths(first, expressions)
        | JSONPathMatcher.key_paths(second, expressions)
    )
