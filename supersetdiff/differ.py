"""Recursive comparison of two decoded documents."""

from __future__ import annotations

from typing import Any, Iterator, Optional

from .comparators import literal_equal
from .models import (
    PRESENCE,
    Difference,
    Options,
    SkippedFunc,
    Span,
    ValueKind,
    kind_of,
)
from .renderer import Renderer


# Marks a key or index absent on one side.
_MISSING = object()


class Differ:
    """
    Walks two value trees in lock-step, rendering as it goes.

    Handles:
    - Null, kind and scalar mismatches (rendered as a changed pair)
    - Presence assertions from the second document
    - Index-wise array and key-wise object comparison
    - Elision of matching subtrees and summaries for elided runs
    - Exclusion of subtrees by path

    The first document may be a superset of the second: content only
    present in the first is SupersetMatch, content only present in the
    second is NoMatch.
    """

    def __init__(self, options: Options, excluded_paths: frozenset[str] = frozenset()):
        self.options = options
        self.excluded_paths = excluded_paths
        self.renderer = Renderer(options)
        self.difference = Difference.FULL_MATCH
        self.nodes_compared = 0

    def run(self, a: Any, b: Any) -> str:
        """Compare two documents from the root and return the rendered text."""
        _, fragment = self.diff("", a, b)
        buf = [fragment]
        self.renderer.close(buf)
        return "".join(buf)

    def diff(self, path: str, a: Any, b: Any) -> tuple[bool, str]:
        """
        Compare two values.

        Args:
            path: Dotted key path of the values (array indices are not included)
            a: Value from the first document
            b: Value from the second document

        Returns:
            Tuple of (has_differences, rendered_fragment)
        """
        self.nodes_compared += 1
        kind_a = kind_of(a)
        kind_b = kind_of(b)

        if kind_a is ValueKind.NULL or kind_b is ValueKind.NULL:
            if kind_a is kind_b:
                return self._match(a, full=False)
            return self._mismatch(a, b)

        # Anything non-null satisfies a presence assertion.
        if kind_b is ValueKind.STRING and b == PRESENCE:
            return self._match(a)

        if kind_a is not kind_b:
            return self._mismatch(a, b)

        if kind_a is ValueKind.ARRAY:
            return self._diff_arrays(path, a, b)
        if kind_a is ValueKind.OBJECT:
            return self._diff_objects(path, a, b)

        if kind_a is ValueKind.NUMBER:
            equal = self._numbers_equal(a, b)
        else:
            equal = a == b

        if equal:
            return self._match(a)
        return self._mismatch(a, b)

    def _numbers_equal(self, a, b) -> bool:
        compare = self.options.compare_numbers or literal_equal
        return compare(a, b)

    def _result(self, difference: Difference):
        self.difference = Difference.worst(self.difference, difference)

    def _match(self, a: Any, full: bool = True) -> tuple[bool, str]:
        self._result(Difference.FULL_MATCH)
        if self.options.skip_matches:
            return False, ""

        buf = []
        self.renderer.tag(buf, Span.NORMAL)
        self.renderer.write_value(buf, a, full)
        return False, "".join(buf)

    def _mismatch(self, a: Any, b: Any) -> tuple[bool, str]:
        self._result(Difference.NO_MATCH)
        buf = []
        self.renderer.write_mismatch(buf, a, b)
        return True, "".join(buf)

    def _diff_arrays(self, path: str, a: list, b: list) -> tuple[bool, str]:
        """Compare two arrays index by index."""
        def entries():
            for i in range(max(len(a), len(b))):
                yield (
                    None,
                    path,
                    a[i] if i < len(a) else _MISSING,
                    b[i] if i < len(b) else _MISSING,
                )

        return self._diff_entries(
            a, entries(), "[", "]", self.options.skipped_array_element
        )

    def _diff_objects(self, path: str, a: dict, b: dict) -> tuple[bool, str]:
        """Compare two objects over the sorted union of their keys."""
        def entries():
            for key in sorted(set(a) | set(b)):
                yield (
                    key,
                    f"{path}.{key}" if path else key,
                    a.get(key, _MISSING),
                    b.get(key, _MISSING),
                )

        return self._diff_entries(
            a, entries(), "{", "}", self.options.skipped_object_property
        )

    def _diff_entries(
        self,
        a: Any,
        entries: Iterator[tuple],
        opening: str,
        closing: str,
        skipped_func: Optional[SkippedFunc]
    ) -> tuple[bool, str]:
        renderer = self.renderer
        entry_span = renderer.open_span

        # Children are rendered one level deeper, each starting in the normal span.
        renderer.level += 1
        rendered, has_differences = self._collect(entries, skipped_func)
        renderer.level -= 1

        renderer.open_span = entry_span
        if self.options.skip_matches and not has_differences:
            return False, ""

        buf = []
        renderer.tag(buf, Span.NORMAL)
        if not rendered:
            buf.append(opening)
        else:
            renderer.level += 1
            renderer.newline(buf, opening)

        for i, item in enumerate(rendered):
            if isinstance(item, int):
                renderer.tag(buf, Span.SKIPPED)
                buf.append(skipped_func(item))
            else:
                fragment, fragment_span = item
                buf.append(fragment)
                renderer.open_span = fragment_span

            last = i == len(rendered) - 1
            if last:
                renderer.level -= 1
            renderer.tag(buf, Span.NORMAL)
            renderer.newline(buf, "" if last else ",")

        buf.append(closing)
        renderer.write_type(buf, a)
        return has_differences, "".join(buf)

    def _collect(
        self,
        entries: Iterator[tuple],
        skipped_func: Optional[SkippedFunc]
    ) -> tuple[list, bool]:
        """
        Render the entries of a container.

        Returns a list whose items are either (fragment, closing_span) for a
        rendered entry or an int counting a run of elided matching entries.
        """
        renderer = self.renderer
        rendered = []
        has_differences = False
        skipped = 0

        for key, path, va, vb in entries:
            renderer.open_span = Span.NORMAL

            if self._ignored(path):
                continue

            buf = []
            if va is not _MISSING and vb is not _MISSING:
                if self._skip(path, va, vb):
                    continue
                if key is not None:
                    renderer.key(buf, key)
                changed, fragment = self.diff(path, va, vb)
                if not changed and self.options.skip_matches:
                    skipped += 1
                    continue
                buf.append(fragment)
            elif va is not _MISSING:
                changed = True
                self._write_one_sided(buf, Span.REMOVED, key, va)
                self._result(Difference.SUPERSET_MATCH)
            else:
                changed = True
                self._write_one_sided(buf, Span.ADDED, key, vb)
                self._result(Difference.NO_MATCH)

            has_differences = has_differences or changed
            if skipped and skipped_func is not None:
                rendered.append(skipped)
            skipped = 0
            rendered.append(("".join(buf), renderer.open_span))

        if skipped and skipped_func is not None:
            rendered.append(skipped)

        renderer.open_span = Span.NORMAL
        return rendered, has_differences

    def _write_one_sided(self, buf: list[str], span: Span, key: Optional[str], value: Any):
        self.nodes_compared += 1
        self.renderer.tag(buf, span)
        if key is not None:
            self.renderer.key(buf, key)
        self.renderer.write_value(buf, value, True)

    def _skip(self, path: str, a: Any, b: Any) -> bool:
        return bool(path) and self.options.skip is not None and self.options.skip(path, a, b)

    def _ignored(self, path: str) -> bool:
        return bool(path) and path in self.excluded_paths
