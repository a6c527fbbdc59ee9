"""Annotated text rendering for the supersetdiff engine."""

from __future__ import annotations

import json
from typing import Any, Optional

from .models import Options, Span, ValueKind, kind_of


class Renderer:
    """
    Per-comparison rendering state.

    Holds the indentation level and the currently open span. Every write
    goes into a caller-owned buffer (a list of strings) so a container can
    decide after visiting its children whether its fragment is emitted.
    """

    def __init__(self, options: Options):
        self.options = options
        self.level = 0
        self.open_span: Optional[Span] = None

    def tag(self, buf: list[str], span: Span):
        """Switch the open span, skipping the switch if the same slot is open."""
        if self.open_span is span:
            return
        if self.open_span is not None:
            buf.append(self.options.tag_for(self.open_span).end)
        buf.append(self.options.tag_for(span).begin)
        self.open_span = span

    def close(self, buf: list[str]):
        """Terminate the open span, if any."""
        if self.open_span is not None:
            buf.append(self.options.tag_for(self.open_span).end)
            self.open_span = None

    def newline(self, buf: list[str], text: str = ""):
        # Spans never cross line breaks: close before, reopen after the indent.
        open_tag = self.options.tag_for(self.open_span) if self.open_span is not None else None
        buf.append(text)
        if open_tag is not None:
            buf.append(open_tag.end)
        buf.append("\n")
        buf.append(self.options.prefix)
        buf.append(self.options.indent * self.level)
        if open_tag is not None:
            buf.append(open_tag.begin)

    def key(self, buf: list[str], key: str):
        buf.append(quote(key))
        buf.append(": ")

    def write_value(self, buf: list[str], value: Any, full: bool):
        """
        Write a value literally.

        Args:
            buf: Output buffer
            value: Decoded value
            full: Expand containers; otherwise they are written as [] or {}
        """
        kind = kind_of(value)

        if kind is ValueKind.NULL:
            buf.append("null")
        elif kind is ValueKind.BOOLEAN:
            buf.append("true" if value else "false")
        elif kind is ValueKind.NUMBER:
            buf.append(value.literal)
        elif kind is ValueKind.STRING:
            buf.append(quote(value))
        elif kind is ValueKind.ARRAY:
            if full:
                self._write_entries(buf, "[", "]", [(None, item) for item in value])
            else:
                buf.append("[]")
        elif kind is ValueKind.OBJECT:
            if full:
                self._write_entries(buf, "{", "}", [(k, value[k]) for k in sorted(value)])
            else:
                buf.append("{}")

        self.write_type(buf, value)

    def _write_entries(self, buf: list[str], opening: str, closing: str, entries: list):
        if not entries:
            buf.append(opening)
        else:
            self.level += 1
            self.newline(buf, opening)

        for i, (key, item) in enumerate(entries):
            if key is not None:
                self.key(buf, key)
            self.write_value(buf, item, True)
            if i != len(entries) - 1:
                self.newline(buf, ",")
            else:
                self.level -= 1
                self.newline(buf)

        buf.append(closing)

    def write_type(self, buf: list[str], value: Any):
        """Append a kind annotation when print_types is enabled."""
        if self.options.print_types:
            buf.append(f" ({kind_of(value).value})")

    def write_mismatch(self, buf: list[str], a: Any, b: Any):
        self.tag(buf, Span.CHANGED)
        self.write_value(buf, a, False)
        buf.append(self.options.changed_separator)
        self.write_value(buf, b, False)


def quote(text: str) -> str:
    """Quote a string the way it appears in JSON source."""
    return json.dumps(text, ensure_ascii=False)
