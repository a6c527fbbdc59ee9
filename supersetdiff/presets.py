"""Preset option bundles for common output targets."""

from __future__ import annotations

from .exceptions import ConfigurationError
from .models import Options, Tag


def skipped_array_elements(n: int) -> str:
    if n == 1:
        return "...skipped 1 array element..."
    return f"...skipped {n} array elements..."


def skipped_object_properties(n: int) -> str:
    if n == 1:
        return "...skipped 1 object property..."
    return f"...skipped {n} object properties..."


def json_options() -> Options:
    """Annotations embedded as JSON-like properties."""
    return Options(
        added=Tag('"prop-added":{', "}"),
        removed=Tag('"prop-removed":{', "}"),
        changed=Tag('{"changed":[', "]}"),
        skipped=Tag('{"skipped":[', "]}"),
        skipped_array_element=skipped_array_elements,
        skipped_object_property=skipped_object_properties,
        changed_separator=", ",
        indent="    ",
    )


def console_options() -> Options:
    """ANSI foreground colors, suited for terminal output."""
    return Options(
        added=Tag("\033[0;32m", "\033[0m"),
        removed=Tag("\033[0;31m", "\033[0m"),
        changed=Tag("\033[0;33m", "\033[0m"),
        skipped=Tag("\033[0;90m", "\033[0m"),
        skipped_array_element=skipped_array_elements,
        skipped_object_property=skipped_object_properties,
        changed_separator=" => ",
        indent="    ",
    )


def html_options() -> Options:
    """Highlighted <span> elements; works best inside a <pre> tag."""
    return Options(
        added=Tag('<span style="background-color: #8bff7f">', "</span>"),
        removed=Tag('<span style="background-color: #fd7f7f">', "</span>"),
        changed=Tag('<span style="background-color: #fcff7f">', "</span>"),
        skipped=Tag('<span style="background-color: #aaa">', "</span>"),
        skipped_array_element=skipped_array_elements,
        skipped_object_property=skipped_object_properties,
        changed_separator=" => ",
        indent="    ",
    )


PRESETS = {
    "plain": Options,
    "json": json_options,
    "console": console_options,
    "html": html_options,
}


def preset(name: str) -> Options:
    """Build the preset Options registered under name."""
    if name not in PRESETS:
        raise ConfigurationError(
            f"Unknown preset '{name}', expected one of: {', '.join(PRESETS)}", "preset"
        )
    return PRESETS[name]()
