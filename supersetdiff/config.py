"""Loading of Options from YAML or JSON option files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from .comparators import number_comparator
from .exceptions import ConfigurationError
from .models import Options, Span, Tag
from .presets import preset, skipped_array_elements, skipped_object_properties

logger = logging.getLogger(__name__)

_BOOL_KEYS = ("print_types", "skip_matches", "summaries")
_STR_KEYS = ("preset", "indent", "prefix", "changed_separator", "number_comparison")
_KNOWN_KEYS = set(_BOOL_KEYS) | set(_STR_KEYS) | {"ignore_paths", "tags"}


def load_options(path: str) -> Options:
    """
    Load Options from a YAML file.

    JSON files are accepted too, since JSON is valid YAML.

    Args:
        path: Path to the options file

    Returns:
        The configured Options
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Options file not found: {config_path}")

    with open(config_path, 'r') as f:
        content = f.read()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse options file: {e}")

    logger.debug("Loaded options from %s", config_path)
    return options_from_dict(data or {})


def options_from_dict(data: dict, base: Optional[Options] = None) -> Options:
    """
    Build Options from a mapping.

    Keys:
        preset: plain, json, console or html (base for everything else)
        indent, prefix, changed_separator: output strings
        print_types, skip_matches: flags
        summaries: attach the default summaries for elided runs
        number_comparison: literal, float or decimal
        ignore_paths: list of JSONPath expressions
        tags: mapping of span name to {begin, end}
    """
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Options must be a mapping, got {type(data).__name__}"
        )

    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise ConfigurationError(
            f"Unknown option keys: {', '.join(sorted(unknown))}", sorted(unknown)[0]
        )

    for key in _BOOL_KEYS:
        _check_type(data, key, bool)
    for key in _STR_KEYS:
        _check_type(data, key, str)

    if "preset" in data:
        options = preset(data["preset"])
    else:
        options = base or Options()

    changes: dict[str, Any] = {}
    for key in ("indent", "prefix", "changed_separator", "print_types", "skip_matches"):
        if key in data:
            changes[key] = data[key]

    if "number_comparison" in data:
        changes["compare_numbers"] = number_comparator(data["number_comparison"])

    if data.get("summaries") is True:
        changes["skipped_array_element"] = skipped_array_elements
        changes["skipped_object_property"] = skipped_object_properties
    elif data.get("summaries") is False:
        changes["skipped_array_element"] = None
        changes["skipped_object_property"] = None

    if "ignore_paths" in data:
        changes["ignore_paths"] = _parse_ignore_paths(data["ignore_paths"])

    if "tags" in data:
        changes.update(_parse_tags(data["tags"], options))

    return options.replace(**changes)


def _check_type(data: dict, key: str, expected: type):
    if key in data and not isinstance(data[key], expected):
        raise ConfigurationError(
            f"Option '{key}' must be a {expected.__name__}, got {type(data[key]).__name__}",
            key,
        )


def _parse_ignore_paths(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
        raise ConfigurationError("Option 'ignore_paths' must be a list of strings", "ignore_paths")
    return tuple(value)


def _parse_tags(value: Any, options: Options) -> dict[str, Tag]:
    if not isinstance(value, dict):
        raise ConfigurationError("Option 'tags' must be a mapping", "tags")

    names = {span.value for span in Span}
    tags = {}
    for name, markers in value.items():
        if name not in names:
            raise ConfigurationError(
                f"Unknown tag '{name}', expected one of: {', '.join(sorted(names))}", "tags"
            )
        if not isinstance(markers, dict) or set(markers) - {"begin", "end"}:
            raise ConfigurationError(f"Tag '{name}' must be a mapping with begin/end", "tags")

        current = options.tag_for(Span(name))
        begin = markers.get("begin", current.begin)
        end = markers.get("end", current.end)
        if not isinstance(begin, str) or not isinstance(end, str):
            raise ConfigurationError(f"Tag '{name}' markers must be strings", "tags")
        tags[name] = Tag(begin, end)
    return tags
