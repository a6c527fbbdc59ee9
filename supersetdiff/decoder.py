"""Decoding of JSON documents into comparable value trees."""

from __future__ import annotations

import json
from typing import Any, BinaryIO, TextIO, Union

from .exceptions import InvalidJSONError
from .models import Number

Source = Union[bytes, bytearray, str]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def decode(data: Source, side: str = None) -> Any:
    """
    Decode a JSON document, keeping numbers as literal tokens.

    Args:
        data: UTF-8 encoded bytes or text
        side: Label attached to the error ("first" or "second")

    Returns:
        The decoded value tree (None, bool, Number, str, list, dict)
    """
    if isinstance(data, (bytes, bytearray)):
        try:
            data = bytes(data).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise InvalidJSONError(f"Input is not valid UTF-8: {e}", side) from e

    try:
        return json.loads(
            data,
            parse_int=Number,
            parse_float=Number,
            parse_constant=_reject_constant,
        )
    except ValueError as e:
        raise InvalidJSONError(f"Input is not valid JSON: {e}", side) from e


def decode_stream(stream: Union[BinaryIO, TextIO], side: str = None) -> Any:
    """Read a binary or text stream to the end and decode it."""
    return decode(stream.read(), side)


def from_python(value: Any) -> Any:
    """
    Convert an already-decoded Python value into the value model.

    Plain ints and floats become Number using their JSON literal form.
    """
    if value is None or isinstance(value, (bool, str, Number)):
        return value
    if isinstance(value, (int, float)):
        try:
            return Number(json.dumps(value, allow_nan=False))
        except ValueError as e:
            raise InvalidJSONError(f"Number has no JSON form: {value!r}") from e
    if isinstance(value, (list, tuple)):
        return [from_python(item) for item in value]
    if isinstance(value, dict):
        result = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise InvalidJSONError(f"Object key is not a string: {key!r}")
            result[key] = from_python(item)
        return result
    raise InvalidJSONError(f"Value has no JSON form: {type(value).__name__}")


def load(value: Any, side: str = None) -> Any:
    """Decode text or bytes as a JSON document, convert anything else with from_python."""
    if isinstance(value, (str, bytes, bytearray)):
        return decode(value, side)
    try:
        return from_python(value)
    except InvalidJSONError as e:
        raise InvalidJSONError(e.message, side) from e
