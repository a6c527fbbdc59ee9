"""Data models for the supersetdiff engine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace as dc_replace
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Callable, Optional


# Reserved string on the second (expected) side meaning "a non-null value exists here".
PRESENCE = "<<PRESENCE>>"


class Difference(Enum):
    FULL_MATCH = "FullMatch"
    SUPERSET_MATCH = "SupersetMatch"
    NO_MATCH = "NoMatch"
    FIRST_INVALID = "FirstArgIsInvalidJson"
    SECOND_INVALID = "SecondArgIsInvalidJson"
    BOTH_INVALID = "BothArgsAreInvalidJson"

    def __str__(self) -> str:
        return self.value

    @property
    def is_invalid(self) -> bool:
        return self in (
            Difference.FIRST_INVALID,
            Difference.SECOND_INVALID,
            Difference.BOTH_INVALID,
        )

    @staticmethod
    def worst(current: Difference, other: Difference) -> Difference:
        """Fold two node verdicts, NoMatch > SupersetMatch > FullMatch."""
        return current if _SEVERITY[current] >= _SEVERITY[other] else other

    @classmethod
    def from_name(cls, name: str) -> Difference:
        """Look up a Difference by value ("NoMatch") or member name ("NO_MATCH")."""
        for member in cls:
            if name in (member.value, member.name):
                return member
        raise ValueError(f"Unknown difference: {name}")


_SEVERITY = {
    Difference.FULL_MATCH: 0,
    Difference.SUPERSET_MATCH: 1,
    Difference.NO_MATCH: 2,
}


class ValueKind(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class Span(Enum):
    """Option slots a rendered span can be wrapped in."""
    NORMAL = "normal"
    ADDED = "added"
    REMOVED = "removed"
    CHANGED = "changed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Number:
    """A JSON number kept as its literal token."""
    literal: str

    def __str__(self) -> str:
        return self.literal

    def to_float(self) -> float:
        return float(self.literal)

    def to_decimal(self) -> Decimal:
        try:
            return Decimal(self.literal)
        except InvalidOperation as e:
            raise ValueError(f"Not a number literal: {self.literal!r}") from e


def kind_of(value: Any) -> ValueKind:
    """Map a decoded value to its JSON kind."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, Number):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.OBJECT
    raise TypeError(f"Not a decoded JSON value: {type(value).__name__}")


@dataclass(frozen=True)
class Tag:
    """Begin/end markers bracketing a rendered span."""
    begin: str = ""
    end: str = ""


NumberComparator = Callable[[Number, Number], bool]
SkippedFunc = Callable[[int], str]
SkipFunc = Callable[[str, Any, Any], bool]


@dataclass(frozen=True)
class Options:
    """Rendering and comparison options for a single comparison."""
    normal: Tag = field(default_factory=Tag)
    added: Tag = field(default_factory=Tag)
    removed: Tag = field(default_factory=Tag)
    changed: Tag = field(default_factory=Tag)
    skipped: Tag = field(default_factory=Tag)
    prefix: str = ""
    indent: str = "    "
    print_types: bool = False
    changed_separator: str = " => "
    # Literal token equality is used when not set.
    compare_numbers: Optional[NumberComparator] = None
    # Omit subtrees without differences from the output.
    skip_matches: bool = False
    skipped_array_element: Optional[SkippedFunc] = None
    skipped_object_property: Optional[SkippedFunc] = None
    # Called with the dotted key path (array indices excluded) of every non-root node.
    skip: Optional[SkipFunc] = None
    ignore_paths: tuple[str, ...] = ()

    def tag_for(self, span: Span) -> Tag:
        return getattr(self, span.value)

    def replace(self, **changes: Any) -> Options:
        return dc_replace(self, **changes)


@dataclass(frozen=True)
class ComparisonResult:
    """Classification plus annotated rendering of a comparison."""
    difference: Difference
    text: str

    def __iter__(self):
        yield self.difference
        yield self.text

    @property
    def is_match(self) -> bool:
        return self.difference == Difference.FULL_MATCH

    @property
    def is_superset(self) -> bool:
        return self.difference in (Difference.FULL_MATCH, Difference.SUPERSET_MATCH)

    @property
    def is_valid(self) -> bool:
        return not self.difference.is_invalid

    def to_dict(self) -> dict:
        return {
            "difference": self.difference.value,
            "text": self.text,
        }
