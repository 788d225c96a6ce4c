"""
Comparable values for webcompare.

Every comparison kind produces one variant of the ComparableValue union.
Values are plain data: two values are equal when their canonical encodings
are identical, whatever order their mapping keys were inserted in.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Mapping, Optional, Union

from webcompare.exceptions import DescriptorError


class ComparisonKind(str, Enum):
    """What part of an element a descriptor watches."""
    TEXT = "text"
    ATTRIBUTE = "attribute"
    STYLE = "style"
    CHILDREN = "children"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, raw: Union[str, "ComparisonKind"]) -> Optional["ComparisonKind"]:
        """Return the matching kind, or None when the name is unknown."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).lower())
        except ValueError:
            return None


class ComparableValue:
    """Base class of the value union. Subclasses are frozen dataclasses."""

    tag: ClassVar[str] = ""

    def payload(self) -> Any:
        """JSON-compatible body of the value, without its tag."""
        raise NotImplementedError

    def to_wire(self) -> Any:
        """Snapshot shape stored by callers (see value_from_wire)."""
        raise NotImplementedError

    def canonical_encoding(self) -> str:
        """
        Deterministic string form used to define equality.

        Keys are sorted at every level, None is encoded as null (never as ""),
        and the variant tag is part of the encoding so values of different
        variants never collide.
        """
        return json.dumps(
            [self.tag, self.payload()],
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComparableValue):
            return NotImplemented
        return self.canonical_encoding() == other.canonical_encoding()

    def __hash__(self) -> int:
        return hash(self.canonical_encoding())


@dataclass(frozen=True, eq=False)
class TextValue(ComparableValue):
    """Full text content of an element. None means the element has no text."""
    text: Optional[str]

    tag: ClassVar[str] = "text"

    def payload(self) -> Any:
        return self.text

    def to_wire(self) -> Any:
        return self.text


@dataclass(frozen=True, eq=False)
class AttributeMap(ComparableValue):
    """Requested attribute names mapped to their value, or None when unset."""
    attributes: Mapping[str, Optional[str]] = field(default_factory=dict)

    tag: ClassVar[str] = "attribute"

    def payload(self) -> Any:
        return dict(self.attributes)

    def to_wire(self) -> Any:
        return dict(self.attributes)


@dataclass(frozen=True, eq=False)
class StyleMap(ComparableValue):
    """Every computed CSS property of an element mapped to its resolved value."""
    properties: Mapping[str, str] = field(default_factory=dict)

    tag: ClassVar[str] = "style"

    def payload(self) -> Any:
        return dict(self.properties)

    def to_wire(self) -> Any:
        return {"style": dict(self.properties)}


@dataclass(frozen=True, eq=False)
class ChildrenSerialization(ComparableValue):
    """Outer markup of the direct child elements, concatenated in DOM order."""
    markup: str

    tag: ClassVar[str] = "children"

    def payload(self) -> Any:
        return self.markup

    def to_wire(self) -> Any:
        return {"children": self.markup}


@dataclass(frozen=True, eq=False)
class CustomValue(ComparableValue):
    """Opaque mapping produced by a custom strategy (empty without one)."""
    data: Mapping[str, Any] = field(default_factory=dict)

    tag: ClassVar[str] = "custom"

    def payload(self) -> Any:
        return dict(self.data)

    def to_wire(self) -> Any:
        return {"custom": dict(self.data)}


@dataclass(frozen=True, eq=False)
class EmptyValue(ComparableValue):
    """The selector matched no element."""

    tag: ClassVar[str] = "empty"

    def payload(self) -> Any:
        return None

    def to_wire(self) -> Any:
        return {}


EMPTY = EmptyValue()


def _require_mapping(kind: str, raw: Any) -> dict:
    if not isinstance(raw, dict):
        raise DescriptorError(f"{kind} value must be an object, got {type(raw).__name__}")
    return raw


def _unwrap(kind: str, raw: Any, key: str) -> Any:
    body = _require_mapping(kind, raw)
    if set(body) != {key}:
        raise DescriptorError(f"{kind} value must be {{\"{key}\": ...}}, got keys {sorted(body)}")
    return body[key]


def value_from_wire(kind: Union[ComparisonKind, str], raw: Any) -> ComparableValue:
    """
    Decode a stored snapshot value for the given comparison kind.

    Wire shapes:
        text       "..." or null
        attribute  {"name": "..." | null, ...}
        style      {"style": {"property": "value", ...}}
        children   {"children": "..."}
        custom     {"custom": {...}}
        no element {}

    Raises:
        DescriptorError: if the shape does not fit the kind
    """
    if isinstance(raw, ComparableValue):
        return raw

    if raw == {}:
        return EMPTY

    parsed = ComparisonKind.parse(kind)

    if parsed == ComparisonKind.TEXT:
        if raw is not None and not isinstance(raw, str):
            raise DescriptorError(f"text value must be a string or null, got {type(raw).__name__}")
        return TextValue(raw)

    if parsed == ComparisonKind.ATTRIBUTE:
        body = _require_mapping("attribute", raw)
        for name, value in body.items():
            if value is not None and not isinstance(value, str):
                raise DescriptorError(f"attribute {name!r} must be a string or null")
        return AttributeMap(dict(body))

    if parsed == ComparisonKind.STYLE:
        properties = _unwrap("style", raw, "style")
        if not isinstance(properties, dict):
            raise DescriptorError("style properties must be an object")
        return StyleMap({str(name): str(value) for name, value in properties.items()})

    if parsed == ComparisonKind.CHILDREN:
        markup = _unwrap("children", raw, "children")
        if not isinstance(markup, str):
            raise DescriptorError("children markup must be a string")
        return ChildrenSerialization(markup)

    # custom, and the placeholder shape of unknown kinds
    data = _unwrap(str(kind), raw, "custom")
    if not isinstance(data, dict):
        raise DescriptorError("custom value must be an object")
    return CustomValue(dict(data))
