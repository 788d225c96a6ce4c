"""
Comparison descriptors and mismatch reports.
Pydantic models whose aliases match the JSON shape monitors are stored in.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from webcompare.comparison.values import (
    EMPTY,
    ComparableValue,
    ComparisonKind,
    value_from_wire,
)
from webcompare.exceptions import DescriptorError


class ComparisonDescriptor(BaseModel):
    """
    One watch declaration: which element, what to compare, what was seen last.

    Wire shape:
        {"MonitorID": 1, "Selector": "#title", "Type": "text",
         "Attributes": [], "Value": "Hello", "Strategy": null}

    A missing Value is read as "no element expected" (EmptyValue).
    """
    monitor_id: int = Field(alias="MonitorID")
    selector: str = Field(alias="Selector", min_length=1)
    kind: Union[ComparisonKind, str] = Field(alias="Type")
    attribute_names: tuple[str, ...] = Field(default=(), alias="Attributes")
    expected_value: ComparableValue = Field(default=EMPTY, alias="Value")
    strategy: Optional[str] = Field(default=None, alias="Strategy")

    class Config:
        populate_by_name = True
        frozen = True
        arbitrary_types_allowed = True

    @model_validator(mode="before")
    @classmethod
    def _decode_expected_value(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        value_key = "Value" if "Value" in data else "expected_value"
        if value_key not in data:
            return data

        kind = data.get("Type", data.get("kind"))
        if kind is None:
            return data

        decoded = dict(data)
        decoded[value_key] = value_from_wire(kind, data[value_key])
        return decoded

    @field_validator("kind", mode="after")
    @classmethod
    def _normalize_kind(cls, value: Union[ComparisonKind, str]) -> Union[ComparisonKind, str]:
        return ComparisonKind.parse(value) or value

    @model_validator(mode="after")
    def _check_attribute_names(self) -> "ComparisonDescriptor":
        if self.kind == ComparisonKind.ATTRIBUTE and not self.attribute_names:
            raise DescriptorError(
                f"monitor {self.monitor_id}: attribute comparison needs at least one attribute name"
            )
        return self

    @classmethod
    def from_wire(cls, data: dict) -> "ComparisonDescriptor":
        """Build a descriptor from its JSON shape, raising DescriptorError on bad input."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise DescriptorError(f"Invalid comparison descriptor: {e}") from e

    @property
    def kind_name(self) -> str:
        return self.kind.value if isinstance(self.kind, ComparisonKind) else str(self.kind)

    def with_expected(self, value: ComparableValue) -> "ComparisonDescriptor":
        """Copy of this descriptor with a new snapshot value."""
        return self.model_copy(update={"expected_value": value})

    def to_wire(self) -> dict:
        wire = {
            "MonitorID": self.monitor_id,
            "Selector": self.selector,
            "Type": self.kind_name,
            "Attributes": list(self.attribute_names),
            "Value": self.expected_value.to_wire(),
        }
        if self.strategy:
            wire["Strategy"] = self.strategy
        return wire


class MismatchReport(BaseModel):
    """A descriptor whose current value no longer matches its snapshot."""
    monitor_id: int
    selector: str
    kind: Union[ComparisonKind, str]
    attribute_names: tuple[str, ...] = ()
    expected_value: ComparableValue
    current_value: ComparableValue

    class Config:
        frozen = True
        arbitrary_types_allowed = True

    @field_validator("kind", mode="after")
    @classmethod
    def _normalize_kind(cls, value: Union[ComparisonKind, str]) -> Union[ComparisonKind, str]:
        return ComparisonKind.parse(value) or value

    @classmethod
    def from_descriptor(
        cls,
        descriptor: ComparisonDescriptor,
        current_value: ComparableValue
    ) -> "MismatchReport":
        return cls(
            monitor_id=descriptor.monitor_id,
            selector=descriptor.selector,
            kind=descriptor.kind,
            attribute_names=descriptor.attribute_names,
            expected_value=descriptor.expected_value,
            current_value=current_value,
        )

    def to_wire(self) -> dict:
        return {
            "MonitorID": self.monitor_id,
            "Selector": self.selector,
            "Type": self.kind.value if isinstance(self.kind, ComparisonKind) else str(self.kind),
            "Attributes": list(self.attribute_names),
            "ExpectedValue": self.expected_value.to_wire(),
            "CurrentValue": self.current_value.to_wire(),
        }


def parse_descriptors(items: list[Union[dict, ComparisonDescriptor]]) -> list[ComparisonDescriptor]:
    """Accept descriptors as models or wire dicts."""
    return [
        item if isinstance(item, ComparisonDescriptor) else ComparisonDescriptor.from_wire(item)
        for item in items
    ]
