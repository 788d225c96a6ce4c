"""Element-value extraction and comparison engine."""

from .values import (
    ComparisonKind,
    ComparableValue,
    TextValue,
    AttributeMap,
    StyleMap,
    ChildrenSerialization,
    CustomValue,
    EmptyValue,
    EMPTY,
    value_from_wire,
)
from .descriptor import ComparisonDescriptor, MismatchReport, parse_descriptors
from .comparator import Comparator
from .extractor import ValueExtractor, StrategyRegistry, CustomStrategy
from .evaluator import BatchEvaluator, EvaluationRun, DescriptorFailure

__all__ = [
    # Values
    "ComparisonKind",
    "ComparableValue",
    "TextValue",
    "AttributeMap",
    "StyleMap",
    "ChildrenSerialization",
    "CustomValue",
    "EmptyValue",
    "EMPTY",
    "value_from_wire",
    # Descriptors
    "ComparisonDescriptor",
    "MismatchReport",
    "parse_descriptors",
    # Engine
    "Comparator",
    "ValueExtractor",
    "StrategyRegistry",
    "CustomStrategy",
    "BatchEvaluator",
    "EvaluationRun",
    "DescriptorFailure",
]
