"""
webcompare: detect changes in rendered web content.

Re-extracts DOM-derived values for a page and reports the watch descriptors
whose value no longer matches the stored snapshot.
"""

from .comparison import (
    AttributeMap,
    BatchEvaluator,
    ChildrenSerialization,
    Comparator,
    ComparableValue,
    ComparisonDescriptor,
    ComparisonKind,
    CustomValue,
    EmptyValue,
    MismatchReport,
    StrategyRegistry,
    StyleMap,
    TextValue,
    ValueExtractor,
)
from .service import capture_snapshot, compare_web_content, run_comparison

__version__ = "0.1.0"

__all__ = [
    "AttributeMap",
    "BatchEvaluator",
    "ChildrenSerialization",
    "Comparator",
    "ComparableValue",
    "ComparisonDescriptor",
    "ComparisonKind",
    "CustomValue",
    "EmptyValue",
    "MismatchReport",
    "StrategyRegistry",
    "StyleMap",
    "TextValue",
    "ValueExtractor",
    "capture_snapshot",
    "compare_web_content",
    "run_comparison",
]
