"""
Value Extractor for webcompare.
Resolves a descriptor's selector and derives the comparable value its kind asks for.
"""

import inspect
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from webcompare.browser.page import ElementRef, PageContext
from webcompare.comparison.descriptor import ComparisonDescriptor
from webcompare.comparison.values import (
    EMPTY,
    AttributeMap,
    ChildrenSerialization,
    ComparableValue,
    ComparisonKind,
    CustomValue,
    StyleMap,
    TextValue,
)
from webcompare.exceptions import (
    ExtractionError,
    UnknownStrategyError,
    UnsupportedComparisonKind,
)
from webcompare.utils.logger import compare_logger as logger


CustomStrategy = Callable[
    [ElementRef, ComparisonDescriptor],
    Union[Mapping[str, Any], Awaitable[Mapping[str, Any]]],
]


class StrategyRegistry:
    """
    Named extraction strategies for the custom comparison kind.

    A strategy receives the matched element and the descriptor and returns a
    JSON-compatible mapping (directly or as an awaitable). The mapping becomes
    the CustomValue that is compared against the snapshot.
    """

    def __init__(self):
        self._strategies: dict[str, CustomStrategy] = {}

    def register(self, name: str, strategy: CustomStrategy):
        if name in self._strategies:
            logger.warning(f"Replacing custom strategy {name!r}")
        self._strategies[name] = strategy

    def strategy(self, name: str):
        """Decorator form of register()."""
        def decorator(func: CustomStrategy) -> CustomStrategy:
            self.register(name, func)
            return func
        return decorator

    def get(self, name: str) -> CustomStrategy:
        try:
            return self._strategies[name]
        except KeyError:
            raise UnknownStrategyError(name) from None

    def __contains__(self, name: str) -> bool:
        return name in self._strategies

    def names(self) -> list[str]:
        return sorted(self._strategies)


class ValueExtractor:
    """
    Derives ComparableValues from a live page.

    Extraction only reads from the page, so one extractor can serve any number
    of concurrent evaluations against the same PageContext.
    """

    def __init__(self, strategies: StrategyRegistry = None, strict_kinds: bool = True):
        self.strategies = strategies or StrategyRegistry()
        self.strict_kinds = strict_kinds

    def resolve_kind(self, descriptor: ComparisonDescriptor) -> Optional[ComparisonKind]:
        """
        Kind to dispatch on; None means "unknown, use the placeholder".

        Raises:
            UnsupportedComparisonKind: for unknown kinds when strict_kinds is set
            UnknownStrategyError: for custom descriptors naming an unregistered strategy
        """
        kind = ComparisonKind.parse(descriptor.kind)
        if kind is None:
            if self.strict_kinds:
                raise UnsupportedComparisonKind(descriptor.kind_name, descriptor.monitor_id)
            logger.warning(
                f"monitor {descriptor.monitor_id}: unknown kind {descriptor.kind_name!r}, using empty placeholder"
            )
            return None

        if kind == ComparisonKind.CUSTOM and descriptor.strategy:
            self.strategies.get(descriptor.strategy)

        return kind

    async def extract(self, page: PageContext, descriptor: ComparisonDescriptor) -> ComparableValue:
        """
        Extract the current value for a descriptor.

        Returns EmptyValue when the selector matches nothing.

        Raises:
            ExtractionError: if the in-page evaluation fails
        """
        kind = self.resolve_kind(descriptor)

        try:
            element = await page.query(descriptor.selector)
            if element is None:
                logger.debug(f"monitor {descriptor.monitor_id}: no element for {descriptor.selector!r}")
                return EMPTY

            try:
                return await self._extract_from(element, kind, descriptor)
            finally:
                await element.dispose()

        except ExtractionError as e:
            if e.monitor_id is not None:
                raise
            raise ExtractionError(str(e), descriptor.monitor_id, descriptor.selector) from e

    async def _extract_from(
        self,
        element: ElementRef,
        kind: Optional[ComparisonKind],
        descriptor: ComparisonDescriptor
    ) -> ComparableValue:
        if kind == ComparisonKind.TEXT:
            # Empty text is reported as "no text", as textContent || null does
            text = await element.text_content()
            return TextValue(text or None)

        if kind == ComparisonKind.ATTRIBUTE:
            values = await element.attributes(descriptor.attribute_names)
            return AttributeMap({name: values.get(name) for name in descriptor.attribute_names})

        if kind == ComparisonKind.STYLE:
            return StyleMap(await element.computed_style())

        if kind == ComparisonKind.CHILDREN:
            return ChildrenSerialization("".join(await element.children_markup()))

        if kind == ComparisonKind.CUSTOM and descriptor.strategy:
            return await self._run_strategy(element, descriptor)

        # custom without a strategy, or a tolerated unknown kind
        return CustomValue({})

    async def _run_strategy(self, element: ElementRef, descriptor: ComparisonDescriptor) -> CustomValue:
        strategy = self.strategies.get(descriptor.strategy)
        try:
            result = strategy(element, descriptor)
            if inspect.isawaitable(result):
                result = await result
        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"Strategy {descriptor.strategy!r} failed: {e}",
                descriptor.monitor_id,
                descriptor.selector,
            ) from e

        if not isinstance(result, Mapping):
            raise ExtractionError(
                f"Strategy {descriptor.strategy!r} returned {type(result).__name__}, expected a mapping",
                descriptor.monitor_id,
                descriptor.selector,
            )
        return CustomValue(dict(result))
