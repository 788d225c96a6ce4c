"""
Page-level entry points: open a page, evaluate descriptors, close the page.
"""

import asyncio
from typing import Optional, Sequence, Union

from webcompare.browser.page import PageRenderer
from webcompare.comparison.descriptor import (
    ComparisonDescriptor,
    MismatchReport,
    parse_descriptors,
)
from webcompare.comparison.evaluator import BatchEvaluator, EvaluationRun
from webcompare.comparison.extractor import ValueExtractor
from webcompare.config.settings import settings
from webcompare.exceptions import RunTimeoutError
from webcompare.utils.logger import compare_logger as logger


DescriptorInput = Union[ComparisonDescriptor, dict]


def _default_renderer() -> PageRenderer:
    from webcompare.browser.controller import PlaywrightRenderer
    return PlaywrightRenderer()


async def _time_boxed(coro, url: str, timeout_ms: Optional[int]):
    if timeout_ms is None:
        return await coro
    try:
        return await asyncio.wait_for(coro, timeout=timeout_ms / 1000)
    except asyncio.TimeoutError as e:
        raise RunTimeoutError(url, timeout_ms) from e


async def run_comparison(
    url: str,
    descriptors: Sequence[DescriptorInput],
    renderer: PageRenderer = None,
    evaluator: BatchEvaluator = None,
    timeout_ms: Optional[int] = None,
) -> EvaluationRun:
    """
    Load url and evaluate every descriptor against it.

    The page is closed only after every evaluation has settled, including on
    failure paths. timeout_ms bounds the whole run, page load included.

    Raises:
        DescriptorError: if a descriptor is malformed
        PageLoadError: if the page cannot be loaded
        ExtractionError: if an evaluation fails and failures are not isolated
        RunTimeoutError: if the run exceeds timeout_ms
    """
    parsed = parse_descriptors(list(descriptors))
    renderer = renderer or _default_renderer()
    evaluator = evaluator or BatchEvaluator()
    timeout_ms = timeout_ms if timeout_ms is not None else settings.engine.run_timeout_ms

    async def _run() -> EvaluationRun:
        async with renderer.session(url) as page:
            return await evaluator.run(page, parsed)

    run = await _time_boxed(_run(), url, timeout_ms)

    for report in run.mismatches:
        logger.info(f"monitor {report.monitor_id} changed ({report.selector})")
    return run


async def compare_web_content(
    url: str,
    descriptors: Sequence[DescriptorInput],
    renderer: PageRenderer = None,
    evaluator: BatchEvaluator = None,
    timeout_ms: Optional[int] = None,
) -> list[MismatchReport]:
    """
    Compare a page against stored snapshot values.

    Returns one MismatchReport per descriptor whose current value differs from
    its expected value; an empty list when nothing changed.
    """
    run = await run_comparison(url, descriptors, renderer, evaluator, timeout_ms)
    return run.mismatches


async def capture_snapshot(
    url: str,
    descriptors: Sequence[DescriptorInput],
    renderer: PageRenderer = None,
    extractor: ValueExtractor = None,
    timeout_ms: Optional[int] = None,
) -> list[ComparisonDescriptor]:
    """
    Extract the current value of every descriptor.

    Returns the descriptors, in input order, with expected_value replaced by
    what the page shows now. Storing them is up to the caller.
    """
    parsed = parse_descriptors(list(descriptors))
    renderer = renderer or _default_renderer()
    extractor = extractor or ValueExtractor(strict_kinds=settings.engine.strict_kinds)
    timeout_ms = timeout_ms if timeout_ms is not None else settings.engine.run_timeout_ms

    for descriptor in parsed:
        extractor.resolve_kind(descriptor)

    async def _capture() -> list[ComparisonDescriptor]:
        async with renderer.session(url) as page:
            values = await asyncio.gather(
                *(extractor.extract(page, descriptor) for descriptor in parsed),
                return_exceptions=True,
            )

        for value in values:
            if isinstance(value, BaseException):
                raise value
        return [descriptor.with_expected(value) for descriptor, value in zip(parsed, values)]

    snapshot = await _time_boxed(_capture(), url, timeout_ms)
    logger.info(f"Captured {len(snapshot)} values from {url}")
    return snapshot
