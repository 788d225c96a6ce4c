"""
Batch Evaluator for webcompare.
Runs extraction and comparison for every descriptor of one page.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from webcompare.browser.page import PageContext
from webcompare.comparison.comparator import Comparator
from webcompare.comparison.descriptor import ComparisonDescriptor, MismatchReport
from webcompare.comparison.extractor import ValueExtractor
from webcompare.config.settings import EngineSettings, settings
from webcompare.exceptions import WebCompareError
from webcompare.utils.logger import compare_logger as logger


@dataclass
class DescriptorFailure:
    """A descriptor whose evaluation failed while failures were isolated."""
    monitor_id: int
    selector: str
    error_type: str
    message: str

    @classmethod
    def from_exception(cls, descriptor: ComparisonDescriptor, error: Exception) -> "DescriptorFailure":
        return cls(
            monitor_id=descriptor.monitor_id,
            selector=descriptor.selector,
            error_type=type(error).__name__,
            message=str(error),
        )

    def to_dict(self) -> dict:
        return {
            "MonitorID": self.monitor_id,
            "Selector": self.selector,
            "ErrorType": self.error_type,
            "Message": self.message,
        }


@dataclass
class EvaluationRun:
    """Outcome of evaluating one page."""
    url: str
    evaluated: int
    mismatches: list[MismatchReport] = field(default_factory=list)
    failures: list[DescriptorFailure] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def changed(self) -> bool:
        return bool(self.mismatches)

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "evaluated": self.evaluated,
            "mismatches": [report.to_wire() for report in self.mismatches],
            "failures": [failure.to_dict() for failure in self.failures],
            "duration_ms": self.duration_ms,
        }


class BatchEvaluator:
    """
    Fans descriptor evaluations out over one shared, read-only page.

    The run only finishes once every evaluation has settled. By default the
    first failure (in descriptor order) then fails the whole run and no
    partial report is returned. With isolate_failures, failing descriptors are
    recorded as DescriptorFailures and the remaining mismatches are kept.
    """

    def __init__(
        self,
        extractor: ValueExtractor = None,
        comparator: Comparator = None,
        max_concurrency: int = None,
        isolate_failures: bool = None,
        engine_settings: EngineSettings = None,
    ):
        config = engine_settings or settings.engine

        self.extractor = extractor or ValueExtractor(strict_kinds=config.strict_kinds)
        self.comparator = comparator or Comparator()
        self.max_concurrency = max_concurrency or config.max_concurrency
        self.isolate_failures = (
            isolate_failures if isolate_failures is not None else config.isolate_failures
        )

    async def evaluate(
        self,
        page: PageContext,
        descriptors: Sequence[ComparisonDescriptor]
    ) -> list[MismatchReport]:
        """Mismatch reports for the descriptors that changed; empty if none did."""
        run = await self.run(page, descriptors)
        return run.mismatches

    async def run(
        self,
        page: PageContext,
        descriptors: Sequence[ComparisonDescriptor]
    ) -> EvaluationRun:
        """Evaluate every descriptor and collect mismatches (and isolated failures)."""
        start_time = datetime.now()

        if not self.isolate_failures:
            # Bad kinds and strategy names fail before anything touches the page
            for descriptor in descriptors:
                self.extractor.resolve_kind(descriptor)

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def evaluate_one(descriptor: ComparisonDescriptor) -> Optional[MismatchReport]:
            async with semaphore:
                actual = await self.extractor.extract(page, descriptor)

            if self.comparator.equal(descriptor.expected_value, actual):
                return None
            return MismatchReport.from_descriptor(descriptor, actual)

        outcomes = await asyncio.gather(
            *(evaluate_one(descriptor) for descriptor in descriptors),
            return_exceptions=True,
        )

        run = EvaluationRun(url=page.url, evaluated=len(descriptors))

        for descriptor, outcome in zip(descriptors, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, WebCompareError) or not self.isolate_failures:
                    raise outcome
                logger.warning(f"monitor {descriptor.monitor_id} failed: {outcome}")
                run.failures.append(DescriptorFailure.from_exception(descriptor, outcome))
            elif outcome is not None:
                run.mismatches.append(outcome)

        run.duration_ms = (datetime.now() - start_time).total_seconds() * 1000
        logger.debug(
            f"Evaluated {run.evaluated} descriptors on {page.url}: "
            f"{len(run.mismatches)} changed, {len(run.failures)} failed"
        )
        return run
