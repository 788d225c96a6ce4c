"""
Exceptions raised by webcompare.

Exception Hierarchy:
    WebCompareError (base)
    ├── DescriptorError
    ├── PageLoadError
    │   └── NavigationTimeoutError
    ├── ExtractionError
    ├── UnsupportedComparisonKind
    ├── UnknownStrategyError
    └── RunTimeoutError

A selector that matches nothing is not an error: it yields an EmptyValue.
"""

from typing import Optional


class WebCompareError(Exception):
    """Base exception for all webcompare errors."""

    pass


class DescriptorError(WebCompareError):
    """A comparison descriptor is malformed (bad kind/value combination, missing attributes)."""

    pass


class PageLoadError(WebCompareError):
    """
    The page could not be opened or navigated.

    Fatal to the whole run: no partial mismatch list is produced.
    """

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to load {url}: {reason}")


class NavigationTimeoutError(PageLoadError):
    """The page never reached the configured load state in time."""

    def __init__(self, url: str, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(url, f"navigation timed out after {timeout_ms}ms")


class ExtractionError(WebCompareError):
    """Evaluating a descriptor inside the page failed (e.g. malformed selector)."""

    def __init__(self, message: str, monitor_id: Optional[int] = None, selector: Optional[str] = None):
        self.monitor_id = monitor_id
        self.selector = selector
        prefix = f"[monitor {monitor_id}] " if monitor_id is not None else ""
        super().__init__(f"{prefix}{message}")


class UnsupportedComparisonKind(WebCompareError):
    """The descriptor names a comparison kind the engine does not know."""

    def __init__(self, kind: str, monitor_id: Optional[int] = None):
        self.kind = kind
        self.monitor_id = monitor_id
        super().__init__(f"Unsupported comparison kind: {kind!r}")


class UnknownStrategyError(WebCompareError):
    """A custom descriptor names a strategy that was never registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No custom strategy registered under {name!r}")


class RunTimeoutError(WebCompareError):
    """The caller's time box for the whole run expired."""

    def __init__(self, url: str, timeout_ms: int):
        self.url = url
        self.timeout_ms = timeout_ms
        super().__init__(f"Comparison run for {url} exceeded {timeout_ms}ms")
