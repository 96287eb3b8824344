"""Error kinds raised by the extraction pipeline.

Selector misses inside extractors are not errors; only the conditions below
propagate to callers.
"""

from typing import Optional


class ExtractionError(RuntimeError):
    """Base class for extraction failures surfaced to callers."""

    def __init__(self, url: Optional[str], reason: str):
        self.url = url
        self.reason = reason
        super().__init__(reason)


class InvalidInput(ExtractionError):
    """URL is missing or not an absolute http(s) URL."""

    def __init__(self, url: Optional[str], reason: str = "Invalid URL format"):
        super().__init__(url, reason)


class UnsupportedDomain(ExtractionError):
    """Host is explicitly unsupported; no browser is launched for it."""

    def __init__(self, url: str, host: str):
        self.host = host
        super().__init__(url, f"Domain {host} is not supported")


class NavigationFailure(ExtractionError):
    """Page failed to load under both wait conditions."""

    def __init__(self, url: str, reason: str):
        super().__init__(url, f"Failed to load {url}: {reason}")


class ExtractionTimeout(ExtractionError):
    """Wall-clock budget for one extraction was exceeded."""

    def __init__(self, url: str, timeout: float):
        self.timeout = timeout
        super().__init__(url, f"Product extraction timed out after {timeout:g} seconds")


class BrowserCrash(ExtractionError):
    """Browser process disconnected, failed to launch, or the driver errored."""

    def __init__(self, url: Optional[str], reason: str):
        super().__init__(url, f"Browser failure: {reason}")


class PageCrash(ExtractionError):
    """Page renderer crashed while the extraction was running."""

    def __init__(self, url: Optional[str]):
        super().__init__(url, f"Page crashed while loading {url}")
