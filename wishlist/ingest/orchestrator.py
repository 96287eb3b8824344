"""Extraction entry point: validate, classify, gate, then run the browser pipeline
under one wall-clock budget."""

import asyncio
import logging
import time
from typing import Callable, Iterable, Optional, Tuple

from playwright.async_api import Error as PlaywrightError

from wishlist.config import settings
from wishlist.ingest.base import ProductInfo
from wishlist.ingest.browser import BrowserConfig, BrowserSession
from wishlist.ingest.document import StaticDocument
from wishlist.ingest.domains import GENERIC, classify_domain, is_blocked_host, validate_url
from wishlist.ingest.errors import (
    BrowserCrash,
    ExtractionError,
    ExtractionTimeout,
    UnsupportedDomain,
)
from wishlist.ingest.pipeline import build_pipeline
from wishlist.ingest.retailers import get_profile
from wishlist.logging_config import LoggerAdapter, get_logger
from wishlist.metrics import record_extraction_error, record_extraction_success

logger = logging.getLogger(__name__)

SessionFactory = Callable[[BrowserConfig], BrowserSession]


class ProductExtractor:
    """
    Extracts title, raw price and image from a product page URL.

    Each call launches its own browser session; nothing is shared between
    concurrent calls. Invalid and unsupported URLs are rejected before any
    browser is launched.
    """

    def __init__(
        self,
        browser_config: Optional[BrowserConfig] = None,
        session_factory: SessionFactory = BrowserSession,
        timeout_seconds: Optional[float] = None,
        allow_generic_domains: Optional[bool] = None,
        blocked_domains: Optional[Iterable[str]] = None,
    ):
        """
        Initialize the extractor.

        Args:
            browser_config: Launch configuration (defaults from settings)
            session_factory: Callable building a session from a config
            timeout_seconds: Wall-clock budget for one extraction
            allow_generic_domains: Whether unrecognized hosts use generic extraction
            blocked_domains: Hosts rejected outright (subdomains included)
        """
        self.browser_config = browser_config or BrowserConfig.from_settings(settings)
        self.session_factory = session_factory
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None
            else settings.extraction_timeout_seconds
        )
        self.allow_generic_domains = (
            allow_generic_domains if allow_generic_domains is not None
            else settings.allow_generic_domains
        )
        self.blocked_domains = list(
            blocked_domains if blocked_domains is not None else settings.blocked_domains
        )

    def check_url(self, url: Optional[str]) -> Tuple[str, str]:
        """
        Validate and classify a URL without touching the network.

        Returns:
            Tuple of (host, retailer)

        Raises:
            InvalidInput: If the URL is malformed
            UnsupportedDomain: If the host is blocked, or generic hosts are disabled
        """
        host = validate_url(url)
        retailer = classify_domain(url)

        if is_blocked_host(host, self.blocked_domains):
            logger.warning(f"Rejected blocked domain: {host}")
            raise UnsupportedDomain(url, host)

        if retailer == GENERIC and not self.allow_generic_domains:
            logger.warning(f"Rejected unsupported domain: {host}")
            raise UnsupportedDomain(url, host)

        return host, retailer

    async def extract(self, url: Optional[str]) -> ProductInfo:
        """
        Extract product info from a live page.

        Args:
            url: Absolute http(s) product URL

        Returns:
            ProductInfo; fields the page did not yield are None

        Raises:
            InvalidInput, UnsupportedDomain: Before any browser launch
            NavigationFailure: If the page could not be loaded
            ExtractionTimeout: If the wall-clock budget ran out
            BrowserCrash, PageCrash: If the browser or page died
        """
        host, retailer = self.check_url(url)
        url = url.strip()
        log = get_logger(__name__, retailer=retailer, url=url)

        log.info(f"Extracting product info from {url} (retailer: {retailer})")
        start_time = time.monotonic()

        try:
            info = await asyncio.wait_for(
                self._extract_in_session(url, host, retailer, log),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            record_extraction_error(retailer, "ExtractionTimeout", time.monotonic() - start_time)
            log.warning(f"Extraction of {url} timed out after {self.timeout_seconds:g}s")
            raise ExtractionTimeout(url, self.timeout_seconds) from e
        except ExtractionError as e:
            record_extraction_error(retailer, type(e).__name__, time.monotonic() - start_time)
            log.warning(f"Extraction of {url} failed: {type(e).__name__}: {e}")
            raise
        except PlaywrightError as e:
            record_extraction_error(retailer, "BrowserCrash", time.monotonic() - start_time)
            log.error(f"Browser error while extracting {url}: {e}")
            raise BrowserCrash(url, str(e)) from e

        duration = time.monotonic() - start_time
        record_extraction_success(retailer, duration)
        log.info(
            f"Extracted {url} in {duration:.2f}s: title={info.title!r}, "
            f"price={info.price!r}, image={'yes' if info.image else 'no'}"
        )
        return info

    async def _extract_in_session(
        self,
        url: str,
        host: str,
        retailer: str,
        log: LoggerAdapter,
    ) -> ProductInfo:
        profile = get_profile(retailer)

        async with self.session_factory(self.browser_config) as session:
            await session.navigate(url)
            await session.wait_until_ready(profile.ready_selector if profile else None)
            await session.nudge_lazy_content()

            pipeline = build_pipeline(retailer)
            log.debug(f"Running stages: {', '.join(pipeline.stage_names)}")
            info = await pipeline.run(session.document(), host)

            session.raise_if_crashed()
            return info

    async def extract_html(self, html: str, url: str) -> ProductInfo:
        """
        Extract product info from an HTML snapshot, without a browser.

        Args:
            html: Page source
            url: URL the snapshot was taken from (used for classification
                and for resolving relative image URLs)

        Returns:
            ProductInfo
        """
        host, retailer = self.check_url(url)
        document = StaticDocument(html, url.strip())
        return await build_pipeline(retailer).run(document, host)


# Global extractor instance
product_extractor = ProductExtractor()


async def extract_product_info(url: str) -> ProductInfo:
    """Extract product info using the default extractor."""
    return await product_extractor.extract(url)
