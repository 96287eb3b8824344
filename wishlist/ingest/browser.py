"""Headless browser session: one Chromium process and one page per extraction.

The session is an async context manager. Whatever happens inside the
``async with`` block (normal return, exception, outer timeout, crash), the
page, context, browser and Playwright driver are closed on the way out within
one shared ``close_timeout_seconds`` budget. A cancelled session skips
straight to closing the browser.
"""

import asyncio
import logging
import os
from dataclasses import dataclass, field
from typing import Awaitable, List, Optional, Sequence

from playwright.async_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    Route,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from wishlist.config import Settings
from wishlist.ingest.document import PlaywrightDocument
from wishlist.ingest.errors import BrowserCrash, NavigationFailure, PageCrash
from wishlist.metrics import browser_close_errors_total, browser_sessions_open

logger = logging.getLogger(__name__)

# Container-friendly launch flags
DEFAULT_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--single-process",
    "--no-zygote",
    "--no-first-run",
    "--disable-blink-features=AutomationControlled",
    "--disable-extensions",
    "--disable-background-timer-throttling",
    "--disable-backgrounding-occluded-windows",
    "--disable-renderer-backgrounding",
]

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

# Common system Chrome/Chromium locations, probed in order
CANDIDATE_EXECUTABLE_PATHS = [
    "/usr/bin/google-chrome-stable",
    "/usr/bin/google-chrome",
    "/usr/bin/chromium-browser",
    "/usr/bin/chromium",
    "/snap/bin/chromium",
]

HIDE_WEBDRIVER_JS = """
Object.defineProperty(navigator, 'webdriver', {
    get: () => undefined
});
"""

_READY_STATE_JS = "() => document.readyState === 'complete'"

_SCROLL_HALF_JS = "() => window.scrollTo(0, document.body ? document.body.scrollHeight / 2 : 0)"
_SCROLL_BOTTOM_JS = "() => window.scrollTo(0, document.body ? document.body.scrollHeight : 0)"

# Minimum time the browser and driver shutdowns get once the close budget is spent
FINAL_CLOSE_FLOOR_SECONDS = 1.0


def discover_executable_path(
    candidates: Sequence[str] = CANDIDATE_EXECUTABLE_PATHS,
) -> Optional[str]:
    """
    Find a system Chrome/Chromium binary.

    Args:
        candidates: Paths to probe, in priority order

    Returns:
        First existing executable path, or None to use Playwright's bundled Chromium
    """
    for path in candidates:
        if os.path.isfile(path) and os.access(path, os.X_OK):
            logger.info(f"Using system browser executable: {path}")
            return path
    return None


@dataclass
class BrowserConfig:
    """Launch and timing configuration for a browser session."""

    headless: bool = True
    executable_path: Optional[str] = None
    launch_args: List[str] = field(default_factory=lambda: list(DEFAULT_LAUNCH_ARGS))
    user_agent: str = DEFAULT_USER_AGENT
    viewport_width: int = 1280
    viewport_height: int = 800
    default_timeout_ms: int = 30000
    navigation_timeout_ms: int = 10000
    ready_timeout_ms: int = 5000
    close_timeout_seconds: float = 5.0
    scroll_pause_ms: int = 500
    blocked_resource_types: List[str] = field(
        default_factory=lambda: ["image", "font", "media"]
    )

    @classmethod
    def from_settings(cls, settings: Settings) -> "BrowserConfig":
        """Build a config from application settings."""
        executable_path = settings.browser_executable_path or None
        if not executable_path and settings.browser_discover_executable:
            executable_path = discover_executable_path()

        return cls(
            headless=settings.browser_headless,
            executable_path=executable_path,
            user_agent=settings.browser_user_agent,
            viewport_width=settings.browser_viewport_width,
            viewport_height=settings.browser_viewport_height,
            default_timeout_ms=settings.browser_default_timeout_ms,
            navigation_timeout_ms=settings.browser_navigation_timeout_ms,
            ready_timeout_ms=settings.browser_ready_timeout_ms,
            close_timeout_seconds=settings.browser_close_timeout_seconds,
            scroll_pause_ms=settings.browser_scroll_pause_ms,
            blocked_resource_types=list(settings.browser_blocked_resource_types),
        )


class BrowserSession:
    """
    One headless Chromium process with a single page.

    Usage:
        async with BrowserSession(config) as session:
            await session.navigate(url)
            await session.wait_until_ready("h1")
            document = session.document()
    """

    def __init__(self, config: Optional[BrowserConfig] = None):
        self.config = config or BrowserConfig()
        self.url: Optional[str] = None

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

        self._page_crashed = False
        self._browser_disconnected = False
        self._closing = False
        self._closed = False
        self._counted = False

    async def __aenter__(self) -> "BrowserSession":
        try:
            await self.start()
        except PlaywrightError as e:
            await self.close()
            raise BrowserCrash(self.url, f"launch failed: {e}") from e
        except asyncio.CancelledError:
            await self.close(abort=True)
            raise
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        cancelled = exc_type is not None and issubclass(exc_type, asyncio.CancelledError)
        await self.close(abort=cancelled)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def page(self) -> Page:
        if self._page is None:
            raise BrowserCrash(self.url, "session has no open page")
        return self._page

    async def start(self) -> None:
        """Launch the browser and open the extraction page."""
        config = self.config

        self._playwright = await async_playwright().start()

        launch_options = {
            "headless": config.headless,
            "args": list(config.launch_args),
        }
        if config.executable_path:
            launch_options["executable_path"] = config.executable_path

        self._browser = await self._playwright.chromium.launch(**launch_options)
        browser_sessions_open.inc()
        self._counted = True
        self._browser.on("disconnected", self._on_disconnected)

        self._context = await self._browser.new_context(
            viewport={"width": config.viewport_width, "height": config.viewport_height},
            user_agent=config.user_agent,
        )
        self._context.set_default_timeout(config.default_timeout_ms)
        self._context.set_default_navigation_timeout(config.navigation_timeout_ms)

        if config.blocked_resource_types:
            await self._context.route("**/*", self._route_request)

        await self._context.add_init_script(HIDE_WEBDRIVER_JS)

        self._page = await self._context.new_page()
        self._page.on("crash", self._on_crash)

        logger.debug(
            f"Browser session started (headless={config.headless}, "
            f"executable={config.executable_path or 'bundled'})"
        )

    async def _route_request(self, route: Route) -> None:
        try:
            if route.request.resource_type in self.config.blocked_resource_types:
                await route.abort()
            else:
                await route.continue_()
        except PlaywrightError as e:
            # Requests still in flight when the page closes
            logger.debug(f"Route handling failed for {route.request.url}: {e}")

    def _on_crash(self, page: Page) -> None:
        self._page_crashed = True
        logger.error(f"Page crashed: {self.url}")

    def _on_disconnected(self, browser: Browser) -> None:
        if self._closing:
            return
        self._browser_disconnected = True
        logger.error(f"Browser disconnected unexpectedly while loading {self.url}")

    def raise_if_crashed(self) -> None:
        """
        Raise if a crash event has been recorded.

        Raises:
            PageCrash: If the page renderer crashed
            BrowserCrash: If the browser disconnected
        """
        if self._page_crashed:
            raise PageCrash(self.url)
        if self._browser_disconnected:
            raise BrowserCrash(self.url, "browser disconnected")

    async def navigate(self, url: str) -> None:
        """
        Load a URL, retrying once with the more permissive "commit" condition.

        Raises:
            NavigationFailure: If both attempts fail
            PageCrash, BrowserCrash: If the target crashed
        """
        self.url = url
        self.raise_if_crashed()

        try:
            await self.page.goto(url, wait_until="domcontentloaded")
            return
        except PlaywrightError as e:
            self.raise_if_crashed()
            logger.warning(f"Navigation to {url} failed on domcontentloaded, retrying on commit: {e}")

        try:
            await self.page.goto(url, wait_until="commit")
        except PlaywrightError as e:
            self.raise_if_crashed()
            raise NavigationFailure(url, str(e)) from e

    async def wait_until_ready(self, selector: Optional[str] = None) -> None:
        """
        Wait for the page to settle, bounded by the ready timeout.

        Args:
            selector: Heading-like element to wait for; if None, wait for
                document.readyState to be "complete"
        """
        timeout = self.config.ready_timeout_ms
        try:
            if selector:
                await self.page.wait_for_selector(selector, state="attached", timeout=timeout)
            else:
                await self.page.wait_for_function(_READY_STATE_JS, timeout=timeout)
        except PlaywrightTimeoutError:
            logger.info(
                f"Page not ready after {timeout}ms ({selector or 'readyState'}), extracting anyway"
            )
        except PlaywrightError as e:
            self.raise_if_crashed()
            logger.debug(f"Ready wait failed on {self.url}: {e}")

    async def nudge_lazy_content(self) -> None:
        """Scroll to the middle and the bottom so lazy-loaded content renders."""
        pause = self.config.scroll_pause_ms / 1000
        for script in (_SCROLL_HALF_JS, _SCROLL_BOTTOM_JS):
            try:
                await self.page.evaluate(script)
            except PlaywrightError as e:
                self.raise_if_crashed()
                logger.debug(f"Scroll failed on {self.url}: {e}")
                return
            await asyncio.sleep(pause)

    def document(self) -> PlaywrightDocument:
        return PlaywrightDocument(self.page)

    async def _close_quietly(self, resource: str, closing: Awaitable, timeout: float) -> None:
        try:
            await asyncio.wait_for(closing, timeout=timeout)
        except asyncio.TimeoutError:
            browser_close_errors_total.labels(resource=resource).inc()
            logger.warning(f"Closing {resource} timed out after {timeout:g}s")
        except Exception as e:
            browser_close_errors_total.labels(resource=resource).inc()
            logger.error(f"Error closing {resource}: {e}")

    async def close(self, abort: bool = False) -> None:
        """
        Close page, context, browser and driver. Safe to call more than once.

        All steps share one ``close_timeout_seconds`` budget. Page and context
        closes are skipped once it is spent; the browser and the driver always
        get at least ``FINAL_CLOSE_FLOOR_SECONDS``.

        Args:
            abort: Skip the page and context and shut the browser down directly
                (used when the extraction was cancelled)
        """
        if self._closed:
            return
        self._closed = True
        self._closing = True

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.config.close_timeout_seconds

        page, self._page = self._page, None
        context, self._context = self._context, None
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None

        for resource, target in (("page", page), ("context", context)):
            if target is None:
                continue
            remaining = deadline - loop.time()
            if abort or remaining <= 0:
                logger.debug(f"Skipping {resource} close, closing the browser directly")
                continue
            await self._close_quietly(resource, target.close(), remaining)

        if browser is not None:
            remaining = max(deadline - loop.time(), FINAL_CLOSE_FLOOR_SECONDS)
            await self._close_quietly("browser", browser.close(), remaining)

        if playwright is not None:
            remaining = max(deadline - loop.time(), FINAL_CLOSE_FLOOR_SECONDS)
            await self._close_quietly("playwright", playwright.stop(), remaining)

        if self._counted:
            browser_sessions_open.dec()
            self._counted = False

        logger.debug(f"Browser session closed ({self.url})")
