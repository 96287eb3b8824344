"""Tests for browser configuration and session cleanup."""

import asyncio
import os
import time

import psutil
import pytest

from wishlist.config import Settings
from wishlist.ingest.browser import (
    DEFAULT_LAUNCH_ARGS,
    BrowserConfig,
    BrowserSession,
    discover_executable_path,
)
from wishlist.ingest.errors import BrowserCrash, ExtractionTimeout, PageCrash
from wishlist.ingest.orchestrator import ProductExtractor


def test_config_from_settings():
    settings = Settings(
        browser_executable_path="/opt/chrome/chrome",
        browser_navigation_timeout_ms=7000,
        browser_viewport_width=1440,
        browser_blocked_resource_types=["image"],
    )

    config = BrowserConfig.from_settings(settings)

    assert config.executable_path == "/opt/chrome/chrome"
    assert config.navigation_timeout_ms == 7000
    assert config.viewport_width == 1440
    assert config.blocked_resource_types == ["image"]
    assert "--no-sandbox" in config.launch_args


def test_default_config():
    config = BrowserConfig()

    assert config.headless
    assert config.executable_path is None
    assert (config.viewport_width, config.viewport_height) == (1280, 800)
    assert config.default_timeout_ms == 30000
    assert config.navigation_timeout_ms == 10000
    assert config.blocked_resource_types == ["image", "font", "media"]
    # Each config owns its argument list
    config.launch_args.append("--mute-audio")
    assert "--mute-audio" not in DEFAULT_LAUNCH_ARGS


def test_discover_executable_path(tmp_path):
    missing = tmp_path / "missing-chrome"
    found = tmp_path / "chromium"
    found.write_text("#!/bin/sh\n")
    found.chmod(0o755)

    assert discover_executable_path([str(missing), str(found)]) == str(found)
    assert discover_executable_path([str(missing)]) is None


class _FailingCloser:
    """Stands in for a page/context whose close fails or never returns."""

    def __init__(self, hang: bool = False):
        self.hang = hang
        self.close_calls = 0

    async def close(self):
        self.close_calls += 1
        if self.hang:
            await asyncio.sleep(60)
        raise RuntimeError("Target closed")


@pytest.mark.asyncio
async def test_close_swallows_errors_and_is_idempotent():
    """Test that failing or hanging closes are bounded and do not raise."""
    session = BrowserSession(BrowserConfig(close_timeout_seconds=0.1))
    page = _FailingCloser()
    context = _FailingCloser(hang=True)
    session._page = page
    session._context = context

    start = time.monotonic()
    await session.close()
    await session.close()

    assert time.monotonic() - start < 2.0
    assert session.closed
    assert page.close_calls == 1
    assert context.close_calls == 1


class _Closer:
    """Stands in for a browser or driver that shuts down cleanly."""

    def __init__(self):
        self.calls = 0

    async def close(self):
        self.calls += 1

    async def stop(self):
        self.calls += 1


@pytest.mark.asyncio
async def test_close_steps_share_one_budget():
    """Test that a hanging page close uses up the budget and the context is skipped."""
    session = BrowserSession(BrowserConfig(close_timeout_seconds=0.2))
    page = _FailingCloser(hang=True)
    context = _FailingCloser(hang=True)
    browser = _Closer()
    session._page = page
    session._context = context
    session._browser = browser

    start = time.monotonic()
    await session.close()

    assert time.monotonic() - start < 1.0
    assert page.close_calls == 1
    assert context.close_calls == 0
    assert browser.calls == 1


@pytest.mark.asyncio
async def test_cancelled_session_closes_browser_directly():
    """Test that cancellation skips page and context closes."""
    session = BrowserSession(BrowserConfig(close_timeout_seconds=5.0))
    page = _FailingCloser(hang=True)
    context = _FailingCloser(hang=True)
    browser = _Closer()
    driver = _Closer()
    session._page = page
    session._context = context
    session._browser = browser
    session._playwright = driver

    start = time.monotonic()
    await session.__aexit__(asyncio.CancelledError, asyncio.CancelledError(), None)

    assert time.monotonic() - start < 1.0
    assert page.close_calls == 0
    assert context.close_calls == 0
    assert browser.calls == 1
    assert driver.calls == 1
    assert session.closed


def test_crash_events_raise_on_next_operation():
    session = BrowserSession()
    session.url = "https://shop.example.com/item"
    session.raise_if_crashed()

    session._on_crash(None)
    with pytest.raises(PageCrash):
        session.raise_if_crashed()


def test_disconnect_while_closing_is_not_a_crash():
    session = BrowserSession()
    session._closing = True
    session._on_disconnected(None)
    session.raise_if_crashed()

    session._closing = False
    session._on_disconnected(None)
    with pytest.raises(BrowserCrash):
        session.raise_if_crashed()


def _real_browser_config() -> BrowserConfig:
    # Multi-process mode so every child process is accounted for
    args = [arg for arg in DEFAULT_LAUNCH_ARGS if arg not in ("--single-process", "--no-zygote")]
    return BrowserConfig(
        executable_path=os.environ.get("BROWSER_EXECUTABLE_PATH") or None,
        launch_args=args,
        navigation_timeout_ms=30000,
        close_timeout_seconds=5.0,
    )


async def _chromium_available(config: BrowserConfig) -> bool:
    try:
        async with BrowserSession(config):
            return True
    except Exception:
        return False


def _child_pids() -> set:
    return {child.pid for child in psutil.Process().children(recursive=True)}


@pytest.mark.asyncio
async def test_timeout_leaves_no_browser_processes():
    """Test against a real browser that a hung page load is cleaned up."""
    config = _real_browser_config()
    if not await _chromium_available(config):
        pytest.skip("Chromium not available")

    connections = []

    async def never_respond(reader, writer):
        connections.append(writer)
        try:
            await reader.read()
        finally:
            writer.close()

    server = await asyncio.start_server(never_respond, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]

    before = _child_pids()
    extractor = ProductExtractor(
        browser_config=config,
        timeout_seconds=3.0,
        blocked_domains=[],
    )

    try:
        start = time.monotonic()
        with pytest.raises(ExtractionTimeout):
            await extractor.extract(f"http://127.0.0.1:{port}/product")
        assert time.monotonic() - start < 3.0 + 10.0

        # Child processes may take a moment to be reaped
        deadline = time.monotonic() + 10.0
        leftover = _child_pids() - before
        while leftover and time.monotonic() < deadline:
            await asyncio.sleep(0.2)
            leftover = {pid for pid in _child_pids() - before if psutil.pid_exists(pid)}

        assert not leftover
    finally:
        for writer in connections:
            writer.close()
        server.close()
        await server.wait_closed()
