"""Shared test fixtures: HTML snapshots and browser session doubles."""

import asyncio
from pathlib import Path
from typing import List, Optional

import pytest

from wishlist.ingest.browser import BrowserConfig
from wishlist.ingest.document import StaticDocument
from wishlist.ingest.orchestrator import ProductExtractor

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> str:
    """Read an HTML snapshot from tests/fixtures."""
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


class FakeSession:
    """Browser session double that serves an HTML snapshot as a static document."""

    def __init__(self, factory: "FakeSessionFactory", config: BrowserConfig):
        self.factory = factory
        self.config = config
        self.url: Optional[str] = None
        self.ready_selector: Optional[str] = None
        self.nudged = False
        self.entered = False
        self.closed = False

    async def __aenter__(self) -> "FakeSession":
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.closed = True

    async def navigate(self, url: str) -> None:
        self.url = url
        if self.factory.hang:
            # A navigation that never resolves
            await asyncio.Event().wait()
        if self.factory.navigate_error is not None:
            raise self.factory.navigate_error

    async def wait_until_ready(self, selector: Optional[str] = None) -> None:
        self.ready_selector = selector

    async def nudge_lazy_content(self) -> None:
        self.nudged = True

    def document(self) -> StaticDocument:
        return StaticDocument(self.factory.html, self.url)

    def raise_if_crashed(self) -> None:
        if self.factory.crash is not None:
            raise self.factory.crash


class FakeSessionFactory:
    """Session factory double that records every session it builds."""

    def __init__(
        self,
        html: str = "",
        hang: bool = False,
        navigate_error: Optional[Exception] = None,
        crash: Optional[Exception] = None,
    ):
        self.html = html
        self.hang = hang
        self.navigate_error = navigate_error
        self.crash = crash
        self.sessions: List[FakeSession] = []

    def __call__(self, config: BrowserConfig) -> FakeSession:
        session = FakeSession(self, config)
        self.sessions.append(session)
        return session

    @property
    def launches(self) -> int:
        return len(self.sessions)


def make_extractor(factory: FakeSessionFactory, **kwargs) -> ProductExtractor:
    """Product extractor wired to a session double, with test-friendly defaults."""
    options = {
        "browser_config": BrowserConfig(),
        "session_factory": factory,
        "timeout_seconds": 5.0,
        "allow_generic_domains": True,
        "blocked_domains": ["localhost", "127.0.0.1"],
    }
    options.update(kwargs)
    return ProductExtractor(**options)


@pytest.fixture
def fixture_html():
    """Loader for HTML snapshots."""
    return load_fixture
