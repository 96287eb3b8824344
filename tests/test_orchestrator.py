"""Tests for the extraction orchestrator using browser session doubles."""

import time

import pytest

from conftest import FakeSessionFactory, load_fixture, make_extractor
from wishlist.ingest.errors import (
    BrowserCrash,
    ExtractionTimeout,
    InvalidInput,
    NavigationFailure,
    PageCrash,
    UnsupportedDomain,
)

ROZETKA_URL = "https://rozetka.com.ua/ua/apple-iphone-15-128gb-black/p395460480/"


@pytest.mark.asyncio
async def test_extract_retailer_page():
    """Test a full extraction and the session lifecycle."""
    factory = FakeSessionFactory(html=load_fixture("rozetka_product.html"))
    extractor = make_extractor(factory)

    info = await extractor.extract(ROZETKA_URL)

    assert info.title == "Мобільний телефон Apple iPhone 15 128GB Black"
    assert info.price == "37 999"
    assert info.image == "https://content1.rozetka.com.ua/goods/images/big/368351200.jpg"

    assert factory.launches == 1
    session = factory.sessions[0]
    assert session.url == ROZETKA_URL
    assert session.ready_selector == "h1"
    assert session.nudged
    assert session.closed


@pytest.mark.asyncio
async def test_generic_page_waits_for_ready_state():
    factory = FakeSessionFactory(html=load_fixture("generic_meta.html"))
    extractor = make_extractor(factory)

    info = await extractor.extract("https://shop.unknownsite.io/products/nordic-lamp")

    assert info.title == "Nordic Desk Lamp"
    assert factory.sessions[0].ready_selector is None


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["not a url", "", None, "ftp://example.com/item"])
async def test_invalid_input_launches_nothing(url):
    """Test that malformed URLs fail before any browser is launched."""
    factory = FakeSessionFactory()
    extractor = make_extractor(factory)

    with pytest.raises(InvalidInput):
        await extractor.extract(url)

    assert factory.launches == 0


@pytest.mark.asyncio
async def test_blocked_domain_is_unsupported():
    factory = FakeSessionFactory()
    extractor = make_extractor(factory)

    with pytest.raises(UnsupportedDomain) as exc_info:
        await extractor.extract("http://localhost:8080/admin")

    assert exc_info.value.host == "localhost"
    assert factory.launches == 0


@pytest.mark.asyncio
async def test_generic_domains_can_be_disabled():
    factory = FakeSessionFactory(html=load_fixture("rozetka_product.html"))
    extractor = make_extractor(factory, allow_generic_domains=False)

    with pytest.raises(UnsupportedDomain):
        await extractor.extract("https://shop.unknownsite.io/products/nordic-lamp")
    assert factory.launches == 0

    # Supported retailers are unaffected
    info = await extractor.extract(ROZETKA_URL)
    assert info.title


@pytest.mark.asyncio
async def test_timeout_cancels_and_closes_session():
    """Test that a never-resolving navigation fails within the budget."""
    factory = FakeSessionFactory(hang=True)
    extractor = make_extractor(factory, timeout_seconds=0.2)

    start = time.monotonic()
    with pytest.raises(ExtractionTimeout) as exc_info:
        await extractor.extract(ROZETKA_URL)
    elapsed = time.monotonic() - start

    assert elapsed < 0.2 + 1.0
    assert exc_info.value.timeout == 0.2
    assert str(exc_info.value) == "Product extraction timed out after 0.2 seconds"
    assert factory.sessions[0].closed


@pytest.mark.asyncio
async def test_navigation_failure_propagates():
    factory = FakeSessionFactory(navigate_error=NavigationFailure(ROZETKA_URL, "net::ERR_NAME_NOT_RESOLVED"))
    extractor = make_extractor(factory)

    with pytest.raises(NavigationFailure):
        await extractor.extract(ROZETKA_URL)

    assert factory.sessions[0].closed


@pytest.mark.asyncio
async def test_page_crash_propagates():
    factory = FakeSessionFactory(
        html=load_fixture("rozetka_product.html"),
        crash=PageCrash(ROZETKA_URL),
    )
    extractor = make_extractor(factory)

    with pytest.raises(PageCrash):
        await extractor.extract(ROZETKA_URL)

    assert factory.sessions[0].closed


@pytest.mark.asyncio
async def test_driver_errors_become_browser_crash():
    """Test that raw Playwright errors surface as BrowserCrash."""
    from playwright.async_api import Error as PlaywrightError

    factory = FakeSessionFactory(navigate_error=PlaywrightError("Target page, context or browser has been closed"))
    extractor = make_extractor(factory)

    with pytest.raises(BrowserCrash):
        await extractor.extract(ROZETKA_URL)

    assert factory.sessions[0].closed


@pytest.mark.asyncio
async def test_extract_html_is_idempotent():
    """Test that static extraction gives the same result every time."""
    extractor = make_extractor(FakeSessionFactory())
    html = load_fixture("amazon_product.html")
    url = "https://www.amazon.com/dp/B0CX23V2ZK"

    first = await extractor.extract_html(html, url)
    second = await extractor.extract_html(html, url)

    assert first == second
    assert first.title == "Kindle Paperwhite (16 GB) - Now with a larger display"


@pytest.mark.asyncio
async def test_extract_html_validates_url():
    extractor = make_extractor(FakeSessionFactory())

    with pytest.raises(InvalidInput):
        await extractor.extract_html("<html></html>", "not a url")
