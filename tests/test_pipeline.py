"""Tests for stage escalation and the fill-gaps merge."""

from typing import List

import pytest

from conftest import load_fixture
from wishlist.ingest.base import BaseExtractor, ProductInfo, is_domain_like_title
from wishlist.ingest.document import Document, StaticDocument
from wishlist.ingest.pipeline import ExtractionPipeline, build_pipeline


class StubExtractor(BaseExtractor):
    """Extractor returning a fixed result and recording that it ran."""

    def __init__(self, name: str, result: ProductInfo, calls: List[str]):
        self.name = name
        self.result = result
        self.calls = calls

    async def extract(self, document: Document) -> ProductInfo:
        self.calls.append(self.name)
        return self.result

    def get_name(self) -> str:
        return self.name


EMPTY_DOCUMENT = StaticDocument("<html></html>", "https://shop.example.com/item")


def test_domain_like_title():
    assert is_domain_like_title(None, "rozetka.com.ua")
    assert is_domain_like_title("   ", "rozetka.com.ua")
    assert is_domain_like_title("rozetka.com.ua", "rozetka.com.ua")
    assert is_domain_like_title("Welcome to amazon.com", "www.amazon.com")
    assert is_domain_like_title("WWW.AMAZON.COM", "www.amazon.com")
    assert not is_domain_like_title("Kindle Paperwhite", "www.amazon.com")


def test_fill_gaps_never_overwrites():
    """Test that later stages only fill missing fields."""
    first = ProductInfo(title="Real Title", price="100", image=None)
    later = ProductInfo(title="Other Title", price="200", image="https://img/a.jpg")

    merged = first.fill_gaps(later, "shop.example.com")

    assert merged == ProductInfo(title="Real Title", price="100", image="https://img/a.jpg")


def test_fill_gaps_title_only_replaced_by_satisfactory_title():
    host = "shop.example.com"
    domain_like = ProductInfo(title="shop.example.com")

    assert domain_like.fill_gaps(ProductInfo(title="Lamp"), host).title == "Lamp"
    assert domain_like.fill_gaps(ProductInfo(title="www.shop.example.com"), host).title == "shop.example.com"
    assert ProductInfo().fill_gaps(ProductInfo(title=None), host).title is None


@pytest.mark.asyncio
async def test_satisfactory_primary_stops_escalation():
    calls: List[str] = []
    pipeline = ExtractionPipeline([
        StubExtractor("primary", ProductInfo(title="Lamp"), calls),
        StubExtractor("meta", ProductInfo(title="Meta Lamp", price="10"), calls),
        StubExtractor("content", ProductInfo(title="Content Lamp"), calls),
    ])

    info = await pipeline.run(EMPTY_DOCUMENT, "shop.example.com")

    assert calls == ["primary"]
    assert info == ProductInfo(title="Lamp")


@pytest.mark.asyncio
async def test_domain_like_title_escalates_through_stages():
    """Test that each stage runs only while the title is unsatisfactory."""
    calls: List[str] = []
    pipeline = ExtractionPipeline([
        StubExtractor("primary", ProductInfo(title="shop.example.com", price="10"), calls),
        StubExtractor("meta", ProductInfo(title=None, price="20", image="https://img/m.jpg"), calls),
        StubExtractor("content", ProductInfo(title="Desk Lamp", image="https://img/c.jpg"), calls),
    ])

    info = await pipeline.run(EMPTY_DOCUMENT, "shop.example.com")

    assert calls == ["primary", "meta", "content"]
    assert info == ProductInfo(title="Desk Lamp", price="10", image="https://img/m.jpg")


def test_pipeline_requires_a_stage():
    with pytest.raises(ValueError):
        ExtractionPipeline([])


def test_build_pipeline_stages():
    assert build_pipeline("rozetka").stage_names == ["rozetka", "meta", "content"]
    assert build_pipeline("generic").stage_names == ["meta", "content"]


@pytest.mark.asyncio
async def test_retailer_page_with_domain_title_uses_meta_title():
    """Test escalation on a page whose heading only echoes the hostname."""
    document = StaticDocument(
        load_fixture("rozetka_domain_title.html"),
        "https://rozetka.com.ua/ua/samsung-galaxy-a55/p412345678/",
    )

    info = await build_pipeline("rozetka").run(document, "rozetka.com.ua")

    assert info.title == "Смартфон Samsung Galaxy A55 8/256GB Navy"
    # Site-specific price survives; the missing image comes from meta tags
    assert info.price == "15 999 ₴"
    assert info.image == "https://content.rozetka.com.ua/goods/images/original/a55.jpg"


@pytest.mark.asyncio
async def test_generic_page_falls_through_to_content():
    document = StaticDocument(
        load_fixture("generic_content.html"),
        "https://www.example-store.com/item/42",
    )

    info = await build_pipeline("generic").run(document, "www.example-store.com")

    assert info.title == "Ceramic Teapot 1.2L"
    assert info.price == "1 250"
    assert info.image == "https://www.example-store.com/img/teapot-front.jpg"
