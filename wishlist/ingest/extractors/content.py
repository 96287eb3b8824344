"""Last-resort extraction from page content heuristics."""

import logging
import re
from typing import Optional

from wishlist.ingest.base import BaseExtractor, ProductInfo
from wishlist.ingest.document import Document
from wishlist.ingest.extractors.common import (
    FROM_PRICE_PATTERNS,
    MIN_IMAGE_SIDE,
    PRICE_PATTERNS,
    collapse_whitespace,
    largest_image,
    resolve_image_url,
    sweep_price,
)

logger = logging.getLogger(__name__)

HEADING_SELECTOR = "h1, h2, h3, .title, .name, .product-title, .product-name"

# Headings containing these are navigation, not product names
NAVIGATION_WORDS = ("cart", "checkout", "login", "register", "category", "home")

MIN_TITLE_LENGTH = 5

PRICE_ELEMENT_SELECTOR = '.price, .cost, .amount, [class*="price"], [class*="cost"]'

PRODUCT_AREA_SELECTOR = "h1, .product, .item, .product-card, .product-detail"

# Images outside the product area must be larger to be trusted
PAGE_WIDE_MIN_IMAGE_SIDE = 100

# "Product name - Shop name", "Product name | Shop", "Product_name"
_TITLE_SUFFIX = re.compile(r"\s+[-|–—]\s+.*$|_.*$")

_NUMERIC_RUN = re.compile(r"\d[\d \u00a0\u202f.,]*")


def is_navigation_text(text: str) -> bool:
    lowered = text.lower()
    return any(word in lowered for word in NAVIGATION_WORDS)


def trim_site_suffix(title: Optional[str]) -> Optional[str]:
    """Drop a trailing " - Shop name" style suffix from a document title."""
    if not title:
        return None
    return collapse_whitespace(_TITLE_SUFFIX.sub("", title.strip()))


class ContentHeuristicExtractor(BaseExtractor):
    """Guess product info from headings, visible text and image sizes."""

    async def extract(self, document: Document) -> ProductInfo:
        title = await self._extract_title(document)
        price = await self._extract_price(document)
        image = await self._extract_image(document)
        return ProductInfo(title=title, price=price, image=image)

    async def _extract_title(self, document: Document) -> Optional[str]:
        for text in await document.all_texts(HEADING_SELECTOR):
            text = collapse_whitespace(text)
            if text and len(text) > MIN_TITLE_LENGTH and not is_navigation_text(text):
                return text

        return trim_site_suffix(await document.title())

    async def _extract_price(self, document: Document) -> Optional[str]:
        price = sweep_price(
            await document.body_text(),
            PRICE_PATTERNS + FROM_PRICE_PATTERNS,
        )
        if price:
            return price

        for text in await document.all_texts(PRICE_ELEMENT_SELECTOR):
            match = _NUMERIC_RUN.search(text)
            if match:
                amount = match.group(0).strip().rstrip(".,").strip()
                if amount:
                    return amount
        return None

    async def _extract_image(self, document: Document) -> Optional[str]:
        base_url = await document.base_url()

        in_area = largest_image(
            await document.images(within=PRODUCT_AREA_SELECTOR),
            min_side=MIN_IMAGE_SIDE,
        )
        if in_area:
            return resolve_image_url(in_area.src, base_url)

        anywhere = largest_image(
            await document.images(),
            min_side=PAGE_WIDE_MIN_IMAGE_SIDE,
        )
        if anywhere:
            logger.debug(f"Using largest page-wide image: {anywhere.src}")
            return resolve_image_url(anywhere.src, base_url)
        return None

    def get_name(self) -> str:
        return "content"
