"""Generic extraction from Open Graph, Twitter card and itemprop metadata."""

import logging
from typing import Optional, Sequence, Tuple

from wishlist.ingest.base import BaseExtractor, ProductInfo
from wishlist.ingest.document import Document
from wishlist.ingest.extractors.common import (
    collapse_whitespace,
    largest_image,
    resolve_image_url,
    sweep_price,
)

logger = logging.getLogger(__name__)

# (selector, attribute) pairs in priority order per field
TITLE_TAGS: Sequence[Tuple[str, str]] = (
    ('meta[property="og:title"]', "content"),
    ('meta[name="twitter:title"]', "content"),
    ('meta[property="og:site_name"]', "content"),
)

PRICE_TAGS: Sequence[Tuple[str, str]] = (
    ('meta[property="product:price:amount"]', "content"),
    ('meta[name="twitter:data1"]', "content"),
    ('meta[name="twitter:data2"]', "content"),
    ('meta[itemprop="price"]', "content"),
)

IMAGE_TAGS: Sequence[Tuple[str, str]] = (
    ('meta[property="og:image"]', "content"),
    ('meta[name="twitter:image"]', "content"),
    ('link[rel="image_src"]', "href"),
)

# Document titles of interstitial pages ("Just a moment...") are not product names
PLACEHOLDER_TITLE_MARKERS = ("moment",)


async def first_tag_value(document: Document, tags: Sequence[Tuple[str, str]]) -> Optional[str]:
    """Return the first non-blank attribute value among the given tags."""
    for selector, attribute in tags:
        value = collapse_whitespace(await document.first_attribute(selector, attribute))
        if value:
            return value
    return None


class MetaTagExtractor(BaseExtractor):
    """Read product info from page metadata, with document-level fallbacks."""

    async def extract(self, document: Document) -> ProductInfo:
        title = await first_tag_value(document, TITLE_TAGS)
        if not title:
            doc_title = collapse_whitespace(await document.title())
            if doc_title and not any(
                marker in doc_title.lower() for marker in PLACEHOLDER_TITLE_MARKERS
            ):
                title = doc_title

        price = await first_tag_value(document, PRICE_TAGS)
        if not price:
            price = sweep_price(await document.body_text())

        base_url = await document.base_url()
        image = resolve_image_url(await first_tag_value(document, IMAGE_TAGS), base_url)
        if not image:
            logger.debug("No meta image found, looking for largest image on page")
            largest = largest_image(await document.images())
            if largest:
                image = resolve_image_url(largest.src, base_url)

        return ProductInfo(title=title, price=price, image=image)

    def get_name(self) -> str:
        return "meta"
