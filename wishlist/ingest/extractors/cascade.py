"""Site-specific extraction driven by a retailer's selector tables."""

import logging

from wishlist.ingest.base import BaseExtractor, ProductInfo
from wishlist.ingest.document import Document
from wishlist.ingest.extractors.common import (
    first_matching_image,
    first_matching_text,
    sweep_price,
)
from wishlist.ingest.retailers.base import RetailerProfile

logger = logging.getLogger(__name__)


class SelectorCascadeExtractor(BaseExtractor):
    """Run a retailer's title, price and image selector cascades against a page."""

    def __init__(self, profile: RetailerProfile):
        self.profile = profile

    async def extract(self, document: Document) -> ProductInfo:
        profile = self.profile

        title = await first_matching_text(document, profile.title_selectors)

        price = await first_matching_text(document, profile.price_selectors)
        if not price:
            logger.debug(f"No {profile.name} price selector matched, sweeping page text")
            price = sweep_price(await document.body_text())

        image = await first_matching_image(document, profile.image_selectors)

        logger.info(
            f"{profile.name} extractor: title={'yes' if title else 'no'}, "
            f"price={price!r}, image={'yes' if image else 'no'}"
        )
        return ProductInfo(title=title, price=price, image=image)

    def get_name(self) -> str:
        return self.profile.name
