"""Build wishlist item drafts from extracted or manually entered product data."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from wishlist.ingest.base import ProductInfo
from wishlist.normalize.processor import normalize_price

logger = logging.getLogger(__name__)

DEFAULT_NAME = "Unknown Product"
MANUAL_ENTRY_NAME = "Manual Entry Product"


@dataclass
class GoodDraft:
    """A wishlist item ready to be stored."""

    name: str
    price: Optional[float]
    image_url: Optional[str]
    url: str
    list_id: Optional[int] = None
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "imageUrl": self.image_url,
            "url": self.url,
            "listId": self.list_id,
        }


def _coerce_price(price: Union[str, int, float, None]) -> Optional[float]:
    if price is None or isinstance(price, bool):
        return None
    if isinstance(price, (int, float)):
        return float(price)
    return normalize_price(price)


def manual_product_info(
    name: Optional[str] = None,
    price: Union[str, int, float, None] = None,
    image_url: Optional[str] = None,
) -> ProductInfo:
    """ProductInfo for an item entered by hand, without a URL."""
    return ProductInfo(
        title=name or MANUAL_ENTRY_NAME,
        price=str(price) if price is not None else None,
        image=image_url or None,
    )


def build_good_draft(
    info: ProductInfo,
    url: Optional[str] = None,
    name: Optional[str] = None,
    price: Union[str, int, float, None] = None,
    image_url: Optional[str] = None,
    list_id: Optional[int] = None,
) -> GoodDraft:
    """
    Combine extracted product info with user-supplied fields.

    Extracted values win; the user's fields fill whatever extraction left
    empty.

    Args:
        info: Extracted (or manual) product info
        url: Product page URL
        name: User-supplied name
        price: User-supplied price (number or text)
        image_url: User-supplied image URL
        list_id: Target wishlist

    Returns:
        GoodDraft with a normalized numeric price
    """
    price_value = normalize_price(info.price) if info.price else None
    if price_value is None:
        price_value = _coerce_price(price)

    draft = GoodDraft(
        name=info.title or name or DEFAULT_NAME,
        price=price_value,
        image_url=info.image or image_url or None,
        url=url or "",
        list_id=list_id,
    )
    logger.debug(f"Built good draft: {draft.name!r} price={draft.price}")
    return draft
