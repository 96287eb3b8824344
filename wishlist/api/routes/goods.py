"""Wishlist item draft routes."""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from wishlist.api.deps import get_product_extractor
from wishlist.ingest.orchestrator import ProductExtractor
from wishlist.normalize.goods import build_good_draft, manual_product_info

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/goods", tags=["goods"])


class GoodDraftRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str | None = None
    name: str | None = None
    price: float | str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    list_id: int | None = Field(default=None, alias="listId")


@router.post("/draft")
async def create_good_draft(
    request: GoodDraftRequest,
    extractor: ProductExtractor = Depends(get_product_extractor),
):
    """
    Build a wishlist item from a product URL or from manual fields.

    With a URL the page is extracted and user fields only fill what
    extraction missed; without one the manual fields are used as-is.
    """
    if request.url and request.url.strip():
        info = await extractor.extract(request.url)
    else:
        logger.debug("No URL given, building draft from manual fields")
        info = manual_product_info(request.name, request.price, request.image_url)

    draft = build_good_draft(
        info,
        url=request.url,
        name=request.name,
        price=request.price,
        image_url=request.image_url,
        list_id=request.list_id,
    )
    return {"success": True, "data": draft.to_dict()}
