"""Product info extraction routes."""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from wishlist.api.deps import get_product_extractor
from wishlist.ingest.orchestrator import ProductExtractor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["extraction"])


class ExtractRequest(BaseModel):
    # Optional so a missing URL is reported as a 400, not a schema error
    url: str | None = None


@router.post("/extract-product-info")
async def extract_product_info(
    request: ExtractRequest,
    extractor: ProductExtractor = Depends(get_product_extractor),
):
    """
    Extract title, raw price and image from a product page.

    Failures are turned into `{success: false, error}` responses by the
    application's exception handlers.
    """
    info = await extractor.extract(request.url)
    return {"success": True, "data": info.to_dict()}
