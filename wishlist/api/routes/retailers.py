"""Supported retailer routes."""

from fastapi import APIRouter

from wishlist.ingest.domains import supported_domains
from wishlist.ingest.retailers import list_retailers

router = APIRouter(prefix="/api/retailers", tags=["retailers"])


@router.get("")
async def list_supported_retailers():
    """List retailers with site-specific extraction and their domains."""
    return {"retailers": list_retailers(), "domains": supported_domains()}
