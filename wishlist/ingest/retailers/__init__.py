"""Retailer profile registry."""

from __future__ import annotations

import logging
from typing import Optional

from wishlist.ingest.retailers.base import RetailerProfile
from wishlist.ingest.retailers.rozetka import ROZETKA
from wishlist.ingest.retailers.prom import PROM
from wishlist.ingest.retailers.olx import OLX
from wishlist.ingest.retailers.amazon import AMAZON
from wishlist.ingest.retailers.ebay import EBAY
from wishlist.ingest.retailers.bestbuy import BESTBUY
from wishlist.ingest.retailers.target import TARGET
from wishlist.ingest.retailers.aliexpress import ALIEXPRESS

logger = logging.getLogger(__name__)

# Classification order: the first profile whose fragment occurs in the hostname wins
_PROFILES: dict[str, RetailerProfile] = {
    profile.name: profile
    for profile in (ROZETKA, PROM, OLX, AMAZON, EBAY, BESTBUY, TARGET, ALIEXPRESS)
}


def get_profile(retailer: str) -> Optional[RetailerProfile]:
    """Return the profile for a retailer identifier, None for "generic" or unknown."""
    if not retailer:
        return None
    return _PROFILES.get(retailer.lower())


def list_retailers() -> list[str]:
    """List registered retailer identifiers in classification order."""
    return list(_PROFILES.keys())


def list_profiles() -> list[RetailerProfile]:
    return list(_PROFILES.values())


def register_profile(profile: RetailerProfile) -> None:
    """
    Register (or replace) a retailer profile.

    Args:
        profile: Selector tables for the retailer
    """
    _PROFILES[profile.name] = profile
    logger.info(f"Registered retailer profile: {profile.name}")


__all__ = [
    "RetailerProfile",
    "get_profile",
    "list_profiles",
    "list_retailers",
    "register_profile",
]
