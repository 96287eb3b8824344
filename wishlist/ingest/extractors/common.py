"""Helpers shared by every extractor: selector cascades, price sweeps, image filtering."""

import logging
import re
from typing import Iterable, List, Optional, Sequence
from urllib.parse import urljoin, urlparse

from wishlist.ingest.document import Document, ImageCandidate

logger = logging.getLogger(__name__)

# Currency markers recognised next to a numeric run
_CURRENCY = r"(?:\$|€|£|₴|грн|\bUAH\b|\brub\b|\bруб\b)"

# A numeric run: digits grouped by spaces, no-break spaces, dots or commas.
# Newlines are excluded so runs never span lines of visible text.
_AMOUNT = r"(\d[\d \u00a0\u202f.,]*)"

PRICE_PATTERNS = [
    re.compile(_CURRENCY + r"[ \u00a0]?" + _AMOUNT, re.IGNORECASE),
    re.compile(_AMOUNT + r"[ \u00a0]?" + _CURRENCY, re.IGNORECASE),
    re.compile(r"цена[: \u00a0]+" + _AMOUNT, re.IGNORECASE),
    re.compile(r"price[: \u00a0]+" + _AMOUNT, re.IGNORECASE),
]

# Ukrainian "from" prices on listing-style pages ("від 1 299 грн")
FROM_PRICE_PATTERNS = [
    re.compile(r"від[ \u00a0]+" + _AMOUNT, re.IGNORECASE),
    re.compile(r"від[ \u00a0]+[^\n]*?" + _AMOUNT, re.IGNORECASE),
]

# Substrings that mark an image URL as a placeholder rather than a product photo
PLACEHOLDER_MARKERS = ("placeholder", "no-image", "noimage", "blank.gif", "spacer.gif")

MIN_IMAGE_SIDE = 50


def collapse_whitespace(text: Optional[str]) -> Optional[str]:
    """Collapse runs of whitespace to single spaces; None for blank input."""
    if not text:
        return None
    collapsed = re.sub(r"\s+", " ", text).strip()
    return collapsed or None


def sweep_price(text: str, patterns: Sequence[re.Pattern] = PRICE_PATTERNS) -> Optional[str]:
    """
    Find the first price-looking run in free text.

    Patterns are tried in order; the first one that matches anywhere wins.

    Args:
        text: Visible page text
        patterns: Compiled patterns whose first group is the numeric run

    Returns:
        Raw numeric run (e.g. "1 299,00") or None
    """
    if not text:
        return None

    for pattern in patterns:
        match = pattern.search(text)
        if match:
            amount = match.group(1).strip().rstrip(".,").strip()
            if amount:
                logger.debug(f"Price sweep matched {pattern.pattern[:30]}...: {amount}")
                return amount

    return None


def resolve_image_url(src: Optional[str], base_url: str) -> Optional[str]:
    """
    Resolve an image reference against the page's base URL.

    Protocol-relative ("//cdn...") and root-relative ("/img/...") references
    become absolute; anything that does not end up http(s) is dropped.

    Args:
        src: Raw attribute value
        base_url: Page base URL

    Returns:
        Absolute http(s) URL or None
    """
    if not src or not src.strip():
        return None

    resolved = urljoin(base_url, src.strip())
    if urlparse(resolved).scheme not in ("http", "https"):
        return None
    return resolved


def is_usable_image_src(src: Optional[str]) -> bool:
    """Reject inline data, SVG and placeholder images."""
    if not src:
        return False

    lowered = src.lower()
    if lowered.startswith("data:"):
        return False
    if ".svg" in lowered or "svg+xml" in lowered:
        return False
    return not any(marker in lowered for marker in PLACEHOLDER_MARKERS)


def largest_image(
    candidates: Iterable[ImageCandidate],
    min_side: float = MIN_IMAGE_SIDE,
) -> Optional[ImageCandidate]:
    """
    Pick the usable image with the largest rendered area.

    Args:
        candidates: Image candidates in document order
        min_side: Minimum width and height in pixels

    Returns:
        Largest candidate (first one wins ties) or None
    """
    usable = [
        candidate
        for candidate in candidates
        if is_usable_image_src(candidate.src)
        and candidate.width >= min_side
        and candidate.height >= min_side
    ]
    if not usable:
        return None
    return max(usable, key=lambda candidate: candidate.area)


async def first_matching_text(document: Document, selectors: Sequence[str]) -> Optional[str]:
    """
    Selector cascade for text fields.

    Args:
        document: Page view
        selectors: CSS selectors in priority order

    Returns:
        Whitespace-collapsed text of the first selector that yields any, or None
    """
    for i, selector in enumerate(selectors):
        text = collapse_whitespace(await document.first_text(selector))
        if text:
            logger.debug(f"Selector {i+1}/{len(selectors)} matched: {selector[:50]}")
            return text
    return None


async def first_matching_image(document: Document, selectors: Sequence[str]) -> Optional[str]:
    """
    Selector cascade for the product image.

    Every element a selector matches is checked in document order; the first
    usable source wins.

    Returns:
        Absolute image URL or None
    """
    base_url = await document.base_url()

    for i, selector in enumerate(selectors):
        candidates: List[ImageCandidate] = await document.images(selector)
        for candidate in candidates:
            if not is_usable_image_src(candidate.src):
                continue
            resolved = resolve_image_url(candidate.src, base_url)
            if resolved:
                logger.debug(f"Image selector {i+1}/{len(selectors)} matched: {selector[:50]}")
                return resolved
    return None
