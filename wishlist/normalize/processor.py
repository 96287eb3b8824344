"""Normalize raw price text scraped from product pages into numbers."""

import logging
import math
import re
from typing import Optional

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^\d\s,.]")
_WHITESPACE = re.compile(r"\s+")
_NUMBER = re.compile(r"\d*\.?\d+")


def _unify_separators(text: str) -> str:
    """
    Rewrite grouping and decimal separators so "." is the only decimal mark.

    When both commas and dots occur, whichever comes last is the decimal
    separator ("1.234,56", "$1,299.99"). Several commas are thousands
    separators; a single comma is a decimal comma. Several dots without any
    comma are thousands separators ("1.234.567").
    """
    commas = text.count(",")
    dots = text.count(".")

    if commas and dots:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")

    if commas > 1:
        return text.replace(",", "")

    if commas == 1:
        return text.replace(",", ".")

    if dots > 1:
        return text.replace(".", "")

    return text


def normalize_price(text: Optional[str]) -> Optional[float]:
    """
    Parse an international price string.

    Examples:
        "1 234,56 грн" -> 1234.56
        "$1,299.99" -> 1299.99
        "€99,90" -> 99.9
        "free" -> None

    Args:
        text: Raw price text as scraped

    Returns:
        Price as float, or None if no number could be parsed
    """
    if not text:
        return None

    cleaned = _NON_NUMERIC.sub("", text)
    cleaned = _unify_separators(cleaned)
    cleaned = _WHITESPACE.sub("", cleaned)

    match = _NUMBER.search(cleaned)
    if not match:
        logger.debug(f"No number in price text: {text!r}")
        return None

    try:
        value = float(match.group(0))
    except ValueError:
        return None

    if not math.isfinite(value):
        return None
    return value
