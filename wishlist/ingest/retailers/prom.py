"""Prom.ua selector tables."""

from wishlist.ingest.retailers.base import RetailerProfile

PROM = RetailerProfile(
    name="prom",
    domains=("prom.ua",),
    ready_selector="h1",
    title_selectors=(
        "h1[data-product-name]",
        "h1.title",
        "h1.product-title",
        "h1",
    ),
    price_selectors=(
        ".price_value",
        ".product-price",
        "[data-diff] .price",
        ".price-current",
        ".current-price",
        ".product__price",
        ".product-price__value",
        ".price-block .price",
    ),
    image_selectors=(
        ".product-card-top__preview img",
        ".photo-wrap img",
        'img[src*="image"]',
        ".product-image img",
        ".gallery-preview img",
        "img.main-photo",
    ),
)
