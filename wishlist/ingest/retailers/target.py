"""Target selector tables."""

from wishlist.ingest.retailers.base import RetailerProfile

TARGET = RetailerProfile(
    name="target",
    domains=("target.com",),
    ready_selector='h1[data-test="product-title"], h1',
    title_selectors=(
        'h1[data-test="product-title"]',
        "h1",
    ),
    price_selectors=(
        '[data-test="product-price"]',
        ".price",
        '[data-test="current-price"]',
    ),
    image_selectors=(
        'img[data-test="image"]',
        '[data-test="image-gallery-item-0"] img',
        "img",
    ),
)
