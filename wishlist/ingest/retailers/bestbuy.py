"""Best Buy selector tables."""

from wishlist.ingest.retailers.base import RetailerProfile

BESTBUY = RetailerProfile(
    name="bestbuy",
    domains=("bestbuy.com",),
    ready_selector="h1",
    title_selectors=(
        "h1.heading-5",
        "h1.product-name",
        'h1[data-test="product-title"]',
    ),
    price_selectors=(
        ".priceView-hero-price .price",
        ".priceView-customer-price span",
        '[data-test="product-price-current"]',
        ".sr-only",
    ),
    image_selectors=(
        "img.primary-image",
        'img[data-test="primary-hero-image"]',
        "img.zoom-image",
    ),
)
