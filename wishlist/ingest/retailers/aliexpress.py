"""AliExpress selector tables."""

from wishlist.ingest.retailers.base import RetailerProfile

ALIEXPRESS = RetailerProfile(
    name="aliexpress",
    domains=("aliexpress.com",),
    ready_selector="h1",
    title_selectors=(
        "h1.product-title",
        'h1[data-pl="product-title"]',
        'h1[data-spm="productTitle"]',
        ".product-title-text",
    ),
    price_selectors=(
        ".uniform-banner-box-price",
        ".product-price-value",
        '[class*="price--current"]',
        '[data-spm="price"]',
    ),
    image_selectors=(
        "#imgExchange img",
        ".magnifier-handle",
        '[class*="magnifier--image"]',
        "img#characteristic-img-0",
    ),
)
