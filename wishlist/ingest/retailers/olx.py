"""OLX (olx.ua) selector tables."""

from wishlist.ingest.retailers.base import RetailerProfile

OLX = RetailerProfile(
    name="olx",
    domains=("olx.ua",),
    ready_selector='h1, [data-testid="ad_title"]',
    title_selectors=(
        'h1[data-testid="ad_title"]',
        '[data-testid="ad_title"] h4',
        "h1.clr",
        "h1.offer-title",
        "h1",
        ".offer-title h1",
    ),
    price_selectors=(
        'h3[data-testid="ad-price"]',
        '[data-testid="ad-price-container"] h3',
        ".price-label",
        ".price-value",
        ".offer-price__number",
        ".price__value",
        '[data-testid="ad-price"]',
        ".price-box .price",
    ),
    image_selectors=(
        'img[data-testid="swiper-image"]',
        'img[data-testid="swiper-slide"]',
        ".photo-container img",
        'img[src*="image"]',
        ".offer-photos-container img",
        ".gallery-item img",
        "img.main-photo",
    ),
)
