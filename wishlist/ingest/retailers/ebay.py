"""eBay selector tables."""

from wishlist.ingest.retailers.base import RetailerProfile

EBAY = RetailerProfile(
    name="ebay",
    domains=("ebay.com",),
    ready_selector="h1",
    title_selectors=(
        "#CenterPanelInternal h1",
        "h1#vi-lkhdr-itmTitl",
        "h1.x-item-title__mainTitle",
        "h1[itemprop='name']",
    ),
    price_selectors=(
        ".notranslate.x-price-primary",
        "#prcIsum",
        ".x-price-primary",
        "[data-testid='x-price-primary']",
    ),
    image_selectors=(
        "#icImg",
        "#mainImgHldr img",
        ".ux-image-carousel-item img",
    ),
)
