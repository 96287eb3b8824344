"""Rozetka (rozetka.com.ua) selector tables.

Rozetka renders its product page with Angular, so gallery images often keep
the real URL in rzimage/ng-src bindings rather than src.
"""

from wishlist.ingest.retailers.base import RetailerProfile

ROZETKA = RetailerProfile(
    name="rozetka",
    domains=("rozetka.com.ua",),
    ready_selector="h1",
    title_selectors=(
        "h1.product__heading",
        "h1.product-title__text",
        'h1[data-testid="product-title"]',
        "h1.product__title",
        "h1",
    ),
    price_selectors=(
        ".product-price__big .product-price__sum",
        ".product__price .price",
        '[data-testid="product-main-price"] .price__current',
        ".price_value",
        ".product-price-current",
        ".product-prices .product-price__current",
        ".main-product-price .price__current",
        ".product__price-format",
        '[data-testid="product-price"] .price__current',
        ".product-price .value",
        ".price-box .actual",
        ".current-price",
        ".price_current",
        ".product__price-default",
    ),
    image_selectors=(
        # Main gallery
        "rz-gallery-main-content-image img",
        ".main-slider__item img",
        ".main-slider__wrap img",
        "img[rzimage]",
        'img[ng-img="true"]',
        "img.photo-zoom__preview",
        "img.image-gallery__preview",
        "img.product-image__preview",
        '[data-testid="product-image"] img',
        "img.product-image__main",
        # Common e-commerce markup
        "img.main-image",
        "img.product-image",
        "img.product-photo",
        "img.product-img",
        'img[itemprop="image"]',
        "#product-image img",
        "#main-image img",
        ".main-image img",
        ".product-image img",
        ".product-photos img",
        ".product-gallery img",
        ".product-images img",
        # Anything whose URL looks like a catalogue photo
        'img[src*="product"]',
        'img[src*="image"]',
        'img[src*="photo"]',
        'img[src*="catalog"]',
        'img[src*="upload"]',
    ),
)
