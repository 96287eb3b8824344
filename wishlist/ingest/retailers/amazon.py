"""Amazon selector tables."""

from wishlist.ingest.retailers.base import RetailerProfile

AMAZON = RetailerProfile(
    name="amazon",
    domains=("amazon.com",),
    ready_selector="#productTitle, #title",
    title_selectors=(
        "#productTitle",
        "#title",
        'h1[data-a-size="large"]',
    ),
    price_selectors=(
        "#priceblock_ourprice",
        "#priceblock_dealprice",
        "#corePrice_feature_div .a-price .a-offscreen",
        ".a-price .a-offscreen",
        "#tp_price_block_ourprice_sims_feature_div",
    ),
    image_selectors=(
        "#landingImage",
        "#imgBlkFront",
        "#altImages img",
        "#imageBlock img",
    ),
)
