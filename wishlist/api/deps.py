"""FastAPI dependencies."""

from wishlist.ingest.orchestrator import ProductExtractor, product_extractor


def get_product_extractor() -> ProductExtractor:
    """Dependency for the product extractor (overridden in tests)."""
    return product_extractor
