"""Base extractor interface and the product info record it produces."""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Optional

from wishlist.ingest.document import Document


def is_domain_like_title(title: Optional[str], host: str) -> bool:
    """
    Check whether a title is empty or merely echoes the page's hostname.

    A login wall or bot challenge usually leaves the hostname as the page
    title, so such a title counts as "nothing recovered".

    Args:
        title: Recovered title (may be None)
        host: Lower-cased hostname of the requested URL

    Returns:
        True if the title should be treated as missing
    """
    if not title or not title.strip():
        return True

    if not host:
        return False

    lowered = title.strip().lower()
    host = host.lower()
    bare_host = host[4:] if host.startswith("www.") else host

    return host in lowered or bare_host in lowered


@dataclass
class ProductInfo:
    """Product title, raw price text and absolute image URL recovered from a page."""

    title: Optional[str] = None
    price: Optional[str] = None
    image: Optional[str] = None

    def has_title(self, host: str) -> bool:
        """True if the title is present and not domain-like."""
        return not is_domain_like_title(self.title, host)

    def fill_gaps(self, later: "ProductInfo", host: str) -> "ProductInfo":
        """
        Merge a later (less targeted) stage's result into this one.

        Price and image are only taken from ``later`` when missing here. The
        title is replaced only when ours is empty or domain-like and the
        later title is not.

        Args:
            later: Result of a later fallback stage
            host: Hostname used for the domain-like title test

        Returns:
            New merged ProductInfo
        """
        title = self.title
        if not self.has_title(host) and later.has_title(host):
            title = later.title

        return ProductInfo(
            title=title,
            price=self.price if self.price else later.price,
            image=self.image if self.image else later.image,
        )

    def to_dict(self) -> dict:
        return asdict(self)


class BaseExtractor(ABC):
    """Abstract base class for product info extractors."""

    @abstractmethod
    async def extract(self, document: Document) -> ProductInfo:
        """
        Recover product info from a loaded page.

        Args:
            document: Read-only view of the loaded page

        Returns:
            ProductInfo with whatever fields could be recovered
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get the stage name (e.g., 'rozetka', 'meta', 'content')."""
        pass
