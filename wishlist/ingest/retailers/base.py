"""Retailer profile: the data a site-specific extractor is built from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RetailerProfile:
    """Selector tables for one supported retailer.

    Selectors are tried in order, so the most specific ones come first.
    Tables go stale as sites change their markup; update them against fresh
    page snapshots rather than treating them as guarantees.
    """

    name: str
    domains: tuple[str, ...]
    title_selectors: tuple[str, ...]
    price_selectors: tuple[str, ...]
    image_selectors: tuple[str, ...]
    ready_selector: Optional[str] = "h1"

    @property
    def domain_fragments(self) -> tuple[str, ...]:
        """Registrable-name fragments used for hostname matching ("rozetka.com.ua" -> "rozetka")."""
        return tuple(domain.removeprefix("www.").split(".")[0] for domain in self.domains)
