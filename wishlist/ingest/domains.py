"""URL validation and retailer classification by hostname."""

import logging
from typing import Iterable, Optional
from urllib.parse import urlparse

from wishlist.ingest.errors import InvalidInput
from wishlist.ingest.retailers import list_profiles

logger = logging.getLogger(__name__)

GENERIC = "generic"

ALLOWED_SCHEMES = ("http", "https")


def supported_domains() -> list[str]:
    """Supported retailer domains in classification order."""
    return [domain for profile in list_profiles() for domain in profile.domains]


def validate_url(url: Optional[str]) -> str:
    """
    Validate an extraction URL and return its lower-cased hostname.

    Args:
        url: Absolute http(s) URL

    Returns:
        Hostname

    Raises:
        InvalidInput: If the URL is missing, relative, or not http(s)
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidInput(url, "URL is required")

    try:
        parsed = urlparse(url.strip())
        host = parsed.hostname
    except ValueError as e:
        raise InvalidInput(url) from e

    if parsed.scheme.lower() not in ALLOWED_SCHEMES or not host:
        raise InvalidInput(url)

    return host.lower()


def _hostname(url: str) -> Optional[str]:
    candidate = url.strip()
    if "://" not in candidate and not candidate.startswith("//"):
        # Bare "host/path" input
        candidate = "//" + candidate
    try:
        host = urlparse(candidate).hostname
    except ValueError:
        return None
    return host.lower() if host else None


def classify_domain(url: Optional[str]) -> str:
    """
    Map a URL to a supported retailer identifier or "generic".

    Matching is substring containment of the retailer's registrable-name
    fragment in the hostname, so mobile and regional hosts
    (m.rozetka.com.ua, amazon.de) classify with their retailer.

    Never raises; anything unparsable is "generic".
    """
    if not url or not isinstance(url, str):
        return GENERIC

    host = _hostname(url)
    if not host:
        return GENERIC

    for profile in list_profiles():
        if any(fragment in host for fragment in profile.domain_fragments):
            return profile.name

    return GENERIC


def is_blocked_host(host: str, blocked_domains: Iterable[str]) -> bool:
    """True if host equals or is a subdomain of any blocked domain."""
    host = host.lower()
    for domain in blocked_domains:
        domain = domain.strip().lower()
        if domain and (host == domain or host.endswith("." + domain)):
            return True
    return False
