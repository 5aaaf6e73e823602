"""
URL validation for marketplace product links.
Runs before any network access so obviously wrong input never costs a fetch.
"""
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from app.config import config
from app.errors import InvalidUrl
from app.utils.logger import LayerLogger

ALLOWED_SCHEMES = ("http", "https")

logger = LayerLogger("url_validation")


def validate_product_url(raw_url: str, domain_marker: Optional[str] = None) -> str:
    """
    Validate a product URL and return it normalized.
    
    Args:
        raw_url: URL as typed by the user
        domain_marker: substring the hostname must contain
            (defaults to MARKETPLACE_DOMAIN)
    
    Returns:
        Absolute URL with lowercase scheme and host and a non-empty path
    
    Raises:
        InvalidUrl: not an absolute http(s) URL, or host outside the marketplace
    """
    marker = (domain_marker or config.MARKETPLACE_DOMAIN).lower()
    
    if not isinstance(raw_url, str) or not raw_url.strip():
        raise InvalidUrl("Missing Mercado Libre URL")
    
    try:
        parsed = urlsplit(raw_url.strip())
        hostname = parsed.hostname
        # Touching .port validates it
        parsed.port
    except ValueError:
        raise InvalidUrl(f"Invalid URL: {raw_url.strip()}") from None
    
    if parsed.scheme.lower() not in ALLOWED_SCHEMES or not hostname:
        raise InvalidUrl(f"Invalid URL: {raw_url.strip()}")
    
    if marker not in hostname:
        logger.log_decision(
            decision="reject_url",
            reason="host is not a marketplace domain",
            url=raw_url,
            hostname=hostname
        )
        raise InvalidUrl("Provided URL is not a Mercado Libre product page")
    
    netloc = parsed.netloc
    host_start = netloc.rfind("@") + 1
    netloc = netloc[:host_start] + netloc[host_start:].lower()
    
    return urlunsplit((
        parsed.scheme.lower(),
        netloc,
        parsed.path or "/",
        parsed.query,
        parsed.fragment,
    ))
