"""
Meta tag fallback extraction.

Reads social-preview meta tags (og:title, og:description, og:image,
og:price:amount, ...) straight from the raw HTML. Used for every product
field the JSON-LD data left empty.
"""
import re
from typing import List, Optional, Pattern, Tuple

from bs4 import BeautifulSoup

from app.config import config

_HTML_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)


def decode_html_entities(value: str) -> str:
    """Decode the five standard HTML entities."""
    for entity, char in _HTML_ENTITIES:
        value = value.replace(entity, char)
    return value


def _build_meta_patterns(key: str) -> Tuple[Pattern[str], ...]:
    """
    Build the property= and name= patterns for one key.
    
    The lookahead lets the key attribute sit before or after content=.
    """
    escaped = re.escape(key)
    patterns = []
    for attribute in ("property", "name"):
        patterns.append(re.compile(
            r"<meta\b"
            rf"(?=[^>]*(?<![\w-]){attribute}\s*=\s*[\"']{escaped}[\"'])"
            r"[^>]*(?<![\w-])content\s*=\s*([\"'])((?:(?!\1).)*)\1"
            r"[^>]*>",
            re.IGNORECASE | re.DOTALL,
        ))
    return tuple(patterns)


# Keys read by the extraction layer, compiled once at import
KNOWN_META_KEYS = (
    "og:title",
    "og:description",
    "og:image",
    "og:price:amount",
    "og:price:currency",
    "product:price:amount",
    "product:price:currency",
)

_META_PATTERNS = {key: _build_meta_patterns(key) for key in KNOWN_META_KEYS}


def _meta_patterns(key: str) -> Tuple[Pattern[str], ...]:
    patterns = _META_PATTERNS.get(key.lower())
    return patterns if patterns is not None else _build_meta_patterns(key)


def extract_meta_content_regex(html: str, key: str) -> Optional[str]:
    """Return the decoded content of the first non-empty meta tag for key."""
    for pattern in _meta_patterns(key):
        for match in pattern.finditer(html):
            content = match.group(2)
            if content:
                return decode_html_entities(content)
    return None


def extract_meta_content_soup(html: str, key: str) -> Optional[str]:
    """
    Same contract as the regex extractor, backed by a real HTML parser.
    
    BeautifulSoup decodes every HTML entity while parsing, not only the
    five handled by decode_html_entities, so "&copy;" comes back as the copyright sign
    here but unchanged from the regex extractor.
    """
    soup = BeautifulSoup(html, "lxml")
    wanted = key.lower()
    
    for attribute in ("property", "name"):
        for tag in soup.find_all("meta"):
            value = tag.get(attribute)
            if not isinstance(value, str) or value.lower() != wanted:
                continue
            content = tag.get("content")
            if content:
                # BeautifulSoup already decoded entities
                return content
    return None


def extract_meta_content(html: str, key: str) -> Optional[str]:
    """Extract one meta tag value with the configured scanner."""
    if config.is_soup_scanner():
        return extract_meta_content_soup(html, key)
    return extract_meta_content_regex(html, key)


def extract_first_meta_content(html: str, keys: List[str]) -> Optional[str]:
    """Try keys in order and return the first value found."""
    for key in keys:
        value = extract_meta_content(html, key)
        if value:
            return value
    return None
