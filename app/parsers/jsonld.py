"""
JSON-LD handling for product pages.

Three steps, each usable on its own:
- locate: pull the raw text of every ld+json script block out of the HTML
- parse: decode one block, retrying once after whitespace normalization
- resolve: walk the decoded data depth-first for the first Product node
"""
import json
import re
from typing import Any, Dict, Iterable, List, Optional

from bs4 import BeautifulSoup

from app.config import config
from app.errors import NoStructuredData
from app.utils.logger import LayerLogger

JSON_LD_TYPE = "application/ld+json"

JSON_LD_PATTERN = re.compile(
    r"<script\b[^>]*(?<![\w-])type\s*=\s*[\"']?application/ld\+json(?=[\"'\s>/])[\"']?[^>]*>(.*?)</script\s*>",
    re.IGNORECASE | re.DOTALL,
)

# Control characters that break strict JSON when left raw inside strings
_WHITESPACE_CONTROL = re.compile(r"[\n\r\t]")

logger = LayerLogger("jsonld_parser")


class _DepthExceeded(Exception):
    """Raised inside the traversal when nesting goes past the limit."""


# =========================================================================
# LOCATE
# =========================================================================

def locate_jsonld_blocks_regex(html: str) -> List[str]:
    """Return the inner text of every JSON-LD script block, in document order."""
    return [match.group(1) for match in JSON_LD_PATTERN.finditer(html) if match.group(1)]


def locate_jsonld_blocks_soup(html: str) -> List[str]:
    """Same contract as the regex locator, backed by a real HTML parser."""
    soup = BeautifulSoup(html, "lxml")
    blocks = []
    
    for script in soup.find_all("script"):
        script_type = script.get("type") or ""
        if script_type.strip().lower() != JSON_LD_TYPE:
            continue
        text = script.string if script.string is not None else script.get_text()
        if text:
            blocks.append(text)
    
    return blocks


def locate_jsonld_blocks(html: str) -> List[str]:
    """Locate JSON-LD candidates with the configured scanner."""
    if config.is_soup_scanner():
        return locate_jsonld_blocks_soup(html)
    return locate_jsonld_blocks_regex(html)


# =========================================================================
# PARSE
# =========================================================================

def parse_jsonld_payload(payload: str) -> Optional[Any]:
    """
    Parse one JSON-LD candidate.
    
    Strict parse first. On failure, newlines, carriage returns and tabs
    are replaced by spaces and the parse is retried once. A candidate
    that fails both attempts returns None.
    """
    trimmed = payload.strip()
    if not trimmed:
        return None
    
    try:
        return json.loads(trimmed)
    except (ValueError, RecursionError):
        pass
    
    try:
        return json.loads(_WHITESPACE_CONTROL.sub(" ", trimmed))
    except (ValueError, RecursionError) as e:
        logger.log_discarded(
            "jsonld_candidate",
            reason=f"invalid JSON: {e}",
            payload_length=len(trimmed)
        )
        return None


# =========================================================================
# RESOLVE
# =========================================================================

def is_product_type(type_value: Any) -> bool:
    """Check an @type value (string or list of strings) for "Product"."""
    types = type_value if isinstance(type_value, list) else [type_value]
    return any(isinstance(t, str) and t.lower() == "product" for t in types)


def _search(candidate: Any, depth: int, max_depth: int) -> Optional[Dict[str, Any]]:
    if depth > max_depth:
        raise _DepthExceeded()
    
    if isinstance(candidate, list):
        for entry in candidate:
            result = _search(entry, depth + 1, max_depth)
            if result is not None:
                return result
        return None
    
    if isinstance(candidate, dict):
        type_value = candidate.get("@type")
        if type_value and is_product_type(type_value):
            return candidate
        for value in candidate.values():
            result = _search(value, depth + 1, max_depth)
            if result is not None:
                return result
    
    return None


def find_product_node(
    candidate: Any, 
    max_depth: Optional[int] = None
) -> Optional[Dict[str, Any]]:
    """
    Depth-first search for the first object whose @type is Product.
    
    Objects are tested before their children; children are visited in
    key (or index) order. Going deeper than max_depth abandons this
    candidate and returns None.
    """
    limit = config.MAX_JSONLD_DEPTH if max_depth is None else max_depth
    try:
        return _search(candidate, 0, limit)
    except _DepthExceeded:
        logger.log_discarded(
            "jsonld_candidate",
            reason="nesting depth limit exceeded",
            max_depth=limit
        )
        return None


def resolve_product_node(
    candidates: Iterable[str], 
    max_depth: Optional[int] = None
) -> Dict[str, Any]:
    """
    Return the first Product node across candidates, in document order.
    
    Raises:
        NoStructuredData: no candidate parsed into data holding a Product
    """
    parsed_count = 0
    for payload in candidates:
        parsed = parse_jsonld_payload(payload)
        if parsed is None:
            continue
        parsed_count += 1
        node = find_product_node(parsed, max_depth)
        if node is not None:
            return node
    
    if parsed_count == 0:
        raise NoStructuredData("No parseable JSON-LD blocks found")
    raise NoStructuredData("No Product node found in JSON-LD")
