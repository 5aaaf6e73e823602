"""Parsers package initialization."""
from app.parsers.jsonld import (
    locate_jsonld_blocks,
    parse_jsonld_payload,
    find_product_node,
    resolve_product_node,
)
from app.parsers.meta_tags import extract_meta_content, decode_html_entities
from app.parsers.price import normalize_price

__all__ = [
    "locate_jsonld_blocks",
    "parse_jsonld_payload",
    "find_product_node",
    "resolve_product_node",
    "extract_meta_content",
    "decode_html_entities",
    "normalize_price",
]
