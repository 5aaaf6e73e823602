"""
Price normalization for marketplace prices.

Prices are read with the marketplace's locale convention: "." groups
thousands and "," separates decimals ("1.234,56" -> 1234.56). The same
convention is applied to every source, so a meta tag holding "99.99"
reads as 9999.0.
"""
import re
from typing import Any, Optional

_NON_PRICE_CHARS = re.compile(r"[^0-9.,]")


def normalize_price(raw_price: Any) -> Optional[float]:
    """
    Convert a raw price into a float.
    
    Numbers pass through unchanged. Strings are stripped down to digits,
    "." and "," before the locale convention is applied. Anything that
    does not yield a number returns None.
    """
    if isinstance(raw_price, bool):
        return None
    
    if isinstance(raw_price, (int, float)):
        return raw_price
    
    if not isinstance(raw_price, str):
        return None
    
    cleaned = _NON_PRICE_CHARS.sub("", raw_price)
    if not cleaned:
        return None
    
    normalized = cleaned.replace(".", "").replace(",", ".")
    try:
        return float(normalized)
    except ValueError:
        return None
