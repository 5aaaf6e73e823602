"""Layers package initialization."""
from app.layers.url_validation import validate_product_url
from app.layers.extraction import ProductExtractionLayer, FieldStrategy, FIELD_STRATEGIES

__all__ = [
    "validate_product_url",
    "ProductExtractionLayer",
    "FieldStrategy",
    "FIELD_STRATEGIES",
]
