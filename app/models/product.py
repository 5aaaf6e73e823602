"""
Product model for the Marketplace Product Extractor.
This is the record handed to callers once a product page has been extracted.
"""
import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class Product(BaseModel):
    """
    Product extracted from a marketplace page.
    
    Only `name` is required. The other fields are filled when the page
    exposes them through structured data or meta tags.
    """
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    url: str
    
    @field_validator("price")
    @classmethod
    def _price_must_be_finite(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and not math.isfinite(value):
            raise ValueError("price must be a finite number")
        return value
    
    def to_response(self) -> Dict[str, Any]:
        """Flat JSON body for the API. Absent optional values are omitted."""
        return self.model_dump(exclude_none=True)
    
    def get_present_fields(self) -> List[str]:
        """Return list of populated optional fields."""
        present = []
        if self.description:
            present.append("description")
        if self.price is not None:
            present.append("price")
        if self.currency:
            present.append("currency")
        if self.images:
            present.append("images")
        return present
    
    def get_missing_fields(self) -> List[str]:
        """Return list of empty optional fields."""
        present = self.get_present_fields()
        return [f for f in ("description", "price", "currency", "images") if f not in present]
