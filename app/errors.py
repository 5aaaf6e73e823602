"""
Error types raised by the product extraction pipeline.

Only InvalidUrl, FetchError and ExtractionIncomplete ever reach a caller.
NoStructuredData marks the non-fatal "no JSON-LD product" condition.
"""
from typing import Optional


class ProductExtractionError(Exception):
    """Base class for extraction failures. Carries one readable message."""
    
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidUrl(ProductExtractionError):
    """Input is not an absolute marketplace URL."""


class FetchError(ProductExtractionError):
    """The product page could not be retrieved."""
    
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.cause = cause


class NoStructuredData(ProductExtractionError):
    """No JSON-LD candidate resolved to a product node."""


class ExtractionIncomplete(ProductExtractionError):
    """Neither structured data nor meta tags produced a product name."""
