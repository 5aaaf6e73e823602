"""
Marketplace Product Extractor - FastAPI Application
Main entry point with REST API endpoints.
"""
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import config
from app.errors import InvalidUrl, ProductExtractionError
from app.layers.extraction import ProductExtractionLayer
from app.utils.logger import get_logger, set_trace_id

VERSION = "1.0.0"

# Initialize FastAPI app
app = FastAPI(
    title="Marketplace Product Extractor",
    description="Extracts product name, description, price and images from Mercado Libre pages",
    version=VERSION,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize layers
extraction_layer = ProductExtractionLayer()

logger = get_logger("main")


# Request models
class ExtractRequest(BaseModel):
    """Request model for product extraction."""
    url: Optional[Any] = None


def error_response(message: str, status_code: int, trace_id: Optional[str] = None) -> JSONResponse:
    """Build the {"error": ...} body used by every failure."""
    headers = {"X-Trace-Id": trace_id} if trace_id else None
    return JSONResponse({"error": message}, status_code=status_code, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors with the usual error shape."""
    logger.warning("invalid_request_body", path=request.url.path, errors=str(exc.errors()))
    return error_response("Missing Mercado Libre URL", 400)


# API Routes
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


@app.post("/api/products/extract")
async def extract_product(request: ExtractRequest):
    """
    Extract product details from a Mercado Libre product URL.
    
    Returns the flat product record, or {"error": ...} with
    400 for bad input and 500 for fetch or extraction failures.
    """
    trace_id = set_trace_id()
    url = request.url
    
    if not isinstance(url, str) or not url.strip():
        logger.info("product_extraction_rejected", reason="missing_url", trace_id=trace_id)
        return error_response("Missing Mercado Libre URL", 400, trace_id)
    
    logger.info("product_extraction_request", url=url, trace_id=trace_id)
    
    try:
        product = await extraction_layer.extract(url)
    except InvalidUrl as e:
        logger.info("product_extraction_rejected", reason=e.message, url=url)
        return error_response(e.message, 400, trace_id)
    except ProductExtractionError as e:
        logger.error("product_extraction_error", error=e.message, url=url)
        return error_response(e.message, 500, trace_id)
    except Exception as e:
        logger.error("product_extraction_unexpected_error", error=str(e), url=url)
        return error_response("Unable to fetch product details", 500, trace_id)
    
    logger.info(
        "product_extraction_completed",
        url=product.url,
        name=product.name,
        price=product.price,
        currency=product.currency,
        images_count=len(product.images),
    )
    
    return JSONResponse(product.to_response(), headers={"X-Trace-Id": trace_id})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
