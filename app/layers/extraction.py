"""
Product Extraction Layer for the Marketplace Product Extractor.

Runs the whole pipeline for one URL:
validate -> fetch -> locate JSON-LD -> parse -> resolve Product node
-> per-field fallback to meta tags -> assemble.

Every field is resolved through an ordered list of strategies. The first
strategy producing a value wins; later sources are never consulted for
that field.
"""
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from app.adapters.page_fetcher import PageFetcher
from app.errors import ExtractionIncomplete, NoStructuredData
from app.layers.url_validation import validate_product_url
from app.models.product import Product
from app.parsers.jsonld import locate_jsonld_blocks, resolve_product_node
from app.parsers.meta_tags import extract_first_meta_content
from app.parsers.price import normalize_price
from app.utils.logger import LayerLogger

SOURCE_JSONLD = "jsonld"
SOURCE_META = "meta_tags"

META_TITLE_KEYS = ["og:title"]
META_DESCRIPTION_KEYS = ["og:description"]
META_IMAGE_KEYS = ["og:image"]
META_PRICE_KEYS = ["og:price:amount", "product:price:amount"]
META_CURRENCY_KEYS = ["og:price:currency", "product:price:currency"]

PriceAndCurrency = Tuple[float, Optional[str]]


@dataclass
class ExtractionContext:
    """Inputs shared by every field strategy for one page."""
    html: str
    product_node: Optional[Dict[str, Any]] = None


@dataclass
class FieldStrategy:
    """One way of obtaining a field, tagged with where it came from."""
    source: str
    extract: Callable[[ExtractionContext], Any]


def _usable_price(value: Optional[float]) -> bool:
    if value is None:
        return False
    try:
        as_float = float(value)
    except OverflowError:
        # JSON integers can be too large for a float
        return False
    return math.isfinite(as_float) and as_float >= 0


# =========================================================================
# JSON-LD strategies
# =========================================================================

def _node_string(node: Optional[Dict[str, Any]], key: str) -> Optional[str]:
    if not node:
        return None
    value = node.get(key)
    return value if isinstance(value, str) and value else None


def jsonld_name(ctx: ExtractionContext) -> Optional[str]:
    return _node_string(ctx.product_node, "name")


def jsonld_description(ctx: ExtractionContext) -> Optional[str]:
    return _node_string(ctx.product_node, "description")


def jsonld_images(ctx: ExtractionContext) -> List[str]:
    """Image URLs from the node; scalar wrapped, non-strings dropped, order kept."""
    if not ctx.product_node:
        return []
    image_value = ctx.product_node.get("image")
    if not image_value:
        return []
    images = image_value if isinstance(image_value, list) else [image_value]
    return [img for img in images if isinstance(img, str)]


def jsonld_offer(ctx: ExtractionContext) -> Optional[PriceAndCurrency]:
    """Price and currency of the first offer with a usable price."""
    if not ctx.product_node:
        return None
    offers_value = ctx.product_node.get("offers")
    if not offers_value:
        return None
    offers = offers_value if isinstance(offers_value, list) else [offers_value]
    
    for offer in offers:
        if not isinstance(offer, dict):
            continue
        price = normalize_price(offer.get("price"))
        if _usable_price(price):
            currency = offer.get("priceCurrency")
            return float(price), (currency if isinstance(currency, str) else None)
    
    return None


# =========================================================================
# Meta tag strategies
# =========================================================================

def meta_name(ctx: ExtractionContext) -> Optional[str]:
    return extract_first_meta_content(ctx.html, META_TITLE_KEYS)


def meta_description(ctx: ExtractionContext) -> Optional[str]:
    return extract_first_meta_content(ctx.html, META_DESCRIPTION_KEYS)


def meta_images(ctx: ExtractionContext) -> List[str]:
    image = extract_first_meta_content(ctx.html, META_IMAGE_KEYS)
    return [image] if image else []


def meta_price(ctx: ExtractionContext) -> Optional[PriceAndCurrency]:
    raw_price = extract_first_meta_content(ctx.html, META_PRICE_KEYS)
    if not raw_price:
        return None
    price = normalize_price(raw_price)
    if not _usable_price(price):
        return None
    return float(price), extract_first_meta_content(ctx.html, META_CURRENCY_KEYS)


FIELD_STRATEGIES: Dict[str, List[FieldStrategy]] = {
    "name": [
        FieldStrategy(SOURCE_JSONLD, jsonld_name),
        FieldStrategy(SOURCE_META, meta_name),
    ],
    "description": [
        FieldStrategy(SOURCE_JSONLD, jsonld_description),
        FieldStrategy(SOURCE_META, meta_description),
    ],
    "images": [
        FieldStrategy(SOURCE_JSONLD, jsonld_images),
        FieldStrategy(SOURCE_META, meta_images),
    ],
    "price": [
        FieldStrategy(SOURCE_JSONLD, jsonld_offer),
        FieldStrategy(SOURCE_META, meta_price),
    ],
}


class ProductExtractionLayer:
    """
    Extraction layer - turns a marketplace URL into a Product.
    
    This layer:
    - Rejects bad URLs before any network access
    - Fetches the page exactly once
    - Prefers JSON-LD data and falls back to meta tags per field
    - Fails only when no product name can be found
    
    Holds no per-call state, so one instance can serve concurrent calls.
    """
    
    def __init__(
        self, 
        fetcher: Optional[PageFetcher] = None, 
        max_depth: Optional[int] = None
    ):
        self.logger = LayerLogger("extraction_layer")
        self.fetcher = fetcher or PageFetcher()
        self.max_depth = max_depth
    
    async def extract(self, url: str) -> Product:
        """
        Extract a product from a marketplace page URL.
        
        Raises:
            InvalidUrl: URL is malformed or not on the marketplace
            FetchError: the page could not be retrieved
            ExtractionIncomplete: no product name on the page
        """
        normalized_url = validate_product_url(url)
        html = await self.fetcher.fetch(normalized_url)
        return self.extract_from_html(normalized_url, html)
    
    def extract_from_html(self, url: str, html: str) -> Product:
        """Build a Product from already-fetched HTML. Pure and deterministic."""
        self.logger.log_action("extract_product", "started", url=url)
        
        ctx = ExtractionContext(html=html, product_node=self._find_product_node(url, html))
        
        values: Dict[str, Any] = {}
        field_sources: Dict[str, str] = {}
        for field_name, strategies in FIELD_STRATEGIES.items():
            value, source = self._resolve_field(ctx, strategies)
            if source:
                values[field_name] = value
                field_sources[field_name] = source
        
        if not values.get("name"):
            self.logger.log_error(
                "No product name found in structured data or meta tags",
                error_type="extraction_incomplete",
                url=url
            )
            raise ExtractionIncomplete(
                "Unable to extract product information from Mercado Libre page"
            )
        
        price, currency = values.get("price") or (None, None)
        product = Product(
            name=values["name"],
            description=values.get("description"),
            price=price,
            currency=currency,
            images=values.get("images", []),
            url=url,
        )
        
        self.logger.log_extraction(
            url=url,
            field_sources=field_sources,
            fields_missing=product.get_missing_fields(),
        )
        
        return product
    
    def _find_product_node(self, url: str, html: str) -> Optional[Dict[str, Any]]:
        """Locate and resolve the JSON-LD Product node, or None."""
        candidates = locate_jsonld_blocks(html)
        try:
            node = resolve_product_node(candidates, self.max_depth)
        except NoStructuredData as e:
            self.logger.log_fallback(
                from_source=SOURCE_JSONLD,
                to_source=SOURCE_META,
                reason=e.message,
                url=url,
                candidates=len(candidates)
            )
            return None
        
        self.logger.log_decision(
            decision="use_jsonld_product",
            reason="Product node found in JSON-LD",
            url=url,
            candidates=len(candidates)
        )
        return node
    
    def _resolve_field(
        self, 
        ctx: ExtractionContext, 
        strategies: List[FieldStrategy]
    ) -> Tuple[Any, Optional[str]]:
        """Run strategies in order; return the first value and its source."""
        for strategy in strategies:
            value = strategy.extract(ctx)
            if value:
                return value, strategy.source
        return None, None
