"""Shared HTML builders and fake transports for the extraction tests."""

from __future__ import annotations

import json

import httpx

from app.adapters.page_fetcher import PageFetcher
from app.layers.extraction import ProductExtractionLayer

PRODUCT_URL = "https://articulo.mercadolibre.com.ar/MLA-123456-widget-_JM"


def jsonld_block(data, raw: bool = False) -> str:
    """Wrap data (or raw text) in a JSON-LD script tag."""
    body = data if raw else json.dumps(data)
    return f'<script type="application/ld+json">{body}</script>'


def html_page(head: str = "", body: str = "") -> str:
    return f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"


class RecordingHandler:
    """httpx.MockTransport handler returning a fixed response and counting calls."""

    def __init__(self, html: str = "", status_code: int = 200):
        self.html = html
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            self.status_code,
            text=self.html,
            headers={"Content-Type": "text/html; charset=utf-8"},
        )


def make_layer(handler) -> ProductExtractionLayer:
    fetcher = PageFetcher(timeout=5, transport=httpx.MockTransport(handler))
    return ProductExtractionLayer(fetcher=fetcher)
