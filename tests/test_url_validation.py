"""Unit tests for app.layers.url_validation."""

from __future__ import annotations

import pytest

from app.errors import InvalidUrl
from app.layers.url_validation import validate_product_url


class TestValidProductUrls:
    def test_returns_normalized_url(self):
        url = "  HTTPS://Articulo.MercadoLibre.com.ar/MLA-1-widget-_JM?x=1#tab  "
        assert validate_product_url(url) == "https://articulo.mercadolibre.com.ar/MLA-1-widget-_JM?x=1#tab"

    def test_empty_path_gets_slash(self):
        assert validate_product_url("https://www.mercadolibre.com.mx") == "https://www.mercadolibre.com.mx/"

    def test_path_case_preserved(self):
        assert validate_product_url("http://mercadolibre.cl/MLC-99") == "http://mercadolibre.cl/MLC-99"

    def test_custom_domain_marker(self):
        assert validate_product_url("https://shop.example.com/p/1", domain_marker="example") == "https://shop.example.com/p/1"


class TestInvalidProductUrls:
    @pytest.mark.parametrize(
        "url",
        [
            "https://www.amazon.com/dp/B000",
            "https://example.com/mercadolibre/item",
            "https://evil.com?next=mercadolibre.com",
        ],
    )
    def test_foreign_host(self, url):
        with pytest.raises(InvalidUrl, match="not a Mercado Libre product page"):
            validate_product_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "articulo.mercadolibre.com.ar/MLA-1",
            "/MLA-1-widget",
            "ftp://mercadolibre.com.ar/file",
            "https://",
            "https://mercadolibre.com.ar:notaport/x",
        ],
    )
    def test_not_absolute_http_url(self, url):
        with pytest.raises(InvalidUrl, match="Invalid URL"):
            validate_product_url(url)

    @pytest.mark.parametrize("url", ["", "   ", None])
    def test_missing(self, url):
        with pytest.raises(InvalidUrl, match="Missing"):
            validate_product_url(url)
