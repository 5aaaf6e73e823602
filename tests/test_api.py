"""Tests for the FastAPI endpoints in app.main."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

import app.main as main
from tests._helpers import PRODUCT_URL, RecordingHandler, html_page, jsonld_block, make_layer

WIDGET_PAGE = html_page(
    jsonld_block(
        {
            "@type": "Product",
            "name": "Widget",
            "image": ["a.jpg", "b.jpg"],
            "offers": {"price": 10.5, "priceCurrency": "ARS"},
        }
    )
)


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler(WIDGET_PAGE)


@pytest.fixture
def client(handler, monkeypatch) -> TestClient:
    monkeypatch.setattr(main, "extraction_layer", make_layer(handler))
    return TestClient(main.app)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_extract_success_returns_flat_record(client):
    response = client.post("/api/products/extract", json={"url": PRODUCT_URL})
    assert response.status_code == 200
    assert response.json() == {
        "name": "Widget",
        "price": 10.5,
        "currency": "ARS",
        "images": ["a.jpg", "b.jpg"],
        "url": PRODUCT_URL,
    }
    assert response.headers["X-Trace-Id"]


def test_partial_record_is_success(client, handler):
    handler.html = html_page('<meta property="og:title" content="Solo nombre">')
    response = client.post("/api/products/extract", json={"url": PRODUCT_URL})
    assert response.status_code == 200
    assert response.json() == {"name": "Solo nombre", "images": [], "url": PRODUCT_URL}


@pytest.mark.parametrize("body", [{}, {"url": ""}, {"url": "   "}, {"url": 42}, {"url": None}])
def test_missing_url_is_client_error(client, handler, body):
    response = client.post("/api/products/extract", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "Missing Mercado Libre URL"}
    assert handler.requests == []


def test_malformed_body_is_client_error(client):
    response = client.post(
        "/api/products/extract",
        content="not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert set(response.json()) == {"error"}


def test_foreign_host_is_client_error(client, handler):
    response = client.post("/api/products/extract", json={"url": "https://www.amazon.com/dp/B0"})
    assert response.status_code == 400
    assert response.json() == {"error": "Provided URL is not a Mercado Libre product page"}
    assert handler.requests == []


def test_fetch_failure_is_server_error(client, handler):
    handler.status_code = 404
    response = client.post("/api/products/extract", json={"url": PRODUCT_URL})
    assert response.status_code == 500
    body = response.json()
    assert set(body) == {"error"}
    assert "404" in body["error"]


def test_missing_name_is_server_error(client, handler):
    handler.html = html_page('<meta property="og:image" content="a.jpg">')
    response = client.post("/api/products/extract", json={"url": PRODUCT_URL})
    assert response.status_code == 500
    assert response.json() == {"error": "Unable to extract product information from Mercado Libre page"}


def test_unexpected_error_hides_details(client, monkeypatch):
    async def boom(url):
        raise RuntimeError("internal state leaked")

    monkeypatch.setattr(main.extraction_layer, "extract", boom)
    response = client.post("/api/products/extract", json={"url": PRODUCT_URL})
    assert response.status_code == 500
    assert json.loads(response.text) == {"error": "Unable to fetch product details"}
