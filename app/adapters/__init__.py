"""Adapters package initialization."""
from app.adapters.page_fetcher import PageFetcher

__all__ = ["PageFetcher"]
