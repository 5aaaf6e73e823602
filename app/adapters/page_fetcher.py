"""
Page Fetcher Adapter for the Marketplace Product Extractor.
Retrieves raw product page HTML with a browser-like request signature.
"""
from typing import Optional

import httpx

from app.config import config
from app.errors import FetchError
from app.utils.logger import LayerLogger


class PageFetcher:
    """
    Single-shot HTML fetcher.
    
    One GET per call, always fresh (no-cache headers), no retries.
    Timeouts come from REQUEST_TIMEOUT.
    """
    
    def __init__(
        self, 
        timeout: Optional[int] = None, 
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.transport = transport
        self.logger = LayerLogger("page_fetcher")
    
    async def fetch(self, url: str) -> str:
        """
        Fetch the HTML of a product page.
        
        Args:
            url: Validated absolute URL
        
        Returns:
            Response body as text
        
        Raises:
            FetchError: non-2xx status or network failure
        """
        self.logger.log_action("fetch_html", "started", url=url)
        
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, 
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(url, headers=self._get_headers())
                html = response.text
        except httpx.HTTPError as e:
            self.logger.log_error(
                f"Failed to fetch URL: {str(e)}",
                error_type="network_error",
                url=url
            )
            raise FetchError(
                f"Failed to fetch product page ({type(e).__name__}: {e})",
                cause=e,
            ) from e
        
        if not response.is_success:
            self.logger.log_error(
                "Non-success status while fetching product page",
                error_type="http_status",
                url=url,
                status_code=response.status_code
            )
            raise FetchError(
                f"Failed to fetch product page (status {response.status_code})",
                status_code=response.status_code,
            )
        
        self.logger.log_action(
            "fetch_html", 
            "completed", 
            url=url,
            status_code=response.status_code,
            content_length=len(html)
        )
        
        return html
    
    def _get_headers(self) -> dict:
        """Get request headers mimicking a browser, with caching disabled."""
        return {
            "User-Agent": config.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "es-AR,es;q=0.9,en;q=0.5",
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        }
