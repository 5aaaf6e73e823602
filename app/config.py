"""
Configuration management for the Marketplace Product Extractor.
Handles environment variables and application settings.
"""
import os
from dotenv import load_dotenv

load_dotenv()


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


class Config:
    """Application configuration loaded from environment variables."""
    
    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")  # json or console
    
    # Request settings
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))
    USER_AGENT: str = os.getenv("USER_AGENT", DEFAULT_USER_AGENT)
    
    # Marketplace host marker - hostnames must contain it
    MARKETPLACE_DOMAIN: str = os.getenv("MARKETPLACE_DOMAIN", "mercadolibre")
    
    # Extraction settings
    MAX_JSONLD_DEPTH: int = int(os.getenv("MAX_JSONLD_DEPTH", "64"))
    HTML_SCANNER: str = os.getenv("HTML_SCANNER", "regex")  # regex or soup
    
    @classmethod
    def is_soup_scanner(cls) -> bool:
        """Check if the BeautifulSoup scanner is selected instead of regex."""
        return cls.HTML_SCANNER.lower() == "soup"


config = Config()
