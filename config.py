import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    """
    Runtime settings, read from the environment (or a .env file).

    Attributes:
        SCRAPER_ORIGIN: Site origin used for search URLs and to absolutize product links
        FETCH_TIMEOUT: Seconds before the page fetch gives up
        ACCEPT_LANGUAGE: Accept-Language header sent with the fetch
        USER_AGENT: Browser User-Agent sent with the fetch
        EXTRACTION_WORKERS: Threads used to extract blocks (1 = sequential)
        PORT: Port for the HTTP API
        LOG_LEVEL: Root logging level
    """
    SCRAPER_ORIGIN: str = os.getenv("SCRAPER_ORIGIN", "https://www.amazon.com")
    FETCH_TIMEOUT: float = float(os.getenv("FETCH_TIMEOUT", "10"))
    ACCEPT_LANGUAGE: str = os.getenv("ACCEPT_LANGUAGE", "es-ES,es;q=0.9,en;q=0.8")
    USER_AGENT: str = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    )
    EXTRACTION_WORKERS: int = int(os.getenv("EXTRACTION_WORKERS", "1"))
    PORT: int = int(os.getenv("PORT", "3001"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


config = Config()


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
