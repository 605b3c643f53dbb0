import logging
from typing import Dict, Optional
from urllib.parse import quote_plus

import requests

from config import config
from errors import TransportError

logger = logging.getLogger(__name__)


def browser_headers(user_agent: str = config.USER_AGENT, accept_language: str = config.ACCEPT_LANGUAGE) -> Dict[str, str]:
    return {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": accept_language,
        "Accept-Encoding": "gzip, deflate, br",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
    }


class AmazonFetcher:
    def __init__(
        self,
        origin: str = config.SCRAPER_ORIGIN,
        timeout: float = config.FETCH_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None,
    ):
        self.origin = origin.rstrip("/")
        self.timeout = timeout
        self.headers = headers or browser_headers()
        self.session = session or requests.Session()

    def search_url(self, keyword: str) -> str:
        return f"{self.origin}/s?k={quote_plus(keyword)}&ref=sr_pg_1"

    def fetch(self, url: str) -> str:
        """GET the page and return its markup; any failure becomes a TransportError."""
        logger.info(f"Fetching {url}")
        try:
            resp = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.Timeout as exc:
            raise TransportError(f"Request timed out after {self.timeout:g}s: {url}") from exc
        except requests.RequestException as exc:
            raise TransportError(f"Request failed for {url}: {exc}") from exc
        if not resp.ok:
            raise TransportError(f"HTTP error ({resp.status_code}) for {url}")
        return resp.text

    def fetch_search_page(self, keyword: str) -> str:
        return self.fetch(self.search_url(keyword))
