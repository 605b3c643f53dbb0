import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from config import config
from errors import ScraperError, ValidationError
from models import ExtractionResult
from scraper.fetcher import AmazonFetcher
from scraper.field_resolver import build_field_specs
from scraper.pipeline import ExtractionPipeline
from scraper.record_extractor import RecordExtractor

logger = logging.getLogger(__name__)

BLOCK_PAGE_MARKERS = ("captcha", "enter the characters", "robot check")


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def success_response(keyword: str, result: ExtractionResult) -> Dict[str, Any]:
    return {
        "success": True,
        "keyword": keyword,
        "totalProducts": len(result.products),
        "products": result.to_dicts(),
        "stats": result.stats.to_dict(),
        "timestamp": utc_timestamp(),
    }


def failure_response(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message}


def looks_blocked(markup: str) -> bool:
    text = (markup or "").lower()
    return any(marker in text for marker in BLOCK_PAGE_MARKERS)


class ScrapeService:
    def __init__(
        self,
        fetcher: Optional[AmazonFetcher] = None,
        pipeline: Optional[ExtractionPipeline] = None,
    ):
        self.fetcher = fetcher or AmazonFetcher()
        self.pipeline = pipeline or ExtractionPipeline(
            extractor=RecordExtractor(field_specs=build_field_specs(self.fetcher.origin)),
            max_workers=config.EXTRACTION_WORKERS,
        )

    def validate_keyword(self, keyword: Optional[str]) -> str:
        if keyword is None or not str(keyword).strip():
            raise ValidationError("The keyword parameter is required")
        return str(keyword).strip()

    def run(self, keyword: Optional[str]) -> ExtractionResult:
        """Validate, fetch and extract. Raises ValidationError or TransportError."""
        keyword = self.validate_keyword(keyword)
        logger.info(f"Scraping search results for: {keyword}")
        markup = self.fetcher.fetch_search_page(keyword)
        result = self.pipeline.extract_all(markup)
        if result.stats.located == 0 and looks_blocked(markup):
            logger.warning("No result blocks found and the page looks like a bot check")
        return result

    def scrape(self, keyword: Optional[str]) -> Dict[str, Any]:
        try:
            result = self.run(keyword)
        except ScraperError as exc:
            logger.error(f"Scrape failed for {keyword!r}: {exc}")
            return failure_response(str(exc))
        return success_response(self.validate_keyword(keyword), result)
