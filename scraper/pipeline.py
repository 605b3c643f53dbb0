import concurrent.futures
import logging
from typing import List, Optional, Tuple, Union

from bs4 import Tag

from models import ExtractionFailure, ExtractionResult, ExtractionStats, Product, Rejection
from scraper.block_locator import BlockLocator
from scraper.record_extractor import RecordExtractor

logger = logging.getLogger(__name__)

Outcome = Union[Product, Rejection, ExtractionFailure]


class ExtractionPipeline:
    """
    Markup in, ordered Products out. No network, no state kept between calls.

    With `max_workers` above 1, blocks are extracted on a thread pool and the
    outcomes are put back in document order before ids are handed out, so the
    result is identical to a sequential run.
    """

    def __init__(
        self,
        locator: Optional[BlockLocator] = None,
        extractor: Optional[RecordExtractor] = None,
        max_workers: int = 1,
    ):
        self.locator = locator or BlockLocator()
        self.extractor = extractor or RecordExtractor()
        self.max_workers = max(1, max_workers)

    def extract_all(self, markup) -> ExtractionResult:
        blocks = list(self.locator.locate(markup))
        result = ExtractionResult(stats=ExtractionStats(located=len(blocks)))

        if self.max_workers > 1 and len(blocks) > 1:
            outcomes = self._extract_parallel(blocks)
        else:
            outcomes = self._extract_sequential(blocks)

        next_id = 1
        for outcome in outcomes:
            if isinstance(outcome, Product):
                outcome.id = next_id
                next_id += 1
                result.products.append(outcome)
            elif isinstance(outcome, Rejection):
                result.stats.rejected += 1
            else:
                result.stats.failed += 1
                result.failures.append(outcome)
        result.stats.accepted = len(result.products)

        logger.info(
            f"Extracted {result.stats.accepted}/{result.stats.located} products "
            f"(rejected={result.stats.rejected}, failed={result.stats.failed})"
        )
        return result

    def _extract_sequential(self, blocks: List[Tag]) -> List[Outcome]:
        outcomes: List[Outcome] = []
        next_id = 1
        for index, block in enumerate(blocks):
            outcome = self.extractor.extract(block, ordinal=next_id, index=index)
            if isinstance(outcome, Product):
                next_id += 1
            outcomes.append(outcome)
        return outcomes

    def _extract_parallel(self, blocks: List[Tag]) -> List[Outcome]:
        indexed: List[Tuple[int, Outcome]] = []
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_index = {
                executor.submit(self.extractor.extract, block, 0, index): index
                for index, block in enumerate(blocks)
            }
            for future in concurrent.futures.as_completed(future_to_index):
                indexed.append((future_to_index[future], future.result()))
        # completion order is arbitrary; ids follow document order
        indexed.sort(key=lambda pair: pair[0])
        return [outcome for _, outcome in indexed]
