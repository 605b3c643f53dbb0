import logging
from typing import Dict, Optional, Union

from bs4 import Tag

from errors import ExtractionContractViolation
from models import TITLE_UNAVAILABLE, ExtractionFailure, Product, Rejection
from scraper.field_resolver import DEFAULT_ORIGIN, FieldResolver, FieldSpec, build_field_specs

logger = logging.getLogger(__name__)

OPTIONAL_FIELDS = ("rating", "review_count", "image_url", "price", "product_url")


class RecordExtractor:
    def __init__(
        self,
        field_specs: Optional[Dict[str, FieldSpec]] = None,
        resolver: Optional[FieldResolver] = None,
        origin: str = DEFAULT_ORIGIN,
    ):
        self.field_specs = field_specs or build_field_specs(origin)
        self.resolver = resolver or FieldResolver()

    def extract(self, block: Tag, ordinal: int, index: int = 0) -> Union[Product, Rejection, ExtractionFailure]:
        """
        Build one Product from a block.

        A block without a title is rejected (not an error). A block whose
        fields cannot be resolved at all is reported as a failure so the
        caller can count it and move on to the next block.
        """
        try:
            title = self.resolver.resolve(block, self.field_specs["title"])
            if title is TITLE_UNAVAILABLE:
                return Rejection(index=index)
            values = {name: self.resolver.resolve(block, self.field_specs[name]) for name in OPTIONAL_FIELDS}
        except ExtractionContractViolation as exc:
            logger.warning(f"Skipping block {index}: {exc}")
            return ExtractionFailure(index=index, reason=str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.warning(f"Error processing block {index}: {exc}")
            return ExtractionFailure(index=index, reason=f"{type(exc).__name__}: {exc}")

        return Product(id=ordinal, title=title, **values)
