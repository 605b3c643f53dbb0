import re
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Optional, Tuple

from bs4 import Tag
from soupsieve import SelectorSyntaxError

from errors import ExtractionContractViolation
from models import TITLE_UNAVAILABLE, UNAVAILABLE, Unavailable
from utils import (
    IMAGE_SOURCE_PATTERN,
    absolute_url,
    clean_price,
    clean_text,
    normalize_image_url,
    parse_rating,
    parse_review_count,
)

DEFAULT_ORIGIN = "https://www.amazon.com"


@dataclass(frozen=True)
class Candidate:
    """One locator: a CSS selector plus what to read from the first match."""

    selector: str
    attribute: Optional[str] = None  # None reads the element text
    accept: Optional[re.Pattern] = None  # raw values not matching are skipped like a missing element

    def extract(self, block: Tag) -> Optional[str]:
        try:
            element = block.select_one(self.selector)
        except SelectorSyntaxError as exc:
            raise ExtractionContractViolation(f"invalid selector {self.selector!r}: {exc}") from exc
        if element is None:
            return None
        if self.attribute is None:
            raw = element.get_text()
        else:
            raw = element.get(self.attribute)
            if isinstance(raw, list):  # multi-valued attributes such as class
                raw = " ".join(raw)
        if raw is None or not raw.strip():
            return None
        if self.accept is not None and not self.accept.match(raw):
            return None
        return raw


@dataclass(frozen=True)
class FieldSpec:
    name: str
    candidates: Tuple[Candidate, ...]
    normalize: Callable[[str], Any]  # returns None when the raw text does not match
    missing: Unavailable = UNAVAILABLE


class FieldResolver:
    def resolve(self, block: Tag, spec: FieldSpec) -> Any:
        """
        Walk the candidates in priority order. The first one that yields raw
        text decides the field: its normalized value, or `spec.missing` when
        normalization fails. Later candidates are not consulted.
        """
        if not isinstance(block, Tag):
            raise ExtractionContractViolation(f"block must be a parsed element, got {type(block).__name__}")
        if not isinstance(spec, FieldSpec):
            raise ExtractionContractViolation(f"field spec expected, got {type(spec).__name__}")

        for candidate in spec.candidates:
            raw = candidate.extract(block)
            if raw is None:
                continue
            value = spec.normalize(raw)
            return spec.missing if value is None else value
        return spec.missing


def build_field_specs(origin: str = DEFAULT_ORIGIN) -> Dict[str, FieldSpec]:
    """Field specs for Amazon search-result cards, keyed by Product attribute."""
    return {
        "title": FieldSpec(
            name="title",
            candidates=(
                Candidate("h2 a span"),
                Candidate(".s-title-instructions-style span"),
            ),
            normalize=clean_text,
            missing=TITLE_UNAVAILABLE,
        ),
        "rating": FieldSpec(
            name="rating",
            candidates=(Candidate(".a-icon-alt"),),
            normalize=parse_rating,
        ),
        "review_count": FieldSpec(
            name="review_count",
            candidates=(Candidate(".a-size-base"),),
            normalize=parse_review_count,
        ),
        "image_url": FieldSpec(
            name="image_url",
            candidates=(
                Candidate(".s-image", attribute="src", accept=IMAGE_SOURCE_PATTERN),
                Candidate(".s-image", attribute="data-src", accept=IMAGE_SOURCE_PATTERN),  # lazy-loaded cards
            ),
            normalize=partial(normalize_image_url, origin=origin),
        ),
        "price": FieldSpec(
            name="price",
            candidates=(
                Candidate(".a-price-whole"),
                Candidate(".a-offscreen"),
            ),
            normalize=clean_price,
        ),
        "product_url": FieldSpec(
            name="product_url",
            candidates=(Candidate("h2 a", attribute="href"),),
            normalize=partial(absolute_url, origin=origin),
        ),
    }
