from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union


class Unavailable(Enum):
    FIELD = "No disponible"
    TITLE = "Título no disponible"  # only used to reject a block, never serialized

    def __repr__(self) -> str:
        return f"<Unavailable.{self.name}>"


UNAVAILABLE = Unavailable.FIELD
TITLE_UNAVAILABLE = Unavailable.TITLE
UNAVAILABLE_LABEL = UNAVAILABLE.value


def is_available(value: Any) -> bool:
    return not isinstance(value, Unavailable)


def serialize_value(value: Any) -> Any:
    return UNAVAILABLE_LABEL if isinstance(value, Unavailable) else value


@dataclass
class Product:
    id: int
    title: str
    rating: Union[float, Unavailable] = UNAVAILABLE
    review_count: Union[int, Unavailable] = UNAVAILABLE
    image_url: Union[str, Unavailable] = UNAVAILABLE
    price: Union[str, Unavailable] = UNAVAILABLE  # raw text, e.g. "$19.99"
    product_url: Union[str, Unavailable] = UNAVAILABLE

    def to_dict(self) -> Dict[str, Any]:
        """Flat camelCase object consumed by the API and the frontend."""
        return {
            "id": self.id,
            "title": self.title,
            "rating": serialize_value(self.rating),
            "reviewCount": serialize_value(self.review_count),
            "imageUrl": serialize_value(self.image_url),
            "price": serialize_value(self.price),
            "productUrl": serialize_value(self.product_url),
        }


@dataclass
class ExtractionFailure:
    index: int  # position of the block in document order
    reason: str


@dataclass
class Rejection:
    index: int
    reason: str = "title not available"


@dataclass
class ExtractionStats:
    located: int = 0
    accepted: int = 0
    rejected: int = 0  # blocks without a title
    failed: int = 0  # blocks that raised while resolving fields

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class ExtractionResult:
    products: List[Product] = field(default_factory=list)
    stats: ExtractionStats = field(default_factory=ExtractionStats)
    failures: List[ExtractionFailure] = field(default_factory=list)

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [product.to_dict() for product in self.products]
