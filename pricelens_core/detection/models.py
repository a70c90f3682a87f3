from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from ..dom.visual_node import VisualNode


class ClimbOutcome(Enum):
    """Terminal state of the per-candidate climb."""
    CONTAINER_FOUND = "container_found"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class ProductRecord:
    """Detected product (title, price, image URL or "N/A")"""
    title: str
    price: str
    image_url: str

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "price": self.price, "imageUrl": self.image_url}


@dataclass(frozen=True)
class ProductMatch:
    """A record with the nodes it was built from; doubles as the highlight request."""
    record: ProductRecord
    container: VisualNode
    image: VisualNode
    title: VisualNode
    price: VisualNode


@dataclass
class DetectionResult:
    matches: List[ProductMatch] = field(default_factory=list)
    candidates: int = 0

    @property
    def records(self) -> List[ProductRecord]:
        return [m.record for m in self.matches]

    def __len__(self) -> int:
        return len(self.matches)

    def __bool__(self) -> bool:
        return bool(self.matches)
