"""
Container Climber - Walk up from a price to the product card holding it

A product card is the innermost ancestor that has a plausible card size
and holds both a qualifying image and a qualifying title. Ancestors that
already back a record in this pass are skipped.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from ..config import Config, config as default_config
from ..diagnostics import get_logger
from ..dom.visual_node import VisualNode
from .image_resolver import ImageResolver
from .models import ClimbOutcome
from .title_resolver import TitleResolver

logger = get_logger(__name__)


class ClaimedSet:
    """Identity-keyed set of containers already bound to a record."""

    def __init__(self):
        self._ids = {}

    def __contains__(self, node: VisualNode) -> bool:
        return id(node) in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[VisualNode]:
        return iter(self._ids.values())

    def claim(self, node: VisualNode) -> None:
        if node in self:
            raise ValueError(f"Container already claimed: {node!r}")
        # Keep a reference so the id cannot be recycled while the pass runs
        self._ids[id(node)] = node


@dataclass
class ClimbResult:
    outcome: ClimbOutcome
    steps: int
    container: Optional[VisualNode] = None
    image: Optional[VisualNode] = None
    title: Optional[VisualNode] = None

    @property
    def found(self) -> bool:
        return self.outcome is ClimbOutcome.CONTAINER_FOUND


class ContainerClimber:
    def __init__(
        self,
        config: Optional[Config] = None,
        image_resolver: Optional[ImageResolver] = None,
        title_resolver: Optional[TitleResolver] = None,
    ):
        self.config = config or default_config
        self.image_resolver = image_resolver or ImageResolver(self.config)
        self.title_resolver = title_resolver or TitleResolver(self.config)

    def climb(self, price_node: VisualNode, claimed: ClaimedSet) -> ClimbResult:
        """
        Ascend at most max_climb_depth ancestors (parent first).

        The first ancestor that is unclaimed, within size bounds and holds
        both an image and a title wins; larger ancestors are not considered.
        """
        current = price_node
        steps = 0
        while steps < self.config.max_climb_depth and current.parent is not None:
            current = current.parent
            steps += 1

            if current in claimed:
                continue
            if not self.config.container_fits(current.offset_width, current.offset_height):
                continue

            image = self.image_resolver.find(current)
            if image is None:
                continue
            title = self.title_resolver.find(current, price_node)
            if title is None:
                continue

            logger.debug(f"Container found after {steps} step(s): {current!r}")
            return ClimbResult(ClimbOutcome.CONTAINER_FOUND, steps, current, image, title)

        logger.debug(f"Climb exhausted after {steps} step(s) for price {price_node.text.strip()!r}")
        return ClimbResult(ClimbOutcome.EXHAUSTED, steps)
