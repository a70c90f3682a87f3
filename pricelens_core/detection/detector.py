"""
Product Detector - One detection pass over a document

Pipeline:
1. PriceCandidateScanner → ordered price candidates
2. ContainerClimber → innermost card holding image + title per candidate
3. RecordBuilder → claim card, build record, request highlighting

Claims are made in scan order, so a later candidate never reuses a card
claimed by an earlier one.
"""

from typing import Callable, List, Optional

from ..config import Config, config as default_config
from ..diagnostics import get_logger
from ..dom.snapshot import CONTAINER_MARKER_CLASS
from ..dom.visual_node import VisualNode
from .container_climber import ClaimedSet, ClimbResult, ContainerClimber
from .image_resolver import ImageResolver
from .models import DetectionResult, ProductMatch, ProductRecord
from .price_scanner import PriceCandidateScanner

logger = get_logger(__name__)

Highlighter = Callable[[ProductMatch], None]


class RecordBuilder:
    """Turn a successful climb into a record and claim its container."""

    def __init__(self, claimed: ClaimedSet, highlighter: Optional[Highlighter] = None):
        self.claimed = claimed
        self.highlighter = highlighter

    def build(self, price_node: VisualNode, climb: ClimbResult) -> ProductMatch:
        self.claimed.claim(climb.container)
        record = ProductRecord(
            title=climb.title.text.strip(),
            price=price_node.text.strip(),
            image_url=ImageResolver.resolve_url(climb.image),
        )
        match = ProductMatch(
            record=record,
            container=climb.container,
            image=climb.image,
            title=climb.title,
            price=price_node,
        )
        if self.highlighter is not None:
            self.highlighter(match)
        return match


class ProductDetector:
    """
    Detect product records in a VisualNode tree.

    Usage:
        detector = ProductDetector()
        result = detector.detect(root)
        for record in result.records:
            print(record.title, record.price, record.image_url)
    """

    def __init__(self, config: Optional[Config] = None, run_logger=None):
        self.config = config or default_config
        self.scanner = PriceCandidateScanner(self.config)
        self.climber = ContainerClimber(self.config)
        self.run_logger = run_logger

    def _log(self, msg: str):
        logger.info(msg)
        if self.run_logger:
            self.run_logger.log_text(msg)

    def detect(self, root: VisualNode, highlighter: Optional[Highlighter] = None) -> DetectionResult:
        claimed = ClaimedSet()
        if self.config.skip_highlighted:
            self._preclaim_highlighted(root, claimed)

        builder = RecordBuilder(claimed, highlighter)
        candidates = self.scanner.scan(root)
        self._log(f"Found {len(candidates)} potential price element(s)")

        matches: List[ProductMatch] = []
        for price_node in candidates:
            climb = self.climber.climb(price_node, claimed)
            if not climb.found:
                continue
            matches.append(builder.build(price_node, climb))

        self._log(f"Detection complete. Products found: {len(matches)}")
        if self.run_logger and matches:
            self.run_logger.log_table(
                ["Title", "Price", "Image"],
                [[m.record.title, m.record.price, m.record.image_url] for m in matches],
                "Detected products",
            )
        return DetectionResult(matches=matches, candidates=len(candidates))

    def _preclaim_highlighted(self, root: VisualNode, claimed: ClaimedSet) -> None:
        for node in root.iter_tree():
            if CONTAINER_MARKER_CLASS in node.classes:
                claimed.claim(node)
        if len(claimed):
            logger.debug(f"Skipping {len(claimed)} container(s) highlighted by a previous pass")


def detect_products(root: VisualNode, config: Optional[Config] = None) -> List[ProductRecord]:
    """Run a single detection pass and return the records in discovery order."""
    return ProductDetector(config).detect(root).records
