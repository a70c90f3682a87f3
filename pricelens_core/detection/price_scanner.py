"""
Price Candidate Scanner - Find nodes that plausibly hold a price

Walks the scan universe (generic text-bearing tags plus nodes with a
semantic price attribute) in document order and keeps the nodes whose
text reads like a price and not like a rating or review.
"""

from typing import Iterator, List, Optional

from ..config import Config, config as default_config
from ..diagnostics import get_logger
from ..dom.visual_node import VisualNode
from . import patterns

logger = get_logger(__name__)


class PriceCandidateScanner:
    """
    Produce the ordered sequence of price candidates for a document.

    Filters, applied in order:
    1. visible with non-zero rendered area
    2. trimmed text non-empty and not longer than max_price_text_length
    3. not inside a review container (bounded climb, node itself included)
    4. no review-semantic attribute on the node
    5. text does not match the review pattern
    6. text matches the price pattern, or the node has a price attribute
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or default_config

    def scan(self, root: VisualNode) -> List[VisualNode]:
        candidates = list(self.iter_candidates(root))
        logger.debug(f"Found {len(candidates)} potential price elements after initial filtering")
        return candidates

    def iter_candidates(self, root: VisualNode) -> Iterator[VisualNode]:
        for node in root.iter_tree():
            if patterns.is_price_scan_target(node) and self.is_candidate(node):
                yield node

    def is_candidate(self, node: VisualNode) -> bool:
        if not node.visible or not node.has_area:
            return False

        text = (node.text or "").strip()
        if not text or len(text) > self.config.max_price_text_length:
            return False

        if self.in_review_container(node):
            return False

        if patterns.has_review_attribute(node):
            return False

        if patterns.looks_like_review(text):
            return False

        if patterns.looks_like_price(text):
            return True

        return patterns.has_price_attribute(node)

    def in_review_container(self, node: VisualNode) -> bool:
        found = node.closest(patterns.is_review_container, max_depth=self.config.review_climb_depth)
        return found is not None
