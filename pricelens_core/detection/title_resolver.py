from typing import Optional

from ..config import Config, config as default_config
from ..dom.visual_node import VisualNode
from . import patterns


class TitleResolver:
    """Find the title node accompanying a price inside a container."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or default_config

    def find(self, container: VisualNode, price_node: VisualNode) -> Optional[VisualNode]:
        for node in container.find_all(patterns.is_title_target):
            if self.qualifies(node, price_node):
                return node
        return None

    def qualifies(self, node: VisualNode, price_node: VisualNode) -> bool:
        text = (node.text or "").strip()
        if not (self.config.title_min_length <= len(text) <= self.config.title_max_length):
            return False
        # A wrapper around the price is not its title
        if node.contains(price_node):
            return False
        if patterns.looks_like_price(text) or patterns.is_purely_numeric(text):
            return False
        if patterns.looks_like_review(text):
            return False
        return node.visible and node.has_area
