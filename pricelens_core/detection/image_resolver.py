"""
Image Resolver - Pick the product image in a container and resolve its URL
"""

import re
from typing import Optional

from ..config import Config, config as default_config
from ..dom.visual_node import VisualNode
from . import patterns


class ImageResolver:
    """
    Locate the first qualifying product image inside a container.

    An image qualifies when it is visible, its rendered width and height
    both exceed image_min_size, and it shows at least one sign of carrying
    real content: a non-placeholder src, a lazy-load marker, a srcset, or
    natural dimensions above image_min_natural_size.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or default_config

    def find(self, container: VisualNode) -> Optional[VisualNode]:
        for img in container.find_all(patterns.is_image):
            if self.qualifies(img):
                return img
        return None

    def qualifies(self, img: VisualNode) -> bool:
        floor = self.config.image_min_size
        if not img.visible or img.offset_width <= floor or img.offset_height <= floor:
            return False
        if not patterns.is_placeholder_source(img.get_attr("src")):
            return True
        if has_lazy_marker(img):
            return True
        if img.get_attr("srcset"):
            return True
        natural = self.config.image_min_natural_size
        return img.natural_width > natural and img.natural_height > natural

    @staticmethod
    def resolve_url(img: VisualNode) -> str:
        """
        Most reliable URL for the image.

        Precedence: real src, lazy-load data attributes, last srcset entry
        (usually the largest). Falls back to "N/A".
        """
        url = img.get_attr("src")
        if patterns.is_placeholder_source(url):
            url = lazy_source(img)
        if not url or patterns.is_data_uri(url):
            url = last_srcset_entry(img.get_attr("srcset")) or url
        if not url or patterns.is_data_uri(url):
            return patterns.NOT_AVAILABLE
        return url.strip()


def has_lazy_marker(img: VisualNode) -> bool:
    if (img.get_attr("loading") or "").lower() == "lazy":
        return True
    return lazy_source(img) is not None


def lazy_source(img: VisualNode) -> Optional[str]:
    for attr in patterns.LAZY_SOURCE_ATTRIBUTES:
        value = img.get_attr(attr)
        if value and value.strip():
            return value.strip()
    return None


_SRCSET_URL = re.compile(r"[\s,]*(\S*)")


def last_srcset_entry(srcset: Optional[str]) -> Optional[str]:
    """
    URL of the last srcset candidate.

    A candidate URL is a run of non-whitespace (commas inside it are kept,
    trailing commas end the candidate); its descriptors run to the next comma.
    """
    if not srcset:
        return None
    urls = []
    pos = 0
    while pos < len(srcset):
        m = _SRCSET_URL.match(srcset, pos)
        url = m.group(1)
        if not url:
            break
        pos = m.end()
        if url.endswith(","):
            url = url.rstrip(",")
        else:
            comma = srcset.find(",", pos)
            pos = len(srcset) if comma == -1 else comma + 1
        if url:
            urls.append(url)
    return urls[-1] if urls else None
