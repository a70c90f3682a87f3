"""
Detection - Product detection engine (no browser required)

Scans a VisualNode tree for price candidates, climbs to the product card
around each one and builds title/price/image records.
"""

from .patterns import looks_like_price, looks_like_review, NOT_AVAILABLE
from .price_scanner import PriceCandidateScanner
from .image_resolver import ImageResolver
from .title_resolver import TitleResolver
from .container_climber import ClaimedSet, ClimbResult, ContainerClimber
from .models import ClimbOutcome, DetectionResult, ProductMatch, ProductRecord
from .detector import CONTAINER_MARKER_CLASS, ProductDetector, RecordBuilder, detect_products

__all__ = [
    'looks_like_price',
    'looks_like_review',
    'NOT_AVAILABLE',
    'PriceCandidateScanner',
    'ImageResolver',
    'TitleResolver',
    'ClaimedSet',
    'ClimbResult',
    'ContainerClimber',
    'ClimbOutcome',
    'DetectionResult',
    'ProductMatch',
    'ProductRecord',
    'CONTAINER_MARKER_CLASS',
    'ProductDetector',
    'RecordBuilder',
    'detect_products',
]
