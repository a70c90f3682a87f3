"""
pricelens_core package: product detection on rendered pages

Finds product cards on an unseen page by correlating a price, an image
and a title inside a card-sized element, while skipping review and rating
blocks.

Usage:
    # Offline, on a snapshot tree
    from pricelens_core import ProductDetector, load_snapshot
    result = ProductDetector().detect(load_snapshot("page.json"))

    # Live page (Playwright)
    from pricelens_core import run_on_url
    status = asyncio.run(run_on_url("https://shop.example.com"))
"""
from .config import Config, config
from .dom import SnapshotNode, VisualNode, build_tree, load_snapshot
from .detection import (
    DetectionResult,
    ProductDetector,
    ProductMatch,
    ProductRecord,
    detect_products,
)
from .data_export import DataExporter
from .runner import PassStatus, run_detection, run_on_snapshot, run_on_url

__all__ = [
    "Config",
    "config",
    "SnapshotNode",
    "VisualNode",
    "build_tree",
    "load_snapshot",
    "DetectionResult",
    "ProductDetector",
    "ProductMatch",
    "ProductRecord",
    "detect_products",
    "DataExporter",
    "PassStatus",
    "run_detection",
    "run_on_snapshot",
    "run_on_url",
]
