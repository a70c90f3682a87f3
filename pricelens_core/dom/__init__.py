"""
DOM - Document tree abstraction and live-page glue

Usage:
    from pricelens_core.dom import build_tree, capture_snapshot

    root = build_tree(await capture_snapshot(page))
"""

from .visual_node import VisualNode, SnapshotNode, build_tree, load_snapshot
from .selectors import SelectorError, compile_selector
from .snapshot import PageHighlighter, capture_snapshot, show_notification

__all__ = [
    'VisualNode',
    'SnapshotNode',
    'build_tree',
    'load_snapshot',
    'SelectorError',
    'compile_selector',
    'PageHighlighter',
    'capture_snapshot',
    'show_notification',
]
