"""
Visual Node - Read-only view over a rendered document tree

The detection engine only talks to this interface, so the same code runs
against a live page snapshot (captured through Playwright) or a hand-built
fixture tree in tests.
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Protocol, Union


class VisualNode(Protocol):
    """Capability set the detector needs from a document node."""

    tag: str
    text: str
    attrs: Dict[str, str]
    offset_width: float
    offset_height: float
    visible: bool
    natural_width: float
    natural_height: float
    parent: Optional["VisualNode"]
    children: List["VisualNode"]

    @property
    def classes(self) -> List[str]: ...

    @property
    def has_area(self) -> bool: ...

    def get_attr(self, name: str) -> Optional[str]: ...

    def has_attr(self, name: str) -> bool: ...

    def closest(self, predicate: Callable[["VisualNode"], bool],
                max_depth: Optional[int] = None) -> Optional["VisualNode"]: ...

    def find_all(self, predicate: Callable[["VisualNode"], bool]) -> List["VisualNode"]: ...

    def iter_tree(self) -> Iterator["VisualNode"]: ...

    def contains(self, other: "VisualNode") -> bool: ...


class SnapshotNode:
    """
    Concrete VisualNode built from a DOM snapshot.

    Snapshot format (one dict per element):
        {
            "tag": "div",
            "text": "rendered innerText",
            "attrs": {"class": "card", "data-price": "19.99"},
            "width": 300, "height": 200,
            "visible": true,
            "natural_width": 0, "natural_height": 0,
            "index": 17,
            "children": [...]
        }

    Nodes compare by identity; two snapshots of the same page never share nodes.
    """

    __slots__ = (
        "tag", "text", "attrs", "offset_width", "offset_height", "visible",
        "natural_width", "natural_height", "index", "parent", "children",
    )

    def __init__(
        self,
        tag: str,
        text: str = "",
        attrs: Optional[Dict[str, str]] = None,
        width: float = 0,
        height: float = 0,
        visible: bool = True,
        natural_width: float = 0,
        natural_height: float = 0,
        index: Optional[int] = None,
        children: Optional[List["SnapshotNode"]] = None,
    ):
        self.tag = (tag or "").lower()
        self.text = text or ""
        self.attrs = {str(k).lower(): "" if v is None else str(v) for k, v in (attrs or {}).items()}
        self.offset_width = width or 0
        self.offset_height = height or 0
        self.visible = bool(visible)
        self.natural_width = natural_width or 0
        self.natural_height = natural_height or 0
        self.index = index
        self.parent: Optional[SnapshotNode] = None
        self.children: List[SnapshotNode] = []
        for child in children or []:
            self.append(child)

    def __repr__(self) -> str:
        cls = self.attrs.get("class")
        label = f"{self.tag}.{cls.split()[0]}" if cls and cls.split() else self.tag
        return f"<SnapshotNode {label} {self.offset_width}x{self.offset_height}>"

    def append(self, child: "SnapshotNode") -> "SnapshotNode":
        child.parent = self
        self.children.append(child)
        return child

    @property
    def classes(self) -> List[str]:
        return self.attrs.get("class", "").split()

    @property
    def has_area(self) -> bool:
        return self.offset_width > 0 and self.offset_height > 0

    def get_attr(self, name: str) -> Optional[str]:
        return self.attrs.get(name.lower())

    def has_attr(self, name: str) -> bool:
        return name.lower() in self.attrs

    def closest(self, predicate: Callable[["SnapshotNode"], bool],
                max_depth: Optional[int] = None) -> Optional["SnapshotNode"]:
        """
        Nearest node, starting with self, that satisfies predicate.

        max_depth limits how many nodes are inspected (self counts as one);
        None walks to the root.
        """
        current: Optional[SnapshotNode] = self
        inspected = 0
        while current is not None:
            if max_depth is not None and inspected >= max_depth:
                return None
            if predicate(current):
                return current
            inspected += 1
            current = current.parent
        return None

    def iter_tree(self) -> Iterator["SnapshotNode"]:
        """Self, then all descendants in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_all(self, predicate: Callable[["SnapshotNode"], bool]) -> List["SnapshotNode"]:
        """Descendants (self excluded) matching predicate, in document order."""
        it = self.iter_tree()
        next(it)
        return [node for node in it if predicate(node)]

    def contains(self, other: "SnapshotNode") -> bool:
        node: Optional[SnapshotNode] = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False


def build_tree(data: Dict[str, Any]) -> SnapshotNode:
    """Build a SnapshotNode tree from a nested snapshot dict."""
    # Iterative so that deeply nested real-world pages don't hit the recursion limit
    root = _node_from_dict(data)
    stack = [(root, data.get("children") or [])]
    while stack:
        parent, raw_children = stack.pop()
        for raw in raw_children:
            child = parent.append(_node_from_dict(raw))
            if raw.get("children"):
                stack.append((child, raw["children"]))
    return root


def _node_from_dict(data: Dict[str, Any]) -> SnapshotNode:
    return SnapshotNode(
        tag=data.get("tag", ""),
        text=data.get("text", ""),
        attrs=data.get("attrs") or {},
        width=data.get("width", 0),
        height=data.get("height", 0),
        visible=data.get("visible", True),
        natural_width=data.get("natural_width", 0),
        natural_height=data.get("natural_height", 0),
        index=data.get("index"),
    )


def load_snapshot(source: Union[str, Path]) -> SnapshotNode:
    """Load a snapshot tree from a JSON file written by capture_snapshot()."""
    raw = json.loads(Path(source).read_text(encoding="utf-8"))
    if isinstance(raw, dict) and "root" in raw:
        raw = raw["root"]
    if not isinstance(raw, dict):
        raise ValueError(f"Snapshot must be a JSON object, got {type(raw).__name__}")
    return build_tree(raw)
