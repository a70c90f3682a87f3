"""
Simple CSS selector matching over VisualNode trees.

Supports the compound-selector subset the pattern tables use:
    tag, *, .class, #id, [attr], [attr=v], [attr*=v], [attr^=v],
    [attr$=v], [attr~=v], the ` i` case flag, and comma-separated lists.
Combinators (descendant, child, sibling) are not supported.

Usage:
    matcher = compile_selector('h1, h2, a[href], [itemprop="name"]')
    titles = container.find_all(matcher)
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, List, Optional, Tuple

from .visual_node import VisualNode


class SelectorError(ValueError):
    """Raised when a selector uses syntax outside the supported subset."""


_TOKEN_RE = re.compile(
    r"""
    (?P<tag>^[a-zA-Z][a-zA-Z0-9-]*|^\*)
    |\.(?P<cls>-?[_a-zA-Z][_a-zA-Z0-9-]*)
    |\#(?P<id>-?[_a-zA-Z][_a-zA-Z0-9-]*)
    |\[\s*(?P<attr>[_a-zA-Z][_a-zA-Z0-9:-]*)\s*
        (?:(?P<op>[*^$~|]?=)\s*
            (?:"(?P<dq>[^"]*)"|'(?P<sq>[^']*)'|(?P<bare>[^\]\s]+))
            \s*(?P<flag>[iIsS])?\s*
        )?\]
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class AttrCondition:
    name: str
    op: Optional[str] = None
    value: str = ""
    ignore_case: bool = False

    def matches(self, node: VisualNode) -> bool:
        actual = node.get_attr(self.name)
        if actual is None:
            return False
        if self.op is None:
            return True
        expected = self.value
        if self.ignore_case:
            actual, expected = actual.lower(), expected.lower()
        if self.op == "=":
            return actual == expected
        if self.op == "*=":
            return bool(expected) and expected in actual
        if self.op == "^=":
            return bool(expected) and actual.startswith(expected)
        if self.op == "$=":
            return bool(expected) and actual.endswith(expected)
        if self.op == "~=":
            return expected in actual.split()
        if self.op == "|=":
            return actual == expected or actual.startswith(expected + "-")
        return False


@dataclass(frozen=True)
class CompoundSelector:
    tag: Optional[str] = None
    classes: Tuple[str, ...] = ()
    conditions: Tuple[AttrCondition, ...] = field(default_factory=tuple)

    def matches(self, node: VisualNode) -> bool:
        if self.tag and node.tag != self.tag:
            return False
        if self.classes:
            node_classes = node.classes
            if not all(c in node_classes for c in self.classes):
                return False
        return all(cond.matches(node) for cond in self.conditions)


def parse_compound(text: str) -> CompoundSelector:
    text = text.strip()
    if not text:
        raise SelectorError("Empty selector")
    tag = None
    classes: List[str] = []
    conditions: List[AttrCondition] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if not m or m.end() == pos:
            raise SelectorError(f"Unsupported selector syntax: {text!r}")
        if m.group("tag"):
            tag = None if m.group("tag") == "*" else m.group("tag").lower()
        elif m.group("cls"):
            classes.append(m.group("cls"))
        elif m.group("id"):
            conditions.append(AttrCondition("id", "=", m.group("id")))
        else:
            op = m.group("op")
            value = next((v for v in (m.group("dq"), m.group("sq"), m.group("bare")) if v is not None), "")
            flag = (m.group("flag") or "").lower()
            conditions.append(AttrCondition(m.group("attr").lower(), op, value, flag == "i"))
        pos = m.end()
    return CompoundSelector(tag=tag, classes=tuple(classes), conditions=tuple(conditions))


@lru_cache(maxsize=128)
def parse_selector_list(selector: str) -> Tuple[CompoundSelector, ...]:
    parts = [p for p in selector.split(",") if p.strip()]
    if not parts:
        raise SelectorError("Empty selector list")
    return tuple(parse_compound(p) for p in parts)


def compile_selector(selector: str) -> Callable[[VisualNode], bool]:
    """Return a predicate matching nodes against a comma-separated selector list."""
    compounds = parse_selector_list(selector)

    def _matches(node: VisualNode) -> bool:
        return any(c.matches(node) for c in compounds)

    return _matches
