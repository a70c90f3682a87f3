"""
Shared fixtures: small synthetic page trees.

Node text defaults to the children's text joined by newlines, which is
how innerText reads for block layouts, so wrappers "see" their children's
prices and titles the way they do on a real page.
"""

import pytest

from pricelens_core.config import Config
from pricelens_core.dom.visual_node import SnapshotNode


def el(tag, text=None, attrs=None, w=0, h=0, children=(), visible=True, natural=(0, 0)):
    children = list(children)
    if text is None:
        text = "\n".join(c.text for c in children if c.text)
    return SnapshotNode(
        tag=tag,
        text=text,
        attrs=attrs or {},
        width=w,
        height=h,
        visible=visible,
        natural_width=natural[0],
        natural_height=natural[1],
        children=children,
    )


def card(title="Wireless Mouse", price="$19.99", src="a.jpg", w=300, h=200, card_attrs=None):
    """A product card: image, heading, price span."""
    return el("div", attrs=card_attrs or {"class": "card"}, w=w, h=h, children=[
        el("img", "", {"src": src}, 120, 120),
        el("h3", title, w=250, h=24),
        el("span", price, {"class": "price"}, 60, 18),
    ])


def page(*children, w=1280, h=4000):
    return el("body", w=w, h=h, children=children)


@pytest.fixture
def make_el():
    return el


@pytest.fixture
def make_card():
    return card


@pytest.fixture
def make_page():
    return page


@pytest.fixture
def cfg():
    """Detection config with the stock thresholds, independent of env vars."""
    return Config(
        skip_highlighted=False,
        max_price_text_length=50,
        review_climb_depth=6,
        max_climb_depth=10,
        container_min_width=100,
        container_max_width=1000,
        container_min_height=100,
        container_max_height=1500,
        image_min_size=60,
        image_min_natural_size=50,
        title_min_length=5,
        title_max_length=200,
    )
