"""
Tests for ContainerClimber: size bounds, claims, innermost-wins, climb limit.
"""

import pytest

from pricelens_core.detection import ClaimedSet, ClimbOutcome, ContainerClimber


def product_parts(make_el, title="Wireless Mouse", price_text="$19.99"):
    image = make_el("img", "", {"src": "a.jpg"}, 120, 120)
    heading = make_el("h3", title, w=250, h=24)
    price = make_el("span", price_text, w=60, h=18)
    return image, heading, price


class TestClimb:

    def test_parent_is_first_step(self, cfg, make_el, make_page):
        image, heading, price = product_parts(make_el)
        card = make_el("div", w=300, h=200, children=[image, heading, price])
        make_page(card)

        result = ContainerClimber(cfg).climb(price, ClaimedSet())
        assert result.outcome is ClimbOutcome.CONTAINER_FOUND
        assert result.found
        assert result.container is card
        assert result.image is image
        assert result.title is heading
        assert result.steps == 1

    def test_innermost_qualifying_ancestor_wins(self, cfg, make_el, make_page):
        image, heading, price = product_parts(make_el)
        card = make_el("div", w=300, h=250, children=[
            image, heading, make_el("div", w=120, h=30, children=[price]),
        ])
        outer = make_el("div", w=900, h=1200, children=[card])
        make_page(outer)

        result = ContainerClimber(cfg).climb(price, ClaimedSet())
        assert result.container is card
        assert result.steps == 2

    @pytest.mark.parametrize("w,h", [(99, 200), (300, 99), (1001, 200), (300, 1501)])
    def test_out_of_bounds_ancestor_skipped(self, cfg, make_el, make_page, w, h):
        image, heading, price = product_parts(make_el)
        card = make_el("div", w=w, h=h, children=[image, heading, price])
        make_page(card)

        result = ContainerClimber(cfg).climb(price, ClaimedSet())
        assert result.outcome is ClimbOutcome.EXHAUSTED
        assert result.container is None

    @pytest.mark.parametrize("w,h", [(100, 100), (1000, 1500)])
    def test_bounds_inclusive(self, cfg, make_el, make_page, w, h):
        image, heading, price = product_parts(make_el)
        card = make_el("div", w=w, h=h, children=[image, heading, price])
        make_page(card)
        assert ContainerClimber(cfg).climb(price, ClaimedSet()).container is card

    def test_too_tall_card_falls_through_to_nothing_even_with_content(self, cfg, make_el, make_page):
        image, heading, price = product_parts(make_el)
        tall = make_el("div", w=300, h=1600, children=[image, heading, price])
        make_page(make_el("section", w=80, h=1700, children=[tall]))
        assert not ContainerClimber(cfg).climb(price, ClaimedSet()).found

    def test_claimed_ancestor_skipped(self, cfg, make_el, make_page):
        image, heading, price = product_parts(make_el)
        card = make_el("div", w=300, h=200, children=[image, heading, price])
        wrapper = make_el("div", w=320, h=220, children=[card])
        make_page(wrapper)

        claimed = ClaimedSet()
        claimed.claim(card)
        result = ContainerClimber(cfg).climb(price, claimed)
        assert result.container is wrapper

    def test_missing_image_or_title_keeps_climbing(self, cfg, make_el, make_page):
        image, heading, price = product_parts(make_el)
        inner = make_el("div", w=300, h=120, children=[heading, price])
        card = make_el("div", w=320, h=300, children=[image, inner])
        make_page(card)
        assert ContainerClimber(cfg).climb(price, ClaimedSet()).container is card

    def test_title_wrapping_price_forces_climb(self, cfg, make_el, make_page):
        image, _, price = product_parts(make_el)
        link = make_el("a", attrs={"href": "/p/1"}, w=250, h=60, children=[
            make_el("span", "Wireless Mouse", w=200, h=20), price,
        ])
        inner = make_el("div", w=300, h=200, children=[image, link])
        heading = make_el("h2", "Wireless Mouse Pro", w=300, h=30)
        outer = make_el("div", w=320, h=300, children=[heading, inner])
        make_page(outer)

        result = ContainerClimber(cfg).climb(price, ClaimedSet())
        # inner has an image but its only title candidate contains the price
        assert result.container is outer
        assert result.title is heading

    def test_climb_limit(self, cfg, make_el, make_page):
        image, heading, price = product_parts(make_el)
        node = price
        for _ in range(10):
            node = make_el("div", w=50, h=50, children=[node])
        card = make_el("div", w=300, h=200, children=[image, heading, node])
        make_page(card)

        result = ContainerClimber(cfg).climb(price, ClaimedSet())
        assert result.outcome is ClimbOutcome.EXHAUSTED
        assert result.steps == 10

    def test_limit_reaches_tenth_ancestor(self, cfg, make_el, make_page):
        image, heading, price = product_parts(make_el)
        node = price
        for _ in range(9):
            node = make_el("div", w=50, h=50, children=[node])
        card = make_el("div", w=300, h=200, children=[image, heading, node])
        make_page(card)

        result = ContainerClimber(cfg).climb(price, ClaimedSet())
        assert result.container is card
        assert result.steps == 10

    def test_stops_at_root(self, cfg, make_el):
        price = make_el("span", "$1.00", w=60, h=18)
        root = make_el("div", w=300, h=200, children=[price])
        result = ContainerClimber(cfg).climb(price, ClaimedSet())
        assert result.outcome is ClimbOutcome.EXHAUSTED
        assert result.steps == 1
        assert root.children == [price]


class TestClaimedSet:

    def test_identity_not_equality(self, make_el):
        a = make_el("div", "same", w=10, h=10)
        b = make_el("div", "same", w=10, h=10)
        claimed = ClaimedSet()
        claimed.claim(a)
        assert a in claimed
        assert b not in claimed
        assert len(claimed) == 1
        assert list(claimed) == [a]

    def test_double_claim_rejected(self, make_el):
        a = make_el("div", w=10, h=10)
        claimed = ClaimedSet()
        claimed.claim(a)
        with pytest.raises(ValueError):
            claimed.claim(a)
