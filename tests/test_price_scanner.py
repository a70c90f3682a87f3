"""
Tests for PriceCandidateScanner filtering and ordering.
"""

from pricelens_core.detection import PriceCandidateScanner


def texts(nodes):
    return [n.text for n in nodes]


class TestFilters:

    def test_accepts_plain_price(self, cfg, make_el, make_page):
        root = make_page(make_el("span", "$19.99", w=60, h=18))
        assert texts(PriceCandidateScanner(cfg).scan(root)) == ["$19.99"]

    def test_rejects_hidden_or_zero_area(self, cfg, make_el, make_page):
        root = make_page(
            make_el("span", "$1.00", w=60, h=18, visible=False),
            make_el("span", "$2.00", w=0, h=18),
            make_el("span", "$3.00", w=60, h=0),
        )
        assert PriceCandidateScanner(cfg).scan(root) == []

    def test_text_length_ceiling(self, cfg, make_el, make_page):
        long_text = "Only today: $19.99 " + "x" * 40
        root = make_page(
            make_el("span", "   ", w=60, h=18),
            make_el("span", long_text, w=60, h=18),
            make_el("span", "x" * 44 + " $9.99", w=60, h=18),
        )
        assert len("x" * 44 + " $9.99") == 50
        assert texts(PriceCandidateScanner(cfg).scan(root)) == ["x" * 44 + " $9.99"]

    def test_text_is_trimmed_before_checks(self, cfg, make_el, make_page):
        root = make_page(make_el("span", "\n   19,99 €  \n", w=60, h=18))
        assert len(PriceCandidateScanner(cfg).scan(root)) == 1

    def test_rejects_review_attribute(self, cfg, make_el, make_page):
        root = make_page(
            make_el("span", "$4.50", {"data-rating": "4.5"}, w=60, h=18),
            make_el("span", "$4.60", {"itemprop": "ratingValue"}, w=60, h=18),
        )
        assert PriceCandidateScanner(cfg).scan(root) == []

    def test_rejects_review_text(self, cfg, make_el, make_page):
        root = make_page(
            make_el("span", "4.5 out of 5 stars", w=60, h=18),
            make_el("span", "4.5/5", w=60, h=18),
            make_el("span", "$5 from 120 reviews", w=60, h=18),
        )
        assert PriceCandidateScanner(cfg).scan(root) == []

    def test_semantic_price_attribute_without_pattern(self, cfg, make_el, make_page):
        root = make_page(
            make_el("span", "19.99", {"itemprop": "price"}, w=60, h=18),
            make_el("div", "Sale", {"data-saleprice": "10"}, w=60, h=18),
            make_el("span", "19.99", w=60, h=18),
        )
        assert texts(PriceCandidateScanner(cfg).scan(root)) == ["19.99", "Sale"]

    def test_semantic_attribute_does_not_override_review_text(self, cfg, make_el, make_page):
        root = make_page(make_el("span", "4.5 stars", {"data-price": "4.5"}, w=60, h=18))
        assert PriceCandidateScanner(cfg).scan(root) == []


class TestReviewContainers:

    def test_inside_review_container(self, cfg, make_el, make_page):
        root = make_page(
            make_el("section", attrs={"class": "reviews"}, w=800, h=400, children=[
                make_el("div", w=700, h=100, children=[
                    make_el("span", "$19.99", w=60, h=18),
                ]),
            ]),
        )
        assert texts(PriceCandidateScanner(cfg).scan(root)) == []

    def test_review_climb_is_bounded(self, cfg, make_el, make_page):
        def nest(levels, leaf):
            node = leaf
            for _ in range(levels):
                node = make_el("div", w=500, h=500, children=[node])
            return node

        # Review marker is the 6th node counting the price itself: excluded
        near = make_el("div", attrs={"class": "score"}, w=500, h=500, children=[
            nest(4, make_el("span", "$1.00", w=60, h=18)),
        ])
        # One level further up: out of reach, price kept
        far = make_el("div", attrs={"class": "score"}, w=500, h=500, children=[
            nest(5, make_el("span", "$2.00", w=60, h=18)),
        ])
        found = [n for n in PriceCandidateScanner(cfg).scan(make_page(near, far)) if n.tag == "span"]
        assert texts(found) == ["$2.00"]

    def test_node_itself_marked_as_review(self, cfg, make_el, make_page):
        root = make_page(make_el("span", "$3.00", {"class": "star-rating"}, w=60, h=18))
        assert PriceCandidateScanner(cfg).scan(root) == []


class TestUniverse:

    def test_only_scan_tags_and_price_attributes(self, cfg, make_el, make_page):
        root = make_page(
            make_el("h3", "$10.00", w=60, h=18),
            make_el("li", "$11.00", w=60, h=18),
            make_el("li", "$12.00", {"data-price": "12"}, w=60, h=18),
            make_el("strong", "$13.00", w=60, h=18),
            make_el("ins", "$14.00", w=60, h=18),
        )
        assert texts(PriceCandidateScanner(cfg).scan(root)) == ["$12.00", "$13.00", "$14.00"]

    def test_document_order_and_wrappers(self, cfg, make_el, make_page):
        root = make_page(
            make_el("div", w=200, h=40, children=[
                make_el("span", "$5.00", w=60, h=18),
            ]),
            make_el("b", "€7", w=60, h=18),
        )
        found = PriceCandidateScanner(cfg).scan(root)
        # The wrapper's innerText is the price too, so it is a candidate first
        assert [(n.tag, n.text) for n in found] == [("div", "$5.00"), ("span", "$5.00"), ("b", "€7")]
        assert len(set(map(id, found))) == len(found)

    def test_empty_tree(self, cfg, make_page):
        assert PriceCandidateScanner(cfg).scan(make_page()) == []
