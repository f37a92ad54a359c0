"""
Unit tests for pageflow/flow_extractor.py - raw DOM nodes → LayoutItems
"""
import pytest

from conftest import raw_node
from pageflow.flow_extractor import FlowCursor, accept_node, extract_layout_items
from pageflow.models import RawTextNode


def nodes(*records):
    return [RawTextNode.from_dict(record) for record in records]


class TestVerticalGap:

    def test_gap_from_previous_bottom(self):
        """Items at y=100 and y=140, 20px tall: gap of the second is 20."""
        items = extract_layout_items(nodes(
            raw_node("first", y=100, height=20),
            raw_node("second", y=140, height=20),
        ))
        assert [item.vertical_gap for item in items] == [100, 20]

    def test_gap_never_negative(self):
        items = extract_layout_items(nodes(
            raw_node("tall", y=100, height=80),
            raw_node("overlapping", y=120, height=20),
            raw_node("above", y=10, height=20),
        ))
        assert all(item.vertical_gap >= 0 for item in items)
        assert items[1].vertical_gap == 0
        assert items[2].vertical_gap == 0

    def test_rejected_nodes_do_not_move_cursor(self):
        items = extract_layout_items(nodes(
            raw_node("first", y=100, height=20),
            raw_node("hidden", y=300, height=20, display="none"),
            raw_node("second", y=150, height=20),
        ))
        assert [item.text for item in items] == ["first", "second"]
        assert items[1].vertical_gap == 30

    def test_cursor_threads_across_batches(self):
        cursor = FlowCursor()
        first = extract_layout_items(nodes(raw_node("a", y=0, height=50)), cursor)
        second = extract_layout_items(nodes(raw_node("b", y=80, height=10)), cursor)
        assert first[0].vertical_gap == 0
        assert second[0].vertical_gap == 30
        assert cursor.last_bottom == 90


class TestFiltering:

    @pytest.mark.parametrize("overrides", [
        {"display": "none"},
        {"visibility": "hidden"},
        {"opacity": "0"},
    ])
    def test_hidden_styles_are_dropped(self, overrides):
        assert extract_layout_items(nodes(raw_node("x", **overrides))) == []

    @pytest.mark.parametrize("width,height", [(0, 20), (100, 0), (0, 0)])
    def test_zero_area_is_dropped(self, width, height):
        """A display:none ancestor collapses the box to zero area."""
        assert extract_layout_items(nodes(raw_node("x", width=width, height=height))) == []

    @pytest.mark.parametrize("tag", ["SCRIPT", "STYLE", "NOSCRIPT", "script"])
    def test_non_rendered_parents_are_dropped(self, tag):
        assert extract_layout_items(nodes(raw_node("var x = 1;", parent_tag=tag))) == []

    def test_orphan_text_is_dropped(self):
        assert extract_layout_items(nodes(raw_node("x", parent_tag=None))) == []

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank_text_is_dropped(self, text):
        assert accept_node(RawTextNode.from_dict(raw_node(text)), FlowCursor()) is None

    def test_missing_style_degrades_to_defaults(self):
        record = raw_node("plain")
        record["style"] = None
        items = extract_layout_items(nodes(record))
        assert len(items) == 1
        assert items[0].style.color_hex == "000000"
        assert items[0].style.alignment == "left"


class TestItemContent:

    def test_text_is_trimmed_and_geometry_kept(self):
        (item,) = extract_layout_items(nodes(
            raw_node("  Hello world \n", x=12.5, y=40, width=90, height=18,
                     color="rgb(255, 255, 255)", fontWeight="bold")
        ))
        assert item.text == "Hello world"
        assert item.position == (12.5, 40)
        assert item.size == (90, 18)
        assert item.style.color_hex == "ffffff"
        assert item.style.bold

    def test_order_is_preserved(self):
        texts = ["c", "a", "b"]
        items = extract_layout_items(nodes(*[raw_node(t, y=i * 30) for i, t in enumerate(texts)]))
        assert [item.text for item in items] == texts

    def test_deterministic(self):
        records = [raw_node(f"n{i}", y=i * 25, height=20) for i in range(10)]
        assert extract_layout_items(nodes(*records)) == extract_layout_items(nodes(*records))
