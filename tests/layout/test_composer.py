"""
Tests for layout.composer

Test Coverage:
- compose_layout(): Section gating and vertical flow
- Imbalance ordering and uniform table height
- Canvas sizing: margins, footer allowance, monotonicity, no clipping
"""
from dataclasses import replace

import pytest

from trade_overlay.layout import LayoutResult, compose_layout
from trade_overlay.layout.composer import (
    CONFLUENCE_HEADER,
    IMBALANCE_HEADER,
    TRADE_HEADER,
    TRADE_SETUP_HEADER,
)
from trade_overlay.layout.models import TextBlockCommand
from trade_overlay.layout.panels import REMAINING_HEADER
from trade_overlay.loading import parse_record
from trade_overlay.loading.models import MISSING, Candle, ImbalanceZone, LimitOrder, TradeRecord


EMPTY_FIELDS = {
    "market_structure": None,
    "order_volume": MISSING,
    "indecision_candle": None,
    "imbalances": (),
    "confluence": (),
    "limit_order": None,
    "remaining": {},
}


def _text_values(result: LayoutResult):
    return [t.text for t in result.texts]


def _header_y(result: LayoutResult, title: str) -> float:
    return next(t.y for t in result.texts if t.text == title)


@pytest.fixture
def full_record(record_data):
    return parse_record(record_data)


class TestSections:
    """Tests for section gating."""

    def test_compose_when_empty_record_then_only_mandatory_headers(self, style):
        """Trade Setup Details and Zone Imbalances are always emitted."""
        # Act
        result = compose_layout(TradeRecord(), style)

        # Assert
        assert result.sections == (TRADE_SETUP_HEADER, IMBALANCE_HEADER)
        assert result.rects == ()
        assert _text_values(result) == [TRADE_SETUP_HEADER, IMBALANCE_HEADER]

    def test_compose_when_empty_record_then_height_is_headers_margins_and_footer(self, style):
        """Two headers, top and bottom padding, plus the footer allowance."""
        # Arrange
        header_block = style.header_font_size + style.header_to_box_spacing
        expected = style.padding + 2 * header_block + style.padding + style.min_footer_height

        # Act
        result = compose_layout(TradeRecord(), style)

        # Assert
        assert result.height == pytest.approx(expected)

    def test_compose_when_null_volume_and_limit_price_then_sections_rendered(self, style):
        """JSON null is a value: it renders and is not a leftover field."""
        # Arrange
        record = parse_record({"orderVolume": None, "limitOrder": {"limitPrice": None}})

        # Act
        result = compose_layout(record, style)

        # Assert
        texts = _text_values(result)
        assert texts[texts.index("Order Volume") + 1] == "null"
        assert TRADE_HEADER in result.sections
        assert "Limit Price: null" in texts
        assert REMAINING_HEADER not in texts

    def test_compose_when_full_record_then_all_sections_in_order(self, full_record, style):
        # Act
        result = compose_layout(full_record, style)

        # Assert
        assert result.sections == (
            TRADE_SETUP_HEADER,
            IMBALANCE_HEADER,
            CONFLUENCE_HEADER,
            TRADE_HEADER,
        )

    def test_compose_when_no_confluence_then_no_header_and_no_advance(self, style):
        """A skipped section adds neither header nor height."""
        # Arrange
        base = TradeRecord(market_structure="BULLISH")
        with_m1 = replace(base, confluence=(("M1", Candle()),))

        # Act
        without = compose_layout(base, style)
        with_section = compose_layout(with_m1, style)

        # Assert
        assert CONFLUENCE_HEADER not in without.sections
        assert CONFLUENCE_HEADER in with_section.sections
        assert with_section.height > without.height

    def test_compose_when_confluence_then_candles_in_timeframe_order(self, style):
        # Arrange
        record = TradeRecord(confluence=(("M1", Candle()), ("M15", Candle()), ("H1", Candle())))

        # Act
        result = compose_layout(record, style)

        # Assert
        titles = [t for t in _text_values(result) if t.endswith(" Candle")]
        assert titles == ["M1 Candle", "M15 Candle", "H1 Candle"]

    def test_compose_when_targets_without_limit_price_then_no_trade_section(self, style):
        # Arrange
        record = TradeRecord(limit_order=LimitOrder(take_profit=1.2, stop_loss=1.0))

        # Act
        result = compose_layout(record, style)

        # Assert
        assert TRADE_HEADER not in result.sections
        assert result.height == pytest.approx(compose_layout(TradeRecord(), style).height)

    def test_compose_when_remaining_fields_then_fallback_block_last(self, style):
        # Arrange
        record = TradeRecord(remaining={"foo": "bar"})

        # Act
        result = compose_layout(record, style)

        # Assert
        assert result.texts[-1].text == REMAINING_HEADER
        assert isinstance(result.commands[-1], TextBlockCommand)
        assert len(result.commands[-1].lines) == 3

    def test_compose_when_nothing_remaining_then_no_fallback_block(self, full_record, style):
        # Act
        result = compose_layout(full_record, style)

        # Assert
        assert REMAINING_HEADER not in _text_values(result)
        assert not any(isinstance(c, TextBlockCommand) for c in result.commands)


class TestVerticalFlow:
    """Tests for cursor advances between sections."""

    def test_compose_when_context_panels_then_imbalance_header_below_row(self, style):
        """The context row advances by its height plus one padding."""
        # Arrange
        record = TradeRecord(order_volume=10)

        # Act
        result = compose_layout(record, style)

        # Assert
        row_top = style.padding + style.header_font_size + style.header_to_box_spacing
        row_height = 6 * style.line_height + 1.5 * style.padding
        expected_header = row_top + row_height + style.padding + style.header_font_size
        assert _header_y(result, IMBALANCE_HEADER) == pytest.approx(expected_header)

    def test_compose_when_only_order_volume_then_row_sized_for_six_lines(self, style):
        """The context row height is fixed, not derived from content."""
        # Act
        result = compose_layout(TradeRecord(order_volume=10), style)

        # Assert
        (rect,) = result.rects
        assert rect.height == pytest.approx(6 * style.line_height + 1.5 * style.padding)

    def test_compose_when_confluence_then_extra_padding_before_header(self, style):
        """Confluence header sits 1.5 x padding below the imbalance row."""
        # Arrange
        zone = ImbalanceZone(key=1, bids=("1",), asks=("2",))
        record = TradeRecord(imbalances=(zone,), confluence=(("M5", Candle()),))

        # Act
        result = compose_layout(record, style)

        # Assert
        table = result.rects[0]
        expected = table.bottom + 1.5 * style.padding + style.header_font_size
        assert _header_y(result, CONFLUENCE_HEADER) == pytest.approx(expected)

    def test_compose_when_trade_then_single_padding_before_header_and_after_box(self, style):
        # Arrange
        record = TradeRecord(limit_order=LimitOrder(limit_price=1.1, take_profit=1.2))

        # Act
        result = compose_layout(record, style)

        # Assert
        header_top = style.padding + 2 * (style.header_font_size + style.header_to_box_spacing)
        assert _header_y(result, TRADE_HEADER) == pytest.approx(
            header_top + style.padding + style.header_font_size
        )
        (box,) = result.rects
        assert box.width == style.trade_width
        assert result.height == pytest.approx(
            box.bottom + style.padding + style.padding + style.min_footer_height
        )

    def test_compose_when_row_then_panels_do_not_overlap(self, full_record, style):
        """Panels on one row are separated by the table gap."""
        # Act
        result = compose_layout(full_record, style)

        # Assert
        rows = {}
        for rect in result.rects:
            rows.setdefault(rect.y, []).append(rect)
        for rects in rows.values():
            rects.sort(key=lambda r: r.x)
            for left, right in zip(rects, rects[1:]):
                assert right.x == pytest.approx(left.right + style.table_gap)

    def test_compose_when_rows_then_rows_do_not_overlap_vertically(self, full_record, style):
        # Act
        result = compose_layout(full_record, style)

        # Assert
        tops = sorted({r.y for r in result.rects})
        for upper, lower in zip(tops, tops[1:]):
            upper_bottom = max(r.bottom for r in result.rects if r.y == upper)
            assert lower >= upper_bottom


class TestImbalances:
    """Tests for imbalance table ordering and sizing."""

    def test_compose_when_keys_unordered_then_descending_numeric_order(self, style):
        """Keys 2, 10, 1 render as 10, 2, 1."""
        # Arrange
        record = parse_record({
            "imbalances": {
                "2": {"bids": [], "asks": []},
                "10": {"bids": [], "asks": []},
                "1": {"bids": [], "asks": []},
            }
        })

        # Act
        result = compose_layout(record, style)

        # Assert
        titles = [t.text for t in result.texts if t.bold and t.family == "monospace"]
        assert titles == ["9th Preceding Candle", "1st Preceding Candle", "Indecision Candle"]
        xs = [r.x for r in result.rects]
        assert xs == sorted(xs)

    def test_compose_when_zones_differ_then_all_tables_share_tallest_height(self, style):
        # Arrange
        record = TradeRecord(imbalances=(
            ImbalanceZone(key=1, bids=("a",), asks=()),
            ImbalanceZone(key=2, bids=("a", "b"), asks=("c", "d", "e", "f")),
        ))

        # Act
        result = compose_layout(record, style)

        # Assert
        expected = (2 + 4) * style.line_height + 1.5 * style.padding
        assert len(result.rects) == 2
        for rect in result.rects:
            assert rect.height == pytest.approx(expected)

    def test_compose_when_bearish_then_tables_highlight_first_row(self, style):
        # Arrange
        record = TradeRecord(
            market_structure="BEARISH",
            imbalances=(ImbalanceZone(key=1, bids=("b0", "b1"), asks=("a0", "a1")),),
        )

        # Act
        result = compose_layout(record, style)

        # Assert
        colors = {t.text: t.color for t in result.texts}
        assert colors["b0"] == style.bearish_color
        assert colors["a0"] == style.bullish_color
        assert colors["b1"] == colors["a1"] == style.text_color


class TestCanvasSize:
    """Tests for the computed bounding box."""

    def test_compose_when_panels_then_canvas_contains_all_plus_margin(self, full_record, style):
        # Act
        result = compose_layout(full_record, style)

        # Assert
        assert result.width >= max(r.right for r in result.rects) + style.padding
        assert result.height >= max(r.bottom for r in result.rects) + style.padding
        assert min(r.x for r in result.rects) >= style.padding
        assert min(r.y for r in result.rects) >= style.padding

    def test_compose_when_row_then_width_uses_right_edge_not_trailing_gap(self, style):
        """The last panel of the widest row contributes its edge, not edge + gap."""
        # Arrange
        zones = tuple(ImbalanceZone(key=k, bids=("1",), asks=("2",)) for k in range(1, 6))

        # Act
        result = compose_layout(TradeRecord(imbalances=zones), style)

        # Assert
        right_edge = style.padding + 5 * style.imbalance_width + 4 * style.table_gap
        assert result.width == pytest.approx(right_edge + style.padding)

    def test_compose_when_long_remaining_line_then_width_covers_text(self, style):
        # Arrange
        record = TradeRecord(remaining={"note": "x" * 200})

        # Act
        result = compose_layout(record, style)

        # Assert
        assert result.width > 200 * style.font_size * 0.5

    @pytest.mark.parametrize(
        "field, value",
        [
            ("market_structure", "BULLISH"),
            ("order_volume", 3),
            ("indecision_candle", Candle()),
            ("imbalances", (ImbalanceZone(key=9, bids=("1",) * 8, asks=()),)),
            ("confluence", (("H1", Candle()),)),
            ("limit_order", LimitOrder(limit_price=1)),
            ("remaining", {"foo": "bar"}),
        ],
    )
    def test_compose_when_panel_added_then_canvas_never_shrinks(self, full_record, style, field, value):
        """Adding a panel keeps width and height at least as large."""
        # Arrange
        smaller = replace(full_record, **{field: EMPTY_FIELDS[field]})
        larger = replace(smaller, **{field: value})

        # Act
        small = compose_layout(smaller, style)
        large = compose_layout(larger, style)

        # Assert
        assert large.width >= small.width
        assert large.height >= small.height

    def test_compose_when_default_style_then_uses_style_config(self):
        """Omitting the style falls back to StyleConfig()."""
        assert compose_layout(TradeRecord()).height > 0
