"""
Module: layout.panels

Purpose:
    Panel builders, one per semantic panel kind. Each builder is pure:
    content and fixed size in, a Panel (commands in panel-local
    coordinates plus its horizontal advance) out.

Key Functions:
    - build_market_structure_panel()
    - build_order_volume_panel()
    - build_candle_panel()
    - build_imbalance_panel()
    - build_trade_panel()
    - build_remaining_panel()

Dependencies:
    - layout.config: StyleConfig
    - layout.geometry: Measurement helpers
    - loading.models: Record types

Used By:
    - layout.composer: Vertical flow composition
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from trade_overlay.loading.models import BEARISH, BULLISH, MISSING, Candle, ImbalanceZone, LimitOrder

from .config import StyleConfig
from .geometry import estimate_text_width, format_value, imbalance_title, trade_panel_height
from .models import MONOSPACE, Panel, RectCommand, TextBlockCommand, TextCommand

logger = logging.getLogger(__name__)

REMAINING_HEADER = "Remaining Details (JSON)"

# (label, LimitOrder attribute) in display order
TRADE_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("Limit Price", "limit_price"),
    ("Take Profit", "take_profit"),
    ("Stop Loss", "stop_loss"),
    ("Zone Pips", "zone_pips"),
    ("Take Profit Pips", "take_profit_pips"),
    ("Stop Loss Pips", "stop_loss_pips"),
)


def _line_baseline(index: int, style: StyleConfig) -> float:
    """Baseline of the ``index``-th line inside a titled panel."""
    return style.font_size + (index + 1) * style.line_height


def _text(
    x: float,
    y: float,
    text: str,
    style: StyleConfig,
    *,
    color: Optional[str] = None,
    bold: bool = False,
    underline: bool = False,
) -> TextCommand:
    return TextCommand(
        x=x,
        y=y,
        text=text,
        color=color or style.text_color,
        font_size=style.font_size,
        family=MONOSPACE,
        bold=bold,
        underline=underline,
    )


def _boxed_panel(
    texts: Sequence[TextCommand],
    width: float,
    height: float,
    style: StyleConfig,
) -> Panel:
    """Rounded box behind ``texts``; advances by width + table gap."""
    box = RectCommand(
        x=0,
        y=0,
        width=width,
        height=height,
        fill=style.panel_background_color,
        radius=style.corner_radius,
    )
    return Panel(
        commands=(box, *texts),
        width=width,
        height=height,
        advance=width + style.table_gap,
    )


def _titled_lines(
    title: str,
    lines: Sequence[Tuple[str, Optional[str]]],
    style: StyleConfig,
) -> List[TextCommand]:
    """Bold title followed by (text, color) lines, one per row."""
    texts = [_text(style.padding, _line_baseline(0, style), title, style, bold=True)]
    for i, (line, color) in enumerate(lines, start=1):
        texts.append(_text(style.padding, _line_baseline(i, style), line, style, color=color))
    return texts


def structure_color(value: Any, style: StyleConfig) -> str:
    """Text color for a market structure value."""
    if value == BEARISH:
        return style.bearish_color
    if value == BULLISH:
        return style.bullish_color
    return style.text_color


def build_market_structure_panel(
    structure: Any,
    width: float,
    height: float,
    style: StyleConfig,
) -> Panel:
    """
    Market structure box: title plus the value, colored by direction.

    Empty values produce an empty panel.
    """
    if not structure:
        return Panel.empty()

    texts = _titled_lines(
        "Market Structure",
        [(format_value(structure), structure_color(structure, style))],
        style,
    )
    return _boxed_panel(texts, width, height, style)


def build_order_volume_panel(
    volume: Any,
    width: float,
    height: float,
    style: StyleConfig,
) -> Panel:
    """Order volume box: title plus the value verbatim; null shows as "null"."""
    if volume is MISSING:
        return Panel.empty()

    texts = _titled_lines("Order Volume", [(format_value(volume), None)], style)
    return _boxed_panel(texts, width, height, style)


def build_candle_panel(
    title: str,
    candle: Optional[Candle],
    width: float,
    height: float,
    style: StyleConfig,
) -> Panel:
    """
    Candle box: bold title then Indecisive, Open, Close, High, Low.

    Args:
        title: Title line, e.g. "Indecision Candle" or "M5 Candle"
        candle: Candle to show; None produces an empty panel
        width: Fixed panel width
        height: Fixed panel height
        style: Style configuration

    Returns:
        Panel with a rounded box and six text lines
    """
    if candle is None:
        return Panel.empty()

    details = [
        f"Indecisive: {format_value(candle.is_indecisive)}",
        f"Open: {format_value(candle.open)}",
        f"Close: {format_value(candle.close)}",
        f"High: {format_value(candle.high)}",
        f"Low: {format_value(candle.low)}",
    ]
    texts = _titled_lines(title, [(line, None) for line in details], style)
    return _boxed_panel(texts, width, height, style)


def highlighted_row(zone: ImbalanceZone, market_structure: Any) -> Optional[int]:
    """
    Index of the accented bid/ask row, if any.

    BEARISH accents the first row, BULLISH the last; anything else
    accents nothing.
    """
    if zone.row_count == 0:
        return None
    if market_structure == BEARISH:
        return 0
    if market_structure == BULLISH:
        return zone.row_count - 1
    return None


def build_imbalance_panel(
    zone: ImbalanceZone,
    market_structure: Any,
    width: float,
    height: float,
    style: StyleConfig,
) -> Panel:
    """
    Two-column Bids/Asks table for one imbalance zone.

    Rows pair bids and asks by index; the shorter side shows empty
    cells. On the highlighted row the bid takes the bearish color and
    the ask the bullish color.

    Args:
        zone: Imbalance zone
        market_structure: Record market structure (drives row highlight)
        width: Fixed table width
        height: Uniform table height shared by all zones of the record
        style: Style configuration

    Returns:
        Panel with the table
    """
    asks_x = style.padding + style.column_offset
    title_y = _line_baseline(0, style)
    header_y = _line_baseline(1, style)

    texts = [
        _text(style.padding, title_y, imbalance_title(zone.key), style, bold=True),
        _text(style.padding, header_y, "Bids", style, underline=True),
        _text(asks_x, header_y, "Asks", style, underline=True),
    ]

    accent = highlighted_row(zone, market_structure)
    for i in range(zone.row_count):
        bid_color = ask_color = style.text_color
        if i == accent:
            bid_color = style.bearish_color
            ask_color = style.bullish_color

        bid = format_value(zone.bids[i]) if i < len(zone.bids) else ""
        ask = format_value(zone.asks[i]) if i < len(zone.asks) else ""
        row_y = _line_baseline(i + 2, style)
        texts.append(_text(style.padding, row_y, bid, style, color=bid_color))
        texts.append(_text(asks_x, row_y, ask, style, color=ask_color))

    return _boxed_panel(texts, width, height, style)


def trade_lines(order: LimitOrder) -> List[str]:
    """'<Label>: <value>' for each present trade field, in display order."""
    lines = []
    for label, attr in TRADE_FIELDS:
        value = getattr(order, attr)
        if value is not MISSING:
            lines.append(f"{label}: {format_value(value)}")
    return lines


def build_trade_panel(
    order: Optional[LimitOrder],
    width: float,
    style: StyleConfig,
) -> Panel:
    """
    Prospective trade box, sized to the number of present fields.

    No title line inside the box: the first line sits one padding
    below the top edge.
    """
    if order is None or not order.has_limit_price:
        return Panel.empty()

    lines = trade_lines(order)
    height = trade_panel_height(len(lines), style)
    texts = [
        _text(style.padding, style.padding + i * style.line_height, line, style)
        for i, line in enumerate(lines)
    ]
    return _boxed_panel(texts, width, height, style)


def remaining_details_lines(remaining: Mapping[str, Any]) -> List[str]:
    """
    Pretty-printed JSON of the unclaimed fields, or [] when nothing is left.
    """
    text = json.dumps(dict(remaining), indent=2, ensure_ascii=False)
    if text == "{}":
        return []
    return text.split("\n")


def build_remaining_panel(remaining: Mapping[str, Any], style: StyleConfig) -> Panel:
    """
    Unboxed fallback block listing fields no other section rendered.

    Header baseline sits one font size below the panel top; the JSON
    lines follow one line height apart.
    """
    lines = remaining_details_lines(remaining)
    if not lines:
        return Panel.empty()

    logger.debug(f"Rendering {len(lines)} remaining detail lines")

    header = _text(0, style.font_size, REMAINING_HEADER, style, bold=True)
    block = TextBlockCommand(
        x=0,
        y=style.font_size + style.line_height,
        lines=tuple(lines),
        line_height=style.line_height,
        color=style.text_color,
        font_size=style.font_size,
        family=MONOSPACE,
    )
    width = max(
        estimate_text_width(line, style.font_size, style)
        for line in (REMAINING_HEADER, *lines)
    )
    height = style.font_size + (len(lines) + 1) * style.line_height
    return Panel(commands=(header, block), width=width, height=height, advance=0)
