"""
Module: layout.composer

Purpose:
    Compose a TradeRecord into positioned panels.
    Advances a vertical cursor through fixed sections, laying panels
    left to right within each row, and computes the canvas size that
    contains everything plus margins.

Key Functions:
    - compose_layout(): Main entry point

Algorithm:
    1. "Trade Setup Details" header (always)
    2. Context row: market structure, order volume, indecision candle
    3. "Zone Imbalances" header (always) and one table per zone,
       descending by key, all with one uniform height
    4. "Lower Timeframe Confluence" header and candle row (if any)
    5. "Prospective Trade" header and box (if limit price present)
    6. Remaining details JSON block (if any field is left)

    Width is the furthest right edge reached (never a trailing gap)
    plus one padding. Height is the cursor bottom plus one padding and
    the minimum footer allowance.

Dependencies:
    - layout.config: StyleConfig
    - layout.panels: Panel builders
    - loading.models: TradeRecord

Used By:
    - controller: Per-pair processing
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from trade_overlay.loading.models import TradeRecord

from .config import StyleConfig
from .geometry import estimate_text_width, imbalance_lines, panel_height
from .models import SANS_SERIF, DrawCommand, LayoutResult, Panel, TextCommand
from .panels import (
    build_candle_panel,
    build_imbalance_panel,
    build_market_structure_panel,
    build_order_volume_panel,
    build_remaining_panel,
    build_trade_panel,
)

logger = logging.getLogger(__name__)

TRADE_SETUP_HEADER = "Trade Setup Details"
IMBALANCE_HEADER = "Zone Imbalances"
CONFLUENCE_HEADER = "Lower Timeframe Confluence"
TRADE_HEADER = "Prospective Trade"


class _Flow:
    """Cursor state for one layout pass."""

    def __init__(self, style: StyleConfig) -> None:
        self.style = style
        self.y: float = style.padding
        self.right: float = 0
        self.commands: List[DrawCommand] = []
        self.sections: List[str] = []

    def header(self, title: str) -> None:
        """Emit a section header and move the cursor below it."""
        style = self.style
        baseline = self.y + style.header_font_size
        self.commands.append(TextCommand(
            x=style.padding,
            y=baseline,
            text=title,
            color=style.text_color,
            font_size=style.header_font_size,
            family=SANS_SERIF,
            bold=True,
        ))
        self.sections.append(title)
        self._reach(style.padding + estimate_text_width(title, style.header_font_size, style))
        self.y = baseline + style.header_to_box_spacing

    def row(self, panels: Iterable[Panel]) -> int:
        """
        Place panels left to right at the cursor row.

        Empty panels take no space. Returns the number placed; the
        vertical cursor is left for the caller to advance.
        """
        x = self.style.padding
        placed = 0
        for panel in panels:
            if panel.is_empty:
                continue
            self.commands.extend(panel.placed_at(x, self.y))
            self._reach(x + panel.width)
            x += panel.advance
            placed += 1
        return placed

    def place(self, panel: Panel, x: float) -> None:
        """Place a single panel at (x, cursor)."""
        self.commands.extend(panel.placed_at(x, self.y))
        self._reach(x + panel.width)

    def _reach(self, edge: float) -> None:
        self.right = max(self.right, edge)


def compose_layout(record: TradeRecord, style: Optional[StyleConfig] = None) -> LayoutResult:
    """
    Lay out a record as positioned panels.

    Args:
        record: Parsed trade record
        style: Style configuration (defaults to StyleConfig())

    Returns:
        LayoutResult with drawing commands and the required canvas size

    Example:
        >>> result = compose_layout(TradeRecord())
        >>> result.sections
        ('Trade Setup Details', 'Zone Imbalances')
    """
    style = style or StyleConfig()
    flow = _Flow(style)

    flow.header(TRADE_SETUP_HEADER)
    _compose_context_row(flow, record)

    flow.header(IMBALANCE_HEADER)
    _compose_imbalances(flow, record)

    _compose_confluence(flow, record)
    _compose_trade(flow, record)

    bottom = flow.y
    remaining = build_remaining_panel(record.remaining, style)
    if not remaining.is_empty:
        flow.place(remaining, style.padding)
        bottom = flow.y + remaining.height

    width = flow.right + style.padding
    height = bottom + style.padding + style.min_footer_height

    logger.debug(
        f"Composed {len(flow.commands)} commands in {len(flow.sections)} sections, "
        f"canvas {width:.0f}x{height:.0f}"
    )

    return LayoutResult(
        commands=tuple(flow.commands),
        width=width,
        height=height,
        sections=tuple(flow.sections),
    )


def _compose_context_row(flow: _Flow, record: TradeRecord) -> None:
    """
    Market structure, order volume and indecision candle share one row.

    Row height is fixed to a candle's line count whichever panels are present.
    """
    style = flow.style
    row_height = panel_height(style.context_row_lines, style)

    placed = flow.row([
        build_market_structure_panel(
            record.market_structure, style.market_structure_width, row_height, style
        ),
        build_order_volume_panel(
            record.order_volume, style.market_structure_width, row_height, style
        ),
        build_candle_panel(
            "Indecision Candle", record.indecision_candle, style.candle_width, row_height, style
        ),
    ])
    if placed:
        flow.y += row_height + style.padding


def _compose_imbalances(flow: _Flow, record: TradeRecord) -> None:
    """One table per zone, highest key first, all the height of the tallest."""
    style = flow.style
    zones = sorted(record.imbalances, key=lambda zone: zone.key, reverse=True)
    if not zones:
        return

    max_lines = max(imbalance_lines(zone.row_count) for zone in zones)
    table_height = panel_height(max_lines, style)

    flow.row(
        build_imbalance_panel(
            zone, record.market_structure, style.imbalance_width, table_height, style
        )
        for zone in zones
    )
    flow.y += table_height


def _compose_confluence(flow: _Flow, record: TradeRecord) -> None:
    style = flow.style
    if not record.confluence:
        return

    flow.y += style.padding * 1.5
    flow.header(CONFLUENCE_HEADER)

    row_height = panel_height(style.context_row_lines, style)
    flow.row(
        build_candle_panel(f"{timeframe} Candle", candle, style.candle_width, row_height, style)
        for timeframe, candle in record.confluence
    )
    flow.y += row_height


def _compose_trade(flow: _Flow, record: TradeRecord) -> None:
    style = flow.style
    panel = build_trade_panel(record.limit_order, style.trade_width, style)
    if panel.is_empty:
        return

    flow.y += style.padding
    flow.header(TRADE_HEADER)
    flow.place(panel, style.padding)
    flow.y += panel.height + style.padding
