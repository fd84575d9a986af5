"""
Module: layout.geometry

Purpose:
    Measurement helpers for the panel layout: panel heights from line
    counts, imbalance table titles and a text width estimate.

Key Functions:
    - panel_height(): Height of a titled panel
    - trade_panel_height(): Height of the prospective trade box
    - ordinal_suffix(): English ordinal suffix
    - imbalance_title(): Title for an imbalance zone key
    - estimate_text_width(): Monospace width estimate
    - format_value(): Display text for a JSON scalar

Dependencies:
    - layout.config: StyleConfig

Used By:
    - layout.panels
    - layout.composer
"""

from __future__ import annotations

import json
from typing import Any

from .config import StyleConfig

# Bids/Asks header row plus the title line
IMBALANCE_HEADER_LINES = 2


def panel_height(lines: int, style: StyleConfig) -> float:
    """
    Height of a boxed panel holding ``lines`` text lines (title included).

    Example:
        >>> round(panel_height(6, StyleConfig()), 1)  # 6 x 19.6 + 1.5 x 20
        147.6
    """
    return lines * style.line_height + style.padding * 1.5


def trade_panel_height(lines: int, style: StyleConfig) -> float:
    """Height of the prospective trade box (no title line, single padding)."""
    return lines * style.line_height + style.padding


def imbalance_lines(row_count: int) -> int:
    """Text lines in an imbalance table with ``row_count`` bid/ask rows."""
    return IMBALANCE_HEADER_LINES + row_count


def ordinal_suffix(n: int) -> str:
    """
    Ordinal suffix for ``n``.

    4 to 20 always take "th"; otherwise the last digit decides.

    Example:
        >>> [ordinal_suffix(n) for n in (1, 2, 3, 11, 22)]
        ['st', 'nd', 'rd', 'th', 'nd']
    """
    if 3 < n < 21:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")


def imbalance_title(key: int) -> str:
    """
    Title of the imbalance table for zone ``key``.

    Key 1 is the indecision candle itself; key n > 1 is the
    (n-1)th candle before it.

    Example:
        >>> imbalance_title(1)
        'Indecision Candle'
        >>> imbalance_title(12)
        '11th Preceding Candle'
    """
    if key == 1:
        return "Indecision Candle"
    n = key - 1
    return f"{n}{ordinal_suffix(n)} Preceding Candle"


def estimate_text_width(text: str, font_size: int, style: StyleConfig) -> float:
    """Upper-bound width of ``text`` assuming a fixed glyph advance."""
    return len(text) * font_size * style.char_width_ratio


def format_value(value: Any) -> str:
    """
    Display text for a record value, JSON spelling for literals.

    Example:
        >>> format_value(True), format_value(None), format_value(1.0), format_value("1.0850")
        ('true', 'null', '1', '1.0850')
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)
