"""
Module: loading.models

Purpose:
    Typed, immutable views of a trade-analysis record.
    Field values are kept as they appear in the JSON (numbers or
    strings) and are only formatted at layout time.

Key Classes:
    - Candle: One candle summary
    - ImbalanceZone: Bid/ask levels for one candle slot
    - LimitOrder: Prospective trade levels
    - TradeRecord: Parsed record plus the fields nothing claimed

Dependencies:
    - dataclasses (std)

Used By:
    - loading.parser: Builds these from raw JSON
    - layout.panels / layout.composer: Renders them
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

BULLISH = "BULLISH"
BEARISH = "BEARISH"


class _Missing:
    """Marker for a key absent from the record (JSON null is a value)."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()

# Fixed render order of confluence timeframes
CONFLUENCE_TIMEFRAMES: Tuple[str, ...] = ("M1", "M5", "M15", "M30", "H1")


@dataclass(frozen=True)
class Candle:
    """
    Candle summary (Indecisive, Open, Close, High, Low).

    Absent fields are None.
    """

    is_indecisive: Any = None
    open: Any = None
    close: Any = None
    high: Any = None
    low: Any = None


@dataclass(frozen=True)
class ImbalanceZone:
    """
    Bid/ask price levels for one candle slot.

    Attributes:
        key: Slot number; 1 is the indecision candle, n > 1 the (n-1)th preceding candle
        bids: Bid levels in display order
        asks: Ask levels in display order
    """

    key: int
    bids: Tuple[Any, ...] = ()
    asks: Tuple[Any, ...] = ()

    @property
    def row_count(self) -> int:
        """Rows needed to show both columns (ragged lists pad the shorter side)."""
        return max(len(self.bids), len(self.asks))


@dataclass(frozen=True)
class LimitOrder:
    """
    Prospective trade levels. Each field is independently optional;
    absent keys are MISSING, JSON null stays None.

    The trade section is only shown when ``limit_price`` is present.
    """

    limit_price: Any = MISSING
    take_profit: Any = MISSING
    stop_loss: Any = MISSING
    zone_pips: Any = MISSING
    take_profit_pips: Any = MISSING
    stop_loss_pips: Any = MISSING

    @property
    def has_limit_price(self) -> bool:
        return self.limit_price is not MISSING


@dataclass(frozen=True)
class TradeRecord:
    """
    Parsed trade-analysis record.

    Attributes:
        market_structure: Raw market structure value (BULLISH/BEARISH/other)
        order_volume: Order volume, MISSING when absent
        indecision_candle: Indecision candle, None when absent
        imbalances: Zones in source order (the layout sorts them)
        confluence: (timeframe, candle) pairs in CONFLUENCE_TIMEFRAMES order
        limit_order: Trade levels, None when absent
        remaining: Top-level fields no section claimed, in source order
    """

    market_structure: Any = None
    order_volume: Any = MISSING
    indecision_candle: Optional[Candle] = None
    imbalances: Tuple[ImbalanceZone, ...] = ()
    confluence: Tuple[Tuple[str, Candle], ...] = ()
    limit_order: Optional[LimitOrder] = None
    remaining: Dict[str, Any] = field(default_factory=dict)
