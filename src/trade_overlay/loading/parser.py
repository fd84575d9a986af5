"""
Module: loading.parser

Purpose:
    Parse a trade-analysis JSON record into a TradeRecord.
    Tracks which top-level keys each section claims so the leftover
    fields can be shown verbatim, without mutating the input.

Key Functions:
    - load_record(): Read and parse a record file
    - parse_record(): Build a TradeRecord from a decoded JSON object

Key Classes:
    - RecordError: Exception for malformed records

Dependencies:
    - json (std)
    - pathlib (std)

Used By:
    - controller: Per-pair processing
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from .models import (
    CONFLUENCE_TIMEFRAMES,
    MISSING,
    Candle,
    ImbalanceZone,
    LimitOrder,
    TradeRecord,
)

logger = logging.getLogger(__name__)

BOM = "\ufeff"


class RecordError(Exception):
    """Error parsing a trade record."""
    pass


class _Claims:
    """Records which top-level keys a section has consumed."""

    def __init__(self, data: Mapping[str, Any]) -> None:
        self._data = data
        self._claimed: Set[str] = set()

    def claim(self, key: str) -> None:
        self._claimed.add(key)

    def remaining(self) -> Dict[str, Any]:
        return {k: v for k, v in self._data.items() if k not in self._claimed}


def load_record(path: Path) -> TradeRecord:
    """
    Load and parse a record file.

    A leading byte-order marker is ignored.

    Args:
        path: Path to the .json record

    Returns:
        Parsed TradeRecord

    Raises:
        RecordError: If the file is not UTF-8, not valid JSON or not a JSON object
        OSError: If the file cannot be read
    """
    try:
        text = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise RecordError(f"Invalid UTF-8 in {path.name}: {e}") from e
    if text.startswith(BOM):
        text = text[len(BOM):]

    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; so are oversized integer literals
        raise RecordError(f"Invalid JSON in {path.name}: {e}") from e

    if not isinstance(data, dict):
        raise RecordError(
            f"Expected a JSON object in {path.name}, got {type(data).__name__}"
        )

    return parse_record(data, source=path.name)


def parse_record(data: Mapping[str, Any], *, source: str = "record") -> TradeRecord:
    """
    Build a TradeRecord from a decoded JSON object.

    Claim rules:
    - currentMarketStructure, imbalances and confluence are always consumed
    - orderVolume is consumed whenever the key is present, null included
    - indecisionCandle and timeframe keys are consumed only when they hold an object
    - limitOrder is consumed when it is an object

    Everything else ends up in ``TradeRecord.remaining``.

    Args:
        data: Decoded top-level JSON object
        source: Name used in error messages

    Returns:
        TradeRecord

    Raises:
        RecordError: If imbalances are malformed
    """
    claims = _Claims(data)

    market_structure = data.get("currentMarketStructure")
    claims.claim("currentMarketStructure")

    order_volume = data.get("orderVolume", MISSING)
    if "orderVolume" in data:
        claims.claim("orderVolume")

    indecision_candle = _parse_candle(data.get("indecisionCandle"))
    if indecision_candle is not None:
        claims.claim("indecisionCandle")

    imbalances = _parse_imbalances(data.get("imbalances"), source)
    claims.claim("imbalances")

    confluence = _parse_confluence(data, claims)

    limit_order = _parse_limit_order(data.get("limitOrder"))
    if limit_order is not None:
        claims.claim("limitOrder")

    remaining = claims.remaining()
    if remaining:
        logger.debug(f"{source}: unrecognised fields {sorted(remaining)}")

    return TradeRecord(
        market_structure=market_structure,
        order_volume=order_volume,
        indecision_candle=indecision_candle,
        imbalances=imbalances,
        confluence=confluence,
        limit_order=limit_order,
        remaining=remaining,
    )


def _parse_candle(value: Any) -> Optional[Candle]:
    """Candle from a JSON object, or None for anything else."""
    if not isinstance(value, dict):
        return None
    return Candle(
        is_indecisive=value.get("isIndecisive"),
        open=value.get("open"),
        close=value.get("close"),
        high=value.get("high"),
        low=value.get("low"),
    )


def _parse_imbalances(value: Any, source: str) -> Tuple[ImbalanceZone, ...]:
    if value is None:
        return ()
    if not isinstance(value, dict):
        raise RecordError(f"imbalances must be an object in {source}")

    zones: List[ImbalanceZone] = []
    for raw_key, zone in value.items():
        key = _parse_zone_key(raw_key, source)
        if not isinstance(zone, dict):
            raise RecordError(f"Imbalance zone {raw_key!r} must be an object in {source}")
        zones.append(ImbalanceZone(
            key=key,
            bids=_parse_levels(zone.get("bids"), "bids", raw_key, source),
            asks=_parse_levels(zone.get("asks"), "asks", raw_key, source),
        ))
    return tuple(zones)


def _parse_zone_key(raw_key: str, source: str) -> int:
    # int() would also accept signs, whitespace and "1_0"
    if not (raw_key.isascii() and raw_key.isdigit()):
        raise RecordError(f"Imbalance key {raw_key!r} is not an integer in {source}")
    key = int(raw_key)
    if key < 1:
        raise RecordError(f"Imbalance key {raw_key!r} must be positive in {source}")
    return key


def _parse_levels(value: Any, side: str, raw_key: str, source: str) -> Tuple[Any, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise RecordError(f"{side} of imbalance zone {raw_key!r} must be a list in {source}")
    return tuple(value)


def _parse_confluence(data: Mapping[str, Any], claims: _Claims) -> Tuple[Tuple[str, Candle], ...]:
    """
    Collect confluence candles in timeframe order.

    A top-level timeframe key wins; the nested ``confluence`` object
    only fills timeframes the top level does not provide.
    """
    nested = data.get("confluence")
    if not isinstance(nested, dict):
        nested = {}
    claims.claim("confluence")

    candles: List[Tuple[str, Candle]] = []
    for timeframe in CONFLUENCE_TIMEFRAMES:
        candle = _parse_candle(data.get(timeframe))
        if candle is None:
            candle = _parse_candle(nested.get(timeframe))
        if candle is None:
            continue
        candles.append((timeframe, candle))
        claims.claim(timeframe)
    return tuple(candles)


def _parse_limit_order(value: Any) -> Optional[LimitOrder]:
    if not isinstance(value, dict):
        return None
    return LimitOrder(
        limit_price=value.get("limitPrice", MISSING),
        take_profit=value.get("takeProfit", MISSING),
        stop_loss=value.get("stopLoss", MISSING),
        zone_pips=value.get("zonePips", MISSING),
        take_profit_pips=value.get("takeProfitPips", MISSING),
        stop_loss_pips=value.get("stopLossPips", MISSING),
    )
