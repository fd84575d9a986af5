"""
Module: loading

Purpose:
    Input side of the pipeline: pairs chart images with their JSON
    records and parses records into typed TradeRecords.

Key Functions:
    - find_file_pairs(): Discover .png/.json pairs under a root
    - load_record(): Parse one record file

Key Classes:
    - FilePair: Matched image and record
    - TradeRecord: Parsed record
    - RecordError: Malformed record
"""

from .models import MISSING, Candle, ImbalanceZone, LimitOrder, TradeRecord
from .parser import RecordError, load_record, parse_record
from .discovery import FilePair, find_file_pairs, normalize_stem

__all__ = [
    "MISSING",
    "Candle",
    "ImbalanceZone",
    "LimitOrder",
    "TradeRecord",
    "RecordError",
    "load_record",
    "parse_record",
    "FilePair",
    "find_file_pairs",
    "normalize_stem",
]
