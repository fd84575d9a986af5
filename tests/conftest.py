import json
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import trade_overlay
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from trade_overlay.layout import StyleConfig  # noqa: E402


# Common test fixtures
@pytest.fixture
def style():
    """Default style configuration."""
    return StyleConfig()


@pytest.fixture
def record_data():
    """A complete record as decoded from JSON."""
    return {
        "currentMarketStructure": "BEARISH",
        "orderVolume": 2.5,
        "indecisionCandle": {
            "isIndecisive": True,
            "open": "1.0850",
            "close": "1.0852",
            "high": "1.0860",
            "low": "1.0841",
        },
        "imbalances": {
            "1": {"bids": ["1.0845", "1.0843"], "asks": ["1.0855", "1.0857"]},
            "2": {"bids": ["1.0830"], "asks": ["1.0870"]},
        },
        "confluence": {
            "M5": {"isIndecisive": False, "open": 1.1, "close": 1.2, "high": 1.3, "low": 1.0},
        },
        "limitOrder": {"limitPrice": "1.0845", "takeProfit": "1.0900", "stopLoss": "1.0820"},
    }


@pytest.fixture
def write_pair(tmp_path: Path):
    """Factory writing a chart image and its record under tmp_path/root."""
    root = tmp_path / "root"

    def _write(stem: str, data, *, subdir: str = "", size=(200, 120), record_stem=None):
        folder = root / subdir if subdir else root
        folder.mkdir(parents=True, exist_ok=True)
        image_path = folder / f"{stem}.png"
        Image.new("RGB", size, color="white").save(image_path)
        record_path = folder / f"{record_stem or stem}.json"
        if isinstance(data, str):
            record_path.write_text(data, encoding="utf-8")
        else:
            record_path.write_text(json.dumps(data), encoding="utf-8")
        return image_path, record_path

    _write.root = root
    return _write
