"""Top-level package for the trade overlay tool.

Renders trade-analysis JSON records as annotated panels beside their
chart images.

Provides subpackages:
- trade_overlay.loading – record parsing and .png/.json pair discovery
- trade_overlay.layout – panel layout engine
- trade_overlay.output – rasterizing, compositing and writing images
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        return pkg_version("trade-overlay")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
