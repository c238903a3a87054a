"""Public package API for tax invoice rendering."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .config import AssetConfig, load_asset_config


def render_invoice(data: Dict[str, Any], assets: Optional[AssetConfig] = None) -> bytes:
    from .rendering import render_invoice as _render_invoice

    return _render_invoice(data, assets)


def run(host: str = "0.0.0.0", port: int = 5000) -> None:
    from .server import run as _run

    _run(host, port)


__all__ = ["AssetConfig", "load_asset_config", "render_invoice", "run"]
