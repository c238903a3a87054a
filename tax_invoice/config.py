"""Runtime configuration loaded from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


def env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


HOST = env_str("INVOICE_HOST", "0.0.0.0")
PORT = env_int("INVOICE_PORT", 5000, minimum=1)
LOG_LEVEL = env_str("INVOICE_LOG_LEVEL", "INFO").upper()
IMAGES_DIR = env_str("INVOICE_IMAGES_DIR", os.path.join(_PROJECT_ROOT, "images"))

DEFAULT_MAX_CONCURRENT_RENDERS = max(2, min(8, os.cpu_count() or 2))
MAX_CONCURRENT_RENDERS = env_int(
    "INVOICE_MAX_CONCURRENT_RENDERS",
    DEFAULT_MAX_CONCURRENT_RENDERS,
    minimum=1,
)
MAX_INFLIGHT_RENDERS = env_int(
    "INVOICE_MAX_INFLIGHT_RENDERS",
    max(20, MAX_CONCURRENT_RENDERS * 4),
    minimum=1,
)
RENDER_QUEUE_TIMEOUT_MS = env_int("INVOICE_RENDER_QUEUE_TIMEOUT_MS", 5000, minimum=0)
RENDER_TIMEOUT_MS = env_int("INVOICE_RENDER_TIMEOUT_MS", 30000, minimum=1000)

MAX_BODY_BYTES = env_int("INVOICE_MAX_BODY_BYTES", 1024 * 1024, minimum=1024)
# The layout is a single A4 page; more rows than this run into the footer.
MAX_ITEMS = env_int("INVOICE_MAX_ITEMS", 5, minimum=1)
LISTEN_BACKLOG = env_int("INVOICE_LISTEN_BACKLOG", 128, minimum=1)

LOGO_CANDIDATES = ("logo.png", "logo.jpg", "logo.jpeg")
STAMP_CANDIDATES = ("stamp.png", "stamp.jpg", "stamp.jpeg")


@dataclass(frozen=True)
class AssetConfig:
    """Resolved asset paths, built once at process start and never mutated."""

    logo_path: Optional[str] = None
    stamp_path: Optional[str] = None


def resolve_asset_path(directory: str, candidates: Sequence[str]) -> Optional[str]:
    for candidate in candidates:
        path = os.path.join(directory, candidate)
        if os.path.exists(path):
            return path
    return None


def load_asset_config(images_dir: Optional[str] = None) -> AssetConfig:
    directory = images_dir or IMAGES_DIR
    config = AssetConfig(
        logo_path=resolve_asset_path(directory, LOGO_CANDIDATES),
        stamp_path=resolve_asset_path(directory, STAMP_CANDIDATES),
    )
    logger.info(
        "Assets resolved from %s: logo=%s stamp=%s",
        directory,
        config.logo_path or "none",
        config.stamp_path or "none",
    )
    return config
