"""Decoding of the logo and stamp images."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import Image

logger = logging.getLogger(__name__)

# Image format expected for each supported file extension.
SUPPORTED_FORMATS = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
}


@dataclass(frozen=True)
class ImageHandle:
    name: str
    path: str
    width: int
    height: int
    image: Image.Image

    def scale_to_width(self, target_width: float) -> Tuple[float, float]:
        factor = target_width / self.width
        return self.width * factor, self.height * factor


def load_image(name: str, path: Optional[str]) -> Optional[ImageHandle]:
    """Decode an asset; failures are logged and yield ``None``."""
    if not path:
        return None

    expected = SUPPORTED_FORMATS.get(os.path.splitext(path)[1].lower())
    if expected is None:
        logger.warning("Could not embed %s: unsupported file type %s", name, path)
        return None

    try:
        with Image.open(path) as opened:
            opened.load()
            if opened.format != expected:
                raise ValueError(f"expected {expected} data, found {opened.format}")
            image = opened.copy()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        logger.warning("Could not embed %s: %s", name, exc)
        return None

    width, height = image.size
    if width <= 0 or height <= 0:
        logger.warning("Could not embed %s: empty image %s", name, path)
        return None
    return ImageHandle(name=name, path=path, width=width, height=height, image=image)
