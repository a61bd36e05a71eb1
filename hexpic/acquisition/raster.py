"""
Rasterizer — draws a decoded image onto a background-filled canvas of the
effective grid size, producing the opaque RGB buffer the pipeline consumes.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Tuple

import numpy as np

try:
    import cv2
except ImportError:
    cv2 = None  # type: ignore[assignment]

from hexpic.ascii.options import RGB

logger = logging.getLogger("hexpic.acquisition.raster")


def flatten_alpha(rgba: np.ndarray, background: RGB, out: np.ndarray | None = None) -> np.ndarray:
    """Source-over composite *rgba* onto a solid *background*, returning RGB uint8.

    ``out = src * a + bg * (1 - a)``, rounded half-up.
    """
    if rgba.shape[2] == 3:
        if out is None:
            return rgba.astype(np.uint8, copy=True)
        out[...] = rgba
        return out

    alpha = rgba[..., 3:4].astype(np.float64) / 255.0
    bg = np.asarray(background, dtype=np.float64).reshape(1, 1, 3)
    blended = rgba[..., :3].astype(np.float64) * alpha + bg * (1.0 - alpha)
    result = np.floor(blended + 0.5).clip(0, 255).astype(np.uint8)
    if out is None:
        return result
    out[...] = result
    return out


class Rasterizer:
    """Resizes images into a reusable scratch canvas.

    The canvas for each ``(width, height)`` is allocated once and reused by
    later calls. A lock serializes access, so one instance may be shared
    between threads; callers receive a copy of the canvas.
    """

    def __init__(self, max_cached: int = 4):
        if max_cached < 1:
            raise ValueError(f"max_cached must be at least 1, got {max_cached}")
        self.max_cached = max_cached
        self._canvases: Dict[Tuple[int, int], np.ndarray] = {}
        self._lock = threading.Lock()

    def _canvas(self, width: int, height: int) -> np.ndarray:
        key = (width, height)
        canvas = self._canvases.get(key)
        if canvas is None:
            if len(self._canvases) >= self.max_cached:
                self._canvases.pop(next(iter(self._canvases)))
            canvas = np.empty((height, width, 3), dtype=np.uint8)
            self._canvases[key] = canvas
            logger.debug("Allocated %dx%d scratch canvas", width, height)
        return canvas

    def rasterize(self, image: np.ndarray, width: int, height: int, background: RGB = (0, 0, 0)) -> np.ndarray:
        """Scale *image* (RGB or RGBA) to ``width x height`` and flatten alpha.

        Uses nearest-pixel sampling. Zero-sized targets return an empty
        ``(height, width, 3)`` array.
        """
        if image.ndim != 3 or image.shape[2] not in (3, 4):
            raise ValueError(f"Expected an (H, W, 3|4) image, got shape {image.shape}")
        if width == 0 or height == 0:
            return np.zeros((height, width, 3), dtype=np.uint8)
        if cv2 is None:
            raise RuntimeError("opencv-python (cv2) is required for rasterization")

        src = np.ascontiguousarray(image, dtype=np.uint8)
        if src.shape[:2] != (height, width):
            src = cv2.resize(src, (width, height), interpolation=cv2.INTER_NEAREST)

        with self._lock:
            canvas = self._canvas(width, height)
            flatten_alpha(src, background, out=canvas)
            return canvas.copy()
