"""
hexpic — image to ASCII art converter.

``HexPic`` ties the pieces together: acquire the source image, plan the grid
size, rasterize into a scratch canvas and run the conversion pipeline.

    converter = HexPic(width=100, height=50)
    result = converter.from_file("photo.png")
    print(result.ascii)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Optional

import httpx
import numpy as np

from hexpic.acquisition.loader import check_source_size, decode_image, fetch_image_bytes, read_image_file
from hexpic.acquisition.raster import Rasterizer
from hexpic.ascii.dimensions import plan_dimensions
from hexpic.ascii.errors import InvalidDimensions
from hexpic.ascii.options import DEFAULT_OPTIONS, ConversionOptions
from hexpic.ascii.pipeline import AsciiArtResult, PixelBuffer, convert_pixels
from hexpic.config.settings import get_settings

logger = logging.getLogger("hexpic.converter")


class HexPic:
    """Converts images to ASCII art with a persistent set of options.

    Parameters
    ----------
    options : ConversionOptions, optional
        Starting options; defaults when omitted.
    workers : int, optional
        Row-scoring threads per conversion (``HEXPIC_WORKERS`` by default).
    rasterizer : Rasterizer, optional
        Scratch-canvas owner; one is created per converter by default.
    **overrides
        Option fields applied on top of *options*.
    """

    def __init__(
        self,
        options: Optional[ConversionOptions] = None,
        *,
        workers: Optional[int] = None,
        rasterizer: Optional[Rasterizer] = None,
        **overrides: Any,
    ):
        self._options = (options or DEFAULT_OPTIONS).merge(overrides)
        self.workers = max(1, workers if workers is not None else get_settings().workers)
        self._rasterizer = rasterizer or Rasterizer()

    @property
    def options(self) -> ConversionOptions:
        return self._options

    def set_options(self, partial: Optional[Mapping[str, Any]] = None, **overrides: Any) -> ConversionOptions:
        """Merge new option values into the converter's options."""
        self._options = self._options.merge(partial, **overrides)
        return self._options

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def from_array(self, image: np.ndarray, **overrides: Any) -> AsciiArtResult:
        """Convert a decoded ``(H, W, 3|4)`` RGB(A) uint8 image.

        *overrides* apply to this call only.
        """
        options = self._options.merge(overrides)
        if image.ndim != 3 or image.shape[2] not in (3, 4):
            raise ValueError(f"Expected an (H, W, 3|4) RGB(A) image, got shape {image.shape}")
        source_height, source_width = image.shape[:2]
        if source_width == 0 or source_height == 0:
            raise InvalidDimensions(f"Source image is {source_width}x{source_height}")
        check_source_size(source_width, source_height)

        width, height = plan_dimensions(
            options.width, options.height, source_width, source_height, options.preserve_aspect_ratio
        )
        pixels = self._rasterizer.rasterize(image, width, height, options.background_rgb)
        result = convert_pixels(PixelBuffer(pixels, source_width, source_height), options, workers=self.workers)
        logger.debug("Converted %dx%d source to %dx%d ASCII", source_width, source_height, width, height)
        return result

    def from_bytes(self, data: bytes, **overrides: Any) -> AsciiArtResult:
        """Convert encoded image bytes (PNG, JPEG, ...)."""
        return self.from_array(decode_image(data), **overrides)

    def from_file(self, path: str | Path, **overrides: Any) -> AsciiArtResult:
        """Convert an image file on disk."""
        return self.from_bytes(read_image_file(path), **overrides)

    def from_url(self, url: str, client: Optional[httpx.Client] = None, **overrides: Any) -> AsciiArtResult:
        """Fetch and convert an ``http(s)`` or ``data:`` URL."""
        logger.info("Fetching image from %s", url if not url.startswith("data:") else "data URL")
        return self.from_bytes(fetch_image_bytes(url, client=client), **overrides)
