"""
hexpic — Conversion Pipeline

Turns a rasterized pixel buffer into an ``AsciiArtResult``. The buffer must
already be sized to the planned effective dimensions; scaling and alpha
flattening happen upstream in ``hexpic.acquisition``.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import numpy as np

from .dimensions import plan_dimensions
from .errors import DimensionMismatch
from .options import DEFAULT_OPTIONS, ConversionOptions
from .tone import glyph_index, tone

logger = logging.getLogger("hexpic.ascii.pipeline")

ROW_SEPARATOR = "\n"


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Row-major RGB(A) samples plus the native size of the source image.

    Attributes
    ----------
    pixels : np.ndarray
        ``(H, W, 3)`` or ``(H, W, 4)`` array of byte samples in RGB(A) order.
        Alpha, when present, has already been flattened and is ignored.
    source_width, source_height : int
        Size of the original image before rasterization; used for aspect-ratio
        planning.
    """

    pixels: np.ndarray
    source_width: int
    source_height: int

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


@dataclass(frozen=True)
class AsciiArtResult:
    """Output of one conversion.

    ``ascii`` holds one line per row, each terminated by ``"\\n"`` (the last
    row included). ``width``/``height`` are the effective grid size, which may
    be smaller than requested when the aspect ratio is preserved.
    """

    ascii: str
    width: int
    height: int
    charset: Union[str, Sequence[str]]

    @property
    def lines(self) -> List[str]:
        return self.ascii.split(ROW_SEPARATOR)[:-1] if self.ascii else []

    def to_dict(self) -> dict:
        charset = self.charset if isinstance(self.charset, str) else list(self.charset)
        return {
            "ascii": self.ascii,
            "lines": self.lines,
            "width": self.width,
            "height": self.height,
            "charset": charset,
        }


def _glyph_table(charset: Union[str, Sequence[str]]) -> np.ndarray:
    return np.asarray(list(charset))


def _render_rows(rgb: np.ndarray, options: ConversionOptions, glyphs: np.ndarray) -> List[str]:
    """Map a block of rows to glyph strings, one string per row."""
    values = tone(
        rgb[..., 0],
        rgb[..., 1],
        rgb[..., 2],
        contrast=options.contrast,
        brightness=options.brightness,
        invert=options.invert,
    )
    chars = glyphs[glyph_index(values, len(glyphs))]
    return ["".join(row) for row in chars]


def _row_bounds(height: int, workers: int) -> List[tuple]:
    chunks = min(workers, height)
    edges = [height * i // chunks for i in range(chunks + 1)]
    return [(edges[i], edges[i + 1]) for i in range(chunks)]


def convert_pixels(
    buffer: PixelBuffer,
    options: Optional[ConversionOptions] = None,
    workers: int = 1,
) -> AsciiArtResult:
    """Convert a rasterized pixel buffer into ASCII art.

    Parameters
    ----------
    buffer : PixelBuffer
        Samples sized to the effective dimensions planned from *options* and
        the buffer's source size.
    options : ConversionOptions
        Conversion settings; defaults when omitted.
    workers : int
        Number of threads to score rows with. Output is identical for any
        value.

    Raises
    ------
    DimensionMismatch
        The buffer is not shaped ``(height, width, 3|4)`` for the planned size.
    """
    options = options or DEFAULT_OPTIONS
    width, height = plan_dimensions(
        options.width,
        options.height,
        buffer.source_width,
        buffer.source_height,
        options.preserve_aspect_ratio,
    )

    pixels = buffer.pixels
    if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
        raise DimensionMismatch(f"Expected an (H, W, 3|4) pixel buffer, got shape {pixels.shape}")
    if pixels.shape[:2] != (height, width):
        raise DimensionMismatch(
            f"Pixel buffer is {pixels.shape[1]}x{pixels.shape[0]}, planned grid is {width}x{height}"
        )

    glyphs = _glyph_table(options.charset)
    rgb = pixels[..., :3]

    if workers > 1 and height > 1:
        bounds = _row_bounds(height, workers)
        with ThreadPoolExecutor(max_workers=len(bounds), thread_name_prefix="hexpic-rows") as pool:
            parts = pool.map(lambda b: _render_rows(rgb[b[0]:b[1]], options, glyphs), bounds)
            rows = [row for part in parts for row in part]
    else:
        rows = _render_rows(rgb, options, glyphs)

    text = "".join(row + ROW_SEPARATOR for row in rows)
    logger.debug("Converted %dx%d grid (source %sx%s, workers=%d)",
                 width, height, buffer.source_width, buffer.source_height, workers)
    return AsciiArtResult(ascii=text, width=width, height=height, charset=options.charset)
