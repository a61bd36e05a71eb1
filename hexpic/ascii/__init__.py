"""
hexpic ASCII core — tone mapping, grid planning and the conversion pipeline.

Pure numpy; no image decoding or I/O happens here.
"""

from .charsets import CHARSETS, DEFAULT_CHARSET, get_charset
from .dimensions import plan_dimensions
from .errors import (
    DimensionMismatch,
    EmptyCharset,
    HexPicError,
    ImageLoadError,
    ImageTooLarge,
    InvalidColor,
    InvalidDimensions,
)
from .options import ConversionOptions, parse_color
from .pipeline import AsciiArtResult, PixelBuffer, convert_pixels
from .tone import (
    adjust_brightness,
    adjust_contrast,
    apply_invert,
    get_ascii_char,
    glyph_index,
    rgb_to_grayscale,
)

__all__ = [
    "AsciiArtResult",
    "CHARSETS",
    "ConversionOptions",
    "DEFAULT_CHARSET",
    "DimensionMismatch",
    "EmptyCharset",
    "HexPicError",
    "ImageLoadError",
    "ImageTooLarge",
    "InvalidColor",
    "InvalidDimensions",
    "PixelBuffer",
    "adjust_brightness",
    "adjust_contrast",
    "apply_invert",
    "convert_pixels",
    "get_ascii_char",
    "get_charset",
    "glyph_index",
    "parse_color",
    "plan_dimensions",
    "rgb_to_grayscale",
]
