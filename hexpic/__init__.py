"""hexpic — convert raster images into monospace ASCII art."""

from hexpic.ascii import (
    AsciiArtResult,
    ConversionOptions,
    DimensionMismatch,
    EmptyCharset,
    HexPicError,
    ImageLoadError,
    ImageTooLarge,
    InvalidColor,
    InvalidDimensions,
    convert_pixels,
    plan_dimensions,
)
from hexpic.converter import HexPic

__version__ = "0.3.0"

__all__ = [
    "AsciiArtResult",
    "ConversionOptions",
    "DimensionMismatch",
    "EmptyCharset",
    "HexPic",
    "HexPicError",
    "ImageLoadError",
    "ImageTooLarge",
    "InvalidColor",
    "InvalidDimensions",
    "convert_pixels",
    "plan_dimensions",
]
