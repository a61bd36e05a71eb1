"""
hexpic Acquisition — turns files, URLs and encoded bytes into pixel buffers.

Requires opencv-python (cv2) for decoding and resizing.
"""

from .loader import (
    check_source_size,
    decode_image,
    fetch_image_bytes,
    read_image_file,
)
from .raster import Rasterizer, flatten_alpha

__all__ = [
    "Rasterizer",
    "check_source_size",
    "decode_image",
    "fetch_image_bytes",
    "flatten_alpha",
    "read_image_file",
]
