"""
hexpic — Tone Mapper

Pure per-pixel tone functions, applied in this order:

    grayscale → contrast → brightness → invert → glyph selection

Every function accepts either Python scalars or numpy arrays and performs the
same float64 operations in both cases, so a pixel scored on its own produces
exactly the glyph it gets inside a whole-frame conversion.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .errors import EmptyCharset

# ITU-R BT.709 luma weights
LUMA_R = 0.2126
LUMA_G = 0.7152
LUMA_B = 0.0722

MID_GRAY = 128
MAX_VALUE = 255


def _unwrap(result):
    """Return a Python float for 0-d results, arrays unchanged."""
    if np.ndim(result) == 0:
        return float(result)
    return result


def rgb_to_grayscale(r, g, b):
    """Weighted luma, rounded half-up to an integer in [0, 255]."""
    gray = np.floor(LUMA_R * r + LUMA_G * g + LUMA_B * b + 0.5)
    if np.ndim(gray) == 0:
        return int(gray)
    return gray.astype(np.int32)


def adjust_contrast(value, contrast: float):
    """Scale *value* about mid-gray by *contrast*, clamped to [0, 255]."""
    return _unwrap(np.clip((value - MID_GRAY) * contrast + MID_GRAY, 0, MAX_VALUE))


def adjust_brightness(value, brightness: float):
    """Blend toward white for positive *brightness*, toward black for negative.

    The result is not clamped; brightness outside [-1, 1] can push tones out
    of range and glyph selection clamps them.
    """
    if brightness > 0:
        return value + (MAX_VALUE - value) * brightness
    if brightness < 0:
        return value + value * brightness
    return value


def apply_invert(value, invert: bool):
    return MAX_VALUE - value if invert else value


def glyph_index(value, glyph_count: int):
    """Map a tone to an index into a charset of *glyph_count* glyphs.

    Index 0 is the darkest glyph (tone 0) and ``glyph_count - 1`` the lightest
    (tone 255). A 1.5 gamma curve compresses dark tones and spreads light
    ones across more glyphs.
    """
    if glyph_count < 1:
        raise EmptyCharset("charset must contain at least 1 glyph")
    normalized = np.clip(value, 0, MAX_VALUE) / float(MAX_VALUE)
    # normalized ** 1.5, written with sqrt so every numpy code path rounds alike
    adjusted = normalized * np.sqrt(normalized)
    index = np.clip(np.floor(adjusted * (glyph_count - 1)), 0, glyph_count - 1)
    if np.ndim(index) == 0:
        return int(index)
    return index.astype(np.intp)


def get_ascii_char(value, charset: Sequence[str]) -> str:
    """Return the glyph for a single tone value."""
    return charset[glyph_index(value, len(charset))]


def tone(r, g, b, contrast: float = 1.0, brightness: float = 0.0, invert: bool = False):
    """Run grayscale, contrast, brightness and invert on RGB components."""
    value = rgb_to_grayscale(r, g, b)
    value = adjust_contrast(value, contrast)
    value = adjust_brightness(value, brightness)
    return apply_invert(value, invert)


def pixel_to_char(r: int, g: int, b: int, options) -> str:
    """Score one opaque pixel with the settings in *options*."""
    value = tone(r, g, b, options.contrast, options.brightness, options.invert)
    return get_ascii_char(value, options.charset)
