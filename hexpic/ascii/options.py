"""
Conversion options — immutable per-call configuration for the ASCII pipeline.

Options are validated when constructed. A later partial option set overlays a
former one field by field via ``merge``; strings and sequences replace, never
concatenate.
"""

from __future__ import annotations

import dataclasses
import numbers
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from .charsets import DEFAULT_CHARSET
from .errors import EmptyCharset, InvalidColor, InvalidDimensions

Charset = Union[str, Tuple[str, ...]]
ColorLike = Union[str, Sequence[int]]
RGB = Tuple[int, int, int]


def parse_color(color: ColorLike) -> RGB:
    """Parse ``#rgb``, ``#rrggbb`` or an ``(r, g, b)`` sequence into an RGB tuple."""
    if isinstance(color, str):
        text = color.strip().lstrip("#")
        if len(text) == 3:
            text = "".join(ch * 2 for ch in text)
        if len(text) != 6:
            raise InvalidColor(f"Invalid color {color!r}: expected #rgb or #rrggbb")
        try:
            return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
        except ValueError:
            raise InvalidColor(f"Invalid color {color!r}: not hexadecimal") from None

    try:
        components = [int(c) for c in color]
    except (TypeError, ValueError):
        raise InvalidColor(f"Invalid color {color!r}") from None
    if len(components) != 3 or any(c < 0 or c > 255 for c in components):
        raise InvalidColor(f"Invalid color {color!r}: need 3 components in [0, 255]")
    return (components[0], components[1], components[2])


def _check_positive_int(name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidDimensions(f"{name} must be an integer, got {value!r}")
    if value <= 0:
        raise InvalidDimensions(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class ConversionOptions:
    """Configuration for a single image → ASCII conversion.

    Parameters
    ----------
    width, height : int
        Requested character-grid size.
    charset : str or tuple of str
        Glyph ramp from darkest to lightest. A single glyph is allowed.
    invert : bool
        Replace each tone with ``255 - tone`` before glyph selection.
    contrast : float
        Multiplier about mid-gray (1.0 leaves tones unchanged).
    brightness : float
        Blend toward white (> 0) or black (< 0); [-1, 1] is the useful range.
    preserve_aspect_ratio : bool
        Shrink one axis so the grid keeps the source aspect ratio.
    background_color : str or (r, g, b)
        Color transparent pixels are flattened against during rasterization.
    """

    width: int = 80
    height: int = 40
    charset: Charset = DEFAULT_CHARSET
    invert: bool = False
    contrast: float = 1.0
    brightness: float = 0.0
    preserve_aspect_ratio: bool = True
    background_color: ColorLike = "#000000"

    def __post_init__(self):
        _check_positive_int("width", self.width)
        _check_positive_int("height", self.height)
        if not isinstance(self.charset, str):
            # Sequence charsets are stored as tuples.
            object.__setattr__(self, "charset", tuple(self.charset))
        if len(self.charset) == 0:
            raise EmptyCharset("charset must contain at least 1 glyph")
        rgb = parse_color(self.background_color)
        if not isinstance(self.background_color, str):
            object.__setattr__(self, "background_color", rgb)

    @property
    def background_rgb(self) -> RGB:
        return parse_color(self.background_color)

    def merge(self, partial: Optional[Mapping[str, Any]] = None, **overrides: Any) -> ConversionOptions:
        """Return a copy with the fields present in *partial* / *overrides* replaced.

        ``None`` values are treated as unspecified and keep the prior value.
        """
        updates: dict[str, Any] = {}
        if partial:
            updates.update(partial)
        updates.update(overrides)
        updates = {k: v for k, v in updates.items() if v is not None}

        unknown = sorted(set(updates) - _FIELD_NAMES)
        if unknown:
            raise TypeError(f"Unknown conversion option(s): {', '.join(unknown)}")
        if not updates:
            return self
        return dataclasses.replace(self, **updates)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ConversionOptions:
        return cls().merge(data)

    def to_dict(self) -> dict:
        charset = self.charset if isinstance(self.charset, str) else list(self.charset)
        background = (
            self.background_color if isinstance(self.background_color, str) else list(self.background_color)
        )
        return {
            "width": self.width,
            "height": self.height,
            "charset": charset,
            "invert": self.invert,
            "contrast": self.contrast,
            "brightness": self.brightness,
            "preserve_aspect_ratio": self.preserve_aspect_ratio,
            "background_color": background,
        }


_FIELD_NAMES = frozenset(f.name for f in dataclasses.fields(ConversionOptions))

DEFAULT_OPTIONS = ConversionOptions()
