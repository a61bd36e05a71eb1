"""Dimension Planner — resolves the character grid actually used for a conversion."""

from __future__ import annotations

import math
import numbers
from typing import Tuple

from .errors import InvalidDimensions


def _require_positive(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
        raise InvalidDimensions(f"{name} must be a finite number, got {value!r}")
    if value <= 0:
        raise InvalidDimensions(f"{name} must be positive, got {value}")


def plan_dimensions(
    requested_width: int,
    requested_height: int,
    source_width: float,
    source_height: float,
    preserve_aspect_ratio: bool = True,
) -> Tuple[int, int]:
    """Return the effective ``(width, height)`` of the character grid.

    Without aspect preservation the requested size is used as-is and the
    source size is ignored. Otherwise the axis that is too long relative to the
    source is shrunk (floored), which can legitimately produce 0.

    Raises
    ------
    InvalidDimensions
        A requested dimension, or (when preserving) a source dimension, is not
        positive.
    """
    _require_positive("requested_width", requested_width)
    _require_positive("requested_height", requested_height)
    width, height = int(requested_width), int(requested_height)

    if not preserve_aspect_ratio:
        return width, height

    _require_positive("source_width", source_width)
    _require_positive("source_height", source_height)
    source_aspect = source_width / source_height

    if width / height > source_aspect:
        return math.floor(height * source_aspect), height
    return width, math.floor(width / source_aspect)
