"""
Shared test fixtures and configuration for the hexpic test suite.

Provides frame factories (RGB/RGBA numpy images), PNG encoding helpers and a
skip marker for tests that need OpenCV.
"""

import numpy as np
import pytest

from hexpic.config.settings import reset_settings

try:
    import cv2
except ImportError:
    cv2 = None


requires_cv2 = pytest.mark.skipif(cv2 is None, reason="opencv-python (cv2) not installed")


# ---------------------------------------------------------------------------
# Frame factories
# ---------------------------------------------------------------------------

def make_solid_frame(value, w=20, h=10, alpha=None) -> np.ndarray:
    """Solid RGB (or RGBA when *alpha* is given) frame.

    *value* is a gray level or an (r, g, b) tuple.
    """
    rgb = (value, value, value) if np.isscalar(value) else tuple(value)
    channels = 3 if alpha is None else 4
    frame = np.empty((h, w, channels), dtype=np.uint8)
    frame[..., :3] = rgb
    if alpha is not None:
        frame[..., 3] = alpha
    return frame


def make_gradient_frame(w=64, h=8) -> np.ndarray:
    """RGB frame with a horizontal black → white gradient."""
    gray = np.linspace(0, 255, w).round().astype(np.uint8)
    gray = np.tile(gray, (h, 1))
    return np.repeat(gray[:, :, None], 3, axis=2)


def encode_png(frame: np.ndarray) -> bytes:
    """Encode an RGB/RGBA frame as PNG bytes."""
    code = cv2.COLOR_RGBA2BGRA if frame.shape[2] == 4 else cv2.COLOR_RGB2BGR
    ok, buf = cv2.imencode(".png", cv2.cvtColor(frame, code))
    assert ok
    return buf.tobytes()


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read HEXPIC_* settings for every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def gradient_frame():
    return make_gradient_frame()


@pytest.fixture
def white_png():
    if cv2 is None:
        pytest.skip("opencv-python (cv2) not installed")
    return encode_png(make_solid_frame(255, w=40, h=20))
