"""
Image acquisition — resolve a file, URL or in-memory bytes into RGBA pixels.

Everything here finishes (or fails) before the conversion core runs. Decoding
uses OpenCV; remote images are fetched with httpx.
"""

from __future__ import annotations

import base64
import binascii
import logging
from pathlib import Path
from typing import Optional
from urllib.parse import unquote_to_bytes, urlparse

import httpx
import numpy as np

try:
    import cv2
except ImportError:
    cv2 = None  # type: ignore[assignment]

from hexpic.ascii.errors import ImageLoadError, ImageTooLarge
from hexpic.config.settings import get_settings

logger = logging.getLogger("hexpic.acquisition.loader")

ALLOWED_SCHEMES = ("http", "https", "data")


def _require_cv2():
    if cv2 is None:
        raise RuntimeError("opencv-python (cv2) is required for image decoding")


def decode_image(data: bytes) -> np.ndarray:
    """Decode encoded image bytes (PNG, JPEG, WebP, ...) into an RGBA uint8 array.

    Grayscale and BGR sources gain an opaque alpha channel; 16-bit samples are
    reduced to 8 bits.
    """
    _require_cv2()
    if not data:
        raise ImageLoadError("Failed to decode image: no data")
    arr = np.frombuffer(data, dtype=np.uint8)
    image = cv2.imdecode(arr, cv2.IMREAD_UNCHANGED)
    if image is None:
        raise ImageLoadError("Failed to decode image bytes")

    if image.dtype == np.uint16:
        image = (image >> 8).astype(np.uint8)
    elif image.dtype != np.uint8:
        image = np.clip(image, 0, 255).astype(np.uint8)

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    channels = image.shape[2]
    if channels == 1:
        return cv2.cvtColor(image[:, :, 0], cv2.COLOR_GRAY2RGBA)
    if channels == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
    if channels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    raise ImageLoadError(f"Unsupported channel count: {channels}")


def check_source_size(width: int, height: int, max_pixels: Optional[int] = None) -> None:
    """Reject sources whose pixel count exceeds *max_pixels* (settings default)."""
    limit = get_settings().max_source_pixels if max_pixels is None else max_pixels
    if limit and width * height > limit:
        raise ImageTooLarge(f"Image is {width}x{height} ({width * height} px), limit is {limit} px")


def read_image_file(path: str | Path) -> bytes:
    """Read an image file from disk."""
    p = Path(path)
    try:
        return p.read_bytes()
    except OSError as e:
        logger.warning("Failed to read image file %s: %s", p, e)
        raise ImageLoadError(f"Failed to read image file {p}: {e}") from e


def _decode_data_url(url: str) -> bytes:
    header, sep, payload = url.partition(",")
    if not sep:
        raise ImageLoadError("Malformed data URL: missing ','")
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ImageLoadError(f"Malformed base64 in data URL: {e}") from e
    return unquote_to_bytes(payload)


def _read_limited(resp: httpx.Response, max_bytes: int) -> bytes:
    """Read a streamed response body, stopping once it passes *max_bytes* (0 = no limit)."""
    declared = resp.headers.get("Content-Length")
    if max_bytes and declared and declared.isdigit() and int(declared) > max_bytes:
        raise ImageTooLarge(f"Image is {declared} bytes, limit is {max_bytes}")

    chunks = []
    total = 0
    for chunk in resp.iter_bytes():
        total += len(chunk)
        if max_bytes and total > max_bytes:
            raise ImageTooLarge(f"Download exceeded {max_bytes} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


def fetch_image_bytes(
    url: str,
    timeout: Optional[float] = None,
    client: Optional[httpx.Client] = None,
    max_bytes: Optional[int] = None,
) -> bytes:
    """Fetch image bytes from an ``http(s)`` or ``data:`` URL.

    Other schemes (``file:``, ``javascript:``, ...) are rejected. Remote
    bodies are streamed and abandoned as soon as they exceed *max_bytes*.
    """
    settings = get_settings()
    timeout = settings.fetch_timeout if timeout is None else timeout
    max_bytes = settings.max_download_bytes if max_bytes is None else max_bytes

    url = url.strip()
    try:
        scheme = urlparse(url).scheme.lower()
    except ValueError as e:
        raise ImageLoadError(f"Malformed URL: {e}") from e
    if scheme not in ALLOWED_SCHEMES:
        raise ImageLoadError(f"Unsupported URL scheme {scheme!r}; expected one of {ALLOWED_SCHEMES}")
    if scheme == "data":
        data = _decode_data_url(url)
        if max_bytes and len(data) > max_bytes:
            raise ImageTooLarge(f"Data URL payload is {len(data)} bytes, limit is {max_bytes}")
        return data

    own_client = client is None
    http = client or httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        with http.stream("GET", url, timeout=timeout) as resp:
            resp.raise_for_status()
            return _read_limited(resp, max_bytes)
    except httpx.HTTPStatusError as e:
        logger.warning("Image fetch %s returned %d", url, e.response.status_code)
        raise ImageLoadError(f"Failed to load image: HTTP {e.response.status_code}") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("Image fetch %s failed: %s", url, e)
        raise ImageLoadError(f"Failed to load image: {e}") from e
    finally:
        if own_client:
            http.close()
