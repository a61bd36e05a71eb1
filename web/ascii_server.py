#!/usr/bin/env python3
"""
hexpic — ASCII Conversion Server

FastAPI service that:
- Converts images given as an http(s)/data URL or base64 payload to ASCII art
- Lists the named charsets
- Reports service status and default options
"""

import base64
import binascii
import logging
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
load_dotenv()

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

# Ensure project root is on path
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from hexpic import HexPic, __version__
from hexpic.ascii.charsets import CHARSETS
from hexpic.ascii.errors import HexPicError, ImageLoadError, ImageTooLarge
from hexpic.config.settings import get_settings
from hexpic.utils.logging_config import setup_logging

logger = logging.getLogger("hexpic.ascii_server")

_start_time = time.time()
converter = HexPic()


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("hexpic ASCII server %s starting on %s:%d", __version__, settings.host, settings.port)
    yield
    logger.info("hexpic ASCII server stopped")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(title="hexpic ASCII", version=__version__, lifespan=lifespan)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class ConvertRequest(BaseModel):
    url: Optional[str] = None
    image_base64: Optional[str] = None
    width: Optional[int] = Field(None, ge=1, le=1000)
    height: Optional[int] = Field(None, ge=1, le=1000)
    charset: Optional[str] = None
    charset_name: Optional[str] = None
    invert: Optional[bool] = None
    contrast: Optional[float] = Field(None, gt=0)
    brightness: Optional[float] = None
    preserve_aspect_ratio: Optional[bool] = None
    background_color: Optional[str] = None


def _error(message: str, status: int) -> JSONResponse:
    return JSONResponse({"error": message}, status)


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return _error("Invalid request: " + "; ".join(parts), 400)


# ---------------------------------------------------------------------------
# REST endpoints
# ---------------------------------------------------------------------------

@app.get("/api/ascii/status")
async def get_status():
    """Health/status endpoint for heartbeat checks."""
    return {
        "service": "ascii_server",
        "status": "ok",
        "version": __version__,
        "uptime_seconds": round(time.time() - _start_time, 1),
        "defaults": converter.options.to_dict(),
        "workers": converter.workers,
    }


@app.get("/api/ascii/charsets")
async def list_charsets():
    """Named charsets, darkest glyph first."""
    return {"charsets": CHARSETS}


@app.post("/api/ascii/convert")
def convert(req: ConvertRequest):
    """Convert one image to ASCII art.

    Exactly one of ``url`` or ``image_base64`` must be given. Option fields
    left out keep the server defaults.
    """
    if (req.url is None) == (req.image_base64 is None):
        return _error("Provide exactly one of 'url' or 'image_base64'", 400)

    overrides = req.model_dump(exclude={"url", "image_base64", "charset_name"}, exclude_none=True)
    if req.charset_name is not None:
        if req.charset is not None:
            return _error("Provide at most one of 'charset' or 'charset_name'", 400)
        if req.charset_name not in CHARSETS:
            return _error(f"Unknown charset. Available: {list(CHARSETS.keys())}", 400)
        overrides["charset"] = CHARSETS[req.charset_name]

    try:
        if req.url is not None:
            result = converter.from_url(req.url, **overrides)
        else:
            try:
                data = base64.b64decode(req.image_base64, validate=True)
            except (binascii.Error, ValueError) as e:
                return _error(f"Invalid base64 image data: {e}", 400)
            result = converter.from_bytes(data, **overrides)
    except ImageTooLarge as e:
        return _error(str(e), 413)
    except ImageLoadError as e:
        return _error(str(e), 422)
    except HexPicError as e:
        return _error(str(e), 400)

    return result.to_dict()


if __name__ == "__main__":
    settings = get_settings()
    setup_logging(server_name="ascii_server", log_dir=settings.log_dir)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level="info")
