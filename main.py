"""Watermark upload service.

Accepts a base image and a watermark as a multipart upload, fits the base
into the configured canvas, tiles the watermark over it and answers with
the composed PNG.

Run locally:
python main.py
"""

import logging
import os
from typing import Optional

import uvicorn
from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from PIL import ImageColor

from tilemark import __version__, storage
from tilemark.errors import DecodeError, EncodeError, InvalidGeometryError
from tilemark.models import ErrorResponse, HealthResponse
from tilemark.pipeline import CompositionPipeline

# --- Environment & Config ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
TARGET_WIDTH = int(os.getenv("TARGET_WIDTH", "1024"))
TARGET_HEIGHT = int(os.getenv("TARGET_HEIGHT", "768"))
BACKGROUND_COLOR = os.getenv("BACKGROUND_COLOR", "black")
SWAPPED_PASSTHROUGH = os.getenv("SWAPPED_PASSTHROUGH", "1").lower() not in ("0", "false", "no", "off")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3210"))

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def parse_background(color: str) -> tuple:
    # Letterbox fill is always opaque, whatever alpha the colour string carries.
    r, g, b = ImageColor.getrgb(color)[:3]
    return (r, g, b, 255)


def build_pipeline() -> CompositionPipeline:
    """Build the pipeline from the environment config.

    Raises:
        ValueError: If ``BACKGROUND_COLOR`` is not a colour Pillow knows.
        InvalidGeometryError: If ``TARGET_WIDTH``/``TARGET_HEIGHT`` is not positive.
    """
    return CompositionPipeline(
        target_width=TARGET_WIDTH,
        target_height=TARGET_HEIGHT,
        background=parse_background(BACKGROUND_COLOR),
        swapped_passthrough=SWAPPED_PASSTHROUGH,
    )


# A bad configuration stops the service at startup instead of failing every request.
PIPELINE = build_pipeline()


# --- App Init ---
app = FastAPI(title="tilemark", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        version=__version__, target_width=PIPELINE.target_width, target_height=PIPELINE.target_height
    )


@app.post(
    "/watermark",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "The composed image."},
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def watermark_endpoint(
    image: Optional[UploadFile] = File(None),
    uploadfile: Optional[UploadFile] = File(None),
    watermark: Optional[UploadFile] = File(None),
):
    """Compose the uploaded base image with a tiled watermark.

    The base image is read from the ``image`` part, or from ``uploadfile``
    for older clients. The decoder for each part is chosen from its
    filename extension (``.png`` or JPEG otherwise). The output size is
    fixed by server configuration.
    """
    base = image or uploadfile
    if base is None:
        raise HTTPException(status_code=400, detail="Missing base image part 'image'.")
    if watermark is None:
        raise HTTPException(status_code=400, detail="Missing watermark image part 'watermark'.")

    base_bytes = await base.read()
    watermark_bytes = await watermark.read()
    logger.info("Received base %s (%d bytes) and watermark %s (%d bytes)",
                base.filename, len(base_bytes), watermark.filename, len(watermark_bytes))

    try:
        png = await run_in_threadpool(
            PIPELINE.compose, base_bytes, base.filename, watermark_bytes, watermark.filename
        )
    except DecodeError as e:
        logger.warning("Rejected upload: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except InvalidGeometryError as e:
        logger.warning("Rejected upload: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    except EncodeError as e:
        logger.exception("Failed to encode result")
        raise HTTPException(status_code=500, detail=str(e))

    headers = {}
    if storage.is_enabled():
        try:
            headers["X-Result-Path"] = storage.save_result(png)
        except OSError as e:
            logger.exception("Failed to store result")
            raise HTTPException(status_code=500, detail=f"Failed to store result: {e}")

    return Response(content=png, media_type="image/png", headers=headers)


if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
