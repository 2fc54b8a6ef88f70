import logging

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from .. import __version__, config
from ..errors import ConversionError, InvalidSettingsError, RasterError
from ..processors import VectorAssembler, load_raster
from ..settings import settings_from_params

logger = logging.getLogger(__name__)

app = FastAPI(title="Raster to SVG API")


def convert_image(image_data: bytes, params) -> dict:
    """
    Decode an uploaded image and vectorize it.

    Args:
        image_data: Encoded image bytes (PNG, JPEG, ...)
        params: Flat string parameters understood by settings_from_params

    Returns:
        VectorizationResult as a JSON-ready dict
    """
    settings = settings_from_params(params)
    raster = load_raster(image_data)
    return VectorAssembler(settings).vectorize(raster).to_dict()


@app.post("/convert")
async def convert_endpoint(
    request: Request,
    image: UploadFile = File(..., description="Raster image to vectorize"),
):
    """
    Convert a raster image to SVG.

    - **image**: image file (PNG, JPEG, ...)
    - query parameters override the conversion settings, e.g.
      `?edge=canny&lowThreshold=20&colorMode=binary`
    """
    if not image.content_type or not image.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="File must be an image")

    content = await image.read()
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    if len(content) > config.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds the {config.MAX_UPLOAD_BYTES} byte upload limit",
        )

    try:
        result = await run_in_threadpool(convert_image, content, dict(request.query_params))
    except (InvalidSettingsError, RasterError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConversionError as e:
        logger.error("Conversion of %s failed: %s", image.filename, e)
        raise HTTPException(status_code=500, detail=str(e))

    return JSONResponse(status_code=200, content=result)


@app.get("/")
async def root():
    return {"message": "Raster to SVG API", "version": __version__}


@app.get("/health")
async def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=config.LOG_LEVEL)
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
