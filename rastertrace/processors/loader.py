import io
import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import RasterError
from ..types import Raster

logger = logging.getLogger(__name__)


def raster_from_image(image: Image.Image) -> Raster:
    """Convert a Pillow image of any mode to an RGBA raster."""
    arr = np.array(image.convert("RGBA"))
    return Raster.from_array(arr)


def load_raster(source: Union[str, Path, bytes]) -> Raster:
    """
    Decode an image file (or its encoded bytes) into an RGBA raster.

    Args:
        source: Path to an image file, or the raw file contents

    Returns:
        Raster with the image's pixels

    Raises:
        RasterError: if the data is not an image Pillow can decode, or its
            pixel count exceeds Image.MAX_IMAGE_PIXELS
    """
    stream = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
    try:
        with Image.open(stream) as image:
            raster = raster_from_image(image)
    except FileNotFoundError:
        raise
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise RasterError(f"Could not decode image: {e}") from e

    logger.debug("Loaded %r", raster)
    return raster
