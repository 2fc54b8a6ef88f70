import numpy as np

SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float64)
SOBEL_Y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.float64)
GAUSSIAN_3X3 = np.array([[1, 2, 1], [2, 4, 2], [1, 2, 1]], dtype=np.float64)
GAUSSIAN_3X3_SUM = 16.0


def grayscale(pixels: np.ndarray) -> np.ndarray:
    """
    Luminance of an RGBA/RGB array, rounded to whole intensity levels.

    Args:
        pixels: (H, W, 3 or 4) array

    Returns:
        (H, W) float64 array with values in [0, 255]
    """
    rgb = pixels[:, :, :3].astype(np.float64)
    luma = 0.299 * rgb[:, :, 0] + 0.587 * rgb[:, :, 1] + 0.114 * rgb[:, :, 2]
    return np.floor(luma + 0.5)


def correlate3x3(image: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Apply a 3x3 kernel to every interior pixel of a 2D array.

    Returns an (H-2, W-2) array; the kernel is applied as written (no flip),
    so kernel[0][0] weighs the top-left neighbour.
    """
    h, w = image.shape
    out = np.zeros((h - 2, w - 2), dtype=np.float64)
    for ky in range(3):
        for kx in range(3):
            weight = kernel[ky, kx]
            if weight == 0:
                continue
            out += weight * image[ky:ky + h - 2, kx:kx + w - 2]
    return out


def sobel_gradients(gray: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Sobel gradient magnitude and direction for interior pixels.

    The one-pixel border is never evaluated and stays at zero.

    Returns:
        Tuple of (magnitude, direction) arrays shaped like ``gray``
    """
    h, w = gray.shape
    magnitude = np.zeros((h, w), dtype=np.float64)
    direction = np.zeros((h, w), dtype=np.float64)
    if h < 3 or w < 3:
        return magnitude, direction

    gx = correlate3x3(gray, SOBEL_X)
    gy = correlate3x3(gray, SOBEL_Y)
    magnitude[1:-1, 1:-1] = np.sqrt(gx * gx + gy * gy)
    direction[1:-1, 1:-1] = np.arctan2(gy, gx)
    return magnitude, direction


def gaussian_blur(pixels: np.ndarray) -> np.ndarray:
    """
    Blur the RGB channels of interior pixels with the fixed 3x3 Gaussian kernel.

    Interior alpha is set to opaque. Border pixels are copied unchanged rather
    than zeroed to transparent black, so the frame does not read as an edge.

    Args:
        pixels: (H, W, 4) uint8 array

    Returns:
        New (H, W, 4) uint8 array
    """
    h, w = pixels.shape[:2]
    blurred = np.array(pixels, dtype=np.uint8, copy=True)
    if h < 3 or w < 3:
        return blurred

    src = pixels.astype(np.float64)
    for channel in range(3):
        smoothed = correlate3x3(src[:, :, channel], GAUSSIAN_3X3) / GAUSSIAN_3X3_SUM
        blurred[1:-1, 1:-1, channel] = np.clip(np.rint(smoothed), 0, 255).astype(np.uint8)
    blurred[1:-1, 1:-1, 3] = 255
    return blurred


def intensity_statistics(pixels: np.ndarray) -> tuple[float, float]:
    """Mean and population standard deviation of the grayscale intensity."""
    gray = grayscale(pixels)
    if gray.size == 0:
        return 0.0, 0.0
    return float(gray.mean()), float(gray.std())
