"""Floyd-Steinberg error diffusion over a brightness field."""

import numpy as np

# (dy, dx, weight) for the not-yet-visited neighbours in raster order
FS_WEIGHTS = (
    (0, 1, 7 / 16),
    (1, -1, 3 / 16),
    (1, 0, 5 / 16),
    (1, 1, 1 / 16),
)


def _ramp_quantizer(levels: int):
    step = 255.0 / (levels - 1)

    def quantize(value: float) -> float:
        return min(255.0, max(0.0, round(value / step) * step))

    return quantize


def _threshold_quantizer(threshold: float):
    def quantize(value: float) -> float:
        return 255.0 if value > threshold else 0.0

    return quantize


def floyd_steinberg(field: np.ndarray, levels: int | None = None, threshold: float | None = None) -> np.ndarray:
    """Dither a 2D brightness field with values in [0, 255].

    Args:
        field: (H, W) brightness values.
        levels: number of evenly spaced output levels, normally the ramp length.
        threshold: quantize to 0/255 against this value instead (braille sub-samples).

    Returns:
        New (H, W) float array holding only quantized values.
    """
    if threshold is not None:
        quantize = _threshold_quantizer(threshold)
    elif levels is not None and levels >= 2:
        quantize = _ramp_quantizer(levels)
    else:
        raise ValueError("floyd_steinberg needs levels >= 2 or a threshold")

    img = np.asarray(field, dtype=np.float64).copy()
    h, w = img.shape

    for y in range(h):
        for x in range(w):
            old = img[y, x]
            new = quantize(old)
            img[y, x] = new
            err = old - new
            if err == 0:
                continue
            for dy, dx, weight in FS_WEIGHTS:
                ny, nx = y + dy, x + dx
                if ny < h and 0 <= nx < w:
                    img[ny, nx] += err * weight

    return np.clip(img, 0.0, 255.0)
