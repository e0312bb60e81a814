import numpy as np

# ITU-R BT.601 luma weights
WEIGHTS = np.array([0.299, 0.587, 0.114])


def composite(pixels: np.ndarray) -> np.ndarray:
    """Composite RGBA samples over black. Returns float64 RGB of shape (..., 3) in [0, 255]."""
    arr = np.asarray(pixels, dtype=np.float64)
    return arr[..., :3] * (arr[..., 3:4] / 255.0)


def luminance(rgba: tuple[int, ...], negative: bool = False) -> float:
    """Brightness of one RGBA (or RGB) sample, in [0, 255]."""
    if len(rgba) == 3:
        rgba = (*rgba, 255)
    value = float(composite(np.array(rgba)) @ WEIGHTS)
    return 255.0 - value if negative else value


def luminance_field(rgb: np.ndarray, negative: bool = False) -> np.ndarray:
    """Brightness of every sample in a composited (..., 3) RGB array."""
    field = rgb @ WEIGHTS
    if negative:
        field = 255.0 - field
    return field
