import numpy as np

from asciimage.luminance import luminance_field
from asciimage.options import ConversionOptions


def sample_colours(blocks: np.ndarray, options: ConversionOptions) -> np.ndarray:
    """Turn block-averaged composited RGB (rows, cols, 3) into display colours.

    Negative inverts the colour, grayscale replaces it with its own luminance,
    so a grayscale cell is shaded by the same scalar that picked its glyph.

    Returns (rows, cols, 3) uint8.
    """
    colours = np.asarray(blocks, dtype=np.float64)
    if options.negative:
        colours = 255.0 - colours
    if options.grayscale:
        gray = luminance_field(colours)
        colours = np.repeat(gray[..., np.newaxis], 3, axis=-1)
    return np.clip(np.rint(colours), 0, 255).astype(np.uint8)
