from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from asciimage.charsets import BRAILLE_CELL_HEIGHT, BRAILLE_CELL_WIDTH
from asciimage.colour import sample_colours
from asciimage.dither import floyd_steinberg
from asciimage.grid import GlyphCell, GlyphGrid, PixelGrid
from asciimage.glyphs import select_braille, select_ramp
from asciimage.luminance import composite, luminance_field
from asciimage.options import BrailleMode, ConversionOptions
from asciimage.render import render_grid
from asciimage.sampling import block_means, flip, resolve_size
from asciimage.text import to_text


def _build_grid(chars: list[str], colours: np.ndarray | None, options: ConversionOptions) -> GlyphGrid:
    if colours is None:
        return GlyphGrid([[GlyphCell(char) for char in line] for line in chars])

    cells = []
    for r, line in enumerate(chars):
        row = []
        for c, char in enumerate(line):
            rgb = tuple(int(v) for v in colours[r, c])
            if options.char_background:
                row.append(GlyphCell(char, bg=rgb))
            else:
                row.append(GlyphCell(char, fg=rgb))
        cells.append(row)
    return GlyphGrid(cells)


def convert_pixels(
    pixels: PixelGrid,
    options: ConversionOptions,
    size: tuple[int, int] | None = None,
    terminal_size: tuple[int, int] | None = None,
) -> GlyphGrid:
    """Convert one decoded frame into a glyph grid.

    `size` is the (columns, rows) to produce; when omitted it is resolved from
    the frame's own dimensions and the sizing options.
    """
    if size is None:
        size = resolve_size(pixels.width, pixels.height, options, terminal_size)
    cols, rows = size

    rgb = composite(pixels.pixels)
    luma = luminance_field(rgb, options.negative)
    mode = options.glyph_mode

    if isinstance(mode, BrailleMode):
        field = block_means(luma, rows * BRAILLE_CELL_HEIGHT, cols * BRAILLE_CELL_WIDTH)
        if options.dither:
            field = floyd_steinberg(field, threshold=mode.threshold)
        # Flipping whole sub-samples mirrors the dots inside each cell as well
        field = flip(field, options.flip_x, options.flip_y)
        chars = select_braille(field, mode.threshold)
    else:
        field = block_means(luma, rows, cols)
        if options.dither:
            field = floyd_steinberg(field, levels=len(mode.ramp))
        field = flip(field, options.flip_x, options.flip_y)
        chars = select_ramp(field, mode.ramp)

    colours = None
    if options.coloured:
        blocks = flip(block_means(rgb, rows, cols), options.flip_x, options.flip_y)
        colours = sample_colours(blocks, options)

    return _build_grid(chars, colours, options)


def image_to_ascii(
    image: Image.Image | str | Path,
    options: ConversionOptions | None = None,
    terminal_size: tuple[int, int] | None = None,
) -> str:
    """Convert a still image (or the first frame of an animation) to text."""
    if not isinstance(image, Image.Image):
        image = Image.open(image)
    grid = convert_pixels(PixelGrid.from_image(image), options or ConversionOptions(), terminal_size=terminal_size)
    return to_text(grid)


def image_to_image(
    image: Image.Image | str | Path,
    options: ConversionOptions,
    terminal_size: tuple[int, int] | None = None,
) -> Image.Image:
    """Convert a still image and rasterize the result with the options' font."""
    if not isinstance(image, Image.Image):
        image = Image.open(image)
    grid = convert_pixels(PixelGrid.from_image(image), options, terminal_size=terminal_size)
    return render_grid(grid, options)
