import logging
import shutil
import subprocess
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from asciimage.charsets import BRAILLE_BASE
from asciimage.errors import ResourceError
from asciimage.grid import GlyphGrid
from asciimage.options import ConversionOptions

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 16


def find_font(pattern: str = "monospace", char: str | None = None) -> str | None:
    """Ask fontconfig for a font file, optionally one that provides `char`."""
    if shutil.which("fc-match") is None:
        return None
    query = f"{pattern}:charset={ord(char):04x}" if char else pattern
    result = subprocess.run(["fc-match", "-f", "%{file}", query], capture_output=True, text=True)
    if result.returncode == 0 and result.stdout.strip():
        return result.stdout.strip()
    return None


def load_font(
    path: str | Path | None = None,
    size: int = DEFAULT_FONT_SIZE,
    braille: bool = False,
) -> ImageFont.FreeTypeFont:
    """Load a TrueType font, looking one up with fontconfig when no path is given.

    Braille output needs a font with the U+2800 block, so the lookup asks for one.
    """
    if path is None:
        path = find_font(char=chr(BRAILLE_BASE + 0xFF) if braille else None)
        if path is None:
            wanted = "braille" if braille else "monospace"
            raise ResourceError(f"No {wanted} font found; pass a font file explicitly")
        logger.debug("Using font %s", path)
    try:
        return ImageFont.truetype(str(path), size)
    except OSError as err:
        raise ResourceError(f"Unable to load font {path}: {err}") from err


def cell_size(font: ImageFont.FreeTypeFont) -> tuple[int, int]:
    """Pixel size of one glyph cell: advance of "M" by ascent plus descent."""
    ascent, descent = font.getmetrics()
    cell_width = max(1, round(font.getlength("M")))
    return cell_width, max(1, ascent + descent)


def render_grid(grid: GlyphGrid, options: ConversionOptions) -> Image.Image:
    """Rasterize a glyph grid into an RGBA image, one font cell per glyph."""
    font = options.font
    if font is None:
        raise ResourceError("Rendering an image needs a font")

    cw, ch = cell_size(font)
    image = Image.new("RGBA", (max(1, grid.width) * cw, max(1, grid.height) * ch), options.background_colour)
    draw = ImageDraw.Draw(image)

    for r, row in enumerate(grid):
        y = r * ch
        for c, cell in enumerate(row):
            x = c * cw
            if cell.bg is not None:
                draw.rectangle((x, y, x + cw - 1, y + ch - 1), fill=cell.bg)
            if cell.char.isspace() or cell.char == chr(BRAILLE_BASE):
                continue
            fill = cell.fg if cell.fg is not None else options.font_colour
            draw.text((x, y), cell.char, fill=fill, font=font)

    return image
