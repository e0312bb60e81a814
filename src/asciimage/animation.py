"""Apply the single-frame pipeline across every frame of an animated source."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from PIL import Image

from asciimage.converter import convert_pixels
from asciimage.errors import ConversionError, FrameError, ResourceError
from asciimage.grid import GlyphGrid, PixelGrid
from asciimage.options import ConversionOptions
from asciimage.render import render_grid
from asciimage.sampling import resolve_size

DEFAULT_DELAY = 100  # ms, used when a decoder reports none


@dataclass(frozen=True)
class Frame:
    pixels: PixelGrid
    delay: int = DEFAULT_DELAY  # milliseconds
    disposal: int = 0


@dataclass
class FrameResult:
    grid: GlyphGrid
    image: Image.Image | None
    delay: int
    disposal: int


def _convert_one(
    number: int,
    frame: Frame,
    options: ConversionOptions,
    size: tuple[int, int],
    render: bool,
) -> FrameResult:
    try:
        grid = convert_pixels(frame.pixels, options, size=size)
        image = render_grid(grid, options) if render else None
    except (ConversionError, ValueError, OSError) as err:
        raise FrameError(number, str(err)) from err
    return FrameResult(grid=grid, image=image, delay=frame.delay, disposal=frame.disposal)


def convert_frames(
    frames: list[Frame],
    options: ConversionOptions,
    terminal_size: tuple[int, int] | None = None,
    render: bool = False,
    workers: int | None = None,
) -> list[FrameResult]:
    """Convert all frames, returning results in the original frame order.

    The output size is resolved once from the first frame and reused for the
    rest. Every frame must match the first frame's pixel size. Any failure
    raises before a single result is returned.
    """
    if not frames:
        raise FrameError(1, "animation has no frames")
    if render and options.font is None:
        raise ResourceError("Rendering frames needs a font")

    first = frames[0].pixels
    for number, frame in enumerate(frames[1:], start=2):
        if frame.pixels.size != first.size:
            raise FrameError(
                number,
                f"size {frame.pixels.width}x{frame.pixels.height} does not match "
                f"first frame {first.width}x{first.height}",
            )

    size = resolve_size(first.width, first.height, options, terminal_size)

    jobs = [(number, frame, options, size, render) for number, frame in enumerate(frames, start=1)]
    if workers is None or workers <= 1:
        return [_convert_one(*job) for job in jobs]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        # map yields in submission order and re-raises the first failure in that order
        return list(pool.map(lambda job: _convert_one(*job), jobs))
