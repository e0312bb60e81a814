import numpy as np

from asciimage.errors import ConfigError, InputError
from asciimage.options import ConversionOptions

# Terminal characters are about twice as tall as they are wide
CHAR_ASPECT = 2.0
DEFAULT_WIDTH = 100


def _height_for_width(width: int, src_width: int, src_height: int) -> int:
    return max(1, round(width * src_height / src_width / CHAR_ASPECT))


def _width_for_height(height: int, src_width: int, src_height: int) -> int:
    return max(1, round(height * src_width / src_height * CHAR_ASPECT))


def resolve_size(
    src_width: int,
    src_height: int,
    options: ConversionOptions,
    terminal_size: tuple[int, int] | None = None,
) -> tuple[int, int]:
    """Pick the glyph grid size (columns, rows) for a source of the given pixel size."""
    if src_width < 1 or src_height < 1:
        raise InputError(f"Source image is empty ({src_width}x{src_height})")

    if options.dimensions is not None:
        return tuple(options.dimensions)
    if options.width is not None:
        return options.width, _height_for_width(options.width, src_width, src_height)
    if options.height is not None:
        return _width_for_height(options.height, src_width, src_height), options.height
    if options.full:
        if terminal_size is None:
            raise ConfigError("Full mode needs the terminal size")
        columns, lines = terminal_size
        if columns < 1 or lines < 1:
            raise ConfigError(f"Terminal size must be positive, got {columns}x{lines}")
        rows = _height_for_width(columns, src_width, src_height)
        if rows <= lines:
            return columns, rows
        return min(columns, _width_for_height(lines, src_width, src_height)), lines
    return DEFAULT_WIDTH, _height_for_width(DEFAULT_WIDTH, src_width, src_height)


def block_starts(length: int, parts: int) -> np.ndarray:
    """First source index of each of `parts` blocks spanning `length` samples.

    Block i covers [i*length//parts, (i+1)*length//parts). When upsampling a
    block would be empty, so it falls back to the single sample at its start.
    """
    return (np.arange(parts) * length) // parts


def _mean_along(arr: np.ndarray, parts: int, axis: int) -> np.ndarray:
    length = arr.shape[axis]
    starts = block_starts(length, parts)
    # reduceat returns arr[start] for empty segments, which is the fallback we want
    sums = np.add.reduceat(arr, starts, axis=axis)
    stops = np.append(starts[1:], length)
    counts = np.maximum(stops - starts, 1)
    shape = [1] * arr.ndim
    shape[axis] = parts
    return sums / counts.reshape(shape)


def block_means(arr: np.ndarray, rows: int, cols: int) -> np.ndarray:
    """Average an (H, W, ...) array down (or up) to (rows, cols, ...)."""
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InputError(f"Cannot resample an empty field of shape {arr.shape}")
    arr = np.asarray(arr, dtype=np.float64)
    return _mean_along(_mean_along(arr, rows, 0), cols, 1)


def flip(arr: np.ndarray, flip_x: bool = False, flip_y: bool = False) -> np.ndarray:
    """Reverse column and/or row order of an (H, W, ...) array."""
    if flip_x:
        arr = arr[:, ::-1]
    if flip_y:
        arr = arr[::-1]
    return arr
