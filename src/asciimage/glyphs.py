import numpy as np

from asciimage.charsets import BRAILLE_BASE, BRAILLE_CELL_HEIGHT, BRAILLE_CELL_WIDTH, BRAILLE_DOT_BITS
from asciimage.errors import ConfigError

_DOT_WEIGHTS = np.array(BRAILLE_DOT_BITS, dtype=np.int64)  # (4, 2)


def ramp_index(brightness: float, length: int) -> int:
    """Index into a ramp of `length` characters for a brightness in [0, 255]."""
    if length < 2:
        raise ConfigError("Ramp must contain at least 2 characters")
    return min(length - 1, max(0, int(brightness / 256 * length)))


def select_ramp(field: np.ndarray, ramp: str) -> list[str]:
    """Map an (H, W) brightness field onto ramp characters. Returns one string per row."""
    if len(ramp) < 2:
        raise ConfigError("Ramp must contain at least 2 characters")
    indices = np.clip(np.floor(np.asarray(field) / 256 * len(ramp)), 0, len(ramp) - 1).astype(np.int64)
    chars = np.array(list(ramp))
    return ["".join(chars[row]) for row in indices]


def braille_char(block: np.ndarray, threshold: float) -> str:
    """Braille character for one (4, 2) block of brightness values; a dot is raised above threshold."""
    bits = int((_DOT_WEIGHTS * (np.asarray(block) > threshold)).sum())
    return chr(BRAILLE_BASE | bits)


def select_braille(field: np.ndarray, threshold: float) -> list[str]:
    """Pack a (4*rows, 2*cols) sub-sample field into rows of braille characters."""
    h, w = field.shape
    rows = h // BRAILLE_CELL_HEIGHT
    cols = w // BRAILLE_CELL_WIDTH
    trimmed = np.asarray(field)[: rows * BRAILLE_CELL_HEIGHT, : cols * BRAILLE_CELL_WIDTH]
    # (rows, 4, cols, 2) -> (rows, cols, 4, 2)
    cells = trimmed.reshape(rows, BRAILLE_CELL_HEIGHT, cols, BRAILLE_CELL_WIDTH).transpose(0, 2, 1, 3)
    bits = ((cells > threshold) * _DOT_WEIGHTS).sum(axis=(2, 3))
    return ["".join(chr(BRAILLE_BASE | int(b)) for b in row) for row in bits]
