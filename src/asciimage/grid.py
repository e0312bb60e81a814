from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

import numpy as np
from PIL import Image

from asciimage.errors import InputError

RGB = tuple[int, int, int]


@dataclass(frozen=True, eq=False)
class PixelGrid:
    """Decoded RGBA samples, shape (height, width, 4) uint8. Treated as read-only."""

    pixels: np.ndarray

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise InputError(f"Expected an (height, width, 4) RGBA array, got shape {self.pixels.shape}")
        if self.pixels.shape[0] == 0 or self.pixels.shape[1] == 0:
            raise InputError(f"Pixel grid is empty ({self.pixels.shape[1]}x{self.pixels.shape[0]})")

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelGrid":
        if image.width == 0 or image.height == 0:
            raise InputError(f"Image is empty ({image.width}x{image.height})")
        return cls(np.asarray(image.convert("RGBA"), dtype=np.uint8))

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class GlyphCell:
    char: str
    fg: RGB | None = None
    bg: RGB | None = None


@dataclass
class GlyphGrid:
    cells: list[list[GlyphCell]] = field(default_factory=list)  # one list per row

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def chars(self) -> list[str]:
        """One string per row, without colour."""
        return ["".join(cell.char for cell in row) for row in self.cells]

    def __iter__(self) -> Iterator[list[GlyphCell]]:
        return iter(self.cells)

    def __len__(self) -> int:
        return sum(len(row) for row in self.cells)
