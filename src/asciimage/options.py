from __future__ import annotations

from dataclasses import dataclass, field

from PIL import ImageFont

from asciimage.charsets import COMPLEX_RAMP, SIMPLE_RAMP
from asciimage.errors import ConfigError

RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]

# Evenly spaced dither levels land in distinct ramp buckets only up to this length
MAX_RAMP_LENGTH = 256


@dataclass(frozen=True)
class RampMode:
    """Pick one character per cell from a brightness ramp."""

    ramp: str


@dataclass(frozen=True)
class BrailleMode:
    """Pack a 2x4 block of thresholded sub-samples into one braille character."""

    threshold: int


GlyphMode = RampMode | BrailleMode


def _check_colour(name: str, value: tuple[int, ...], length: int) -> None:
    if len(value) != length or any(not 0 <= c <= 255 for c in value):
        raise ConfigError(f"{name} must be {length} values in 0-255, got {value!r}")


@dataclass(frozen=True)
class ConversionOptions:
    """Everything one conversion needs. Validated on construction."""

    # Sizing: at most one of these may be set; none means the default size
    dimensions: tuple[int, int] | None = None
    width: int | None = None
    height: int | None = None
    full: bool = False

    threshold: int = 128
    negative: bool = False
    colour: bool = False
    char_background: bool = False
    grayscale: bool = False
    flip_x: bool = False
    flip_y: bool = False
    complex: bool = False
    braille: bool = False
    dither: bool = False
    custom_map: str | None = None

    # Raster output
    font: ImageFont.FreeTypeFont | None = field(default=None, compare=False, repr=False)
    font_colour: RGB = (255, 255, 255)
    background_colour: RGBA = (0, 0, 0, 255)

    def __post_init__(self):
        sizing = [self.dimensions is not None, self.width is not None, self.height is not None, self.full]
        if sum(sizing) > 1:
            raise ConfigError("Only one of dimensions, width, height or full may be set")
        if self.dimensions is not None:
            if len(self.dimensions) != 2 or min(self.dimensions) < 1:
                raise ConfigError(f"Dimensions must be two positive integers, got {self.dimensions!r}")
        if self.width is not None and self.width < 1:
            raise ConfigError(f"Width must be at least 1, got {self.width}")
        if self.height is not None and self.height < 1:
            raise ConfigError(f"Height must be at least 1, got {self.height}")

        if not 0 <= self.threshold <= 255:
            raise ConfigError(f"Threshold must be in 0-255, got {self.threshold}")
        if self.custom_map is not None and len(self.custom_map) < 2:
            raise ConfigError("Custom map must contain at least 2 characters")
        if self.custom_map is not None and len(self.custom_map) > MAX_RAMP_LENGTH:
            raise ConfigError(f"Custom map must contain at most {MAX_RAMP_LENGTH} characters")
        if self.braille and (self.custom_map is not None or self.complex):
            raise ConfigError("Braille mode cannot be combined with a character map")
        if self.char_background and not self.coloured:
            raise ConfigError("Character background colouring needs colour or grayscale output")

        _check_colour("Font colour", self.font_colour, 3)
        _check_colour("Background colour", self.background_colour, 4)

    @property
    def coloured(self) -> bool:
        return self.colour or self.grayscale

    @property
    def glyph_mode(self) -> GlyphMode:
        if self.braille:
            return BrailleMode(self.threshold)
        if self.custom_map is not None:
            return RampMode(self.custom_map)
        return RampMode(COMPLEX_RAMP if self.complex else SIMPLE_RAMP)
