import numpy as np
import pytest
from PIL import Image

from asciimage.converter import convert_pixels, image_to_ascii, image_to_image
from asciimage.errors import InputError, ResourceError
from asciimage.grid import PixelGrid
from asciimage.options import ConversionOptions


def split_image(width, height, left, right):
    """Image whose left half is one colour and right half another."""
    img = Image.new("RGB", (width, height), left)
    img.paste(Image.new("RGB", (width - width // 2, height), right), (width // 2, 0))
    return img


def grid_of(img, **kwargs):
    return convert_pixels(PixelGrid.from_image(img), ConversionOptions(**kwargs))


def test_solid_white_maps_to_brightest():
    grid = grid_of(Image.new("RGB", (2, 2), (255, 255, 255)), dimensions=(2, 2))
    assert grid.chars == ["@@", "@@"]


def test_solid_black_maps_to_space():
    grid = grid_of(Image.new("RGB", (30, 40), 0), dimensions=(3, 2))
    assert grid.chars == ["   ", "   "]


def test_negative_swaps_extremes():
    grid = grid_of(Image.new("RGB", (4, 4), (255, 255, 255)), dimensions=(2, 1), negative=True)
    assert grid.chars == ["  "]


def test_custom_map():
    grid = grid_of(split_image(20, 10, (0, 0, 0), (255, 255, 255)), dimensions=(2, 1), custom_map="AB")
    assert grid.chars == ["AB"]


@pytest.mark.parametrize("braille", [False, True])
def test_grid_has_requested_cell_count(braille):
    rng = np.random.default_rng(9)
    img = Image.fromarray(rng.integers(0, 256, size=(23, 37, 3), dtype=np.uint8))
    grid = grid_of(img, dimensions=(13, 7), braille=braille)
    assert grid.width == 13
    assert grid.height == 7
    assert len(grid) == 13 * 7


def test_upsampling_small_source():
    grid = grid_of(Image.new("RGB", (1, 1), (255, 255, 255)), dimensions=(5, 3))
    assert grid.chars == ["@@@@@"] * 3


@pytest.mark.parametrize("gray, expected", [(200, "⣿"), (50, "⠀")])
def test_braille_solid_gray(gray, expected):
    grid = grid_of(Image.new("RGB", (4, 8), (gray, gray, gray)), dimensions=(1, 1), braille=True)
    assert grid.chars == [expected]


def test_braille_flip_mirrors_dots():
    img = split_image(2, 4, (255, 255, 255), (0, 0, 0))
    assert grid_of(img, dimensions=(1, 1), braille=True).chars == ["⡇"]
    assert grid_of(img, dimensions=(1, 1), braille=True, flip_x=True).chars == ["⢸"]


def test_flip_x_reverses_columns():
    img = split_image(20, 10, (0, 0, 0), (255, 255, 255))
    assert grid_of(img, dimensions=(2, 1)).chars == [" @"]
    assert grid_of(img, dimensions=(2, 1), flip_x=True).chars == ["@ "]


def test_flip_y_reverses_rows():
    arr = np.repeat(np.linspace(0, 255, 4).astype(np.uint8)[:, None], 4, axis=1)
    img = Image.fromarray(arr)
    plain = grid_of(img, dimensions=(4, 4)).chars
    flipped = grid_of(img, dimensions=(4, 4), flip_y=True).chars
    assert flipped == plain[::-1]
    assert plain[0] != plain[-1]


def _mirror_braille_x(char):
    """Swap the left and right dot columns of a braille character."""
    bits = ord(char) - 0x2800
    pairs = [(0x01, 0x08), (0x02, 0x10), (0x04, 0x20), (0x40, 0x80)]
    mirrored = 0
    for left, right in pairs:
        if bits & left:
            mirrored |= right
        if bits & right:
            mirrored |= left
    return chr(0x2800 | mirrored)


def test_dithered_flip_x_reverses_each_row():
    gradient = np.tile(np.linspace(0, 255, 64).astype(np.uint8), (16, 1))
    img = Image.fromarray(gradient)
    plain = grid_of(img, dimensions=(16, 4), dither=True).chars
    flipped = grid_of(img, dimensions=(16, 4), dither=True, flip_x=True).chars
    assert flipped == [row[::-1] for row in plain]


def test_dithered_flip_y_reverses_rows():
    rng = np.random.default_rng(12)
    img = Image.fromarray(rng.integers(0, 256, size=(32, 32, 3), dtype=np.uint8))
    plain = grid_of(img, dimensions=(8, 8), dither=True).chars
    flipped = grid_of(img, dimensions=(8, 8), dither=True, flip_y=True).chars
    assert flipped == plain[::-1]


def test_dithered_braille_flip_x_mirrors_cells_and_dots():
    rng = np.random.default_rng(13)
    img = Image.fromarray(rng.integers(0, 256, size=(24, 24, 3), dtype=np.uint8))
    plain = grid_of(img, dimensions=(6, 3), braille=True, dither=True).chars
    flipped = grid_of(img, dimensions=(6, 3), braille=True, dither=True, flip_x=True).chars
    assert flipped == ["".join(_mirror_braille_x(ch) for ch in reversed(row)) for row in plain]


def test_transparent_pixels_are_dark():
    grid = grid_of(Image.new("RGBA", (4, 4), (255, 255, 255, 0)), dimensions=(2, 2))
    assert grid.chars == ["  ", "  "]


def test_colour_sets_foreground():
    grid = grid_of(Image.new("RGB", (4, 4), (255, 0, 0)), dimensions=(2, 2), colour=True)
    for row in grid:
        for cell in row:
            assert cell.fg == (255, 0, 0)
            assert cell.bg is None


def test_char_background_moves_colour():
    grid = grid_of(Image.new("RGB", (4, 4), (0, 0, 255)), dimensions=(1, 1), colour=True, char_background=True)
    cell = grid.cells[0][0]
    assert cell.bg == (0, 0, 255)
    assert cell.fg is None


def test_braille_cells_use_block_average_colour():
    img = split_image(4, 4, (255, 0, 0), (0, 0, 255))
    grid = grid_of(img, dimensions=(1, 1), braille=True, colour=True)
    assert grid.cells[0][0].fg == (128, 0, 128)


def test_no_colour_by_default():
    grid = grid_of(Image.new("RGB", (4, 4), (255, 0, 0)), dimensions=(2, 2))
    assert all(cell.fg is None and cell.bg is None for row in grid for cell in row)


def test_dither_keeps_flat_extremes():
    img = split_image(20, 10, (0, 0, 0), (255, 255, 255))
    assert grid_of(img, dimensions=(4, 2), dither=True).chars == ["  @@", "  @@"]


def test_dither_produces_pattern_for_midtones():
    img = Image.new("L", (64, 64), 100)
    plain = grid_of(img, dimensions=(16, 8), custom_map=" #")
    dithered = grid_of(img, dimensions=(16, 8), custom_map=" #", dither=True)
    assert set("".join(plain.chars)) == {" "}
    assert set("".join(dithered.chars)) == {" ", "#"}


def test_image_to_ascii_accepts_path(tmp_path):
    path = tmp_path / "wide.png"
    Image.new("RGB", (200, 100), (255, 255, 255)).save(path)
    lines = image_to_ascii(path).split("\n")
    assert len(lines) == 25
    assert all(line == "@" * 100 for line in lines)


def test_image_to_ascii_colour_escapes():
    result = image_to_ascii(Image.new("RGB", (20, 20), (255, 0, 0)), ConversionOptions(width=4, colour=True))
    assert "\033[38;2;255;0;0m" in result
    assert result.endswith("\033[0m")


def test_image_to_image_needs_font():
    with pytest.raises(ResourceError):
        image_to_image(Image.new("RGB", (4, 4)), ConversionOptions(width=2))


def test_empty_pixel_grid_rejected():
    with pytest.raises(InputError):
        PixelGrid(np.zeros((0, 3, 4), dtype=np.uint8))
