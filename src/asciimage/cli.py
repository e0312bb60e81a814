import argparse
import logging
import sys
from pathlib import Path

from asciimage.animation import convert_frames
from asciimage.converter import convert_pixels
from asciimage.errors import ConfigError, ConversionError
from asciimage.options import ConversionOptions
from asciimage.output import save_gif, save_image, save_text
from asciimage.render import DEFAULT_FONT_SIZE, load_font, render_grid
from asciimage.source import Source, load_source
from asciimage.terminal import get_terminal_size, play
from asciimage.text import to_text

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert images and gifs into ASCII art")
    parser.add_argument("images", nargs="+", help="Image paths, http(s) URLs, or - for piped input")

    size = parser.add_mutually_exclusive_group()
    size.add_argument("-d", "--dimensions", type=int, nargs=2, metavar=("WIDTH", "HEIGHT"), help="Exact output size")
    size.add_argument("-W", "--width", type=int, help="Output width in characters, height follows aspect ratio")
    size.add_argument("-H", "--height", type=int, help="Output height in characters, width follows aspect ratio")
    size.add_argument("-f", "--full", action="store_true", help="Fit the output to the terminal")

    parser.add_argument("-c", "--complex", action="store_true", help="Use the longer character ramp")
    parser.add_argument("-m", "--map", dest="custom_map", help="Custom character ramp, darkest first")
    parser.add_argument("-b", "--braille", action="store_true", help="Use braille characters")
    parser.add_argument("--threshold", type=int, default=128, help="Braille dot threshold, 0-255 (default: 128)")
    parser.add_argument("--dither", action="store_true", help="Apply Floyd-Steinberg dithering")
    parser.add_argument("-n", "--negative", action="store_true", help="Invert brightness and colours")
    parser.add_argument("-C", "--colour", "--color", action="store_true", help="Enable truecolor ANSI output")
    parser.add_argument(
        "--colour-bg", "--color-bg", dest="char_background", action="store_true", help="Colour backgrounds instead"
    )
    parser.add_argument("-g", "--grayscale", action="store_true", help="Colour characters in grayscale")
    parser.add_argument("-x", "--flipX", dest="flip_x", action="store_true", help="Flip horizontally")
    parser.add_argument("-y", "--flipY", dest="flip_y", action="store_true", help="Flip vertically")

    parser.add_argument("--font", help="TrueType font for saved images and gifs")
    parser.add_argument("--font-size", type=int, default=DEFAULT_FONT_SIZE, help="Font size for saved images")
    parser.add_argument(
        "--font-colour", "--font-color", type=int, nargs=3, default=[255, 255, 255], metavar=("R", "G", "B")
    )
    parser.add_argument(
        "--save-bg",
        type=int,
        nargs=4,
        default=[0, 0, 0, 100],
        metavar=("R", "G", "B", "A"),
        help="Background of saved images; A is opacity in percent (default: 0 0 0 100)",
    )
    parser.add_argument("-s", "--save-img", metavar="DIR", help="Save rendered PNG into DIR")
    parser.add_argument("--save-txt", metavar="DIR", help="Save plain text into DIR")
    parser.add_argument("--save-gif", metavar="DIR", help="Save rendered gif into DIR (animated inputs)")
    parser.add_argument("--only-save", action="store_true", help="Do not print to the terminal")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def build_options(args: argparse.Namespace) -> ConversionOptions:
    r, g, b, opacity = args.save_bg
    if not 0 <= opacity <= 100:
        raise ConfigError(f"Background opacity must be 0-100, got {opacity}")

    font = None
    if args.save_img or args.save_gif:
        font = load_font(args.font, args.font_size, braille=args.braille)

    return ConversionOptions(
        dimensions=tuple(args.dimensions) if args.dimensions else None,
        width=args.width,
        height=args.height,
        full=args.full,
        threshold=args.threshold,
        negative=args.negative,
        colour=args.colour,
        char_background=args.char_background,
        grayscale=args.grayscale,
        flip_x=args.flip_x,
        flip_y=args.flip_y,
        complex=args.complex,
        braille=args.braille,
        dither=args.dither,
        custom_map=args.custom_map,
        font=font,
        font_colour=tuple(args.font_colour),
        background_colour=(r, g, b, round(opacity * 255 / 100)),
    )


def check_directories(args: argparse.Namespace) -> None:
    for flag in ("save_img", "save_txt", "save_gif"):
        directory = getattr(args, flag)
        if directory and not Path(directory).is_dir():
            raise ConfigError(f"Save directory does not exist: {directory}")


def convert_still(source: Source, options: ConversionOptions, args, terminal_size) -> None:
    grid = convert_pixels(source.frames[0].pixels, options, terminal_size=terminal_size)
    image = render_grid(grid, options) if args.save_img else None

    if not args.only_save:
        print(to_text(grid))
    if args.save_txt:
        save_text(grid.chars, args.save_txt, source.name)
    if image is not None:
        save_image(image, args.save_img, source.name)
    if args.save_gif:
        logger.warning("%s is not animated; --save-gif ignored", source.name)


def convert_animation(source: Source, options: ConversionOptions, args, terminal_size) -> None:
    results = convert_frames(source.frames, options, terminal_size=terminal_size, render=bool(args.save_gif))
    logger.debug("Converted %d frames of %s", len(results), source.name)

    if args.save_gif:
        save_gif(
            [result.image for result in results],
            [result.delay for result in results],
            [result.disposal for result in results],
            args.save_gif,
            source.name,
        )
    if args.save_txt or args.save_img:
        logger.warning("%s is animated; only --save-gif applies", source.name)
    if not args.only_save:
        try:
            play([(to_text(result.grid), result.delay) for result in results])
        except KeyboardInterrupt:
            print()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        check_directories(args)
        options = build_options(args)
        terminal_size = get_terminal_size() if args.full else None
        for location in args.images:
            source = load_source(location)
            if source.animated:
                convert_animation(source, options, args, terminal_size)
            else:
                convert_still(source, options, args, terminal_size)
    except ConversionError as err:
        print(f"asciimage: {err}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
