"""Read an image or animation from a path, URL or piped stdin and decode it into frames."""

from __future__ import annotations

import io
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

import requests
from PIL import Image, ImageSequence, UnidentifiedImageError

from asciimage.animation import DEFAULT_DELAY, Frame
from asciimage.errors import InputError
from asciimage.grid import PixelGrid

logger = logging.getLogger(__name__)

STILL = "still"
ANIMATED = "animated"

# Pillow format name -> how frames are decoded
DECODERS: dict[str, str] = {
    "PNG": STILL,
    "JPEG": STILL,
    "WEBP": STILL,
    "TIFF": STILL,
    "BMP": STILL,
    "GIF": ANIMATED,
}

FETCH_TIMEOUT = (5.0, 30.0)  # connect, read


@dataclass
class Source:
    name: str  # file stem used to name saved outputs
    frames: list[Frame]
    animated: bool


def supported_formats() -> list[str]:
    return sorted(DECODERS)


def is_url(location: str) -> bool:
    parsed = urlparse(location)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def fetch_url(url: str) -> bytes:
    logger.info("Fetching %s", url)
    try:
        response = requests.get(url, timeout=FETCH_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as err:
        raise InputError(f"Can't fetch {url}: {err}") from err
    return response.content


def read_stdin() -> bytes:
    if sys.stdin.isatty():
        raise InputError("There is no input being piped to stdin")
    return sys.stdin.buffer.read()


def _source_name(location: str) -> str:
    if location == "-":
        return "piped-img"
    if is_url(location):
        return Path(urlparse(location).path).stem or "url-img"
    return Path(location).stem


def read_bytes(location: str) -> bytes:
    if location == "-":
        return read_stdin()
    if is_url(location):
        return fetch_url(location)
    try:
        return Path(location).read_bytes()
    except OSError as err:
        raise InputError(f"Unable to open file {location}: {err}") from err


def decode(data: bytes, name: str = "image") -> Source:
    """Sniff the format of `data` and decode it through the matching registry entry."""
    if not data:
        raise InputError(f"{name}: no data")
    try:
        image = Image.open(io.BytesIO(data))
    except UnidentifiedImageError as err:
        raise InputError(f"{name}: not a recognised image") from err

    kind = DECODERS.get(image.format)
    if kind is None:
        raise InputError(f"{name}: unsupported format {image.format} (supported: {', '.join(supported_formats())})")
    logger.debug("Decoding %s as %s (%s)", name, image.format, kind)

    if kind == STILL:
        return Source(name=name, frames=[Frame(PixelGrid.from_image(image))], animated=False)

    frames = []
    for frame in ImageSequence.Iterator(image):
        frames.append(
            Frame(
                PixelGrid.from_image(frame),
                delay=int(frame.info.get("duration") or DEFAULT_DELAY),
                disposal=int(getattr(frame, "disposal_method", 0) or 0),
            )
        )
    return Source(name=name, frames=frames, animated=True)


def load_source(location: str) -> Source:
    """Load a local path, http(s) URL, or "-" for stdin."""
    return decode(read_bytes(location), _source_name(location))
