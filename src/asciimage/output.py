import logging
from pathlib import Path

from PIL import Image

logger = logging.getLogger(__name__)

SUFFIX = "-ascii-art"


def output_path(directory: str | Path, name: str, extension: str) -> Path:
    return Path(directory) / f"{name}{SUFFIX}{extension}"


def save_text(lines: list[str], directory: str | Path, name: str) -> Path:
    """Write plain glyph lines (no colour escapes) as <name>-ascii-art.txt."""
    path = output_path(directory, name, ".txt")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("Saved %s", path)
    return path


def save_image(image: Image.Image, directory: str | Path, name: str) -> Path:
    path = output_path(directory, name, ".png")
    image.save(path, "PNG")
    logger.info("Saved %s", path)
    return path


def save_gif(
    images: list[Image.Image],
    delays: list[int],
    disposals: list[int],
    directory: str | Path,
    name: str,
) -> Path:
    """Write rendered frames as a looping gif, keeping each frame's delay and disposal."""
    if not images:
        raise ValueError("No frames to save")
    path = output_path(directory, name, ".gif")
    frames = [image.convert("RGB") for image in images]
    frames[0].save(
        path,
        "GIF",
        save_all=True,
        append_images=frames[1:],
        duration=delays,
        disposal=disposals,
        loop=0,
    )
    logger.info("Saved %s (%d frames)", path, len(frames))
    return path
