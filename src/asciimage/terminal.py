import itertools
import os
import sys
import time
from typing import TextIO

HOME = "\033[H"
CLEAR = "\033[2J"


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, rows) of the terminal, or (80, 24) if not a tty."""
    if not sys.stdout.isatty():
        return (80, 24)
    size = os.get_terminal_size()
    return (size.columns, size.lines)


def play(frames: list[tuple[str, int]], loops: int | None = None, stream: TextIO | None = None) -> None:
    """Show (text, delay_ms) frames in place. loops=None repeats until interrupted."""
    stream = stream or sys.stdout
    stream.write(CLEAR)
    cycles = itertools.count() if loops is None else range(loops)
    for _ in cycles:
        for text, delay in frames:
            stream.write(HOME + text + "\n")
            stream.flush()
            time.sleep(delay / 1000)
