from asciimage.grid import GlyphCell, GlyphGrid

RESET = "\033[0m"


def _escape(cell: GlyphCell) -> str:
    parts = []
    if cell.fg is not None:
        r, g, b = cell.fg
        parts.append(f"\033[38;2;{r};{g};{b}m")
    if cell.bg is not None:
        r, g, b = cell.bg
        parts.append(f"\033[48;2;{r};{g};{b}m")
    return "".join(parts)


def to_lines(grid: GlyphGrid) -> list[str]:
    """One line per grid row; coloured cells are wrapped in ANSI truecolor escapes."""
    lines = []
    for row in grid:
        coloured = False
        parts = []
        for cell in row:
            escape = _escape(cell)
            coloured = coloured or bool(escape)
            parts.append(escape + cell.char)
        if coloured:
            parts.append(RESET)
        lines.append("".join(parts))
    return lines


def to_text(grid: GlyphGrid) -> str:
    return "\n".join(to_lines(grid))
