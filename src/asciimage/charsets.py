# Ramps run from the character used for brightness 0 to the one used for 255
SIMPLE_RAMP = " .:-=+*#%@"

COMPLEX_RAMP = " .'`^\",:;Il!i><~+_-?][}{1)(|\\/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$"

# Braille patterns: U+2800 to U+28FF (256 characters, 2x4 dot grid)
BRAILLE_BASE = 0x2800
BRAILLE = "".join(chr(i) for i in range(BRAILLE_BASE, BRAILLE_BASE + 0x100))

# Bit for each dot, indexed [row][col]:
#  dots: 1 4
#        2 5
#        3 6
#        7 8
BRAILLE_DOT_BITS = (
    (0x01, 0x08),
    (0x02, 0x10),
    (0x04, 0x20),
    (0x40, 0x80),
)
BRAILLE_CELL_WIDTH = 2
BRAILLE_CELL_HEIGHT = 4
