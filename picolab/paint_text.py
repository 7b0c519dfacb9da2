"""Text, numbers and clock faces drawn on a :class:`~picolab.paint.Paint`.

Fonts are row-major bitmaps starting at the space character. Each glyph row
takes whole bytes, and the most significant bit is the leftmost pixel.

The string, number and time functions keep the panel library's colour
convention. :func:`draw_string` and :func:`draw_time` draw glyph pixels in
the colour passed as ``background`` and blank pixels in the one passed as
``foreground``. :func:`draw_num` and :func:`draw_num_decimals` swap the pair
once more before drawing the string, so their colours come out as named.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from picolab.paint import FONT_BACKGROUND, Paint

_WORD = 0xFFFF
_FIRST_CHAR = ord(" ")


def _f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _div10(n: int) -> tuple[int, int]:
    """Quotient and remainder by ten, truncating toward zero."""
    quotient = abs(n) // 10
    if n < 0:
        quotient = -quotient
    return quotient, n - quotient * 10


@dataclass(frozen=True)
class Font:
    """A fixed-width bitmap font whose first glyph is the space character."""

    width: int
    height: int
    table: bytes

    @property
    def bytes_per_row(self) -> int:
        return -(-self.width // 8)

    def glyph_offset(self, char: str) -> int:
        """Offset of a character's glyph in :attr:`table`."""
        code = ord(char)
        size = self.height * self.bytes_per_row
        offset = (code - _FIRST_CHAR) * size
        if code < _FIRST_CHAR or offset + size > len(self.table):
            raise ValueError(f"font has no glyph for {char!r}")
        return offset


@dataclass
class PaintTime:
    """A date and time of day as shown by :func:`draw_time`."""

    year: int = 0
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0


def draw_char(
    paint: Paint,
    x: int,
    y: int,
    char: str,
    font: Font,
    foreground: int,
    background: int,
) -> None:
    """Draw one character with its top-left corner at ``(x, y)``.

    When ``background`` is the font background colour only the glyph's set
    pixels are painted; otherwise the blank pixels get ``background``.
    """
    x &= _WORD
    y &= _WORD
    if x > paint.width or y > paint.height:
        return

    offset = font.glyph_offset(char)
    row_bytes = font.bytes_per_row
    for page in range(font.height):
        row = offset + page * row_bytes
        for column in range(font.width):
            lit = font.table[row + column // 8] & (0x80 >> (column % 8))
            if lit:
                paint.set_pixel(x + column, y + page, foreground)
            elif background != FONT_BACKGROUND:
                paint.set_pixel(x + column, y + page, background)


def draw_string(
    paint: Paint,
    x: int,
    y: int,
    text: str,
    font: Font,
    foreground: int,
    background: int,
) -> None:
    """Draw a string, wrapping at the right edge and restarting at the bottom.

    Glyph pixels are drawn in ``background`` and blank pixels in
    ``foreground``.
    """
    x_start = x & _WORD
    y_start = y & _WORD
    if x_start > paint.width or y_start > paint.height:
        return

    x_point, y_point = x_start, y_start
    for char in text:
        if x_point + font.width > paint.width:
            x_point = x_start
            y_point = (y_point + font.height) & _WORD
        if y_point + font.height > paint.height:
            x_point, y_point = x_start, y_start
        draw_char(paint, x_point, y_point, char, font, background, foreground)
        x_point = (x_point + font.width) & _WORD


def _digits(number: int) -> list[str]:
    """Digits of ``number``, least significant first, at least one."""
    digits = []
    while True:
        number, remainder = _div10(number)
        digits.append(chr(remainder + ord("0")))
        if not number:
            return digits


def draw_num(
    paint: Paint,
    x: int,
    y: int,
    number: int,
    font: Font,
    foreground: int,
    background: int,
) -> None:
    """Draw an integer in decimal."""
    if (x & _WORD) > paint.width or (y & _WORD) > paint.height:
        return
    text = "".join(reversed(_digits(number)))
    draw_string(paint, x, y, text, font, background, foreground)


def draw_num_decimals(
    paint: Paint,
    x: int,
    y: int,
    number: float,
    font: Font,
    digit: int,
    foreground: int,
    background: int,
) -> None:
    """Draw a number with ``digit`` truncated fractional digits."""
    if (x & _WORD) > paint.width or (y & _WORD) > paint.height:
        return

    chars: list[str] = []
    whole = int(number)
    if digit > 0:
        places = digit & 0xFF
        decimals = _f32(number - whole)
        for _ in range(places):
            decimals = _f32(decimals * 10)
        fraction = int(decimals)
        for _ in range(places):
            fraction, remainder = _div10(fraction)
            chars.append(chr(remainder + ord("0")))
        chars.append(".")

    chars.extend(_digits(whole))
    text = "".join(reversed(chars))
    draw_string(paint, x, y, text, font, background, foreground)


def draw_time(
    paint: Paint,
    x: int,
    y: int,
    time: PaintTime,
    font: Font,
    foreground: int,
    background: int,
) -> None:
    """Draw ``time`` as ``HH:MM:SS`` with narrowed colons.

    Glyph pixels are drawn in ``background`` and blank pixels in
    ``foreground``.
    """
    dx = font.width
    layout = (
        (x, str(time.hour // 10)),
        (x + dx, str(time.hour % 10)),
        (x + dx + dx // 4 + dx // 2, ":"),
        (x + dx * 2 + dx // 2, str(time.minute // 10)),
        (x + dx * 3 + dx // 2, str(time.minute % 10)),
        (x + dx * 4 + dx // 2 - dx // 4, ":"),
        (x + dx * 5, str(time.second // 10)),
        (x + dx * 6, str(time.second % 10)),
    )
    for position, char in layout:
        draw_char(paint, position, y, char, font, background, foreground)