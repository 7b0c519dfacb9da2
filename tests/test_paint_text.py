import pytest

from picolab.paint import BLACK, WHITE, Paint
from picolab.paint_text import (
    Font,
    PaintTime,
    draw_char,
    draw_num,
    draw_num_decimals,
    draw_string,
    draw_time,
)


def make_font(width, height, pattern):
    """Build a font covering space to tilde; ``pattern(char)`` gives row bytes."""
    row_bytes = -(-width // 8)
    table = bytearray()
    for code in range(32, 127):
        byte = pattern(chr(code))
        table.extend(bytes([byte]) * (row_bytes * height))
    return Font(width=width, height=height, table=bytes(table))


def solid(char):
    return 0x00 if char == " " else 0xFF


def white_paint(width=16, height=8):
    paint = Paint(None, width, height)
    paint.clear(WHITE)
    return paint


def black_pixels(paint):
    return {
        (x, y)
        for y in range(paint.height_memory)
        for x in range(paint.width_memory)
        if not paint.image[y * paint.width_byte + x // 8] & (0x80 >> (x % 8))
    }


def test_draw_char_paints_only_set_pixels_on_font_background():
    font = make_font(4, 3, solid)
    paint = white_paint()
    draw_char(paint, 2, 1, "A", font, BLACK, WHITE)
    assert black_pixels(paint) == {(x, y) for x in range(2, 6) for y in range(1, 4)}


def test_draw_char_paints_blank_pixels_with_other_background():
    font = make_font(4, 3, lambda c: 0xA0 if c == "A" else 0x00)
    paint = white_paint()
    draw_char(paint, 0, 0, "A", font, WHITE, BLACK)
    assert black_pixels(paint) == {(x, y) for x in (1, 3) for y in range(3)}


def test_draw_char_space_leaves_image_untouched():
    font = make_font(4, 3, solid)
    paint = white_paint()
    draw_char(paint, 0, 0, " ", font, BLACK, WHITE)
    assert black_pixels(paint) == set()


def test_draw_char_outside_image_is_ignored():
    font = make_font(4, 3, solid)
    paint = white_paint()
    draw_char(paint, 17, 0, "A", font, BLACK, WHITE)
    assert black_pixels(paint) == set()


def test_draw_char_without_glyph_raises():
    font = make_font(4, 3, solid)
    paint = white_paint()
    with pytest.raises(ValueError):
        draw_char(paint, 0, 0, "\n", font, BLACK, WHITE)


def test_draw_string_swaps_colour_arguments():
    font = make_font(4, 3, solid)
    by_string = white_paint()
    draw_string(by_string, 0, 0, "AB", font, WHITE, BLACK)
    by_chars = white_paint()
    draw_char(by_chars, 0, 0, "A", font, BLACK, WHITE)
    draw_char(by_chars, 4, 0, "B", font, BLACK, WHITE)
    assert bytes(by_string.image) == bytes(by_chars.image)
    assert len(black_pixels(by_string)) == 2 * 4 * 3


def test_draw_string_wraps_to_next_line():
    font = make_font(4, 3, solid)
    by_string = white_paint()
    draw_string(by_string, 0, 0, "ABCDE", font, WHITE, BLACK)
    by_chars = white_paint()
    for n, char in enumerate("ABCD"):
        draw_char(by_chars, n * 4, 0, char, font, BLACK, WHITE)
    draw_char(by_chars, 0, 3, "E", font, BLACK, WHITE)
    assert bytes(by_string.image) == bytes(by_chars.image)


def test_draw_string_restarts_at_top_when_full():
    font = make_font(4, 3, solid)
    paint = white_paint(8, 4)
    draw_string(paint, 0, 0, "ABC", font, WHITE, BLACK)
    assert black_pixels(paint) == {(x, y) for x in range(8) for y in range(3)}


@pytest.mark.parametrize("number", [0, 7, 123])
def test_draw_num_matches_decimal_string(number):
    font = make_font(4, 3, lambda c: 0x90 if c.isdigit() else 0x00)
    by_num = white_paint(32, 8)
    draw_num(by_num, 0, 0, number, font, BLACK, WHITE)
    by_string = white_paint(32, 8)
    draw_string(by_string, 0, 0, str(number), font, WHITE, BLACK)
    assert bytes(by_num.image) == bytes(by_string.image)
    assert black_pixels(by_num)


@pytest.mark.parametrize(
    "number, digit, text",
    [(3.14, 2, "3.14"), (7.9, 0, "7"), (2.5, 1, "2.5")],
)
def test_draw_num_decimals_matches_text(number, digit, text):
    font = make_font(4, 3, lambda c: (ord(c) * 16) & 0xF0)
    by_num = white_paint(32, 8)
    draw_num_decimals(by_num, 0, 0, number, font, digit, BLACK, WHITE)
    by_string = white_paint(32, 8)
    draw_string(by_string, 0, 0, text, font, WHITE, BLACK)
    assert bytes(by_num.image) == bytes(by_string.image)


def test_draw_time_places_narrow_colons():
    font = make_font(4, 3, lambda c: 0xFF if c == ":" else 0x00)
    paint = white_paint(32, 8)
    draw_time(paint, 0, 0, PaintTime(hour=12, minute=34, second=56), font, WHITE, BLACK)
    columns = {x for x, y in black_pixels(paint) if y == 0}
    assert columns == {7, 8, 9, 10, 17, 18, 19, 20}


def test_draw_time_digits_follow_time():
    font = make_font(4, 3, lambda c: 0xFF if c == "1" else 0x00)
    paint = white_paint(32, 8)
    draw_time(paint, 0, 0, PaintTime(hour=10, minute=0, second=0), font, WHITE, BLACK)
    expected = white_paint(32, 8)
    draw_char(expected, 0, 0, "1", font, BLACK, WHITE)
    assert bytes(paint.image) == bytes(expected.image)