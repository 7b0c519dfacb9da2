import pytest

from picolab.paint import (
    BLACK,
    GRAY1,
    GRAY4,
    ROTATE_0,
    ROTATE_90,
    ROTATE_180,
    WHITE,
    Mirror,
    Paint,
)

W, H = 16, 4


def _white(width=W, height=H, rotate=ROTATE_0):
    paint = Paint(None, width, height, rotate, WHITE)
    paint.clear(WHITE)
    return paint


def test_rotation_swaps_logical_size():
    paint = Paint(None, 24, 8, ROTATE_90, WHITE)
    assert (paint.width, paint.height) == (8, 24)
    assert (paint.width_memory, paint.height_memory) == (24, 8)


def test_row_bytes_cover_width():
    paint = Paint(None, 10, 3, ROTATE_0, WHITE)
    assert paint.width_byte * 8 >= 10
    assert (paint.width_byte - 1) * 8 < 10
    assert len(paint.image) == paint.width_byte * 3


def test_clear_fills_with_colour():
    paint = _white()
    assert bytes(paint.image) == bytes([WHITE]) * len(paint.image)
    paint.clear(BLACK)
    assert bytes(paint.image) == bytes([BLACK]) * len(paint.image)


def test_black_pixel_clears_most_significant_bit():
    paint = _white()
    paint.set_pixel(0, 0, BLACK)
    assert paint.image[0] == 0x7F
    assert all(b == WHITE for b in paint.image[1:])


def test_set_pixel_round_trip():
    paint = _white()
    before = bytes(paint.image)
    paint.set_pixel(5, 2, BLACK)
    assert bytes(paint.image) != before
    paint.set_pixel(5, 2, WHITE)
    assert bytes(paint.image) == before


def test_rotate_180_maps_to_opposite_corner():
    rotated = _white(rotate=ROTATE_180)
    plain = _white()
    rotated.set_pixel(0, 0, BLACK)
    plain.set_pixel(W - 1, H - 1, BLACK)
    assert rotated.image == plain.image


def test_rotate_90_mapping():
    rotated = _white(rotate=ROTATE_90)
    plain = _white()
    rotated.set_pixel(2, 3, BLACK)
    plain.set_pixel(W - 3 - 1, 2, BLACK)
    assert rotated.image == plain.image


def test_horizontal_mirror():
    mirrored = _white()
    mirrored.set_mirroring(Mirror.HORIZONTAL)
    plain = _white()
    mirrored.set_pixel(1, 1, BLACK)
    plain.set_pixel(W - 2, 1, BLACK)
    assert mirrored.image == plain.image


def test_origin_mirror_matches_half_turn():
    mirrored = _white()
    mirrored.set_mirroring(Mirror.ORIGIN)
    rotated = _white(rotate=ROTATE_180)
    for x, y in [(0, 0), (3, 1), (7, 2)]:
        mirrored.set_pixel(x, y, BLACK)
        rotated.set_pixel(x, y, BLACK)
    assert mirrored.image == rotated.image


def test_out_of_range_pixels_ignored():
    paint = _white()
    before = bytes(paint.image)
    paint.set_pixel(W + 1, 0, BLACK)
    paint.set_pixel(0, H + 1, BLACK)
    paint.set_pixel(-1, 0, BLACK)
    assert bytes(paint.image) == before


def test_invalid_rotation_and_mirror_ignored():
    paint = _white()
    paint.set_rotate(45)
    paint.set_mirroring(9)
    assert paint.rotate == ROTATE_0
    assert paint.mirror == Mirror.NONE
    paint.set_rotate(ROTATE_180)
    paint.set_mirroring(Mirror.VERTICAL)
    assert paint.rotate == ROTATE_180
    assert paint.mirror == Mirror.VERTICAL


def test_invalid_scale_ignored():
    paint = _white()
    width_byte = paint.width_byte
    paint.set_scale(3)
    assert paint.scale == 2
    assert paint.width_byte == width_byte


def test_four_grey_pixel():
    paint = Paint(bytearray(W // 4 * H), W, H, ROTATE_0, WHITE)
    paint.set_scale(4)
    assert paint.width_byte * 4 == W
    paint.clear(GRAY4)
    paint.set_pixel(0, 0, GRAY1)
    assert paint.image[0] == 0xC0


def test_four_grey_clear_is_consistent_with_pixels():
    paint = Paint(bytearray(W // 4 * H), W, H, ROTATE_0, WHITE)
    paint.set_scale(4)
    paint.clear(1)
    before = bytes(paint.image)
    assert len(set(before)) == 1
    paint.set_pixel(2, 1, 1)
    assert bytes(paint.image) == before


def test_nibble_scale_pixels_match_clear():
    drawn = Paint(bytearray(W // 2 * H), W, H, ROTATE_0, WHITE)
    drawn.set_scale(7)
    drawn.clear(0)
    drawn.set_pixel(0, 0, 5)
    drawn.set_pixel(1, 0, 5)
    cleared = Paint(bytearray(W // 2 * H), W, H, ROTATE_0, WHITE)
    cleared.set_scale(7)
    cleared.clear(5)
    assert drawn.image[0] == cleared.image[0]
    assert drawn.image[1] == 0


def test_clear_windows_full_area_equals_clear():
    windowed = _white()
    windowed.clear_windows(0, 0, W, H, BLACK)
    cleared = _white()
    cleared.clear(BLACK)
    assert windowed.image == cleared.image


def test_clear_windows_empty_leaves_image():
    paint = _white()
    before = bytes(paint.image)
    paint.clear_windows(3, 0, 3, H, BLACK)
    assert bytes(paint.image) == before


def test_draw_bitmap_copies_buffer():
    paint = _white()
    bitmap = bytes(range(len(paint.image)))
    paint.draw_bitmap(bitmap)
    assert bytes(paint.image) == bitmap


def test_draw_bitmap_too_short_raises():
    paint = _white()
    with pytest.raises(ValueError):
        paint.draw_bitmap(b"\x00")


def test_select_image_redirects_drawing():
    paint = _white()
    first = paint.image
    second = bytearray([WHITE]) * len(first)
    paint.select_image(second)
    paint.set_pixel(0, 0, BLACK)
    assert all(b == WHITE for b in first)
    assert second[0] != WHITE


def test_clear_small_buffer_raises():
    paint = Paint(bytearray(1), W, H, ROTATE_0, WHITE)
    with pytest.raises(ValueError):
        paint.clear(WHITE)