"""In-memory image canvas for e-paper panels.

A :class:`Paint` wraps a byte buffer laid out the way the panel expects:
rows of packed pixels, most significant bits first. The number of bits per
pixel depends on the colour scale (2 colours: 1 bit, 4 greys: 2 bits,
6/7/16 colours: 4 bits). Coordinates are mapped through the selected
rotation and mirroring before they reach the buffer.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Union

ROTATE_0 = 0
ROTATE_90 = 90
ROTATE_180 = 180
ROTATE_270 = 270
ROTATIONS = (ROTATE_0, ROTATE_90, ROTATE_180, ROTATE_270)

WHITE = 0xFF
BLACK = 0x00
RED = BLACK

IMAGE_BACKGROUND = WHITE
FONT_FOREGROUND = BLACK
FONT_BACKGROUND = WHITE

GRAY1 = 0x03  # blackest
GRAY2 = 0x02
GRAY3 = 0x01
GRAY4 = 0x00  # white

_NIBBLE_SCALES = (6, 7, 16)
_WORD = 0xFFFF

Buffer = Union[bytearray, memoryview]


class Mirror(IntEnum):
    """How the image is flipped before it reaches the buffer."""

    NONE = 0x00
    HORIZONTAL = 0x01
    VERTICAL = 0x02
    ORIGIN = 0x03


def _bytes_per_row(width: int, pixels_per_byte: int) -> int:
    return -(-width // pixels_per_byte)


class Paint:
    """A drawable image backed by a mutable byte buffer.

    ``width`` and ``height`` describe the panel memory; after a rotation of
    90 or 270 degrees the logical :attr:`width` and :attr:`height` are
    swapped. When no buffer is given one of the right size is allocated.
    """

    def __init__(
        self,
        image: Optional[Buffer],
        width: int,
        height: int,
        rotate: int = ROTATE_0,
        color: int = WHITE,
    ) -> None:
        self.width_memory = width
        self.height_memory = height
        self.color = color
        self.scale = 2
        self.width_byte = _bytes_per_row(width, 8)
        self.height_byte = height
        self.rotate = rotate
        self.mirror = Mirror.NONE
        if rotate in (ROTATE_0, ROTATE_180):
            self.width, self.height = width, height
        else:
            self.width, self.height = height, width
        if image is None:
            image = bytearray(self.width_byte * self.height_byte)
        self.image: Buffer = image

    def select_image(self, image: Buffer) -> None:
        """Direct further drawing into another buffer."""
        self.image = image

    def set_rotate(self, rotate: int) -> None:
        """Select a rotation of 0, 90, 180 or 270 degrees; others are ignored."""
        if rotate in ROTATIONS:
            self.rotate = rotate

    def set_mirroring(self, mirror: int) -> None:
        """Select a mirroring mode; unknown modes are ignored."""
        if mirror in tuple(Mirror):
            self.mirror = Mirror(mirror)

    def set_scale(self, scale: int) -> None:
        """Select the colour scale (2, 4, 6, 7 or 16); others are ignored."""
        if scale == 2:
            self.width_byte = _bytes_per_row(self.width_memory, 8)
        elif scale == 4:
            self.width_byte = _bytes_per_row(self.width_memory, 4)
        elif scale in _NIBBLE_SCALES:
            self.width_byte = _bytes_per_row(self.width_memory, 2)
        else:
            return
        self.scale = scale

    def _memory_position(self, x: int, y: int) -> Optional[tuple[int, int]]:
        x &= _WORD
        y &= _WORD
        if x > self.width or y > self.height:
            return None

        wm, hm = self.width_memory, self.height_memory
        if self.rotate == ROTATE_0:
            mx, my = x, y
        elif self.rotate == ROTATE_90:
            mx, my = wm - y - 1, x
        elif self.rotate == ROTATE_180:
            mx, my = wm - x - 1, hm - y - 1
        elif self.rotate == ROTATE_270:
            mx, my = y, hm - x - 1
        else:
            return None

        if self.mirror in (Mirror.HORIZONTAL, Mirror.ORIGIN):
            mx = wm - mx - 1
        if self.mirror in (Mirror.VERTICAL, Mirror.ORIGIN):
            my = hm - my - 1

        mx &= _WORD
        my &= _WORD
        if mx > wm or my > hm:
            return None
        return mx, my

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """Paint one pixel; positions outside the image are ignored."""
        position = self._memory_position(x, y)
        if position is None:
            return
        mx, my = position

        if self.scale == 2:
            addr = mx // 8 + my * self.width_byte
            if addr >= len(self.image):
                return
            mask = 0x80 >> (mx % 8)
            if color == BLACK:
                self.image[addr] &= ~mask & 0xFF
            else:
                self.image[addr] |= mask
        elif self.scale == 4:
            addr = mx // 4 + my * self.width_byte
            if addr >= len(self.image):
                return
            shift = (mx % 4) * 2
            value = self.image[addr] & ~(0xC0 >> shift) & 0xFF
            self.image[addr] = (value | (((color % 4) << 6) >> shift)) & 0xFF
        elif self.scale in _NIBBLE_SCALES:
            addr = mx // 2 + my * self.width_byte
            if addr >= len(self.image):
                return
            shift = (mx % 2) * 4
            value = self.image[addr] & ~(0xF0 >> shift) & 0xFF
            self.image[addr] = (value | ((color << 4) >> shift)) & 0xFF

    def _fill(self, value: int) -> None:
        size = self.width_byte * self.height_byte
        if len(self.image) < size:
            raise ValueError(
                f"image buffer holds {len(self.image)} bytes, {size} needed"
            )
        self.image[:size] = bytes([value & 0xFF]) * size

    def clear(self, color: int) -> None:
        """Fill the whole image with one colour."""
        if self.scale == 2:
            self._fill(color)
        elif self.scale == 4:
            self._fill((color << 6) | (color << 4) | (color << 2) | color)
        elif self.scale in _NIBBLE_SCALES:
            self._fill((color << 4) | color)

    def clear_windows(
        self, x_start: int, y_start: int, x_end: int, y_end: int, color: int
    ) -> None:
        """Fill a rectangle, end coordinates excluded, with one colour."""
        for y in range(y_start, y_end):
            for x in range(x_start, x_end):
                self.set_pixel(x, y, color)

    def draw_bitmap(self, image_buffer: bytes) -> None:
        """Copy a ready-made bitmap of the image's size into the buffer."""
        size = self.width_byte * self.height_byte
        if len(image_buffer) < size:
            raise ValueError(
                f"bitmap holds {len(image_buffer)} bytes, {size} needed"
            )
        if len(self.image) < size:
            raise ValueError(
                f"image buffer holds {len(self.image)} bytes, {size} needed"
            )
        self.image[:size] = bytes(image_buffer[:size])