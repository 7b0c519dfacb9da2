"""Loading BMP files onto a :class:`~picolab.paint.Paint` canvas.

Three pixel formats are handled here: 1-bit monochrome, 4-bit images shown
on a four-level grey panel, and 4-bit images shown with sixteen grey levels.
Pixels outside the canvas are skipped. Pixel data that ends early leaves the
remaining pixels at the all-ones fill value.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from os import PathLike
from typing import Iterator, Union

from picolab.paint import BLACK, WHITE, Paint

log = logging.getLogger(__name__)

_FILE_HEADER = struct.Struct("<HIHHI")
_INFO_HEADER = struct.Struct("<IIIHHIIIIII")
_HEADERS_SIZE = _FILE_HEADER.size + _INFO_HEADER.size
_PALETTE_ENTRY = 4
_FILL = 0xFF

Path = Union[str, "PathLike[str]"]


class BmpError(Exception):
    """A BMP file cannot be read or has an unsupported format."""


@dataclass(frozen=True)
class BmpFileHeader:
    """The 14-byte bitmap file header."""

    type: int
    size: int
    reserved1: int
    reserved2: int
    offset: int


@dataclass(frozen=True)
class BmpInfoHeader:
    """The 40-byte bitmap information header."""

    info_size: int
    width: int
    height: int
    planes: int
    bit_count: int
    compression: int
    image_size: int
    x_pels_per_meter: int
    y_pels_per_meter: int
    clr_used: int
    clr_important: int


def read_headers(data: bytes) -> tuple[BmpFileHeader, BmpInfoHeader]:
    """Parse the file and information headers at the start of ``data``."""
    if len(data) < _HEADERS_SIZE:
        raise BmpError(
            f"bitmap holds {len(data)} bytes, headers need {_HEADERS_SIZE}"
        )
    file_header = BmpFileHeader(*_FILE_HEADER.unpack_from(data, 0))
    info_header = BmpInfoHeader(*_INFO_HEADER.unpack_from(data, _FILE_HEADER.size))
    return file_header, info_header


def _load(path: Path, bit_count: int) -> tuple[bytes, BmpFileHeader, BmpInfoHeader]:
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise BmpError(f"cannot open bitmap {path}: {exc}") from exc

    file_header, info_header = read_headers(data)
    log.debug("pixel = %d * %d", info_header.width, info_header.height)
    if info_header.bit_count != bit_count:
        raise BmpError(
            f"bitmap has {info_header.bit_count} bits per pixel, {bit_count} expected"
        )
    if info_header.height >= 1 << 31:
        raise BmpError("top-down bitmaps are not supported")
    return data, file_header, info_header


def _palette(data: bytes, entries: int) -> list[tuple[int, int, int]]:
    """Palette entries as (blue, green, red), read right after the headers."""
    end = _HEADERS_SIZE + entries * _PALETTE_ENTRY
    if len(data) < end:
        raise BmpError("bitmap palette is truncated")
    return [
        tuple(data[start:start + 3])  # type: ignore[misc]
        for start in range(_HEADERS_SIZE, end, _PALETTE_ENTRY)
    ]


def _rows(data: bytes, start: int, height: int, row_bytes: int) -> Iterator[tuple[int, bytes]]:
    """File rows in stored order; rows past the end of the data come up short."""
    position = start
    for y in range(height):
        row = data[position:position + row_bytes]
        position += len(row)
        if len(row) < row_bytes:
            log.warning("bitmap pixel data is truncated")
        yield y, row


def read_bmp(paint: Paint, path: Path, x_start: int, y_start: int) -> None:
    """Draw a monochrome bitmap with its top-left corner at ``(x_start, y_start)``.

    When the first palette entry is white, set bits are drawn black;
    otherwise set bits are drawn white.
    """
    data, file_header, info = _load(path, 1)
    width, height = info.width, info.height

    image_width_byte = -(-width // 8)
    bmp_width_byte = -(-image_width_byte // 4) * 4
    image = bytearray([_FILL]) * (image_width_byte * height)

    first, _ = _palette(data, 2)
    if first == (0xFF, 0xFF, 0xFF):
        set_color, clear_color = BLACK, WHITE
    else:
        set_color, clear_color = WHITE, BLACK

    for y, row in _rows(data, file_header.offset, height, bmp_width_byte):
        used = row[:image_width_byte]
        dest = (height - y - 1) * image_width_byte
        image[dest:dest + len(used)] = used

    for y in range(height):
        for x in range(width):
            if x > paint.width or y > paint.height:
                break
            temp = image[x // 8 + y * image_width_byte]
            color = set_color if (temp << (x % 8)) & 0x80 else clear_color
            paint.set_pixel(x_start + x, y_start + y, color)


def read_bmp_4gray(paint: Paint, path: Path, x_start: int, y_start: int) -> None:
    """Draw a 4-bit bitmap on a four-level grey canvas.

    Each pixel's level is its byte value shifted right by two; the canvas
    keeps the low two bits of it.
    """
    data, file_header, info = _load(path, 4)
    width, height = info.width, info.height
    log.debug("width = %d, height = %d", width, height)

    image_width_byte = -(-width // 4)
    bmp_width_byte = -(-width // 2)
    stride = image_width_byte * 2
    image = bytearray([_FILL]) * (stride * height)

    for y, row in _rows(data, file_header.offset, height, bmp_width_byte):
        used = row[:stride]
        dest = (height - y - 1) * stride
        image[dest:dest + len(used)] = used

    for y in range(height):
        for x in range(width):
            if x > paint.width or y > paint.height:
                break
            temp = image[x // 2 + (y * width) // 2] >> (0 if x % 2 else 4)
            paint.set_pixel(x_start + x, y_start + y, temp >> 2)


def read_bmp_16gray(paint: Paint, path: Path, x_start: int, y_start: int) -> None:
    """Draw a 4-bit bitmap with sixteen grey levels taken from its palette.

    Each palette entry maps to the grey level nearest its red component.
    """
    data, file_header, info = _load(path, 4)
    width, height = info.width, info.height
    log.debug("width = %d, height = %d", width, height)

    width_byte = (width + 1) // 2
    image = bytearray([_FILL]) * (width_byte * height)
    colors = [(red + 8) // 17 for _, _, red in _palette(data, 16)]

    for y, row in _rows(data, file_header.offset, height, width_byte):
        dest = (height - y - 1) * width_byte
        image[dest:dest + len(row)] = row

    for y in range(height):
        for x in range(width):
            if x_start + x > paint.width or y_start + y > paint.height:
                break
            index = (image[x // 2 + y * width_byte] >> (0 if x % 2 else 4)) & 15
            paint.set_pixel(x_start + x, y_start + y, colors[index])