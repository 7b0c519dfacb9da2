"""Loading 24-bit colour BMP files onto a multi-colour :class:`~picolab.paint.Paint`.

Each pixel is matched against the colours a panel can show and stored as
that colour's index. Pixels that match no colour keep the all-ones fill
value. The image is drawn with its first stored row at the bottom, as BMP
files are stored bottom-up. Pixels outside the canvas are skipped.
"""

from __future__ import annotations

import logging
from os import PathLike
from typing import Callable, Optional, Union

from picolab.bmpfile import BmpError, BmpFileHeader, BmpInfoHeader, read_headers
from picolab.paint import Paint

log = logging.getLogger(__name__)

_FILL = 0xFF
_BYTES_PER_PIXEL = 3

Path = Union[str, "PathLike[str]"]
Classifier = Callable[[int, int, int], Optional[int]]

# Keys are (blue, green, red) as stored in the file.
_SEVEN_COLORS = {
    (0, 0, 0): 0,        # black
    (255, 255, 255): 1,  # white
    (0, 255, 0): 2,      # green
    (255, 0, 0): 3,      # blue
    (0, 0, 255): 4,      # red
    (0, 255, 255): 5,    # yellow
    (0, 128, 255): 6,    # orange
}

_SIX_COLORS = {
    (0, 0, 0): 0,        # black
    (255, 255, 255): 1,  # white
    (0, 255, 255): 2,    # yellow
    (0, 0, 255): 3,      # red
    (255, 0, 0): 5,      # blue
    (0, 255, 0): 6,      # green
}


def _load(path: Path) -> tuple[bytes, BmpFileHeader, BmpInfoHeader]:
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise BmpError(f"cannot open bitmap {path}: {exc}") from exc

    file_header, info_header = read_headers(data)
    log.debug("pixel = %d * %d", info_header.width, info_header.height)
    if info_header.bit_count != 24:
        raise BmpError(
            f"bitmap has {info_header.bit_count} bits per pixel, 24 expected"
        )
    if info_header.height >= 1 << 31:
        raise BmpError("top-down bitmaps are not supported")
    return data, file_header, info_header


def _classify_table(table: dict[tuple[int, int, int], int]) -> Classifier:
    def classify(blue: int, green: int, red: int) -> Optional[int]:
        return table.get((blue, green, red))

    return classify


def _classify_four(blue: int, green: int, red: int) -> Optional[int]:
    if blue < 128 and green < 128 and red < 128:
        return 0  # black
    if blue > 127 and green > 127 and red > 127:
        return 1  # white
    if blue < 128 and green > 127 and red > 127:
        return 2  # yellow
    if blue < 128 and green < 128 and red > 127:
        return 3  # red
    return None


def _read_indices(
    data: bytes,
    offset: int,
    width: int,
    height: int,
    classify: Classifier,
    row_skip: int,
) -> bytearray:
    """Colour indices in stored row order; unread pixels keep the fill value."""
    image = bytearray([_FILL]) * (width * height * _BYTES_PER_PIXEL)
    position = offset
    for y in range(height):
        for x in range(width):
            pixel = data[position:position + _BYTES_PER_PIXEL]
            if len(pixel) < _BYTES_PER_PIXEL:
                log.warning("bitmap pixel data is truncated")
                return image
            position += _BYTES_PER_PIXEL
            index = classify(pixel[0], pixel[1], pixel[2])
            if index is not None:
                image[x + y * width] = index
        position += row_skip
    return image


def _draw(
    paint: Paint,
    image: bytearray,
    width: int,
    height: int,
    x_start: int,
    y_start: int,
) -> None:
    for y in range(height):
        for x in range(width):
            if x > paint.width or y > paint.height:
                break
            paint.set_pixel(x_start + x, y_start + y, image[(height - 1 - y) * width + x])


def _read_color_bmp(
    paint: Paint,
    path: Path,
    x_start: int,
    y_start: int,
    classify: Classifier,
    pad_rows: bool,
) -> None:
    data, file_header, info = _load(path)
    width, height = info.width, info.height
    row_skip = width % 4 if pad_rows else 0
    image = _read_indices(data, file_header.offset, width, height, classify, row_skip)
    _draw(paint, image, width, height, x_start, y_start)


def read_bmp_rgb_7color(paint: Paint, path: Path, x_start: int, y_start: int) -> None:
    """Draw a 24-bit bitmap using the seven pure colours of a 7-colour panel."""
    _read_color_bmp(paint, path, x_start, y_start, _classify_table(_SEVEN_COLORS), False)


def read_bmp_rgb_4color(paint: Paint, path: Path, x_start: int, y_start: int) -> None:
    """Draw a 24-bit bitmap thresholded to black, white, yellow and red.

    After each row, ``width % 4`` padding bytes are skipped.
    """
    _read_color_bmp(paint, path, x_start, y_start, _classify_four, True)


def read_bmp_rgb_6color(paint: Paint, path: Path, x_start: int, y_start: int) -> None:
    """Draw a 24-bit bitmap using the six pure colours of a 6-colour panel."""
    _read_color_bmp(paint, path, x_start, y_start, _classify_table(_SIX_COLORS), False)