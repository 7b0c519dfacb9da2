"""Points, lines, rectangles and circles drawn on a :class:`~picolab.paint.Paint`.

Coordinates are 16-bit unsigned on the panel side: a negative coordinate
wraps to a large value and so falls outside the image.
"""

from __future__ import annotations

from enum import IntEnum

from picolab.paint import IMAGE_BACKGROUND, Paint

_WORD = 0xFFFF

DOT_PIXEL_1X1 = 1
DOT_PIXEL_2X2 = 2
DOT_PIXEL_3X3 = 3
DOT_PIXEL_4X4 = 4
DOT_PIXEL_5X5 = 5
DOT_PIXEL_6X6 = 6
DOT_PIXEL_7X7 = 7
DOT_PIXEL_8X8 = 8
DOT_PIXEL_DFT = DOT_PIXEL_1X1


class DotStyle(IntEnum):
    """How a point of more than one pixel is laid around its position."""

    FILL_AROUND = 1
    FILL_RIGHTUP = 2


class LineStyle(IntEnum):
    """Solid or dotted lines."""

    SOLID = 0
    DOTTED = 1


class DrawFill(IntEnum):
    """Whether a shape is filled."""

    EMPTY = 0
    FULL = 1


DOT_STYLE_DFT = DotStyle.FILL_AROUND


def _outside(paint: Paint, x: int, y: int) -> bool:
    return (x & _WORD) > paint.width or (y & _WORD) > paint.height


def draw_point(
    paint: Paint,
    x: int,
    y: int,
    color: int,
    dot_pixel: int = DOT_PIXEL_DFT,
    dot_style: DotStyle = DOT_STYLE_DFT,
) -> None:
    """Draw a square point of ``dot_pixel`` size in one colour."""
    x &= _WORD
    y &= _WORD
    if x > paint.width or y > paint.height:
        return

    if dot_style == DotStyle.FILL_AROUND:
        span = 2 * dot_pixel - 1
        for dx in range(span):
            for dy in range(span):
                px = x + dx - dot_pixel
                py = y + dy - dot_pixel
                if px < 0 or py < 0:
                    break
                paint.set_pixel(px, py, color)
    else:
        for dx in range(dot_pixel):
            for dy in range(dot_pixel):
                paint.set_pixel(x + dx - 1, y + dy - 1, color)


def draw_line(
    paint: Paint,
    x_start: int,
    y_start: int,
    x_end: int,
    y_end: int,
    color: int,
    line_width: int = DOT_PIXEL_DFT,
    line_style: LineStyle = LineStyle.SOLID,
) -> None:
    """Draw a line of any slope; every third point of a dotted line is blank."""
    x_start &= _WORD
    y_start &= _WORD
    x_end &= _WORD
    y_end &= _WORD
    if (x_start > paint.width or y_start > paint.height
            or x_end > paint.width or y_end > paint.height):
        return

    x, y = x_start, y_start
    dx = abs(x_end - x_start)
    dy = -abs(y_end - y_start)
    x_step = 1 if x_start < x_end else -1
    y_step = 1 if y_start < y_end else -1

    error = dx + dy
    dotted_len = 0
    while True:
        dotted_len += 1
        if line_style == LineStyle.DOTTED and dotted_len % 3 == 0:
            draw_point(paint, x, y, IMAGE_BACKGROUND, line_width, DOT_STYLE_DFT)
            dotted_len = 0
        else:
            draw_point(paint, x, y, color, line_width, DOT_STYLE_DFT)
        if 2 * error >= dy:
            if x == x_end:
                break
            error += dy
            x += x_step
        if 2 * error <= dx:
            if y == y_end:
                break
            error += dx
            y += y_step


def draw_rectangle(
    paint: Paint,
    x_start: int,
    y_start: int,
    x_end: int,
    y_end: int,
    color: int,
    line_width: int = DOT_PIXEL_DFT,
    draw_fill: DrawFill = DrawFill.EMPTY,
) -> None:
    """Draw a rectangle outline, or fill rows ``y_start`` to ``y_end - 1``."""
    if (_outside(paint, x_start, y_start) or _outside(paint, x_end, y_end)):
        return

    if draw_fill:
        for y in range(y_start, y_end):
            draw_line(paint, x_start, y, x_end, y, color, line_width, LineStyle.SOLID)
    else:
        draw_line(paint, x_start, y_start, x_end, y_start, color, line_width, LineStyle.SOLID)
        draw_line(paint, x_start, y_start, x_start, y_end, color, line_width, LineStyle.SOLID)
        draw_line(paint, x_end, y_end, x_end, y_start, color, line_width, LineStyle.SOLID)
        draw_line(paint, x_end, y_end, x_start, y_end, color, line_width, LineStyle.SOLID)


def draw_circle(
    paint: Paint,
    x_center: int,
    y_center: int,
    radius: int,
    color: int,
    line_width: int = DOT_PIXEL_DFT,
    draw_fill: DrawFill = DrawFill.EMPTY,
) -> None:
    """Draw a circle with the eight-way symmetric midpoint method."""
    if (x_center & _WORD) > paint.width or (y_center & _WORD) >= paint.height:
        return

    cx, cy = x_center, y_center
    x_cur, y_cur = 0, radius
    error = 3 - (radius << 1)

    while x_cur <= y_cur:
        if draw_fill == DrawFill.FULL:
            for s in range(x_cur, y_cur + 1):
                for px, py in (
                    (cx + x_cur, cy + s), (cx - x_cur, cy + s),
                    (cx - s, cy + x_cur), (cx - s, cy - x_cur),
                    (cx - x_cur, cy - s), (cx + x_cur, cy - s),
                    (cx + s, cy - x_cur), (cx + s, cy + x_cur),
                ):
                    draw_point(paint, px, py, color, DOT_PIXEL_DFT, DOT_STYLE_DFT)
        else:
            for px, py in (
                (cx + x_cur, cy + y_cur), (cx - x_cur, cy + y_cur),
                (cx - y_cur, cy + x_cur), (cx - y_cur, cy - x_cur),
                (cx - x_cur, cy - y_cur), (cx + x_cur, cy - y_cur),
                (cx + y_cur, cy - x_cur), (cx + y_cur, cy + x_cur),
            ):
                draw_point(paint, px, py, color, line_width, DOT_STYLE_DFT)

        if error < 0:
            error += 4 * x_cur + 6
        else:
            error += 10 + 4 * (x_cur - y_cur)
            y_cur -= 1
        x_cur += 1