# picolab

Hardware-free building blocks for small microcontroller projects, written in
plain Python with no dependencies outside the standard library.

## What is inside

- `picolab.paint` – an e-paper image buffer (`Paint`, `Mirror`) with
  rotation, mirroring and 2, 4, 6, 7 and 16 level pixel packing
  (`set_pixel`, `clear`, `clear_windows`, `draw_bitmap`, `set_rotate`,
  `set_mirroring`, `set_scale`, `select_image`).
- `picolab.paint_shapes` – points, lines, rectangles and circles on a
  `Paint` (`draw_point`, `draw_line`, `draw_rectangle`, `draw_circle`,
  with `DotStyle`, `LineStyle` and `DrawFill`).
- `picolab.paint_text` – characters, strings, numbers and clock times on a
  `Paint` (`Font`, `PaintTime`, `draw_char`, `draw_string`, `draw_num`,
  `draw_num_decimals`, `draw_time`). Fonts are supplied by the caller as
  row-major bitmaps starting at the space character.
- `picolab.bmpfile` – loads 1-bit monochrome and 4-bit (4-gray and
  16-gray) BMP files onto a `Paint` (`read_bmp`, `read_bmp_4gray`,
  `read_bmp_16gray`), parses headers (`read_headers`, `BmpFileHeader`,
  `BmpInfoHeader`) and raises `BmpError` for unreadable or unsupported files.
- `picolab.bmpcolor` – loads 24-bit BMP files onto a multi-colour `Paint`,
  matching pixels to 4, 6 or 7 panel colours (`read_bmp_rgb_4color`,
  `read_bmp_rgb_6color`, `read_bmp_rgb_7color`).
- `picolab.ahrs` – Madgwick orientation filter with a complementary
  fallback, gyro bias estimation and magnetometer smoothing (`Madgwick`,
  `GyroBiasEstimator`, `SmoothingFilter`, `gyro_to_rad`).
- `picolab.uart` – the line-based request/acknowledge exchange between two
  boards (`LineBuffer`, `LightSender`, `LightResponder`, `SenderStatus`,
  `ResponderStatus`, `contains`).
- `picolab.controls` – ADC scaling for servos, buzzers and seven-segment
  speed displays, frequency change detection, battery percentage, LED bar
  states and seven-segment patterns (`scale_servo`, `scale_buzzer`,
  `scale_speed`, `frequency_differs`, `charge_percentage`, `led_bar`,
  `segment_states`).

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Examples

Fill an e-paper image and draw on it:

```python
from picolab.paint import Paint, WHITE, BLACK
from picolab.paint_shapes import draw_rectangle, DrawFill

paint = Paint(bytearray(200 * 25), 200, 200, 0, WHITE)
paint.clear(WHITE)
draw_rectangle(paint, 10, 10, 50, 50, BLACK, 1, DrawFill.FULL)
```

Track orientation from sensor readings:

```python
from picolab.ahrs import Madgwick

fusion = Madgwick()
fusion.update(0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 0.0, 0.0, 0.005)
roll, pitch = fusion.roll_pitch()
heading = fusion.yaw()
```

Run both sides of the UART handshake in memory:

```python
from picolab.uart import LightResponder, LightSender

sender, responder = LightSender(), LightResponder()
request = sender.step()          # "START LIGHT\n"
responder.receive(request)
colors, reply = responder.step() # LED words and "FIRST OK\n"
sender.receive(reply)
```

Map readings to outputs:

```python
from picolab.controls import scale_servo, led_bar, charge_percentage

scale_servo(4095)                  # 3200
led_bar(charge_percentage(3000))   # (True, True, False, False)
```

## What it does not do

Nothing here talks to hardware. There is no GPIO, ADC, PWM, I2C, SPI or
UART port access, no OLED display buffer or driver, no IMU register
decoding or calibration, and no artificial-horizon view. The classes and
functions compute the values and buffers such a program would send; moving
them to a device is left to the caller.