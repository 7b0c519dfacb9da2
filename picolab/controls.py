"""Value mapping for the potentiometer, servo, buzzer, seven-segment and
LED-bar experiments.

All scaling follows 16-bit unsigned storage with integer division that
truncates toward zero.
"""

from __future__ import annotations

_UINT16 = 0xFFFF

SERVO_FROM_MIN, SERVO_FROM_MAX = 0, 4095
SERVO_TO_MIN, SERVO_TO_MAX = 500, 3200

BUZZER_FROM_MIN, BUZZER_FROM_MAX = 0, 4095
BUZZER_TO_MIN, BUZZER_TO_MAX = 32000, 65535

SPEED_FROM_MIN, SPEED_FROM_MAX = 100, 1000
SPEED_TO_MIN, SPEED_TO_MAX = 0, 9

FREQUENCY_TOLERANCE = 50

SEGA, SEGB, SEGC, SEGD, SEGE, SEGF, SEGG = 18, 17, 16, 15, 14, 13, 12
SEGMENT_PINS = (SEGA, SEGB, SEGC, SEGD, SEGE, SEGF, SEGG)

RED_LED, ORANGE_LED, YELLOW_LED, GREEN_LED = 14, 15, 16, 17
LED_BAR_PINS = (RED_LED, ORANGE_LED, YELLOW_LED, GREEN_LED)

BLANK = 10

_DIGITS = (
    (1, 1, 1, 1, 1, 1, 0),
    (0, 1, 1, 0, 0, 0, 0),
    (1, 1, 0, 1, 1, 0, 1),
    (1, 1, 1, 1, 0, 0, 1),
    (0, 1, 1, 0, 0, 1, 1),
    (1, 0, 1, 1, 0, 1, 1),
    (1, 0, 1, 1, 1, 1, 1),
    (1, 1, 1, 0, 0, 0, 0),
    (1, 1, 1, 1, 1, 1, 1),
    (1, 1, 1, 0, 0, 1, 1),
    (0, 0, 0, 0, 0, 0, 0),
)


def _div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _scale(value: int, from_min: int, from_max: int, to_min: int, to_max: int) -> int:
    value &= _UINT16
    result = to_min + _div((value - from_min) * (to_max - to_min), from_max - from_min)
    return result & _UINT16


def scale_servo(value: int) -> int:
    """Map an ADC reading (0-4095) to a servo PWM level (500-3200)."""
    return _scale(value, SERVO_FROM_MIN, SERVO_FROM_MAX, SERVO_TO_MIN, SERVO_TO_MAX)


def scale_buzzer(value: int) -> int:
    """Map an ADC reading (0-4095) to a buzzer PWM wrap (32000-65535)."""
    return _scale(value, BUZZER_FROM_MIN, BUZZER_FROM_MAX, BUZZER_TO_MIN, BUZZER_TO_MAX)


def scale_speed(value: int) -> int:
    """Map a propeller reading (100-1000) to a digit (0-9).

    Readings far below the range wrap around as a 16-bit unsigned value.
    """
    return _scale(value, SPEED_FROM_MIN, SPEED_FROM_MAX, SPEED_TO_MIN, SPEED_TO_MAX)


def frequency_differs(value: int, previous: int) -> bool:
    """Whether ``value`` lies more than 50 away from ``previous``."""
    return (value < previous - FREQUENCY_TOLERANCE
            or value > previous + FREQUENCY_TOLERANCE)


def charge_percentage(reading: int) -> int:
    """Percentage of a full-scale 12-bit ADC reading, truncated."""
    return int(reading / 40.96)


def led_bar(percentage: int) -> tuple[bool, bool, bool, bool]:
    """States of the red, orange, yellow and green LEDs for a charge level."""
    if 25 < percentage <= 50:
        lit = 1
    elif 50 < percentage <= 75:
        lit = 2
    elif 75 < percentage <= 90:
        lit = 3
    elif percentage > 90:
        lit = 4
    else:
        lit = 0
    return tuple(n < lit for n in range(len(LED_BAR_PINS)))  # type: ignore[return-value]


def segment_states(number: int) -> tuple[int, ...]:
    """Segment levels a-g for a digit 0-9, or 10 for a blank display."""
    if not 0 <= number <= BLANK:
        raise ValueError(f"no seven-segment pattern for {number}")
    return _DIGITS[number]