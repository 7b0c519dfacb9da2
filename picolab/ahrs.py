"""Orientation estimation from accelerometer, gyroscope and magnetometer data.

:class:`Madgwick` fuses the three sensors into a unit quaternion;
:class:`GyroBiasEstimator` tracks slow gyroscope drift while the device is
still, and :class:`SmoothingFilter` smooths magnetometer readings.
"""

from __future__ import annotations

import math

BETA = 0.01
MOTION_THRESHOLD = 0.1
BIAS_ALPHA = 0.0001
SMOOTHING_ALPHA = 0.6
ACCEL_WEIGHT = 0.02
GYRO_LSB_PER_DPS = 131.0


def gyro_to_rad(raw: float, offset: float, bias: float) -> float:
    """Convert a raw gyroscope reading to radians per second."""
    return (raw - offset - bias) * (math.pi / 180.0) / GYRO_LSB_PER_DPS


class Madgwick:
    """Madgwick gradient-descent orientation filter."""

    def __init__(self, beta: float = BETA) -> None:
        self.beta = beta
        self.q0 = 1.0
        self.q1 = 0.0
        self.q2 = 0.0
        self.q3 = 0.0

    @property
    def quaternion(self) -> tuple[float, float, float, float]:
        return self.q0, self.q1, self.q2, self.q3

    def update(
        self,
        gx: float, gy: float, gz: float,
        ax: float, ay: float, az: float,
        mx: float, my: float, mz: float,
        dt: float,
    ) -> None:
        """Advance the estimate by ``dt`` seconds.

        Gyroscope rates are in radians per second. A zero accelerometer or
        magnetometer vector leaves the estimate unchanged.
        """
        q0, q1, q2, q3 = self.quaternion

        norm = math.sqrt(ax * ax + ay * ay + az * az)
        if norm == 0.0:
            return
        ax, ay, az = ax / norm, ay / norm, az / norm

        norm = math.sqrt(mx * mx + my * my + mz * mz)
        if norm == 0.0:
            return
        mx, my, mz = mx / norm, my / norm, mz / norm

        _2q0, _2q1, _2q2, _2q3 = 2.0 * q0, 2.0 * q1, 2.0 * q2, 2.0 * q3
        q0q0, q0q1, q0q2, q0q3 = q0 * q0, q0 * q1, q0 * q2, q0 * q3
        q1q1, q1q2, q1q3 = q1 * q1, q1 * q2, q1 * q3
        q2q2, q2q3, q3q3 = q2 * q2, q2 * q3, q3 * q3

        # Reference direction of Earth's magnetic field
        _2q0mx = 2.0 * q0 * mx
        _2q0my = 2.0 * q0 * my
        _2q0mz = 2.0 * q0 * mz
        _2q1mx = 2.0 * q1 * mx
        hx = (mx * q0q0 - _2q0my * q3 + _2q0mz * q2 + mx * q1q1
              + _2q1 * my * q2 + _2q1 * mz * q3 - mx * q2q2 - mx * q3q3)
        hy = (_2q0mx * q3 + my * q0q0 - _2q0mz * q1 + _2q1mx * q2
              - my * q1q1 + my * q2q2 + _2q2 * mz * q3 - my * q3q3)
        _2bx = math.sqrt(hx * hx + hy * hy)
        _2bz = (-_2q0mx * q2 + _2q0my * q1 + mz * q0q0 + _2q1mx * q3
                - mz * q1q1 + _2q2 * my * q3 - mz * q2q2 + mz * q3q3)

        fa_x = 2.0 * (q1q3 - q0q2) - ax
        fa_y = 2.0 * (q0q1 + q2q3) - ay
        fa_z = 1 - 2.0 * (q1q1 + q2q2) - az
        fm_x = _2bx * (0.5 - q2q2 - q3q3) + _2bz * (q1q3 - q0q2) - mx
        fm_y = _2bx * (q1q2 - q0q3) + _2bz * (q0q1 + q2q3) - my
        fm_z = _2bx * (q0q2 + q1q3) + _2bz * (0.5 - q1q1 - q2q2) - mz

        s0 = (-_2q2 * fa_x + _2q1 * fa_y - _2bz * q2 * fm_x
              + (-_2bx * q3 + _2bz * q1) * fm_y + _2bx * q2 * fm_z)
        s1 = (_2q3 * fa_x + _2q0 * fa_y - 4.0 * q1 * fa_z + _2bz * q3 * fm_x
              + (_2bx * q2 + _2bz * q0) * fm_y + (_2bx * q3 - 4.0 * _2bz * q1) * fm_z)
        s2 = (-_2q0 * fa_x + _2q3 * fa_y - 4.0 * q2 * fa_z
              + (-4.0 * _2bx * q2 - _2bz * q0) * fm_x
              + (_2bx * q1 + _2bz * q3) * fm_y + (_2bx * q0 - 4.0 * _2bz * q2) * fm_z)
        s3 = (_2q1 * fa_x + _2q2 * fa_y + (-4.0 * _2bx * q3 + _2bz * q1) * fm_x
              + (-_2bx * q0 + _2bz * q2) * fm_y + _2bx * q1 * fm_z)

        norm = math.sqrt(s0 * s0 + s1 * s1 + s2 * s2 + s3 * s3)
        if norm:
            s0, s1, s2, s3 = s0 / norm, s1 / norm, s2 / norm, s3 / norm

        beta = self.beta
        q_dot1 = 0.5 * (-q1 * gx - q2 * gy - q3 * gz) - beta * s0
        q_dot2 = 0.5 * (q0 * gx + q2 * gz - q3 * gy) - beta * s1
        q_dot3 = 0.5 * (q0 * gy - q1 * gz + q3 * gx) - beta * s2
        q_dot4 = 0.5 * (q0 * gz + q1 * gy - q2 * gx) - beta * s3

        q0 += q_dot1 * dt
        q1 += q_dot2 * dt
        q2 += q_dot3 * dt
        q3 += q_dot4 * dt

        norm = math.sqrt(q0 * q0 + q1 * q1 + q2 * q2 + q3 * q3)
        self.q0, self.q1, self.q2, self.q3 = q0 / norm, q1 / norm, q2 / norm, q3 / norm

    def complementary_update(
        self,
        gx: float, gy: float, gz: float,
        ax: float, ay: float, az: float,
        dt: float,
    ) -> None:
        """Update roll and pitch without the magnetometer; yaw is dropped."""
        del gz
        accel_roll = math.atan2(ay, math.sqrt(ax * ax + az * az))
        accel_pitch = math.atan2(-ax, math.sqrt(ay * ay + az * az))

        roll, pitch = self._roll_pitch_rad()
        roll += gx * dt
        pitch += gy * dt

        roll = roll * (1.0 - ACCEL_WEIGHT) + accel_roll * ACCEL_WEIGHT
        pitch = pitch * (1.0 - ACCEL_WEIGHT) + accel_pitch * ACCEL_WEIGHT

        cr, sr = math.cos(roll * 0.5), math.sin(roll * 0.5)
        cp, sp = math.cos(pitch * 0.5), math.sin(pitch * 0.5)
        self.q0 = cr * cp
        self.q1 = sr * cp
        self.q2 = cr * sp
        self.q3 = sr * sp

    def yaw(self) -> float:
        """Heading in degrees, from 0 up to 360."""
        q0, q1, q2, q3 = self.quaternion
        yaw = math.atan2(2.0 * (q1 * q2 + q0 * q3), q0 * q0 + q1 * q1 - q2 * q2 - q3 * q3)
        yaw_deg = math.degrees(yaw)
        if yaw_deg < 0:
            yaw_deg += 360.0
        return yaw_deg

    def _roll_pitch_rad(self) -> tuple[float, float]:
        q0, q1, q2, q3 = self.quaternion
        roll = math.atan2(2.0 * (q0 * q1 + q2 * q3), 1.0 - 2.0 * (q1 * q1 + q2 * q2))
        # Clamped so rounding just past +-1 does not leave the domain of asin.
        sin_pitch = max(-1.0, min(1.0, 2.0 * (q0 * q2 - q3 * q1)))
        return roll, math.asin(sin_pitch)

    def roll_pitch(self) -> tuple[float, float]:
        """Roll and pitch in degrees."""
        roll, pitch = self._roll_pitch_rad()
        return math.degrees(roll), math.degrees(pitch)


class GyroBiasEstimator:
    """Slowly learns gyroscope bias while the accelerometer shows no motion."""

    def __init__(
        self, motion_threshold: float = MOTION_THRESHOLD, alpha: float = BIAS_ALPHA
    ) -> None:
        self.motion_threshold = motion_threshold
        self.alpha = alpha
        self.bias_x = 0.0
        self.bias_y = 0.0
        self.bias_z = 0.0
        self.variance = 0.0
        self._previous = (0.0, 0.0, 0.0)

    def update(
        self, ax: float, ay: float, az: float, gx: float, gy: float, gz: float
    ) -> tuple[float, float, float]:
        """Take one sample and return the current bias estimate."""
        px, py, pz = self._previous
        self.variance = (abs(ax - px) + abs(ay - py) + abs(az - pz)) / 3.0
        if self.variance < self.motion_threshold:
            self.bias_x += self.alpha * gx
            self.bias_y += self.alpha * gy
            self.bias_z += self.alpha * gz
        self._previous = (ax, ay, az)
        return self.bias_x, self.bias_y, self.bias_z


class SmoothingFilter:
    """Exponential smoothing of a three-axis reading."""

    def __init__(self, alpha: float = SMOOTHING_ALPHA) -> None:
        self.alpha = alpha
        self.value = (0.0, 0.0, 0.0)
        self.initialised = False

    def update(self, x: float, y: float, z: float) -> tuple[float, float, float]:
        """Blend in a new reading; the first reading is taken as it is."""
        if not self.initialised:
            self.value = (x, y, z)
            self.initialised = True
        a = self.alpha
        self.value = tuple(  # type: ignore[assignment]
            a * new + (1.0 - a) * old for new, old in zip((x, y, z), self.value)
        )
        return self.value