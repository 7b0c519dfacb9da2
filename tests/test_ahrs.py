import math

import pytest

from picolab.ahrs import (
    BIAS_ALPHA,
    SMOOTHING_ALPHA,
    GyroBiasEstimator,
    Madgwick,
    SmoothingFilter,
    gyro_to_rad,
)


def norm(q):
    return math.sqrt(sum(c * c for c in q))


def test_identity_orientation_angles():
    filt = Madgwick()
    assert filt.yaw() == 0.0
    assert filt.roll_pitch() == (0.0, 0.0)


def test_zero_accelerometer_leaves_estimate():
    filt = Madgwick()
    filt.update(0.3, 0.2, 0.1, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.01)
    assert filt.quaternion == (1.0, 0.0, 0.0, 0.0)


def test_zero_magnetometer_leaves_estimate():
    filt = Madgwick()
    filt.update(0.3, 0.2, 0.1, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.01)
    assert filt.quaternion == (1.0, 0.0, 0.0, 0.0)


@pytest.mark.parametrize("step", range(5))
def test_update_keeps_unit_quaternion(step):
    filt = Madgwick()
    for n in range(step + 1):
        filt.update(0.1 * n, -0.2, 0.3, 0.1, 0.2, 0.9, 0.4, -0.3, 0.5, 0.005)
    assert norm(filt.quaternion) == pytest.approx(1.0)


def test_gyro_rotation_raises_yaw():
    filt = Madgwick(beta=0.0)
    filt.update(0.0, 0.0, 1.0, 0.0, 0.0, 1.0, 1.0, 0.0, 0.0, 0.01)
    assert filt.yaw() == pytest.approx(math.degrees(0.01), rel=1e-3)


def test_negative_rotation_wraps_yaw():
    filt = Madgwick(beta=0.0)
    filt.update(0.0, 0.0, -1.0, 0.0, 0.0, 1.0, 1.0, 0.0, 0.0, 0.01)
    assert 359.0 < filt.yaw() < 360.0


def test_complementary_level_stays_level():
    filt = Madgwick()
    filt.complementary_update(0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.01)
    roll, pitch = filt.roll_pitch()
    assert roll == pytest.approx(0.0)
    assert pitch == pytest.approx(0.0)
    assert norm(filt.quaternion) == pytest.approx(1.0)


def test_complementary_moves_toward_accel_roll():
    filt = Madgwick()
    filt.complementary_update(0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.01)
    roll, pitch = filt.roll_pitch()
    assert roll == pytest.approx(1.8)
    assert pitch == pytest.approx(0.0)


def test_bias_learns_when_still():
    estimator = GyroBiasEstimator()
    bias = estimator.update(0.0, 0.0, 0.0, 2.0, -4.0, 6.0)
    assert estimator.variance == 0.0
    assert bias == pytest.approx((BIAS_ALPHA * 2.0, BIAS_ALPHA * -4.0, BIAS_ALPHA * 6.0))


def test_bias_frozen_while_moving():
    estimator = GyroBiasEstimator()
    bias = estimator.update(3.0, 0.0, 0.0, 2.0, 2.0, 2.0)
    assert estimator.variance == pytest.approx(1.0)
    assert bias == (0.0, 0.0, 0.0)
    bias = estimator.update(3.0, 0.0, 0.0, 2.0, 2.0, 2.0)
    assert bias[0] == pytest.approx(BIAS_ALPHA * 2.0)


def test_smoothing_first_reading_passes_through():
    smoothing = SmoothingFilter()
    assert smoothing.update(1.5, -2.0, 3.0) == pytest.approx((1.5, -2.0, 3.0))


def test_smoothing_blends_later_readings():
    smoothing = SmoothingFilter()
    smoothing.update(0.0, 0.0, 0.0)
    x, y, z = smoothing.update(10.0, 0.0, -10.0)
    assert x == pytest.approx(SMOOTHING_ALPHA * 10.0)
    assert y == 0.0
    assert z == pytest.approx(-x)


def test_gyro_to_rad_one_degree():
    assert gyro_to_rad(131, 0, 0) == pytest.approx(math.radians(1))


def test_gyro_to_rad_removes_offset_and_bias():
    assert gyro_to_rad(50, 30, 20) == 0.0