import math
from datetime import datetime, timedelta

import pytest

from fractal_clock.angles import Angles, compute_angles, ratio_to_radians


def test_ratio_to_radians_rotates_zero_to_twelve_o_clock() -> None:
    assert ratio_to_radians(0) == pytest.approx(-math.pi / 2)
    assert ratio_to_radians(0.25) == pytest.approx(0.0)
    assert ratio_to_radians(0.5) == pytest.approx(math.pi / 2)


def test_midnight_points_every_hand_up() -> None:
    angles = compute_angles(datetime(2024, 1, 1, 0, 0, 0))

    assert angles.hour == pytest.approx(-math.pi / 2)
    assert angles.minute == pytest.approx(-math.pi / 2)
    assert angles.second == pytest.approx(-math.pi / 2)


@pytest.mark.parametrize("hour", [6, 18])
def test_six_o_clock_points_hour_hand_down(hour: int) -> None:
    angles = compute_angles(datetime(2024, 1, 1, hour, 0, 0))

    assert angles.hour == pytest.approx(math.pi / 2)
    assert angles.minute == pytest.approx(-math.pi / 2)
    assert angles.second == pytest.approx(-math.pi / 2)


def test_fractional_units_carry_into_larger_hands() -> None:
    angles = compute_angles(datetime(2024, 1, 1, 3, 15, 30, 500_000))

    seconds = 30.5
    minutes = 15 + seconds / 60
    hours = 3 + minutes / 60

    assert angles.second == pytest.approx(seconds / 60 * 2 * math.pi - math.pi / 2)
    assert angles.minute == pytest.approx(minutes / 60 * 2 * math.pi - math.pi / 2)
    assert angles.hour == pytest.approx(hours / 12 * 2 * math.pi - math.pi / 2)


def test_angles_stay_within_one_turn_from_twelve_o_clock() -> None:
    instants = [datetime(2024, 1, 1) + timedelta(seconds=37 * i, microseconds=4_321 * i) for i in range(2400)]
    instants.append(datetime(2024, 1, 1, 23, 59, 59, 999_999))

    for instant in instants:
        angles = compute_angles(instant)
        for value in (angles.hour, angles.minute, angles.second):
            assert -math.pi / 2 <= value < 3 * math.pi / 2


def test_same_instant_gives_identical_angles() -> None:
    instant = datetime(2024, 5, 17, 21, 42, 7, 125_000)

    assert compute_angles(instant) == compute_angles(instant)


def test_angles_serialize_to_dict() -> None:
    angles = Angles(hour=1.0, minute=2.0, second=3.0)

    assert angles.to_dict() == {"hour": 1.0, "minute": 2.0, "second": 3.0}
