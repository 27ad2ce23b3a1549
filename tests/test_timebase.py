import pytest

from lorastack.timebase import (
    OSTICKS_PER_SEC,
    ms2osticks,
    ms2osticks_ceil,
    ms2osticks_round,
    osticks2ms,
    osticks2us,
    sec2osticks,
    time_diff,
    us2osticks,
    us2osticks_ceil,
    us2osticks_round,
)


def test_one_second_is_ticks_per_second():
    assert us2osticks(1_000_000) == OSTICKS_PER_SEC
    assert ms2osticks(1000) == OSTICKS_PER_SEC
    assert sec2osticks(1) == OSTICKS_PER_SEC


def test_negative_values_truncate_toward_zero():
    assert us2osticks(-1648) == -us2osticks(1648)
    assert ms2osticks(-750) == -ms2osticks(750)


@pytest.mark.parametrize("us", [0, 1, 29, 31, 1648, 999_999, 5_000_001])
def test_ceil_round_floor_ordering(us):
    floor = us2osticks(us)
    assert floor <= us2osticks_round(us) <= us2osticks_ceil(us) <= floor + 1


@pytest.mark.parametrize("ms", [0, 1, 3, 750, 1001])
def test_ms_ceil_round_floor_ordering(ms):
    floor = ms2osticks(ms)
    assert floor <= ms2osticks_round(ms) <= ms2osticks_ceil(ms) <= floor + 1


def test_exact_conversions_agree_in_all_modes():
    assert us2osticks_ceil(1_000_000) == us2osticks(1_000_000)
    assert ms2osticks_round(2000) == ms2osticks(2000)


@pytest.mark.parametrize("ticks", [0, 1, 54, 32768, 100_000])
def test_ticks_round_trip_through_us(ticks):
    assert us2osticks_ceil(osticks2us(ticks)) == ticks or us2osticks(
        osticks2us(ticks)
    ) <= ticks
    assert osticks2us(us2osticks(osticks2us(ticks))) <= osticks2us(ticks)


@pytest.mark.parametrize("ms", [0, 1, 750, 5000])
def test_ms_round_trip_does_not_overshoot(ms):
    assert osticks2ms(ms2osticks(ms)) <= ms
    assert osticks2ms(ms2osticks_ceil(ms)) >= ms - 1


def test_time_diff_wraps():
    largest = 2**31 - 1
    smallest = -(2**31)
    assert time_diff(smallest, largest) == 1
    assert time_diff(largest, smallest) == -1
    assert time_diff(10, 3) == -time_diff(3, 10)


def test_sec2osticks_wraps_to_signed_32_bits():
    assert -(2**31) <= sec2osticks(100_000) < 2**31