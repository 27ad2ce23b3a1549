"""Conversions between wall-clock units and scheduler ticks.

Ticks run at ``OSTICKS_PER_SEC`` per second and are held as signed 32-bit
values that wrap around; compare tick values with :func:`time_diff`.
"""

from __future__ import annotations

__all__ = [
    "OSTICKS_PER_SEC",
    "RX_RAMPUP_DEFAULT",
    "TX_RAMPUP",
    "us2osticks",
    "ms2osticks",
    "sec2osticks",
    "osticks2ms",
    "osticks2us",
    "us2osticks_ceil",
    "us2osticks_round",
    "ms2osticks_ceil",
    "ms2osticks_round",
    "time_diff",
]

OSTICKS_PER_SEC = 32768

_US_PER_SEC = 1_000_000
_MS_PER_SEC = 1_000


def _to_s32(value: int) -> int:
    """Wrap *value* into the signed 32-bit range."""
    return ((value + (1 << 31)) % (1 << 32)) - (1 << 31)


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator >= 0) else -quotient


def us2osticks(us: int) -> int:
    """Convert microseconds to ticks, truncating."""
    return _to_s32(_trunc_div(int(us) * OSTICKS_PER_SEC, _US_PER_SEC))


def ms2osticks(ms: int) -> int:
    """Convert milliseconds to ticks, truncating."""
    return _to_s32(_trunc_div(int(ms) * OSTICKS_PER_SEC, _MS_PER_SEC))


def sec2osticks(sec: int) -> int:
    """Convert seconds to ticks."""
    return _to_s32(int(sec) * OSTICKS_PER_SEC)


def osticks2ms(ticks: int) -> int:
    """Convert ticks to milliseconds, truncating."""
    return _to_s32(_trunc_div(int(ticks) * _MS_PER_SEC, OSTICKS_PER_SEC))


def osticks2us(ticks: int) -> int:
    """Convert ticks to microseconds, truncating."""
    return _to_s32(_trunc_div(int(ticks) * _US_PER_SEC, OSTICKS_PER_SEC))


def us2osticks_ceil(us: int) -> int:
    """Convert microseconds to ticks, rounding up for non-negative input."""
    return _to_s32(
        _trunc_div(int(us) * OSTICKS_PER_SEC + _US_PER_SEC - 1, _US_PER_SEC)
    )


def us2osticks_round(us: int) -> int:
    """Convert microseconds to ticks, rounding half up for non-negative input."""
    return _to_s32(
        _trunc_div(int(us) * OSTICKS_PER_SEC + _US_PER_SEC // 2, _US_PER_SEC)
    )


def ms2osticks_ceil(ms: int) -> int:
    """Convert milliseconds to ticks, rounding up for non-negative input."""
    return _to_s32(
        _trunc_div(int(ms) * OSTICKS_PER_SEC + _MS_PER_SEC - 1, _MS_PER_SEC)
    )


def ms2osticks_round(ms: int) -> int:
    """Convert milliseconds to ticks, rounding half up for non-negative input."""
    return _to_s32(
        _trunc_div(int(ms) * OSTICKS_PER_SEC + _MS_PER_SEC // 2, _MS_PER_SEC)
    )


def time_diff(a: int, b: int) -> int:
    """Return ``a - b`` as a wrapped signed 32-bit tick difference."""
    return _to_s32(int(a) - int(b))


RX_RAMPUP_DEFAULT = us2osticks(10000)
TX_RAMPUP = us2osticks(10000)