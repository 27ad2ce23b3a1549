"""Compact floating-point encodings for sensor payloads.

Each encoder takes a number in a fixed range and packs it into 16 or 12 bits
as a biased 4-bit exponent and a rounded mantissa. Values outside the range
saturate to the largest code. Signed variants use sign/magnitude form.
"""

from __future__ import annotations

import math
import struct

__all__ = ["f2sflt16", "f2sflt12", "f2uflt16", "f2uflt12"]

_EXPONENT_BIAS = 15
_EXPONENT_MAX = 15


def _as_float32(value: float) -> float:
    """Round *value* to single precision, as the encoders work in that width."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _prepare(f: float) -> float:
    value = float(f)
    if math.isnan(value):
        raise ValueError("cannot encode NaN")
    return value


def _encode_magnitude(magnitude: float, fraction_bits: int) -> tuple[int, int]:
    """Return (exponent, fraction) for a magnitude in [0, 1).

    The exponent may come out one above the 4-bit range when rounding
    carries; callers saturate in that case.
    """
    normal, exponent = math.frexp(magnitude)
    exponent = max(exponent + _EXPONENT_BIAS, 0)
    fraction = int(math.ldexp(normal, fraction_bits) + 0.5)
    if fraction >= 1 << fraction_bits:
        fraction = 1 << (fraction_bits - 1)
        exponent += 1
    return exponent, fraction


def _encode_signed(f: float, fraction_bits: int) -> int:
    sign_bit = 1 << (fraction_bits + 4)
    largest = sign_bit - 1
    value = _prepare(f)
    if value <= -1.0:
        return largest | sign_bit
    if value >= 1.0:
        return largest
    value = _as_float32(value)
    if value <= -1.0:
        return largest | sign_bit
    if value >= 1.0:
        return largest

    sign = 0
    if value < 0:
        sign = sign_bit
        value = -value
    exponent, fraction = _encode_magnitude(value, fraction_bits)
    if exponent > _EXPONENT_MAX:
        return largest | sign
    return sign | (exponent << fraction_bits) | fraction


def _encode_unsigned(f: float, fraction_bits: int) -> int:
    largest = (1 << (fraction_bits + 4)) - 1
    value = _prepare(f)
    if value < 0.0:
        return 0
    if value >= 1.0:
        return largest
    value = _as_float32(value)
    if value >= 1.0:
        return largest

    exponent, fraction = _encode_magnitude(value, fraction_bits)
    if exponent > _EXPONENT_MAX:
        return largest
    return (exponent << fraction_bits) | fraction


def f2sflt16(f: float) -> int:
    """Encode a value in (-1, 1) as a signed 16-bit float.

    Bit 15 is the sign, bits 14..11 the biased exponent and bits 10..0 the
    mantissa. Returns 0xFFFF for values <= -1 and 0x7FFF for values >= 1.
    """
    return _encode_signed(f, 11)


def f2sflt12(f: float) -> int:
    """Encode a value in (-1, 1) as a signed 12-bit float.

    Bit 11 is the sign, bits 10..7 the biased exponent and bits 6..0 the
    mantissa. Returns 0xFFF for values <= -1 and 0x7FF for values >= 1.
    """
    return _encode_signed(f, 7)


def f2uflt16(f: float) -> int:
    """Encode a value in [0, 1) as an unsigned 16-bit float.

    Bits 15..12 are the biased exponent and bits 11..0 the mantissa.
    Returns 0 for negative values and 0xFFFF for values >= 1.
    """
    return _encode_unsigned(f, 12)


def f2uflt12(f: float) -> int:
    """Encode a value in [0, 1) as an unsigned 12-bit float.

    Bits 11..8 are the biased exponent and bits 7..0 the mantissa.
    Returns 0 for negative values and 0xFFF for values >= 1.
    """
    return _encode_unsigned(f, 8)