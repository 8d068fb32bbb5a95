"""Fixed-point arithmetic in the s1.14, s15.16 and 17.15 formats.

Values are plain Python integers holding the raw two's-complement bits
of the fixed-point number. Every operation wraps its result to the width
of the format, so overflow behaves as it does in a 16-bit or 32-bit register.
"""

from __future__ import annotations

S1X14_ONE = 1 << 14
S15X16_ONE = 1 << 16
FIX15_ONE = 1 << 15


def wrap_s16(value: int) -> int:
    """Wrap an integer to the signed 16-bit range."""
    return ((int(value) + 0x8000) & 0xFFFF) - 0x8000


def wrap_s32(value: int) -> int:
    """Wrap an integer to the signed 32-bit range."""
    return ((int(value) + 0x8000_0000) & 0xFFFF_FFFF) - 0x8000_0000


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    if denominator == 0:
        raise ZeroDivisionError("fixed-point division by zero")
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


# --- s1.14: resolution 2**-14, range -2.0 .. +1.9999 -----------------------


def float_to_s1x14(x: float) -> int:
    """Convert a float to s1.14, truncating toward zero."""
    return wrap_s16(int(x * 16384.0))


def s1x14_to_float(a: int) -> float:
    """Convert an s1.14 value to a float."""
    return a / 16384.0


def mul_s1x14(a: int, b: int) -> int:
    """Multiply two s1.14 values."""
    return wrap_s16((a * b) >> 14)


def div_s1x14(a: int, b: int) -> int:
    """Divide two s1.14 values."""
    return wrap_s16(_trunc_div(a << 14, b))


def adc_to_s1x14(a: int) -> int:
    """Scale a 12-bit ADC reading into s1.14."""
    return wrap_s16(a << 1)


# --- s15.16: resolution 2**-16, range -32768 .. 32767 ----------------------


def float_to_s15x16(x: float) -> int:
    """Convert a float to s15.16, truncating toward zero."""
    return wrap_s32(int(x * 65536.0))


def s15x16_to_float(a: int) -> float:
    """Convert an s15.16 value to a float."""
    return a / 65536.0


def int_to_s15x16(a: int) -> int:
    """Convert an integer to s15.16."""
    return wrap_s32(a << 16)


def s15x16_to_int(a: int) -> int:
    """Take the integer part of an s15.16 value (rounding toward minus infinity)."""
    return a >> 16


def mul_s15x16(a: int, b: int) -> int:
    """Multiply two s15.16 values."""
    return wrap_s32((a * b) >> 16)


def div_s15x16(a: int, b: int) -> int:
    """Divide two s15.16 values."""
    return wrap_s32(_trunc_div(a << 16, b))


def s1x14_to_s15x16(a: int) -> int:
    """Widen an s1.14 value to s15.16."""
    return wrap_s32(a << 2)


# --- 17.15 ("fix15") --------------------------------------------------------


def float_to_fix15(x: float) -> int:
    """Convert a float to 17.15 fixed point, truncating toward zero."""
    return wrap_s32(int(x * 32768.0))


def fix15_to_float(a: int) -> float:
    """Convert a 17.15 fixed-point value to a float."""
    return a / 32768.0


def mul_fix15(a: int, b: int) -> int:
    """Multiply two 17.15 values."""
    return wrap_s32((a * b) >> 15)


def div_fix15(a: int, b: int) -> int:
    """Divide two 17.15 values."""
    return wrap_s32(_trunc_div(a << 15, b))