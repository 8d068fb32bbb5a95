"""Fixed-point radix-2 FFT with magnitude and log2 approximations.

All spectra are lists of s1.14 integers (see :mod:`pitchmidi.fixedpoint`).
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from pitchmidi.fixedpoint import (
    float_to_s15x16,
    float_to_s1x14,
    int_to_s15x16,
    mul_s1x14,
    s1x14_to_s15x16,
    wrap_s16,
    wrap_s32,
)

_TWO_PI_APPROX = 6.283
_MAG_ALPHA = float_to_s1x14(0.89820)
_MAG_BETA = float_to_s1x14(0.48597)
_LOG_LOW_CUTOFF = float_to_s15x16(0.00006)
_LOG_SLOPE = float_to_s15x16(0.984)
_LOG_OFFSET = float_to_s15x16(0.065)
_LOG_FLOOR = -15
_LOG_MIN = 0


@dataclass(frozen=True)
class FFTTables:
    """Sine and raised-cosine window tables for an FFT of ``2**log2_n`` points."""

    log2_n: int
    sine: tuple[int, ...]
    window: tuple[int, ...]

    @property
    def n(self) -> int:
        return 1 << self.log2_n

    @classmethod
    def build(cls, log2_n: int) -> FFTTables:
        """Build the tables for a transform of ``2**log2_n`` points."""
        if log2_n < 2:
            raise ValueError("log2_n must be at least 2")
        n = 1 << log2_n
        sine = tuple(
            float_to_s1x14(0.5 * math.sin(_TWO_PI_APPROX * float(i) / n))
            for i in range(n)
        )
        window = tuple(
            float_to_s1x14(1.0 - math.cos(_TWO_PI_APPROX * float(i) / (n - 1)))
            for i in range(n)
        )
        return cls(log2_n=log2_n, sine=sine, window=window)


def _bit_reverse(index: int, bits: int) -> int:
    result = 0
    for _ in range(bits):
        result = (result << 1) | (index & 1)
        index >>= 1
    return result


def fft_fix(
    fr: Sequence[int], fi: Sequence[int], tables: FFTTables
) -> tuple[list[int], list[int]]:
    """Forward FFT of s1.14 data; returns new real and imaginary lists.

    Each butterfly stage halves its inputs, so the output is scaled by ``1/n``.
    """
    n = tables.n
    if len(fr) != n or len(fi) != n:
        raise ValueError(f"FFT input must have {n} real and {n} imaginary values")

    re = [wrap_s16(v) for v in fr]
    im = [wrap_s16(v) for v in fi]

    # decimation in time: reorder into bit-reversed positions
    for idx in range(n):
        rev = _bit_reverse(idx, tables.log2_n)
        if rev > idx:
            re[idx], re[rev] = re[rev], re[idx]
            im[idx], im[rev] = im[rev], im[idx]

    quarter = n // 4
    span = 1
    k = tables.log2_n - 1
    while span < n:
        step = span << 1
        for m in range(span):
            j = m << k
            wr = tables.sine[j + quarter]
            wi = wrap_s16(-tables.sine[j])
            for i in range(m, n, step):
                j2 = i + span
                tr = wrap_s16(mul_s1x14(wr, re[j2]) - mul_s1x14(wi, im[j2]))
                ti = wrap_s16(mul_s1x14(wr, im[j2]) + mul_s1x14(wi, re[j2]))
                qr = re[i] >> 1
                qi = im[i] >> 1
                re[j2] = wrap_s16(qr - tr)
                im[j2] = wrap_s16(qi - ti)
                re[i] = wrap_s16(qr + tr)
                im[i] = wrap_s16(qi + ti)
        k -= 1
        span = step
    return re, im


def magnitude(fr: Sequence[int], fi: Sequence[int]) -> list[int]:
    """Approximate ``|fr + j*fi|`` with the alpha-max-plus-beta-min method."""
    if len(fr) != len(fi):
        raise ValueError("real and imaginary parts differ in length")
    result = []
    for re, im in zip(fr, fi):
        a, b = abs(re), abs(im)
        lo = wrap_s16(min(a, b))
        hi = wrap_s16(max(a, b))
        estimate = mul_s1x14(hi, _MAG_ALPHA) + mul_s1x14(lo, _MAG_BETA)
        result.append(wrap_s16(max(hi, estimate)))
    return result


def log2_approx0(values: Sequence[int]) -> list[int]:
    """Single-segment piecewise-linear log2 of s1.14 values.

    Inputs at or below the low cutoff give -15. Intermediate arithmetic wraps
    at 32 bits, and the normalising shift count is taken modulo 32.
    """
    result = []
    for value in values:
        log_input = s1x14_to_s15x16(value)
        if log_input <= _LOG_LOW_CUTOFF:
            result.append(_LOG_FLOOR)
            continue
        frac_factor = 0
        if log_input < int_to_s15x16(2):
            frac_factor = 14
            log_input = wrap_s32(log_input << frac_factor)

        sx = log_input
        msb = 1
        position = 0
        while sx > int_to_s15x16(2):
            msb <<= 1
            position = wrap_s32(position + int_to_s15x16(1))
            sx >>= 1

        x = wrap_s32(log_input - msb) >> (position & 31)
        log_output = wrap_s32(
            position + wrap_s32(x * _LOG_SLOPE) + _LOG_OFFSET - frac_factor
        )
        result.append(wrap_s16(log_output >> 16))
    return result


def log2_approx(values: Sequence[int]) -> list[int]:
    """8-bit log2 approximation: integer part in the high nibble, fraction in the low.

    Results below zero are clamped to zero.
    """
    result = []
    for value in values:
        sx = value
        msb = 1
        position = 0
        while sx > 1:
            msb *= 2
            position += 1
            sx >>= 1
        diff = value - msb
        shift = position - 4 if position >= 4 else 31
        out = wrap_s16((position << 4) + (diff >> shift))
        result.append(max(out, _LOG_MIN))
    return result