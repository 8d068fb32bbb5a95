"""Dominant-frequency estimation from ADC sample blocks and note selection."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from pitchmidi.fft import FFTTables, fft_fix, magnitude
from pitchmidi.fixedpoint import (
    adc_to_s1x14,
    div_s15x16,
    float_to_fix15,
    float_to_s15x16,
    int_to_s15x16,
    mul_s15x16,
    mul_s1x14,
    s15x16_to_float,
    wrap_s16,
)

DEFAULT_LOG2_N = 9
DEFAULT_BIN_CONVERSION = 9.76
DEFAULT_MEDIAN_WINDOW = 9
DAC_CONFIG_CHAN_A = 0b0011000000000000
DAC_CONFIG_CHAN_B = 0b1011000000000000

_FIRST_SEARCH_BIN = 2
# The divisor is built in 17.15 but used as s15.16, exactly as the detector expects.
_BIN_DIVISOR = float_to_fix15(2.0)


class PitchDetector:
    """Finds the strongest frequency in a block of 12-bit ADC samples."""

    def __init__(
        self,
        log2_n: int = DEFAULT_LOG2_N,
        bin_conversion: float = DEFAULT_BIN_CONVERSION,
    ) -> None:
        self.tables = FFTTables.build(log2_n)
        self.bin_conversion = float_to_s15x16(bin_conversion)

    @property
    def block_size(self) -> int:
        return self.tables.n

    def estimate_frequency(self, samples: Sequence[int]) -> float:
        """Return the frequency in Hz of the largest spectral peak.

        Bins 0 and 1 are skipped; a block with no energy above them gives 0.0.
        """
        n = self.tables.n
        if len(samples) != n:
            raise ValueError(f"expected {n} samples, got {len(samples)}")

        windowed = [
            mul_s1x14(adc_to_s1x14(wrap_s16(sample)), weight)
            for sample, weight in zip(samples, self.tables.window)
        ]
        re, im = fft_fix(windowed, [0] * n, self.tables)
        spectrum = magnitude(re, im)

        peak = 0
        peak_index = 0
        for index in range(_FIRST_SEARCH_BIN, n // 2):
            if spectrum[index] > peak:
                peak = spectrum[index]
                peak_index = index

        bin_index = int_to_s15x16(peak_index)
        freq = div_s15x16(mul_s15x16(bin_index, self.bin_conversion), _BIN_DIVISOR)
        return s15x16_to_float(freq)


def freq_to_midi(freq: float) -> int:
    """Convert a frequency in Hz to a MIDI note number, truncating toward zero."""
    if freq <= 0:
        raise ValueError("frequency must be positive")
    return int(57.01 + (12 * math.log(freq / 220.0)) / math.log(2))


def median_frequency(freqs: Iterable[float]) -> float:
    """Return the middle element of the sorted frequencies."""
    ordered = sorted(freqs)
    if not ordered:
        raise ValueError("no frequencies given")
    return ordered[len(ordered) // 2]


def to_dac_words(samples: Iterable[int]) -> list[int]:
    """Pack 12-bit samples into 16-bit channel-B DAC command words."""
    return [DAC_CONFIG_CHAN_B | (sample & 0x0FFF) for sample in samples]


class NoteEstimator:
    """Collects frequency estimates and yields a note once per full window."""

    def __init__(self, window: int = DEFAULT_MEDIAN_WINDOW) -> None:
        if window < 1:
            raise ValueError("window must be at least 1")
        self.window = window
        self._freqs = [0.0] * window
        self._index = 0

    def push(self, frequency: float) -> int | None:
        """Record one estimate; return the median's MIDI note when the window fills.

        Returns None while the window is filling, or when the median is not a
        positive frequency.
        """
        self._freqs[self._index] = frequency
        self._index = (self._index + 1) % self.window
        if self._index != 0:
            return None
        median = median_frequency(self._freqs)
        if median <= 0:
            return None
        return freq_to_midi(median)