import math

import pytest

from pitchmidi.pitch import (
    DAC_CONFIG_CHAN_B,
    NoteEstimator,
    PitchDetector,
    freq_to_midi,
    median_frequency,
    to_dac_words,
)


def _tone(bin_index, n=512, amplitude=1000, offset=2048):
    return [
        int(offset + amplitude * math.sin(2 * math.pi * bin_index * i / n))
        for i in range(n)
    ]


def test_silence_gives_zero_frequency():
    detector = PitchDetector()
    assert detector.estimate_frequency([0] * 512) == 0.0


@pytest.mark.parametrize("bin_index", [10, 40, 100])
def test_tone_lands_in_its_bin(bin_index):
    detector = PitchDetector()
    freq = detector.estimate_frequency(_tone(bin_index))
    assert abs(freq - bin_index * 9.76) < 0.01


def test_custom_bin_conversion_scales_result():
    base = PitchDetector().estimate_frequency(_tone(20))
    doubled = PitchDetector(bin_conversion=19.52).estimate_frequency(_tone(20))
    assert abs(doubled - 2 * base) < 0.01


def test_smaller_transform_block_size():
    detector = PitchDetector(log2_n=7)
    assert detector.block_size == 128
    freq = detector.estimate_frequency(_tone(8, n=128))
    assert abs(freq - 8 * 9.76) < 0.01


def test_wrong_block_length_raises():
    with pytest.raises(ValueError):
        PitchDetector().estimate_frequency([0] * 100)


def test_freq_to_midi_reference_pitches():
    assert freq_to_midi(440.0) == 69
    assert freq_to_midi(220.0) == 57


def test_freq_to_midi_octave_adds_twelve():
    assert freq_to_midi(523.26) == freq_to_midi(261.63) + 12


@pytest.mark.parametrize("bad", [0.0, -10.0])
def test_freq_to_midi_rejects_non_positive(bad):
    with pytest.raises(ValueError):
        freq_to_midi(bad)


def test_median_frequency_picks_middle():
    assert median_frequency([5.0, 1.0, 3.0]) == 3.0
    assert median_frequency([9.0, 2.0, 7.0, 4.0]) == 7.0


def test_median_frequency_empty_raises():
    with pytest.raises(ValueError):
        median_frequency([])


def test_to_dac_words_sets_channel_bits():
    samples = [0, 0x0123, 0x0FFF, 0x7ABC]
    words = to_dac_words(samples)
    assert len(words) == len(samples)
    for sample, word in zip(samples, words):
        assert word & 0xF000 == DAC_CONFIG_CHAN_B
        assert word & 0x0FFF == sample & 0x0FFF


def test_note_estimator_waits_for_full_window():
    estimator = NoteEstimator()
    results = [estimator.push(440.0) for _ in range(9)]
    assert results[:8] == [None] * 8
    assert results[8] == freq_to_midi(440.0)


def test_note_estimator_uses_median():
    estimator = NoteEstimator(window=3)
    estimator.push(1000.0)
    estimator.push(220.0)
    assert estimator.push(10.0) == freq_to_midi(220.0)


def test_note_estimator_silence_gives_none():
    estimator = NoteEstimator(window=2)
    estimator.push(0.0)
    assert estimator.push(0.0) is None


def test_note_estimator_invalid_window():
    with pytest.raises(ValueError):
        NoteEstimator(window=0)