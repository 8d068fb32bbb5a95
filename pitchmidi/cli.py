"""Command-line note detection from WAV recordings."""

from __future__ import annotations

import argparse
import sys
import wave
from collections.abc import Sequence

from pitchmidi.midi import NotePlayer
from pitchmidi.pitch import NoteEstimator, PitchDetector

_ADC_BITS = 12


def _to_adc(frame: bytes, width: int) -> int:
    if width == 1:
        return frame[0] << (_ADC_BITS - 8)
    bits = width * 8
    value = int.from_bytes(frame[:width], "little", signed=True)
    return (value + (1 << (bits - 1))) >> (bits - _ADC_BITS)


def read_wav_samples(path) -> list[int]:
    """Read the first channel of a PCM WAV file as 12-bit unsigned ADC values."""
    with wave.open(str(path), "rb") as wav:
        width = wav.getsampwidth()
        channels = wav.getnchannels()
        data = wav.readframes(wav.getnframes())
    frame_size = width * channels
    return [
        _to_adc(data[offset : offset + width], width)
        for offset in range(0, len(data) - frame_size + 1, frame_size)
    ]


def detect_notes(samples: Sequence[int]) -> list[int]:
    """Return one MIDI note per completed median window of sample blocks.

    Trailing samples that do not fill a whole block are ignored.
    """
    detector = PitchDetector()
    estimator = NoteEstimator()
    size = detector.block_size
    notes = []
    for start in range(0, len(samples) - size + 1, size):
        note = estimator.push(detector.estimate_frequency(samples[start : start + size]))
        if note is not None:
            notes.append(note)
    return notes


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pitchmidi", description="Detect MIDI notes in a WAV recording."
    )
    parser.add_argument("wav", help="PCM WAV file to analyse")
    parser.add_argument(
        "--midi",
        action="store_true",
        help="print the MIDI messages sent for each note change as hex",
    )
    args = parser.parse_args(argv)

    try:
        samples = read_wav_samples(args.wav)
    except (OSError, EOFError, wave.Error) as exc:
        print(f"pitchmidi: {args.wav}: {exc}", file=sys.stderr)
        return 1

    notes = detect_notes(samples)
    if args.midi:
        player = NotePlayer()
        for note in notes:
            for message in player.play(note):
                print(message.hex(" "))
    else:
        for note in notes:
            print(note)
    return 0


if __name__ == "__main__":
    sys.exit(main())