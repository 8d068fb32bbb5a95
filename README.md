# pitchmidi

pitchmidi finds the pitch of an audio signal and turns it into MIDI notes.
It runs a fixed-point FFT (512 points by default) on blocks of 12-bit samples
and takes the strongest bin as the frequency. Every nine blocks, the median of
the last nine frequencies becomes a MIDI note number. It also builds the USB
device and string descriptors that a small USB-MIDI device would report.

All arithmetic is done on integers in s1.14, s15.16 and 17.15 fixed-point
formats, wrapping at 16 or 32 bits the way hardware registers do, so the
results match those of a small microcontroller bit for bit.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
pitchmidi recording.wav
```

reads the first channel of a PCM WAV file, scales it to 12-bit unsigned
values (0..4095) and prints one detected MIDI note number per line. Trailing
samples that do not fill a whole 512-sample block are ignored.

```
pitchmidi --midi recording.wav
```

prints instead the three-byte MIDI messages, as hex, that would be sent for
each note change: a Note Off for the previous note followed by a Note On at
velocity 127 on channel 1.

A file that cannot be read is reported on standard error and the command
exits with status 1.

The frequency of a peak is its bin index times 9.76 Hz, which fits a sample
rate of about 5 kHz. The command does not resample, so recordings at other
rates give notes scaled accordingly.

## Library use

```python
from pitchmidi.pitch import PitchDetector, NoteEstimator
from pitchmidi.midi import NotePlayer

detector = PitchDetector(9, 9.76)     # 2**9 points, Hz per bin
estimator = NoteEstimator(9)          # median over nine estimates
player = NotePlayer()

for block in blocks:                  # 512 samples each, 0..4095
    freq = detector.estimate_frequency(block)
    note = estimator.push(freq)       # a MIDI note once every nine blocks
    if note is not None:
        for message in player.play(note):
            print(message.hex(" "))
```

`PitchDetector.estimate_frequency` skips bins 0 and 1 and searches up to half
the block; a block with no energy there gives 0.0. `NoteEstimator.push`
returns `None` while its window fills, or when the median is not positive.
`NotePlayer.play` only sends messages for notes from 28 to 127 that differ
from the previous one, and otherwise returns an empty list.

Modules:

- `pitchmidi.fixedpoint`: conversions and arithmetic for s1.14, s15.16 and
  17.15 values (`float_to_s1x14`, `mul_s1x14`, `div_s15x16`, `mul_fix15`,
  `wrap_s16`, `wrap_s32`, ...). Division by zero raises `ZeroDivisionError`.
- `pitchmidi.fft`: `FFTTables.build` (sine and raised-cosine window tables),
  `fft_fix` (forward radix-2 FFT, output scaled by 1/n), `magnitude`
  (alpha-max-plus-beta-min estimate), `log2_approx0` and `log2_approx`.
- `pitchmidi.pitch`: `PitchDetector`, `NoteEstimator`, `freq_to_midi`,
  `median_frequency` and `to_dac_words` (packs samples into channel-B DAC
  command words).
- `pitchmidi.midi`: `NotePlayer`; `SequencePlayer`, which steps through a
  fixed demo melody one note per interval (286 ms by default); `LedBlinker`,
  which reports when to toggle an LED at a rate given by `BlinkInterval` for
  the mounted, unmounted and suspended USB states.
- `pitchmidi.descriptors`: `DeviceDescriptor` with `to_bytes`,
  `device_descriptor`, `product_id` and `string_descriptor` (index 0 gives
  the language id; unknown indices raise `IndexError`).
- `pitchmidi.cli`: `read_wav_samples`, `detect_notes` and `main`.

## What it does not do

pitchmidi works on samples it is given or reads from WAV files. It does not
capture live audio, does not open MIDI ports or send messages anywhere (it
returns them as bytes), and does not act as a USB device: the descriptors are
built as bytes only, and there is no configuration descriptor.