"""Fixed-point FFT pitch detection, MIDI note output and USB-MIDI descriptors."""

__version__ = "0.1.0"
__all__ = ["cli", "descriptors", "fft", "fixedpoint", "midi", "pitch"]