"""MIDI note output, a demo note sequencer and the USB-state LED blinker."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum

NOTE_ON = 0x90
NOTE_OFF = 0x80
FULL_VELOCITY = 127
LOWEST_PLAYABLE_NOTE = 27
MIDI_NOTE_LIMIT = 128
DEFAULT_SEQUENCE_INTERVAL_MS = 286

NOTE_SEQUENCE: tuple[int, ...] = (
    74, 78, 81, 86, 90, 93, 98, 102, 57, 61, 66, 69, 73, 78, 81, 85, 88, 92, 97, 100, 97, 92, 88, 85, 81, 78,
    74, 69, 66, 62, 57, 62, 66, 69, 74, 78, 81, 86, 90, 93, 97, 102, 97, 93, 90, 85, 81, 78, 73, 68, 64, 61,
    56, 61, 64, 68, 74, 78, 81, 86, 90, 93, 98, 102,
)


def _note_on(note: int) -> bytes:
    return bytes((NOTE_ON, note, FULL_VELOCITY))


def _note_off(note: int) -> bytes:
    return bytes((NOTE_OFF, note, 0))


def _elapsed(now_ms: int, start_ms: int) -> int:
    return (now_ms - start_ms) & 0xFFFF_FFFF


@dataclass
class NotePlayer:
    """Turns a stream of detected notes into channel-1 note-off/note-on messages."""

    previous: int = 0

    def play(self, note: int) -> list[bytes]:
        """Return the messages to send for ``note``; empty if nothing changes."""
        if note == self.previous or not LOWEST_PLAYABLE_NOTE < note < MIDI_NOTE_LIMIT:
            return []
        messages = [_note_off(self.previous), _note_on(note)]
        self.previous = note
        return messages


class SequencePlayer:
    """Steps through a fixed melody, one note per interval."""

    def __init__(
        self,
        sequence: Sequence[int] = NOTE_SEQUENCE,
        interval_ms: int = DEFAULT_SEQUENCE_INTERVAL_MS,
    ) -> None:
        if not sequence:
            raise ValueError("sequence must not be empty")
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.sequence = tuple(sequence)
        self.interval_ms = interval_ms
        self.position = 0
        self._start_ms = 0

    def tick(self, now_ms: int) -> list[bytes]:
        """Return note-on for the current note and note-off for the previous one,
        or nothing if the interval has not elapsed."""
        if _elapsed(now_ms, self._start_ms) < self.interval_ms:
            return []
        self._start_ms += self.interval_ms
        previous = self.sequence[self.position - 1]
        messages = [_note_on(self.sequence[self.position]), _note_off(previous)]
        self.position = (self.position + 1) % len(self.sequence)
        return messages


class BlinkInterval(IntEnum):
    """LED blink periods in milliseconds for each USB state."""

    NOT_MOUNTED = 250
    MOUNTED = 1000
    SUSPENDED = 2500


@dataclass
class LedBlinker:
    """Toggles an LED at a rate that reflects the USB device state."""

    interval: BlinkInterval = BlinkInterval.NOT_MOUNTED
    led_on: bool = False
    _start_ms: int = field(default=0, repr=False)

    def mount(self) -> None:
        self.interval = BlinkInterval.MOUNTED

    def unmount(self) -> None:
        self.interval = BlinkInterval.NOT_MOUNTED

    def suspend(self, remote_wakeup_enabled: bool) -> None:
        self.interval = BlinkInterval.SUSPENDED

    def resume(self) -> None:
        self.interval = BlinkInterval.MOUNTED

    def tick(self, now_ms: int) -> bool | None:
        """Return the LED level to write, or None if the interval has not elapsed."""
        if _elapsed(now_ms, self._start_ms) < self.interval:
            return None
        self._start_ms += int(self.interval)
        level = self.led_on
        self.led_on = not self.led_on
        return level