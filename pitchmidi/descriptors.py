"""USB device and string descriptors for the MIDI device."""

from __future__ import annotations

import struct
from dataclasses import dataclass

# Device-class configuration: only the MIDI class is enabled.
CFG_TUD_CDC = 0
CFG_TUD_MSC = 0
CFG_TUD_HID = 0
CFG_TUD_MIDI = 1
CFG_TUD_VENDOR = 0

CFG_TUD_ENDPOINT0_SIZE = 64
CFG_TUD_MIDI_RX_BUFSIZE = 64
CFG_TUD_MIDI_TX_BUFSIZE = 64
CFG_TUD_MIDI_HS_BUFSIZE = 512

TUSB_DESC_DEVICE = 0x01
TUSB_DESC_STRING = 0x03

VENDOR_ID = 0xCAFE
_BASE_PID = 0x4000
_MAX_STRING_CHARS = 31
_LANGUAGE_ID = bytes((0x09, 0x04))  # English (0x0409)

STRING_TABLE: tuple[str, ...] = (
    "",  # index 0 holds the language id, handled separately
    "Raspberry Pi",
    "Pico Demo Device",
    "123456",
)

_DEVICE_FORMAT = "<BBHBBBBHHHBBBB"


def product_id(cdc: int, msc: int, hid: int, midi: int, vendor: int) -> int:
    """Build a product id whose low bits record which classes are enabled."""
    return (
        _BASE_PID
        | (cdc << 0)
        | (msc << 1)
        | (hid << 2)
        | (midi << 3)
        | (vendor << 4)
    )


@dataclass(frozen=True)
class DeviceDescriptor:
    """The standard 18-byte USB device descriptor."""

    bcd_usb: int = 0x0200
    device_class: int = 0x00
    device_subclass: int = 0x00
    device_protocol: int = 0x00
    max_packet_size0: int = CFG_TUD_ENDPOINT0_SIZE
    vendor_id: int = VENDOR_ID
    product_id: int = _BASE_PID
    bcd_device: int = 0x0100
    manufacturer_index: int = 0x01
    product_index: int = 0x02
    serial_number_index: int = 0x03
    num_configurations: int = 0x01

    @property
    def length(self) -> int:
        return struct.calcsize(_DEVICE_FORMAT)

    def to_bytes(self) -> bytes:
        """Serialise the descriptor in USB wire order (little-endian)."""
        return struct.pack(
            _DEVICE_FORMAT,
            self.length,
            TUSB_DESC_DEVICE,
            self.bcd_usb,
            self.device_class,
            self.device_subclass,
            self.device_protocol,
            self.max_packet_size0,
            self.vendor_id,
            self.product_id,
            self.bcd_device,
            self.manufacturer_index,
            self.product_index,
            self.serial_number_index,
            self.num_configurations,
        )


def device_descriptor() -> DeviceDescriptor:
    """Return the descriptor for this device's class configuration."""
    return DeviceDescriptor(
        product_id=product_id(
            CFG_TUD_CDC, CFG_TUD_MSC, CFG_TUD_HID, CFG_TUD_MIDI, CFG_TUD_VENDOR
        )
    )


def _with_header(payload: bytes) -> bytes:
    return bytes((len(payload) + 2, TUSB_DESC_STRING)) + payload


def _encode_string(text: str) -> bytes:
    """Encode text as a string descriptor, capped at 31 characters."""
    chars = text[:_MAX_STRING_CHARS]
    payload = b"".join((ord(ch) & 0xFF).to_bytes(2, "little") for ch in chars)
    return _with_header(payload)


def string_descriptor(index: int) -> bytes:
    """Return the string descriptor for ``index``.

    Index 0 gives the supported language id. Unknown indices raise IndexError.
    """
    if index == 0:
        return _with_header(_LANGUAGE_ID)
    if not 0 < index < len(STRING_TABLE):
        raise IndexError(f"no string descriptor at index {index}")
    return _encode_string(STRING_TABLE[index])