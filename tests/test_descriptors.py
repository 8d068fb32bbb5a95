import struct

import pytest

from pitchmidi.descriptors import (
    STRING_TABLE,
    DeviceDescriptor,
    _encode_string,
    device_descriptor,
    product_id,
    string_descriptor,
)


def test_product_id_base_without_classes():
    assert product_id(0, 0, 0, 0, 0) == 0x4000


@pytest.mark.parametrize("position", range(5))
def test_product_id_each_class_sets_its_own_bit(position):
    flags = [0] * 5
    flags[position] = 1
    assert product_id(*flags) == 0x4000 | (1 << position)


def test_device_descriptor_header_and_length():
    data = device_descriptor().to_bytes()
    assert len(data) == 18
    assert data[0] == len(data)
    assert data[1] == 1


def test_device_descriptor_vendor_and_product_fields():
    desc = device_descriptor()
    data = desc.to_bytes()
    vendor, product = struct.unpack_from("<HH", data, 8)
    assert vendor == 0xCAFE
    assert product == product_id(0, 0, 0, 1, 0)
    assert product == desc.product_id


def test_device_descriptor_usb_version_and_packet_size():
    data = DeviceDescriptor().to_bytes()
    assert struct.unpack_from("<H", data, 2)[0] == 0x0200
    assert data[7] == 64
    assert data[17] == 1


def test_string_descriptor_language_id():
    data = string_descriptor(0)
    assert data[0] == len(data)
    assert data[1] == 3
    assert data[2:] == bytes((0x09, 0x04))


@pytest.mark.parametrize("index", [1, 2, 3])
def test_string_descriptor_round_trip(index):
    data = string_descriptor(index)
    assert data[0] == len(data)
    assert data[1] == 3
    assert data[2:].decode("utf-16-le") == STRING_TABLE[index]


def test_string_descriptor_manufacturer_text():
    assert string_descriptor(1)[2:].decode("utf-16-le") == "Raspberry Pi"


@pytest.mark.parametrize("index", [4, 0xEE, -1])
def test_string_descriptor_unknown_index(index):
    with pytest.raises(IndexError):
        string_descriptor(index)


def test_long_strings_are_capped():
    data = _encode_string("x" * 40)
    assert data[0] == len(data)
    assert data[2:].decode("utf-16-le") == "x" * 31