"""Tests for byte/bit helpers and the 12-bit signed sensor word codec."""
import pytest

from uvrlink.core.binary import (
    combine16,
    combine32,
    decode_signed12,
    encode_signed12,
    get_bit,
    hex_dump,
    to_signed,
)


def test_combine16():
    assert combine16(0x3E, 0x00) == 0x003E
    assert combine16(0x34, 0x12) == 0x1234
    # Only the low byte of ``lo`` is used.
    assert combine16(0x1FF, 0x01) == 0x01FF


def test_combine32():
    assert combine32(0x78, 0x56, 0x34, 0x12) == 0x12345678
    assert combine32(0xFF, 0xFF, 0xFF, 0xFF) == 0xFFFFFFFF


def test_to_signed():
    assert to_signed(0xFFFF, 16) == -1
    assert to_signed(0x7FFF, 16) == 0x7FFF
    assert to_signed(0xFFFFFA80, 32) == -1408


def test_decode_positive_temperature_word():
    # T.Kollektor 6.2 °C: low 0x3E, high 0x20 (unit bits 0x20, sign clear)
    value, unit_bits = decode_signed12(combine16(0x3E, 0x20))
    assert value == 62
    assert unit_bits == 0x20
    assert value / 10 == pytest.approx(6.2)


def test_decode_negative_word():
    # -5.0 °C -> 12-bit two's complement 0xFCE with sign and temperature tag
    value, unit_bits = decode_signed12(combine16(0xCE, 0xAF))
    assert value == -50
    assert unit_bits == 0x20


def test_decode_masks_unit_bits_before_sign_handling():
    # Same magnitude, different unit tags -> same value.
    assert decode_signed12(0x3019)[0] == decode_signed12(0x7019)[0] == 0x19


def test_decode_most_negative():
    value, unit_bits = decode_signed12(0x8000)
    assert value == -4096
    assert unit_bits == 0x00


def test_encode_signed12():
    assert encode_signed12(62, 0x20) == 0x203E
    assert encode_signed12(-50, 0x20) == 0xAFCE


def test_encode_rejects_out_of_range():
    with pytest.raises(ValueError):
        encode_signed12(4096, 0x20)
    with pytest.raises(ValueError):
        encode_signed12(-4097, 0x20)


def test_signed12_roundtrip_all_words():
    for word in range(0x10000):
        value, unit_bits = decode_signed12(word)
        assert encode_signed12(value, unit_bits) == word


def test_get_bit():
    assert get_bit(0b0100, 2) is True
    assert get_bit(0b0100, 1) is False
    assert get_bit(0x8000, 15) is True
    with pytest.raises(ValueError):
        get_bit(0, 16)


def test_hex_dump():
    dump = hex_dump(bytes(range(18)))
    lines = dump.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("0000  00 01 02 03 04 05 06 07  08 09 0A 0B")
    assert lines[1] == "0010  10 11"
    assert hex_dump(b"") == "<empty>"
