"""Tests for header frame parsing and device-info replies."""
import pytest

from uvrlink.core.errors import DecodeError, TruncatedFrameError, UnknownModeError
from uvrlink.parsing.header import (
    DeviceHeader,
    HeaderFrame,
    LoggerMode,
    parse_firmware_version,
    parse_module_id,
    parse_transmission_mode,
)


def _header_a8(device_type: int = 0x76) -> bytes:
    # identifier, version, timestamp[3], recordLengthDevice1, start[3], end[3], checksum
    return bytes([0xAA, 0xA8, 0x01, 0x02, 0x03, device_type, 0, 0, 0, 0, 0, 0, 0])


def _header_d1(first: int = 0x76, second: int = 0x5A) -> bytes:
    return bytes([0xAA, 0xD1, 0x01, 0x02, 0x03, first, second, 0, 0, 0, 0, 0, 0, 0])


def _header_dc(codes: list[int]) -> bytes:
    return bytes([0xAA, 0xDC, 0x01, 0x02, 0x03, len(codes)] + codes + [0] * 7)


def test_single_logger_header():
    frame = HeaderFrame.from_bytes(_header_a8())
    assert frame.mode is LoggerMode.SINGLE_LOGGER
    assert frame.frame_count == 1
    assert frame.device_type_codes == (0x76,)
    assert frame.device_types == ("UVR1611",)
    assert frame.mode_label == "1DL"


def test_dual_logger_header():
    frame = HeaderFrame.from_bytes(_header_d1())
    assert frame.mode is LoggerMode.DUAL_LOGGER
    assert frame.frame_count == 1
    assert frame.device_types == ("UVR1611", "UVR61-3")


def test_can_header_frame_count():
    frame = HeaderFrame.from_bytes(_header_dc([0x76, 0x76, 0x5A]))
    assert frame.mode is LoggerMode.CAN_MULTI
    assert frame.frame_count == 3
    assert frame.device_type_codes == (0x76, 0x76, 0x5A)
    assert frame.mode_label == "3CAN"


def test_unknown_device_type_is_not_fatal():
    frame = HeaderFrame.from_bytes(_header_a8(device_type=0x11))
    assert frame.device_types == ("Unknown",)


def test_unknown_mode():
    raw = bytearray(_header_a8())
    raw[1] = 0x42
    with pytest.raises(UnknownModeError) as exc_info:
        HeaderFrame.from_bytes(bytes(raw))
    assert exc_info.value.mode == 0x42


def test_truncated_headers():
    with pytest.raises(TruncatedFrameError):
        HeaderFrame.from_bytes(b"\xaa")
    with pytest.raises(TruncatedFrameError):
        HeaderFrame.from_bytes(bytes([0xAA, 0xD1, 0, 0, 0, 0x76]))
    with pytest.raises(TruncatedFrameError):
        HeaderFrame.from_bytes(bytes([0xAA, 0xDC, 0, 0, 0, 4, 0x76, 0x76]))


@pytest.mark.parametrize("count", [0, 9])
def test_can_frame_count_bounds(count):
    raw = bytes([0xAA, 0xDC, 0, 0, 0, count] + [0x76] * 9)
    with pytest.raises(DecodeError):
        HeaderFrame.from_bytes(raw)


def test_device_info_replies():
    assert parse_module_id(b"\x12\xab") == "0x12AB"
    assert parse_firmware_version(bytes([219])) == "2.19"
    assert parse_transmission_mode(bytes([0xA8])) == "A8"
    with pytest.raises(TruncatedFrameError):
        parse_firmware_version(b"")


def test_device_header_from_replies():
    frame = HeaderFrame.from_bytes(_header_dc([0x76, 0x5A]))
    header = DeviceHeader.from_replies(frame, version=b"\x01\x02", firmware=bytes([230]), mode=bytes([0x20]))
    assert header.frame_count == 2
    assert header.module_id == "0x0102"
    assert header.firmware_version == "2.3"
    assert header.transmission_mode == "20"
    assert header.device_type_for_frame(1) == "UVR1611"
    assert header.device_type_for_frame(2) == "UVR61-3"
    as_dict = header.as_dict()
    assert as_dict["mode"] == "CAN"
    assert as_dict["device_type_codes"] == ["0x76", "0x5A"]


def test_dual_logger_frame_uses_first_device():
    frame = HeaderFrame.from_bytes(_header_d1(first=0x5A, second=0x76))
    header = DeviceHeader.from_replies(frame, version=b"\x01", firmware=b"\x01", mode=b"\x01")
    assert header.device_type_for_frame(1) == "UVR61-3"
