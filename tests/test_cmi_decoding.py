"""Tests for decoding CMI JSON API documents."""
import pytest

from uvrlink.core.errors import DecodeError, ProtocolStatusError, UnknownUnitError
from uvrlink.parsing.cmi import check_status, decode_document, entry_key, parse_header, status_meaning


def _document(data: dict, device: str = "87", status_code: int = 0) -> dict:
    """Helper: wrap a ``Data`` object into a complete CMI reply."""
    return {
        "Header": {"Version": 5, "Device": device, "Timestamp": 1630764000},
        "Data": data,
        "Status": "OK" if status_code == 0 else "FAIL",
        "Status code": status_code,
    }


def test_output_state_takes_precedence_over_value():
    doc = _document({"Outputs": [{"Number": 7, "AD": "A", "Value": {"State": 1, "Value": 65.0, "Unit": "8"}}]})
    record = decode_document(doc)
    assert record.outputs["A07"] is True
    assert record.sections["Outputs"]["A07"].value == 65.0
    assert record.sections["Outputs"]["A07"].unit == "%"


def test_output_state_off_with_nonzero_value():
    doc = _document({"Outputs": [{"Number": 2, "AD": "A", "Value": {"State": 0, "Value": 40.0, "Unit": "8"}}]})
    assert decode_document(doc).outputs["A02"] is False


def test_digital_output_without_state():
    doc = _document({"Outputs": [{"Number": 3, "AD": "D", "Value": {"Value": 1, "Unit": "43"}}]})
    record = decode_document(doc)
    assert record.outputs["D03"] is True
    assert record.sections["Outputs"]["D03"].value is True
    assert record.sections["Outputs"]["D03"].unit == "ON/OFF"


def test_analog_output_without_state_is_not_an_output():
    doc = _document({"Outputs": [{"Number": 5, "AD": "A", "Value": {"Value": 65.0, "Unit": "8"}}]})
    record = decode_document(doc)
    assert "A05" not in record.outputs
    assert record.sections["Outputs"]["A05"].value == 65.0


def test_yes_no_unit_reads_as_boolean():
    doc = _document({"Outputs": [{"Number": 4, "AD": "A", "Value": {"Value": 1, "Unit": "44"}}]})
    record = decode_document(doc)
    assert record.sections["Outputs"]["A04"].value is True
    assert record.outputs["A04"] is True


def test_inputs_feed_analog_inputs():
    doc = _document(
        {
            "Inputs": [
                {"Number": 1, "AD": "A", "Value": {"Value": 92.2, "Unit": "1"}},
                {"Number": 12, "AD": "A", "Value": {"Value": 120, "Unit": "3"}},
            ]
        }
    )
    record = decode_document(doc, frame_index=2)
    assert record.frame_index == 2
    assert record.source == "cmi"
    assert record.device_type == "UVR16x2"
    assert record.analog_inputs["A01"].value == pytest.approx(92.2)
    assert record.analog_inputs["A01"].unit == "°C"
    assert record.analog_inputs["A12"].unit == "l/h"


def test_arbitrary_sections_are_kept():
    doc = _document(
        {
            "Logging Analog": [{"Number": 1, "AD": "A", "Value": {"Value": 1234.5, "Unit": "11"}}],
            "DL-Bus": [{"Number": 4, "AD": "D", "Value": {"Value": 0, "Unit": "44"}}],
            "Inputs": [],
        }
    )
    record = decode_document(doc)
    assert set(record.sections) == {"Logging Analog", "DL-Bus", "Inputs"}
    assert record.sections["Logging Analog"]["A01"].unit == "kWh"
    assert record.sections["DL-Bus"]["D04"].value is False
    assert dict(record.outputs) == {}
    assert dict(record.analog_inputs) == {}


def test_missing_sections_are_tolerated():
    record = decode_document(_document({}))
    assert dict(record.sections) == {}


def test_unknown_unit_code_raises():
    doc = _document({"Inputs": [{"Number": 1, "AD": "A", "Value": {"Value": 1, "Unit": "99"}}]})
    with pytest.raises(UnknownUnitError):
        decode_document(doc)


def test_malformed_entries():
    with pytest.raises(DecodeError):
        entry_key({"Number": 1, "AD": "X"})
    with pytest.raises(DecodeError):
        decode_document(_document({"Inputs": [{"Number": 1, "AD": "A"}]}))
    with pytest.raises(DecodeError):
        decode_document(_document({"Inputs": {"Number": 1}}))
    with pytest.raises(DecodeError):
        decode_document(_document({"Inputs": [1]}))
    with pytest.raises(DecodeError):
        entry_key("x")


def test_entry_key_padding():
    assert entry_key({"Number": 3, "AD": "D"}) == "D03"
    assert entry_key({"Number": 16, "AD": "A"}) == "A16"


def test_status_codes():
    check_status({"Status code": 0})
    with pytest.raises(ProtocolStatusError) as exc_info:
        decode_document(_document({}, status_code=4))
    assert exc_info.value.status_code == 4
    assert exc_info.value.meaning == "too many requests"
    assert status_meaning(1) == "node not available"
    assert status_meaning(7) == "CAN bus busy"
    assert status_meaning(42) == "unknown status"


def test_missing_status_code():
    with pytest.raises(DecodeError):
        check_status({"Status": "OK"})


def test_header_device_name():
    assert parse_header(_document({}, device="80")).device_name == "UVR1611"
    assert parse_header(_document({}, device="a3")).device_name == "BL-NET"
    header = parse_header(_document({}, device="FE"))
    assert header.device_name == "Unknown"
    assert header.device_code == "FE"
    assert header.timestamp == 1630764000
    with pytest.raises(DecodeError):
        parse_header({"Data": {}})
