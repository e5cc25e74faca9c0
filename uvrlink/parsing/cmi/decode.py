"""
Decoder for documents returned by the CMI JSON API.

A document looks like::

    {"Header": {"Version": 5, "Device": "87", "Timestamp": 1630764000},
     "Data": {"Inputs": [{"Number": 1, "AD": "A", "Value": {"Value": 92.2, "Unit": "1"}}], ...},
     "Status": "OK", "Status code": 0}

Every section is kept on the record. "Inputs" and "Outputs" also feed the
``analog_inputs`` and ``outputs`` maps shared with the binary decoder.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from uvrlink.core.errors import DecodeError, ProtocolStatusError
from uvrlink.core.units import CMI_DIGITAL_UNITS, cmi_device_name, cmi_unit
from uvrlink.parsing.record.model import Measurement, SensorRecord

logger = logging.getLogger(__name__)

INPUTS_SECTION = "Inputs"
OUTPUTS_SECTION = "Outputs"

# ``jsonparam`` codes -> section names in ``Data``.
SECTION_CODES: dict[str, str] = {
    "I": "Inputs",
    "O": "Outputs",
    "D": "DL-Bus",
    "Sg": "General",
    "Sd": "Date",
    "St": "Time",
    "Ss": "Sun",
    "Sp": "Electrical power",
    "Na": "Network Analog",
    "Nd": "Network Digital",
    "M": "M-Bus",
    "AM": "Modbus",
    "AK": "KNX",
    "La": "Logging Analog",
    "Ld": "Logging Digital",
}

STATUS_OK = 0
STATUS_MEANINGS: dict[int, str] = {
    0: "OK",
    1: "node not available",
    2: "parameter not supported",
    3: "syntax error",
    4: "too many requests",
    5: "device not supported",
    6: "too few arguments",
    7: "CAN bus busy",
}


@dataclass(frozen=True)
class CmiHeader:
    version: Optional[int]
    device_code: str
    device_name: str
    timestamp: Optional[int]

    def as_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "device_code": self.device_code,
            "device_name": self.device_name,
            "timestamp": self.timestamp,
        }


def status_meaning(code: int) -> str:
    return STATUS_MEANINGS.get(code, "unknown status")


def check_status(document: Mapping[str, Any]) -> None:
    """Raise ``ProtocolStatusError`` unless the document carries status code 0."""
    raw_code = document.get("Status code")
    try:
        code = int(raw_code)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"Missing or invalid 'Status code': {raw_code!r}") from exc
    if code != STATUS_OK:
        raise ProtocolStatusError(code, status_meaning(code))


def parse_header(document: Mapping[str, Any]) -> CmiHeader:
    header = document.get("Header")
    if not isinstance(header, Mapping):
        raise DecodeError("CMI document has no 'Header' object")
    code = str(header.get("Device") or "").upper()
    return CmiHeader(
        version=header.get("Version"),
        device_code=code,
        device_name=cmi_device_name(code),
        timestamp=header.get("Timestamp"),
    )


def entry_key(entry: Mapping[str, Any]) -> str:
    if not isinstance(entry, Mapping):
        raise DecodeError(f"CMI entry is not an object: {entry!r}")
    ad = entry.get("AD")
    number = entry.get("Number")
    if ad not in ("A", "D") or not isinstance(number, int):
        raise DecodeError(f"Malformed CMI entry: {dict(entry)!r}")
    return f"{ad}{number:02d}"


def decode_entry(entry: Mapping[str, Any]) -> tuple[str, Measurement, Optional[bool]]:
    """
    Decode one section entry.

    Returns:
        ``(key, measurement, state)`` where ``state`` is the boolean ``State``
        field when the entry carries one, else ``None``.
    """
    key = entry_key(entry)
    value_obj = entry.get("Value")
    if not isinstance(value_obj, Mapping) or "Value" not in value_obj:
        raise DecodeError(f"CMI entry {key} has no value")
    unit_code = value_obj.get("Unit", 0)
    unit = cmi_unit(unit_code)
    value = value_obj["Value"]
    if entry["AD"] == "D" or int(unit_code) in CMI_DIGITAL_UNITS:
        value = bool(value)
    state = value_obj.get("State")
    return key, Measurement(value=value, unit=unit), (bool(state) if state is not None else None)


def decode_document(document: Mapping[str, Any], frame_index: int = 1) -> SensorRecord:
    """
    Decode a CMI document into a ``SensorRecord``.

    Sections are taken as the device reports them; absent sections are simply
    missing from the record.

    Raises:
        ProtocolStatusError: The document reports a non-zero status code.
        DecodeError: The document or one of its entries is malformed.
    """
    check_status(document)
    header = parse_header(document)
    data = document.get("Data")
    if not isinstance(data, Mapping):
        raise DecodeError("CMI document has no 'Data' object")

    sections: dict[str, dict[str, Measurement]] = {}
    outputs: dict[str, bool] = {}
    for section, entries in data.items():
        if not isinstance(entries, list):
            raise DecodeError(f"CMI section {section!r} is not a list")
        decoded: dict[str, Measurement] = {}
        for entry in entries:
            key, measurement, state = decode_entry(entry)
            decoded[key] = measurement
            if section != OUTPUTS_SECTION:
                continue
            if state is not None:
                outputs[key] = state
            elif isinstance(measurement.value, bool):
                outputs[key] = measurement.value
        sections[section] = decoded

    logger.debug(
        "cmi_document_decoded",
        extra={"details": {"frame_index": frame_index, "device": header.device_name, "sections": list(sections)}},
    )
    return SensorRecord(
        frame_index=frame_index,
        device_type=header.device_name,
        outputs=outputs,
        analog_inputs=sections.get(INPUTS_SECTION, {}),
        sections=sections,
        source="cmi",
    )
