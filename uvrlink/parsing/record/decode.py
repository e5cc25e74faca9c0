"""
Decoder for BL-NET current-data frames.

A frame starts with the identifier byte ``0x80`` followed by the fixed-offset
record described by a ``RecordLayout``. Decoding is all-or-nothing: any
problem raises and no partial record is produced.
"""
from __future__ import annotations

import logging
from typing import Optional

from uvrlink.core.binary import combine16, combine32, decode_signed12, get_bit, hex_dump, to_signed
from uvrlink.core.errors import TruncatedFrameError, UnexpectedFrameFormatError
from uvrlink.core.units import (
    TYPE_DIGITAL,
    TYPE_RADIATION,
    TYPE_ROOM_SENSOR,
    TYPE_TEMP,
    TYPE_VOLUME,
    blnet_unit,
)
from uvrlink.parsing.record.layout import RecordLayout, ThermalChannel, layout_for
from uvrlink.parsing.record.model import Measurement, SensorRecord

logger = logging.getLogger(__name__)

FRAME_IDENTIFIER = 0x80
SPEED_ACTIVE = 0x80
SPEED_MASK = 0x1F


def decode_analog(word: int) -> Measurement:
    """
    Convert a raw 16-bit sensor word into a scaled measurement.

    The unit tag in bits 4-6 of the high byte selects the scaling. Digital and
    radiation inputs take their state from bit 15 of the raw word.
    """
    value, unit_bits = decode_signed12(word)
    unit = blnet_unit(unit_bits)
    if unit_bits in (TYPE_DIGITAL, TYPE_RADIATION):
        return Measurement(value=get_bit(word, 15), unit=unit)
    if unit_bits == TYPE_TEMP:
        return Measurement(value=value / 10.0, unit=unit)
    if unit_bits == TYPE_VOLUME:
        return Measurement(value=value * 4.0, unit=unit)
    if unit_bits == TYPE_ROOM_SENSOR:
        return Measurement(value=(value & 0x1FF) / 10.0, unit=unit)
    return Measurement(value=value, unit=unit)


def decode_speed_level(byte_value: int) -> Optional[int]:
    if not byte_value & SPEED_ACTIVE:
        return None
    return byte_value & SPEED_MASK


def decode_heat_power(raw: bytes, channel: ThermalChannel) -> float:
    """
    Current heat power in kW.

    The 4-byte field is a signed fixed-point value with 1/256 resolution in
    units of 0.1 kW. The 2-byte field is a signed word in 0.1 kW.
    """
    offset = channel.power_offset
    if channel.power_width == 4:
        value = to_signed(combine32(raw[offset], raw[offset + 1], raw[offset + 2], raw[offset + 3]), 32)
        return value * 10 / 256 / 100
    return to_signed(combine16(raw[offset], raw[offset + 1]), 16) / 10.0


def decode_heat_energy(raw: bytes, channel: ThermalChannel) -> float:
    kwh = combine16(raw[channel.kwh_offset], raw[channel.kwh_offset + 1])
    mwh = combine16(raw[channel.mwh_offset], raw[channel.mwh_offset + 1])
    return kwh / 10.0 + mwh * 1000.0


def _decode_outputs(raw: bytes, layout: RecordLayout) -> dict[str, bool]:
    offset = layout.output_offset
    bits = raw[offset]
    if layout.output_count > 8:
        bits = combine16(raw[offset], raw[offset + 1])
    return {name: get_bit(bits, i) for i, name in enumerate(layout.output_names())}


def _decode_analog_inputs(raw: bytes, layout: RecordLayout) -> dict[str, Measurement]:
    inputs = {}
    for i, name in enumerate(layout.analog_names()):
        offset = layout.analog_offset + i * 2
        inputs[name] = decode_analog(combine16(raw[offset], raw[offset + 1]))
    return inputs


def _decode_thermal(raw: bytes, layout: RecordLayout) -> tuple[dict[str, Measurement], dict[str, bool]]:
    status = raw[layout.thermal_status_offset]
    counters: dict[str, Measurement] = {}
    active: dict[str, bool] = {}
    for channel in layout.thermal_channels:
        n = channel.number
        is_active = bool(status & channel.active_bit)
        active[f"wmz{n}"] = is_active
        if is_active:
            power = decode_heat_power(raw, channel)
            energy = decode_heat_energy(raw, channel)
        else:
            power = 0.0
            energy = 0.0
        counters[f"current_heat_power{n}"] = Measurement(value=power, unit="kW")
        counters[f"total_heat_energy{n}"] = Measurement(value=energy, unit="kWh")
        if channel.flow_offset is not None:
            flow = combine16(raw[channel.flow_offset], raw[channel.flow_offset + 1]) if is_active else 0
            counters[f"volume_flow{n}"] = Measurement(value=float(flow), unit="l/h")
    return counters, active


def decode_record(raw: bytes, device_type: Optional[str] = "UVR1611", frame_index: int = 1) -> SensorRecord:
    """
    Decode one current-data frame into a ``SensorRecord``.

    Args:
        raw: The frame as received, starting with the identifier byte.
        device_type: Controller model selecting the layout; unknown models
            fall back to UVR1611.
        frame_index: The 1-based frame the data belongs to.

    Raises:
        UnexpectedFrameFormatError: The identifier byte is not ``0x80``.
        TruncatedFrameError: The frame is shorter than the layout.
    """
    layout = layout_for(device_type)
    if not raw:
        raise UnexpectedFrameFormatError(None, FRAME_IDENTIFIER)
    if raw[0] != FRAME_IDENTIFIER:
        logger.debug("unexpected_frame", extra={"details": {"frame_index": frame_index, "dump": hex_dump(raw)}})
        raise UnexpectedFrameFormatError(raw[0], FRAME_IDENTIFIER)
    if len(raw) < layout.length:
        raise TruncatedFrameError(len(raw), layout.length)

    data = bytes(raw[: layout.length])
    counters, active = _decode_thermal(data, layout)
    record = SensorRecord(
        frame_index=frame_index,
        device_type=layout.device_type,
        outputs=_decode_outputs(data, layout),
        speed_levels={name: decode_speed_level(data[offset]) for name, offset in layout.speed_levels},
        analog_inputs=_decode_analog_inputs(data, layout),
        thermal_counters=counters,
        thermal_counter_active=active,
        source="blnet",
    )
    logger.debug(
        "record_decoded",
        extra={"details": {"frame_index": frame_index, "device_type": layout.device_type}},
    )
    return record
