"""
Static offset tables for the current-data frames of the supported controllers.

Offsets count from the identifier byte (offset 0). Unknown device types are
decoded with the UVR1611 layout, which is the richer of the two.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ThermalChannel:
    """
    Location of one heat meter (WMZ) inside a frame.

    Attributes:
        number: Channel number used in field names (``wmz1``, ``current_heat_power1``).
        active_bit: Bit in the activity byte that marks the channel as active.
        power_offset: First byte of the current power field.
        power_width: 4 for the fixed-point 1/256 format, 2 for a plain 0.1 kW word.
        kwh_offset: First byte of the kWh/10 word.
        mwh_offset: First byte of the MWh word.
        flow_offset: First byte of the volume-flow word, if the layout carries one.
    """
    number: int
    active_bit: int
    power_offset: int
    power_width: int
    kwh_offset: int
    mwh_offset: int
    flow_offset: Optional[int] = None


@dataclass(frozen=True)
class RecordLayout:
    device_type: str
    length: int
    analog_offset: int
    analog_count: int
    output_offset: int
    output_count: int
    speed_levels: tuple[tuple[str, int], ...]
    thermal_status_offset: int
    thermal_channels: tuple[ThermalChannel, ...]

    def analog_names(self) -> list[str]:
        return [f"S{i + 1:02d}" for i in range(self.analog_count)]

    def output_names(self) -> list[str]:
        return [f"A{i + 1:02d}" for i in range(self.output_count)]


UVR1611_LAYOUT = RecordLayout(
    device_type="UVR1611",
    length=56,
    analog_offset=1,
    analog_count=16,
    output_offset=33,
    output_count=13,
    speed_levels=(("DzA1", 35), ("DzA2", 36), ("DzA6", 37), ("DzA7", 38)),
    thermal_status_offset=39,
    thermal_channels=(
        ThermalChannel(number=1, active_bit=0x01, power_offset=40, power_width=4, kwh_offset=44, mwh_offset=46),
        ThermalChannel(number=2, active_bit=0x02, power_offset=48, power_width=4, kwh_offset=52, mwh_offset=54),
    ),
)

UVR61_3_LAYOUT = RecordLayout(
    device_type="UVR61-3",
    length=25,
    analog_offset=1,
    analog_count=6,
    output_offset=13,
    output_count=3,
    speed_levels=(("DzA1", 14),),
    # Byte 15 holds the analog output, which is not decoded.
    thermal_status_offset=16,
    thermal_channels=(
        ThermalChannel(
            number=1, active_bit=0x01, power_offset=19, power_width=2, kwh_offset=21, mwh_offset=23, flow_offset=17
        ),
    ),
)

LAYOUTS: dict[str, RecordLayout] = {
    UVR1611_LAYOUT.device_type: UVR1611_LAYOUT,
    UVR61_3_LAYOUT.device_type: UVR61_3_LAYOUT,
}


def layout_for(device_type: Optional[str]) -> RecordLayout:
    return LAYOUTS.get(device_type or "", UVR1611_LAYOUT)
