from uvrlink.parsing.record.decode import (
    decode_analog,
    decode_heat_energy,
    decode_heat_power,
    decode_record,
    decode_speed_level,
    FRAME_IDENTIFIER,
)
from uvrlink.parsing.record.layout import LAYOUTS, RecordLayout, ThermalChannel, UVR1611_LAYOUT, UVR61_3_LAYOUT, layout_for
from uvrlink.parsing.record.model import Measurement, SensorRecord

__all__ = [
    "decode_analog",
    "decode_heat_energy",
    "decode_heat_power",
    "decode_record",
    "decode_speed_level",
    "FRAME_IDENTIFIER",
    "LAYOUTS",
    "layout_for",
    "Measurement",
    "RecordLayout",
    "SensorRecord",
    "ThermalChannel",
    "UVR1611_LAYOUT",
    "UVR61_3_LAYOUT",
]
