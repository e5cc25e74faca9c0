"""
Static lookup tables for units and device models.

The BL-NET binary protocol and the CMI JSON API use two unrelated unit
encodings: a 3-bit tag packed into each sensor word, and a numeric unit code
returned as a string by the CMI. They are kept as separate tables.
"""
from __future__ import annotations

from uvrlink.core.errors import UnknownUnitError

UNKNOWN = "unknown"

# Unit tags as they sit in the high byte of a BL-NET sensor word (bits 4-6).
TYPE_DIGITAL = 0x10
TYPE_TEMP = 0x20
TYPE_VOLUME = 0x30
TYPE_RADIATION = 0x60
TYPE_ROOM_SENSOR = 0x70

# Indexed by ``unit_bits >> 4``.
BLNET_UNITS: tuple[str, ...] = (
    "",          # 0x00 unused
    "digital",   # 0x10
    "°C",        # 0x20
    "l/h",       # 0x30
    UNKNOWN,     # 0x40
    UNKNOWN,     # 0x50
    "W/m²",      # 0x60
    "°C (room sensor)",  # 0x70
)

# Indexed by the CMI unit code. Gaps are codes the CMI never reports.
CMI_UNITS: tuple[str, ...] = (
    "", "°C", "W/m²", "l/h", "s", "min", "l/Imp", "K", "%", "",          # 0-9
    "kW", "kWh", "MWh", "V", "mA", "h", "d", "Imp", "kΩ", "l",          # 10-19
    "km/h", "Hz", "l/min", "bar", "", "km", "m", "mm", "m³", "",         # 20-29
    "", "", "", "", "", "l/d", "m/s", "m³/min", "m³/h", "m³/d",          # 30-39
    "mm/min", "mm/h", "mm/d", "ON/OFF", "NO/YES", "", "°C", "", "", "",  # 40-49
    "€", "$", "g/m³", "", "°", "", "°", "s", "", "%",                    # 50-59
    "h", "", "", "A", "", "mbar", "Pa", "ppm", "", "W",                  # 60-69
    "t", "kg", "g", "cm", "K", "lx", "Bq/m³",                            # 70-76
)

# CMI unit codes whose values are on/off states.
CMI_DIGITAL_UNITS: frozenset[int] = frozenset({43, 44})

# Device-type bytes found in BL-NET header frames.
BLNET_DEVICE_TYPES: dict[int, str] = {
    0x5A: "UVR61-3",
    0x76: "UVR1611",
}

# ``Header.Device`` codes reported by the CMI.
CMI_DEVICES: dict[str, str] = {
    "7F": "CoE",
    "80": "UVR1611",
    "81": "CAN-MT",
    "82": "CAN-I/O44",
    "83": "CAN-I/O35",
    "84": "CAN-BC",
    "85": "CAN-EZ",
    "86": "CAN-TOUCH",
    "87": "UVR16x2",
    "88": "RSM610",
    "89": "CAN-I/O45",
    "8A": "CMI",
    "8B": "CAN-EZ2",
    "8C": "CAN-MTx2",
    "8D": "CAN-BC2",
    "8E": "UVR65",
    "8F": "CAN-EZ3",
    "91": "UVR610",
    "92": "UVR67",
    "A3": "BL-NET",
}


def blnet_unit(unit_bits: int) -> str:
    index = unit_bits >> 4
    if 0 <= index < len(BLNET_UNITS):
        return BLNET_UNITS[index]
    return UNKNOWN


def cmi_unit(code: int | str) -> str:
    """
    Resolve a CMI unit code to its display string.

    The CMI only reports codes from its own table, so anything unparseable
    or out of range is treated as a decode failure rather than substituted.
    """
    try:
        index = int(code)
    except (TypeError, ValueError) as exc:
        raise UnknownUnitError(code) from exc
    if not 0 <= index < len(CMI_UNITS):
        raise UnknownUnitError(code)
    return CMI_UNITS[index]


def blnet_device_name(code: int) -> str:
    return BLNET_DEVICE_TYPES.get(code, "Unknown")


def cmi_device_name(code: str | None) -> str:
    if not code:
        return "Unknown"
    return CMI_DEVICES.get(str(code).upper(), "Unknown")
