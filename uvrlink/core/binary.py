from __future__ import annotations


def combine16(lo: int, hi: int) -> int:
    return ((hi & 0xFF) << 8) | (lo & 0xFF)


def combine32(b0: int, b1: int, b2: int, b3: int) -> int:
    return combine16(b0, b1) | (combine16(b2, b3) << 16)


def to_signed(value: int, bits: int) -> int:
    sign_bit = 1 << (bits - 1)
    if value & sign_bit:
        return value - (1 << bits)
    return value


def decode_signed12(word: int) -> tuple[int, int]:
    """
    Decode a sensor word into its signed magnitude and unit tag.

    The high byte carries the sign in bit 7 and a 3-bit unit tag in bits 4-6,
    so the tag has to be masked out before the 12-bit two's complement is
    undone. A plain sign-extension of bit 11 gives wrong results.

    Returns:
        A ``(value, unit_bits)`` tuple where ``unit_bits`` keeps its position
        in the high byte (``0x00``..``0x70``).
    """
    high_byte = (word >> 8) & 0xFF
    low_byte = word & 0xFF
    sign = high_byte & 0x80
    unit_bits = high_byte & 0x70
    magnitude = combine16(low_byte, high_byte & 0x0F)
    if sign:
        magnitude |= 0xF000
        magnitude = (~magnitude + 1) & 0xFFFF
        magnitude = -magnitude
    return magnitude, unit_bits


def encode_signed12(value: int, unit_bits: int) -> int:
    if not -0x1000 <= value <= 0x0FFF:
        raise ValueError("value must fit in 12 bits plus sign")
    sign = 0x80 if value < 0 else 0x00
    magnitude = value & 0x0FFF
    high_byte = sign | (unit_bits & 0x70) | (magnitude >> 8)
    return combine16(magnitude & 0xFF, high_byte)


def get_bit(word: int, bit: int) -> bool:
    if not 0 <= bit <= 15:
        raise ValueError(f"bit must be between 0 and 15, got {bit}")
    return bool(word & (1 << bit))


def hex_dump(data: bytes | None, width: int = 16) -> str:
    if not data:
        return "<empty>"
    lines = []
    for start in range(0, len(data), width):
        chunk = data[start: start + width]
        halves = [chunk[i: i + 8].hex(" ") for i in range(0, len(chunk), 8)]
        lines.append(f"{start:04X}  " + "  ".join(halves).upper())
    return "\n".join(lines)
