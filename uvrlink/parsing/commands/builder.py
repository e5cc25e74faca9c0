"""
Command builder for the BL-NET binary protocol.

Every request is a single opcode byte, optionally followed by parameter
bytes: ``[opcode] [params...]``. The logger answers each request with one
reply and closes the connection.
"""
from __future__ import annotations

from dataclasses import dataclass

# Request opcodes.
VERSION_REQUEST = 0x81
HEADER_READ = 0xAA
FIRMWARE_REQUEST = 0x82
MODE_REQUEST = 0x21
READ_CURRENT_DATA = 0xAB

MAX_FRAME_INDEX = 8


@dataclass(frozen=True)
class Command:
    """
    A single request to the logger.

    Attributes:
        opcode: The request opcode byte.
        params: Parameter bytes sent after the opcode.
    """
    opcode: int
    params: bytes = b""

    def to_bytes(self) -> bytes:
        return bytes([self.opcode]) + bytes(self.params)

    def hex(self) -> str:
        return self.to_bytes().hex()


def build_version_request() -> Command:
    return Command(VERSION_REQUEST)


def build_header_read() -> Command:
    return Command(HEADER_READ)


def build_firmware_request() -> Command:
    return Command(FIRMWARE_REQUEST)


def build_mode_request() -> Command:
    return Command(MODE_REQUEST)


def build_current_data_read(frame_index: int = 1) -> Command:
    """
    Build a current-data read for one frame.

    Args:
        frame_index: The 1-based frame (CAN data record) to read.

    Returns:
        The ``0xAB [frame_index]`` command.
    """
    if frame_index < 1 or frame_index > MAX_FRAME_INDEX:
        raise ValueError(f"frame_index must be between 1 and {MAX_FRAME_INDEX}")
    return Command(READ_CURRENT_DATA, bytes([frame_index]))


@dataclass(frozen=True)
class CmiRequest:
    """
    A CMI JSON API query for one CAN node.

    Attributes:
        node: The CAN node id (``jsonnode``).
        params: Section codes joined into ``jsonparam``.
    """
    node: int
    params: tuple[str, ...] = ("I", "O", "D")

    def query(self) -> str:
        return f"jsonnode={self.node}&jsonparam={','.join(self.params)}"


def build_cmi_request(node: int, params: tuple[str, ...] | list[str] = ("I", "O", "D")) -> CmiRequest:
    if node < 0:
        raise ValueError("node must be non-negative")
    if not params:
        raise ValueError("at least one jsonparam section code is required")
    return CmiRequest(node=node, params=tuple(params))
