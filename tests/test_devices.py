"""Tests for the BL-NET and CMI device façades with scripted transports."""
import asyncio

import pytest

from uvrlink.core.errors import MaxRetriesExceededError, ProtocolStatusError, UnknownModeError
from uvrlink.domain import BlNetDevice, CmiDevice, create_device
from uvrlink.parsing.commands import CmiRequest
from uvrlink.parsing.header import LoggerMode
from uvrlink.poller_app.config import PollerSettings
from uvrlink.transports.base import DeviceTransport


async def no_sleep(_delay):
    return None


class ScriptedTransport(DeviceTransport):
    """Answers by opcode (BL-NET) or node (CMI); the last scripted reply repeats."""

    def __init__(self, replies):
        self.replies = {key: list(value) for key, value in replies.items()}
        self.sent = []
        self.closed = False

    async def send_command(self, command):
        self.sent.append(command)
        key = command.node if isinstance(command, CmiRequest) else command.opcode
        queue = self.replies[key]
        reply = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self):
        self.closed = True


def _uvr1611_frame(s01: int = 0x203E) -> bytes:
    frame = bytearray(56)
    frame[0] = 0x80
    frame[1] = s01 & 0xFF
    frame[2] = s01 >> 8
    return bytes(frame)


def _uvr61_3_frame() -> bytes:
    frame = bytearray(25)
    frame[0] = 0x80
    frame[1:3] = bytes([0x3E, 0x20])
    return bytes(frame)


def _blnet_replies(header: bytes) -> dict:
    return {
        0x81: [b"\x12\x34\x56"],
        0xAA: [header],
        0x82: [bytes([219])],
        0x21: [bytes([0xA8])],
        0xAB: [_uvr1611_frame()],
    }


def test_blnet_initialize_single_logger():
    header = bytes([0xAA, 0xA8, 0, 0, 0, 0x76, 0, 0, 0, 0, 0, 0, 0])
    transport = ScriptedTransport(_blnet_replies(header))
    device = BlNetDevice(transport, sleep=no_sleep)

    info = asyncio.run(device.initialize())
    assert info.mode is LoggerMode.SINGLE_LOGGER
    assert info.frame_count == 1
    assert info.module_id == "0x123456"
    assert info.firmware_version == "2.19"
    assert info.transmission_mode == "A8"
    assert [command.opcode for command in transport.sent] == [0x81, 0xAA, 0x82, 0x21]


def test_blnet_initialize_unknown_mode_is_not_retried():
    header = bytes([0xAA, 0x42, 0, 0, 0, 0x76, 0, 0, 0, 0, 0, 0, 0])
    transport = ScriptedTransport(_blnet_replies(header))
    with pytest.raises(UnknownModeError):
        asyncio.run(BlNetDevice(transport, sleep=no_sleep).initialize())
    assert [command.opcode for command in transport.sent] == [0x81, 0xAA]


def test_blnet_read_frame_retries_busy_reply():
    header = bytes([0xAA, 0xA8, 0, 0, 0, 0x76, 0, 0, 0, 0, 0, 0, 0])
    replies = _blnet_replies(header)
    replies[0xAB] = [b"\xff", _uvr1611_frame()]
    transport = ScriptedTransport(replies)
    device = BlNetDevice(transport, sleep=no_sleep)

    async def run():
        info = await device.initialize()
        return await device.read_frame(info, 1)

    record = asyncio.run(run())
    assert record.analog_inputs["S01"].value == pytest.approx(6.2)
    reads = [command for command in transport.sent if command.opcode == 0xAB]
    assert len(reads) == 2
    assert reads[0].params == b"\x01"


def test_blnet_can_frames_use_their_own_layout():
    header = bytes([0xAA, 0xDC, 0, 0, 0, 2, 0x76, 0x5A] + [0] * 7)
    replies = _blnet_replies(header)
    replies[0xAB] = [_uvr61_3_frame()]
    transport = ScriptedTransport(replies)
    device = BlNetDevice(transport, sleep=no_sleep)

    async def run():
        info = await device.initialize()
        return info, await device.read_frame(info, 2)

    info, record = asyncio.run(run())
    assert info.frame_count == 2
    assert record.device_type == "UVR61-3"
    assert record.frame_index == 2
    assert transport.sent[-1].params == b"\x02"


def test_blnet_read_frame_gives_up_on_wrong_identifier():
    header = bytes([0xAA, 0xA8, 0, 0, 0, 0x76, 0, 0, 0, 0, 0, 0, 0])
    replies = _blnet_replies(header)
    replies[0xAB] = [bytes([0xAB]) + bytes(55)]
    device = BlNetDevice(ScriptedTransport(replies), max_attempts=3, sleep=no_sleep)

    async def run():
        info = await device.initialize()
        return await device.read_frame(info, 1)

    with pytest.raises(MaxRetriesExceededError):
        asyncio.run(run())


def _cmi_reply(device: str = "87", value: float = 21.4) -> dict:
    return {
        "Header": {"Version": 5, "Device": device, "Timestamp": 1630764000},
        "Data": {"Inputs": [{"Number": 1, "AD": "A", "Value": {"Value": value, "Unit": "1"}}]},
        "Status": "OK",
        "Status code": 0,
    }


def test_cmi_initialize_and_read_nodes():
    transport = ScriptedTransport({1: [_cmi_reply()], 5: [_cmi_reply(device="88", value=30.0)]})
    device = CmiDevice(transport, can_nodes=[1, 5], params=["I"], sleep=no_sleep)

    async def run():
        info = await device.initialize()
        return info, await device.read_frame(info, 2)

    info, record = asyncio.run(run())
    assert info.frame_count == 2
    assert info.header.device_name == "UVR16x2"
    assert record.frame_index == 2
    assert record.device_type == "RSM610"
    assert record.analog_inputs["A01"].value == pytest.approx(30.0)
    assert [command.node for command in transport.sent] == [1, 5]
    assert transport.sent[0].params == ("I",)


def test_cmi_status_errors_are_retried():
    transport = ScriptedTransport({1: [ProtocolStatusError(7, "CAN bus busy"), _cmi_reply()]})
    device = CmiDevice(transport, sleep=no_sleep)
    info = asyncio.run(device.initialize())
    assert info.header.device_code == "87"
    assert len(transport.sent) == 2


def test_cmi_frame_index_out_of_range():
    transport = ScriptedTransport({1: [_cmi_reply()]})
    device = CmiDevice(transport, sleep=no_sleep)
    info = asyncio.run(device.initialize())
    with pytest.raises(ValueError):
        asyncio.run(device.read_frame(info, 2))


def test_cmi_requires_nodes():
    with pytest.raises(ValueError):
        CmiDevice(ScriptedTransport({}), can_nodes=[])


def test_close_closes_transport():
    transport = ScriptedTransport({})
    asyncio.run(BlNetDevice(transport).close())
    assert transport.closed


def test_create_device_from_settings():
    blnet = create_device(PollerSettings(LOGGER_TYPE="blnet", DEVICE_ADDRESS="10.0.0.5", DEVICE_PORT=40001))
    assert isinstance(blnet, BlNetDevice)
    assert blnet.transport.host == "10.0.0.5"
    assert blnet.transport.port == 40001

    cmi = create_device(
        PollerSettings(LOGGER_TYPE="cmi", DEVICE_PASSWORD="pw", CAN_NODES="1,3", CMI_PARAMS="I,O,Na")
    )
    assert isinstance(cmi, CmiDevice)
    assert cmi.can_nodes == (1, 3)
    assert cmi.params == ("I", "O", "Na")
    assert cmi.transport.password == "pw"
    assert cmi.command_delay == 61.0


def test_cmi_malformed_entry_is_retried_then_surfaced():
    reply = _cmi_reply()
    reply["Data"] = {"Inputs": [1]}
    transport = ScriptedTransport({1: [reply]})
    device = CmiDevice(transport, max_attempts=2, sleep=no_sleep)

    async def run():
        info = await device.initialize()
        return await device.read_frame(info, 1)

    with pytest.raises(MaxRetriesExceededError) as exc_info:
        asyncio.run(run())
    assert exc_info.value.attempts == 2
    assert len(transport.sent) == 3
