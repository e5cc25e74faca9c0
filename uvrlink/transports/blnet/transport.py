from __future__ import annotations

import asyncio
import logging

from uvrlink.core.binary import hex_dump
from uvrlink.core.errors import TransportError
from uvrlink.parsing.commands import Command
from uvrlink.transports.base import DeviceTransport

logger = logging.getLogger(__name__)

DEFAULT_PORT = 40000


class BlNetTransport(DeviceTransport):
    """
    One-shot TCP transport: every command opens a connection, writes the
    request, waits for the first chunk of data and closes again.
    """

    def __init__(self, host: str, port: int = DEFAULT_PORT, timeout: float = 10.0, read_size: int = 1024) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self.read_size = read_size

    async def send_command(self, command: Command) -> bytes:
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port), timeout=self.timeout
            )
        except (OSError, asyncio.TimeoutError) as exc:
            raise TransportError(f"Could not connect to {self.host}:{self.port}: {exc!r}") from exc

        try:
            writer.write(command.to_bytes())
            await writer.drain()
            logger.debug("command_sent", extra={"details": {"command": command.hex()}})
            data = await asyncio.wait_for(reader.read(self.read_size), timeout=self.timeout)
        except (OSError, asyncio.TimeoutError) as exc:
            raise TransportError(f"Communication with {self.host}:{self.port} failed: {exc!r}") from exc
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except OSError as exc:
                logger.debug("close_failed", extra={"details": {"error": str(exc)}})

        if not data:
            raise TransportError("Connection closed unexpectedly")
        logger.debug("reply_received", extra={"details": {"length": len(data), "dump": hex_dump(data)}})
        return data
