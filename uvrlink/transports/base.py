from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class DeviceTransport(ABC):
    @abstractmethod
    async def send_command(self, command: Any) -> Any:
        """Send one request and return the raw reply."""

    async def close(self) -> None:
        return None
