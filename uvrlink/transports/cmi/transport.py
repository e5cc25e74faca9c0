from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from uvrlink.core.errors import DecodeError, ProtocolStatusError, TransportError
from uvrlink.parsing.cmi import check_status
from uvrlink.parsing.commands import CmiRequest
from uvrlink.transports.base import DeviceTransport

logger = logging.getLogger(__name__)

API_PATH = "/INCLUDE/api.cgi"


class CmiTransport(DeviceTransport):
    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        timeout: float = 10.0,
        scheme: str = "http",
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.host = host
        self.username = username
        self.password = password
        self.timeout = timeout
        self.base_url = f"{scheme}://{host}"
        self._http_transport = http_transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                auth=httpx.BasicAuth(self.username, self.password),
                transport=self._http_transport,
            )
        return self._client

    def url_for(self, request: CmiRequest) -> str:
        return f"{self.base_url}{API_PATH}?{request.query()}"

    async def send_command(self, command: CmiRequest) -> dict[str, Any]:
        client = await self._client_instance()
        url = self.url_for(command)
        try:
            resp = await client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(f"CMI request to {url} failed: {exc}") from exc

        try:
            document = resp.json()
        except ValueError as exc:
            raise DecodeError(f"Failed to parse CMI reply: {resp.text[:200]}") from exc
        if not isinstance(document, dict):
            raise DecodeError("CMI reply is not a JSON object")

        try:
            check_status(document)
        except ProtocolStatusError as exc:
            logger.warning(
                "cmi_status_error",
                extra={"details": {"node": command.node, "status_code": exc.status_code, "meaning": exc.meaning}},
            )
            raise
        return document

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
