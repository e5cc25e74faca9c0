"""
Bounded request/response retries.

Loggers need a pause between commands and sometimes answer with a single
busy byte instead of data, so every request goes through ``fetch_with_retry``.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

from uvrlink.core.errors import DecodeError, MaxRetriesExceededError, ProtocolStatusError, TransportError
from uvrlink.transports.base import DeviceTransport

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 5
RETRYABLE_ERRORS = (TransportError, ProtocolStatusError, DecodeError)


def is_valid_response(response: Any, min_length: int) -> bool:
    if response is None:
        return False
    try:
        return len(response) >= min_length
    except TypeError:
        return False


async def fetch_with_retry(
    transport: DeviceTransport,
    command: Any,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    delay: float = 2.0,
    min_length: int = 2,
    decode: Optional[Callable[[Any], T]] = None,
    sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
) -> Any:
    """
    Send ``command`` until a valid reply arrives or the attempts run out.

    Args:
        transport: Transport used to send the command.
        command: The request handed to ``transport.send_command``.
        max_attempts: Upper bound on sends.
        delay: Pause before every send, in seconds.
        min_length: Replies shorter than this are treated as invalid.
        decode: Optional decoder applied to a valid reply; a ``DecodeError``
            from it counts as a failed attempt.
        sleep: Awaitable sleep, replaceable in tests.

    Returns:
        The first valid reply, decoded when ``decode`` is given.

    Raises:
        MaxRetriesExceededError: No attempt produced a valid reply.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    last_error: Optional[BaseException] = None
    for attempt in range(1, max_attempts + 1):
        await sleep(delay)
        try:
            response = await transport.send_command(command)
        except RETRYABLE_ERRORS as exc:
            last_error = exc
            logger.warning("fetch_attempt_failed", extra={"details": {"attempt": attempt, "error": str(exc)}})
            continue

        if not is_valid_response(response, min_length):
            last_error = DecodeError(f"Invalid short response: {response!r}")
            logger.debug("short_response", extra={"details": {"attempt": attempt, "response": repr(response)}})
            continue

        if decode is None:
            logger.debug("fetch_succeeded", extra={"details": {"attempt": attempt}})
            return response
        try:
            decoded = decode(response)
        except DecodeError as exc:
            last_error = exc
            logger.warning("decode_attempt_failed", extra={"details": {"attempt": attempt, "error": str(exc)}})
            continue
        logger.debug("fetch_succeeded", extra={"details": {"attempt": attempt}})
        return decoded

    logger.error("max_retries_exceeded", extra={"details": {"attempts": max_attempts, "error": str(last_error)}})
    raise MaxRetriesExceededError(max_attempts, last_error) from last_error
