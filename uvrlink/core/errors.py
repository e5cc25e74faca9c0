"""
Exception hierarchy shared by the decoders, transports and the poller.

Decode failures are ``ValueError`` subclasses and transport failures are
``ConnectionError`` subclasses, so callers that only know the builtin
families keep working.
"""
from __future__ import annotations

from typing import Optional


class UvrLinkError(Exception):
    """Root of every error raised by uvrlink."""


class DecodeError(UvrLinkError, ValueError):
    """A frame or document could not be turned into a record."""


class UnknownModeError(DecodeError):
    def __init__(self, mode: int):
        super().__init__(f"Unknown logger mode: 0x{mode:02X}")
        self.mode = mode


class UnexpectedFrameFormatError(DecodeError):
    def __init__(self, identifier: Optional[int], expected: int):
        shown = "none" if identifier is None else f"0x{identifier:02X}"
        super().__init__(f"Unexpected frame identifier {shown}, expected 0x{expected:02X}")
        self.identifier = identifier
        self.expected = expected


class TruncatedFrameError(DecodeError):
    def __init__(self, length: int, required: int, what: str = "frame"):
        super().__init__(f"{what} too short: got {length} bytes, need {required}")
        self.length = length
        self.required = required


class UnknownUnitError(DecodeError):
    def __init__(self, code):
        super().__init__(f"Unknown unit code: {code!r}")
        self.code = code


class TransportError(UvrLinkError, ConnectionError):
    """The connection to the logger failed, was refused or closed early."""


class ProtocolStatusError(UvrLinkError):
    """The CMI answered with a non-zero application status code."""

    def __init__(self, status_code: int, meaning: str):
        super().__init__(f"CMI status code {status_code}: {meaning}")
        self.status_code = status_code
        self.meaning = meaning


class MaxRetriesExceededError(UvrLinkError):
    def __init__(self, attempts: int, last_error: Optional[BaseException] = None):
        message = f"Max retries reached after {attempts} attempts. Unable to communicate with device."
        if last_error is not None:
            message += f" Last error: {last_error}"
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


__all__ = [
    "DecodeError",
    "MaxRetriesExceededError",
    "ProtocolStatusError",
    "TransportError",
    "TruncatedFrameError",
    "UnexpectedFrameFormatError",
    "UnknownModeError",
    "UnknownUnitError",
    "UvrLinkError",
]
