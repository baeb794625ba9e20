from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ErrorCode(IntEnum):
    """Error codes for every failure the chat protocol can surface."""

    RESOLUTION_FAILED = 1001
    CONNECT_FAILED = 1002
    HANDSHAKE_FAILED = 1003
    SEND_FAILED = 1004
    PARTIAL_SEND = 1005
    RECV_FAILED = 1006
    MESSAGE_TOO_LONG = 1007
    INVALID_USERNAME = 1008
    INVALID_CONFIG = 1009


class ChatError(Exception):
    """Structured chat exception carrying code + message."""

    code: ErrorCode = ErrorCode.SEND_FAILED
    fatal: bool = True

    def __init__(self, message: str = "", code: Optional[ErrorCode] = None) -> None:
        if code is not None:
            self.code = code
        self.message = message
        super().__init__(f"{self.code.name} ({int(self.code)}): {message}")

    def to_payload(self) -> dict:
        """Map error into a dict suitable for logging/reporting."""
        return {
            "error_code": int(self.code),
            "error_name": self.code.name,
            "error_message": self.message,
            "fatal": self.fatal,
        }


class ResolutionError(ChatError):
    code = ErrorCode.RESOLUTION_FAILED


class ConnectError(ChatError):
    code = ErrorCode.CONNECT_FAILED


class HandshakeError(ChatError):
    code = ErrorCode.HANDSHAKE_FAILED


class SendError(ChatError):
    """An underlying send failed; `sent` is how much made it out before that."""

    code = ErrorCode.SEND_FAILED

    def __init__(self, message: str = "", sent: int = 0, expected: int = 0) -> None:
        self.sent = sent
        self.expected = expected
        super().__init__(message)


class PartialSendError(SendError):
    code = ErrorCode.PARTIAL_SEND


class RecvError(ChatError):
    code = ErrorCode.RECV_FAILED


class TooLongError(ChatError):
    """Raised at framing time; the caller rejects the line and re-prompts."""

    code = ErrorCode.MESSAGE_TOO_LONG
    fatal = False

    def __init__(self, message: str = "", length: int = 0, limit: int = 0) -> None:
        self.length = length
        self.limit = limit
        super().__init__(message)


class UsernameError(ChatError):
    code = ErrorCode.INVALID_USERNAME
    fatal = False


class ConfigError(ChatError):
    """Raised when configuration values are invalid."""

    code = ErrorCode.INVALID_CONFIG


__all__ = [
    "ErrorCode",
    "ChatError",
    "ResolutionError",
    "ConnectError",
    "HandshakeError",
    "SendError",
    "PartialSendError",
    "RecvError",
    "TooLongError",
    "UsernameError",
    "ConfigError",
]
