"""
Shared protocol package that centralizes constants, errors, framing, the command
grammar and validation helpers for both the chat client and the peer host.
"""

from .commands import Command, is_quit, parse_command
from .constants import (
    COMMAND_PREFIX,
    ENCODING,
    MAX_MESSAGE_LEN,
    MAX_USERNAME_LEN,
    RECOMMENDED_MIN_PORT,
    SEPARATOR,
)
from .errors import (
    ChatError,
    ConfigError,
    ConnectError,
    ErrorCode,
    HandshakeError,
    PartialSendError,
    RecvError,
    ResolutionError,
    SendError,
    TooLongError,
    UsernameError,
)
from .framing import MessageFramer
from .messages import ChatLine, Endpoint
from .validator import load_schema, validate_config, validate_username

__all__ = [
    "Command",
    "is_quit",
    "parse_command",
    "COMMAND_PREFIX",
    "ENCODING",
    "MAX_MESSAGE_LEN",
    "MAX_USERNAME_LEN",
    "RECOMMENDED_MIN_PORT",
    "SEPARATOR",
    "ChatError",
    "ConfigError",
    "ConnectError",
    "ErrorCode",
    "HandshakeError",
    "PartialSendError",
    "RecvError",
    "ResolutionError",
    "SendError",
    "TooLongError",
    "UsernameError",
    "MessageFramer",
    "ChatLine",
    "Endpoint",
    "load_schema",
    "validate_config",
    "validate_username",
]
