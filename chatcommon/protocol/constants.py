"""Protocol-wide constants shared by client and peer host."""

ENCODING = "utf-8"
SEPARATOR = "> "
MAX_MESSAGE_LEN = 500  # framed message, bytes
MAX_USERNAME_LEN = 10
COMMAND_PREFIX = "\\"
RECOMMENDED_MIN_PORT = 50000

__all__ = [
    "ENCODING",
    "SEPARATOR",
    "MAX_MESSAGE_LEN",
    "MAX_USERNAME_LEN",
    "COMMAND_PREFIX",
    "RECOMMENDED_MIN_PORT",
]
