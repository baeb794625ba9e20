from __future__ import annotations

from .constants import ENCODING, MAX_MESSAGE_LEN, SEPARATOR
from .errors import TooLongError


class MessageFramer:
    """
    Builds and parses the username-prefixed wire format: ``<username>> <body>``.

    There is no length prefix and no terminator; one logical message is one
    send on the writer side and one receive on the reader side.
    """

    def __init__(self, max_message_len: int = MAX_MESSAGE_LEN, encoding: str = ENCODING) -> None:
        self.max_message_len = max_message_len
        self.encoding = encoding
        self.separator = SEPARATOR.encode(encoding)

    def overhead(self, username: str) -> int:
        return len(username.encode(self.encoding)) + len(self.separator)

    def body_limit(self, username: str) -> int:
        """Longest body (in bytes) that still fits in one frame for `username`."""
        return max(0, self.max_message_len - self.overhead(username))

    def frame(self, username: str, body: str) -> bytes:
        """Encode one chat line, rejecting it if the frame would exceed the maximum."""
        name = username.encode(self.encoding)
        data = body.encode(self.encoding)
        length = len(name) + len(self.separator) + len(data)
        if length > self.max_message_len:
            raise TooLongError(
                f"Message is {length} bytes, limit is {self.max_message_len}",
                length=length,
                limit=self.max_message_len,
            )
        return name + self.separator + data

    def unframe(self, data: bytes, known_username_len: int) -> str:
        """
        Strip the sender prefix by position.

        A buffer shorter than the prefix yields an empty body.
        """
        body = data[known_username_len + len(self.separator) :]
        return body.decode(self.encoding, errors="replace")


__all__ = ["MessageFramer"]
