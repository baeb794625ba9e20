from __future__ import annotations

from typing import Iterable, Optional, Union


class ScriptedActor:
    """Feeds canned lines to a session and records everything it shows."""

    def __init__(self, lines: Iterable[str] = ()) -> None:
        self.lines = list(lines)
        self.prompts: list[str] = []
        self.shown: list[str] = []

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError("no more scripted input")
        return self.lines.pop(0)

    def show(self, line: str) -> None:
        self.shown.append(line)


class ThrottledSocket:
    """
    Socket stand-in that accepts at most `per_call` bytes per send and fails
    once `fail_after` bytes have gone out.
    """

    def __init__(
        self,
        per_call: int = 1024,
        fail_after: Optional[int] = None,
        incoming: Iterable[Union[bytes, Exception]] = (),
    ) -> None:
        self.per_call = per_call
        self.fail_after = fail_after
        self.incoming = list(incoming)
        self.sent = bytearray()
        self.send_calls = 0
        self.recv_sizes: list[int] = []
        self.close_calls = 0

    def send(self, data) -> int:
        self.send_calls += 1
        if self.fail_after is not None and len(self.sent) >= self.fail_after:
            raise BrokenPipeError("peer went away")
        chunk = bytes(data[: self.per_call])
        self.sent += chunk
        return len(chunk)

    def recv(self, size: int) -> bytes:
        self.recv_sizes.append(size)
        if not self.incoming:
            return b""
        item = self.incoming.pop(0)
        if isinstance(item, Exception):
            raise item
        return item[:size]

    def close(self) -> None:
        self.close_calls += 1
