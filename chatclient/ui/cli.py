from __future__ import annotations

import logging
import sys
from typing import Callable, Optional, TextIO

from chatcommon.protocol import validator
from chatcommon.protocol.constants import MAX_USERNAME_LEN
from chatcommon.protocol.errors import UsernameError

logger = logging.getLogger(__name__)


class ConsoleActor:
    """Blocking stdin/stdout front end for a chat session."""

    def __init__(self, input_fn: Callable[[str], str] = input, out: Optional[TextIO] = None) -> None:
        self._input = input_fn
        self._out = out

    def read_line(self, prompt: str) -> str:
        return self._input(prompt)

    def show(self, line: str) -> None:
        print(line, file=self._out or sys.stdout, flush=True)

    def prompt_username(self, max_len: int = MAX_USERNAME_LEN) -> str:
        """Ask until a valid username is entered; names are rejected, never truncated."""
        while True:
            self.show(f"Please enter a one word username, up to {max_len} characters")
            name = self.read_line("").rstrip("\r\n")
            try:
                return validator.validate_username(name, max_len)
            except UsernameError as exc:
                logger.debug("Rejected username %r: %s", name, exc.message)
                self.show(f"Invalid username format: {exc.message}")
