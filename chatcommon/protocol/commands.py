from __future__ import annotations

from enum import StrEnum
from typing import Optional

from .constants import COMMAND_PREFIX

WHITESPACE = " \t"


class Command(StrEnum):
    """Directives a user can type in place of a chat line."""

    QUIT = "quit"


def parse_command(body: str) -> Optional[Command]:
    """
    Recognize a directive at the start of a message body.

    Leading spaces/tabs are skipped, the next character must be the command
    prefix, and the command name is matched case-insensitively. Anything after
    the name is ignored.
    """
    text = body.lstrip(WHITESPACE)
    if not text.startswith(COMMAND_PREFIX):
        return None
    rest = text[len(COMMAND_PREFIX) :]
    for command in Command:
        candidate = rest[: len(command.value)]
        if len(candidate) == len(command.value) and candidate.lower() == command.value:
            return command
    return None


def is_quit(body: str) -> bool:
    """Check if `body` is a quit directive."""
    return parse_command(body) is Command.QUIT


__all__ = ["Command", "parse_command", "is_quit"]
