from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Optional, Protocol

from chatcommon.protocol import validator
from chatcommon.protocol.commands import is_quit
from chatcommon.protocol.constants import SEPARATOR
from chatcommon.protocol.errors import (
    HandshakeError,
    PartialSendError,
    RecvError,
    SendError,
    TooLongError,
    UsernameError,
)
from chatcommon.protocol.framing import MessageFramer
from chatcommon.protocol.messages import ChatLine

from .network import Connection, Transport

logger = logging.getLogger(__name__)


class SessionState(Enum):
    CONNECTING = "connecting"
    HANDSHAKING = "handshaking"
    CHATTING = "chatting"
    CLOSING = "closing"
    CLOSED = "closed"


class CloseReason(Enum):
    LOCAL_QUIT = "local_quit"
    PEER_QUIT = "peer_quit"
    PEER_DISCONNECT = "peer_disconnect"


class ChatActor(Protocol):
    """The person at the keyboard: supplies lines, sees lines."""

    def read_line(self, prompt: str) -> str: ...

    def show(self, line: str) -> None: ...


class ChatSession:
    """
    One conversation with one peer.

    The initiator (the client) names itself first and speaks first; the
    responder (the peer host) mirrors that. Turns strictly alternate and the
    connection is closed exactly once on every way out.
    """

    def __init__(
        self,
        transport: Transport,
        actor: ChatActor,
        username: str,
        framer: Optional[MessageFramer] = None,
        initiator: bool = True,
        config: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.transport = transport
        self.actor = actor
        self.config = config or transport.config
        self.framer = framer or MessageFramer(
            int(self.config["max_message_len"]), self.config.get("encoding", "utf-8")
        )
        self.max_username_len: int = int(self.config["max_username_len"])
        self.username = validator.validate_username(username, self.max_username_len)
        self.initiator = initiator

        self.state = SessionState.CONNECTING
        self.connection: Optional[Connection] = None
        self.peer_username: str = ""
        self.peer_username_len: int = 0
        self.close_reason: Optional[CloseReason] = None

    @property
    def prompt(self) -> str:
        return f"{self.username}{SEPARATOR}"

    def run(self, host: str, service: str | int) -> CloseReason:
        """Connect to `host`/`service` and hold the conversation until someone leaves."""
        conn = self.transport.connect(host, service)
        return self.attach(conn)

    def attach(self, conn: Connection) -> CloseReason:
        """Hold the conversation over an already established connection."""
        self.connection = conn
        self._transition(SessionState.HANDSHAKING)
        try:
            self.handshake()
            self._transition(SessionState.CHATTING)
            self.actor.show(f"Now chatting with {self.peer_username}, say hello!")
            reason = self.chat()
        finally:
            self.close()
        self.close_reason = reason
        self._announce(reason)
        return reason

    def handshake(self) -> None:
        if self.initiator:
            self._send_username()
            self._recv_username()
        else:
            self._recv_username()
            self._send_username()
        logger.debug("Handshake complete: %s <-> %s", self.username, self.peer_username)

    def chat(self) -> CloseReason:
        turns = (self._send_turn, self._receive_turn) if self.initiator else (self._receive_turn, self._send_turn)
        while True:
            for turn in turns:
                reason = turn()
                if reason is not None:
                    logger.info("Chat with %s ended: %s", self.peer_username, reason.value)
                    return reason

    def close(self) -> None:
        if self.state is SessionState.CLOSED:
            return
        self._transition(SessionState.CLOSING)
        if self.connection is not None:
            self.transport.close(self.connection)
        self._transition(SessionState.CLOSED)

    def _send_username(self) -> None:
        assert self.connection is not None
        try:
            self.transport.send_all(self.connection, self.username.encode(self.framer.encoding))
        except SendError as exc:
            raise HandshakeError(f"could not send username: {exc.message}") from exc

    def _recv_username(self) -> None:
        assert self.connection is not None
        try:
            raw = self.transport.recv_chunk(self.connection, self.max_username_len)
        except RecvError as exc:
            raise HandshakeError(f"could not receive peer username: {exc.message}") from exc
        if not raw:
            raise HandshakeError("peer closed the connection during handshake")
        self.peer_username = raw.decode(self.framer.encoding, errors="replace")
        # Positional unframing needs the byte length, not the character count.
        self.peer_username_len = len(raw)
        try:
            validator.validate_username(self.peer_username, self.max_username_len)
        except UsernameError as exc:
            logger.warning("Peer username %r is not valid (%s); continuing", self.peer_username, exc.message)

    def _send_turn(self) -> Optional[CloseReason]:
        assert self.connection is not None
        while True:
            body = self.actor.read_line(self.prompt).rstrip("\r\n")
            try:
                data = self.framer.frame(self.username, body)
                break
            except TooLongError as exc:
                self.actor.show(
                    f"Message too long: {exc.length} bytes, limit is {exc.limit} "
                    f"({self.framer.body_limit(self.username)} for the message text). Please try again."
                )
        try:
            self.transport.send_all(self.connection, data)
        except SendError as exc:
            raise PartialSendError(
                f"only {exc.sent} of {len(data)} characters were sent to {self.peer_username}",
                sent=exc.sent,
                expected=len(data),
            ) from exc
        if is_quit(body):
            return CloseReason.LOCAL_QUIT
        return None

    def _receive_turn(self) -> Optional[CloseReason]:
        assert self.connection is not None
        data = self.transport.recv_chunk(self.connection, self.framer.max_message_len)
        if not data:
            return CloseReason.PEER_DISCONNECT
        body = self.framer.unframe(data, self.peer_username_len)
        if is_quit(body):
            return CloseReason.PEER_QUIT
        self.actor.show(ChatLine(sender=self.peer_username, body=body).render())
        return None

    def _announce(self, reason: CloseReason) -> None:
        if reason is CloseReason.LOCAL_QUIT:
            self.actor.show("You have left the chatroom.")
        elif reason is CloseReason.PEER_QUIT:
            self.actor.show(f"{self.peer_username} has ended the chat.")
        else:
            self.actor.show(f"{self.peer_username} has disconnected.")

    def _transition(self, state: SessionState) -> None:
        logger.debug("Session %s -> %s", self.state.value, state.value)
        self.state = state


__all__ = ["ChatActor", "ChatSession", "CloseReason", "SessionState"]
