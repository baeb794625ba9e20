from __future__ import annotations

import logging
import socket
from typing import Any, Dict, Optional, Tuple

from chatclient.core.network import Connection, Transport
from chatclient.core.session import ChatActor, ChatSession, CloseReason
from chatcommon.protocol.errors import ChatError

from chatserve.config import SERVER_CONFIG

logger = logging.getLogger(__name__)


class ChatServer:
    """Listens for a chat client and talks to one peer at a time."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        actor: ChatActor,
        config: Optional[Dict[str, Any]] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.actor = actor
        self.config = config or SERVER_CONFIG
        self.transport = transport or Transport(self.config)
        self._sock: Optional[socket.socket] = None

    def start(self) -> None:
        self._sock = socket.create_server((self.host, self.port), backlog=int(self.config["backlog"]))
        logger.info("Server listening on %s:%s", *self.address)

    @property
    def address(self) -> Tuple[str, int]:
        if self._sock is None:
            return self.host, self.port
        host, port = self._sock.getsockname()[:2]
        return host, port

    def accept(self) -> Connection:
        assert self._sock is not None, "start() must be called first"
        sock, addr = self._sock.accept()
        logger.info("Accepted connection from %s", addr)
        return Connection(sock=sock, peername=str(addr))

    def serve_once(self) -> CloseReason:
        """Accept one client and chat until either side leaves."""
        conn = self.accept()
        session = ChatSession(self.transport, self.actor, self.username, initiator=False, config=self.config)
        return session.attach(conn)

    def serve_forever(self) -> None:
        while True:
            self.actor.show(f"Waiting for a chat client on port {self.address[1]}...")
            try:
                self.serve_once()
            except ChatError as exc:
                logger.warning("Chat with client ended with error: %s", exc)
                self.actor.show(f"ERROR, {exc.message}")

    def stop(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None
            logger.info("Server on port %s stopped", self.port)
