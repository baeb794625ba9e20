from __future__ import annotations

import logging
import socket
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Dict, Optional

from chatclient.config import CLIENT_CONFIG
from chatcommon.protocol.errors import ConnectError, RecvError, ResolutionError, SendError

logger = logging.getLogger(__name__)

Resolver = Callable[..., list]
SocketFactory = Callable[..., socket.socket]


@dataclass
class Connection:
    """A connected stream socket to exactly one peer."""

    sock: Any  # socket.socket or anything with send/recv/close
    peername: str = ""
    closed: bool = False


class Transport:
    """Blocking TCP transport: connect, send-all, one-shot receive, close."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        resolver: Resolver = socket.getaddrinfo,
        socket_factory: SocketFactory = socket.socket,
    ) -> None:
        self.config = config or CLIENT_CONFIG
        self.max_message_len: int = int(self.config["max_message_len"])
        self._resolve = resolver
        self._socket = socket_factory

    def connect(self, host: str, service: str | int) -> Connection:
        """Resolve `host`/`service` and connect to the first candidate that accepts."""
        try:
            candidates = self._resolve(host, service, socket.AF_UNSPEC, socket.SOCK_STREAM)
        except (socket.gaierror, UnicodeError) as exc:
            raise ResolutionError(f"could not get address info for host: {host} port: {service} ({exc})") from exc
        if not candidates:
            raise ResolutionError(f"could not get address info for host: {host} port: {service}")

        for attempt, (family, socktype, proto, _canonname, sockaddr) in enumerate(candidates, start=1):
            try:
                sock = self._socket(family, socktype, proto)
            except OSError as exc:
                logger.warning("Socket creation for candidate %s failed: %s", attempt, exc)
                continue
            try:
                sock.connect(sockaddr)
            except OSError as exc:
                logger.warning("Connect attempt %s to %s failed: %s", attempt, sockaddr, exc)
                sock.close()
                continue
            logger.info("Connected to %s:%s (%s)", host, service, sockaddr)
            return Connection(sock=sock, peername=str(sockaddr))

        raise ConnectError(f"failed to connect to host: {host} on port: {service}")

    def send_all(self, conn: Connection, data: bytes) -> int:
        """
        Send every byte of `data`, looping over short writes.

        Returns the byte count on success. If an underlying send fails, raises
        SendError with `sent` set to the bytes that did go out.
        """
        total = 0
        remaining = len(data)
        view = memoryview(data)
        while remaining > 0:
            try:
                n = conn.sock.send(view[total:])
            except OSError as exc:
                raise SendError(f"send failed after {total} of {len(data)} bytes: {exc}", sent=total, expected=len(data)) from exc
            if n <= 0:
                raise SendError(f"connection closed after {total} of {len(data)} bytes", sent=total, expected=len(data))
            total += n
            remaining -= n
        logger.debug("Sent %s bytes to %s", total, conn.peername)
        return total

    def recv_chunk(self, conn: Connection, max_bytes: Optional[int] = None) -> bytes:
        """Issue exactly one receive. Empty bytes mean the peer shut down."""
        size = max_bytes if max_bytes is not None else self.max_message_len
        try:
            data = conn.sock.recv(size)
        except OSError as exc:
            raise RecvError(f"unable to receive message from {conn.peername or 'peer'}: {exc}") from exc
        logger.debug("Received %s bytes from %s", len(data), conn.peername)
        return data

    def close(self, conn: Connection) -> None:
        if conn.closed:
            logger.debug("Connection %s already closed", conn.peername)
            return
        conn.closed = True
        conn.sock.close()
        logger.info("Connection %s closed", conn.peername)
