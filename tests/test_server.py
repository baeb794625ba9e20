from __future__ import annotations

import threading

from chatclient.config import DEFAULT_CONFIG
from chatclient.core import ChatSession, CloseReason, Transport
from chatserve.config import DEFAULT_SERVER_CONFIG
from chatserve.core import ChatServer
from fakes import ScriptedActor


def test_client_and_server_chat_over_loopback():
    server_actor = ScriptedActor(["hi there"])
    server = ChatServer("127.0.0.1", 0, "bob", server_actor, DEFAULT_SERVER_CONFIG.copy())
    server.start()
    outcome = {}

    def serve() -> None:
        outcome["reason"] = server.serve_once()

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    try:
        client_actor = ScriptedActor(["hello", "\\quit"])
        session = ChatSession(Transport(DEFAULT_CONFIG.copy()), client_actor, "alice")
        reason = session.run("127.0.0.1", server.address[1])
        thread.join(5)
    finally:
        server.stop()

    assert reason is CloseReason.LOCAL_QUIT
    assert outcome["reason"] is CloseReason.PEER_QUIT
    assert "bob> hi there" in client_actor.shown
    assert server_actor.shown == [
        "Now chatting with alice, say hello!",
        "alice> hello",
        "alice has ended the chat.",
    ]
    assert server_actor.prompts == ["bob> "]


def test_stop_is_safe_before_start():
    server = ChatServer("127.0.0.1", 0, "bob", ScriptedActor(), DEFAULT_SERVER_CONFIG.copy())
    server.stop()
    assert server.address == ("127.0.0.1", 0)
