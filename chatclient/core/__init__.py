from .network import Connection, Transport
from .session import ChatActor, ChatSession, CloseReason, SessionState

__all__ = ["Connection", "Transport", "ChatActor", "ChatSession", "CloseReason", "SessionState"]
