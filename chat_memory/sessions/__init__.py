"""会话串行化：SessionActor 与 SessionRegistry。"""

from chat_memory.sessions.actor import SessionActor
from chat_memory.sessions.registry import SessionRegistry

__all__ = ["SessionActor", "SessionRegistry"]
