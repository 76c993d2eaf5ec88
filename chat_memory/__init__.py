"""Chat Memory 顶层包。

按会话维护有序的消息历史，构造有界的上下文窗口调用生成服务，
并保证同一会话的所有修改严格串行执行。
"""

from chat_memory.sessions import SessionActor, SessionRegistry

__all__ = ["SessionActor", "SessionRegistry"]
