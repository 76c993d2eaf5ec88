"""会话历史的持久化实现。"""

from chat_memory.infrastructure.storage.json_store import JsonConversationStore
from chat_memory.infrastructure.storage.memory_store import InMemoryConversationStore

__all__ = ["JsonConversationStore", "InMemoryConversationStore"]
