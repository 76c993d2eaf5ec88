from typing import Dict, List

from chat_memory.domain.conversation import ConversationStore
from chat_memory.domain.models import Message


class InMemoryConversationStore(ConversationStore):
    """进程内存储，不跨重启保留，用于测试和临时部署。"""

    def __init__(self):
        self._data: Dict[str, List[Message]] = {}

    def get(self, session_id: str) -> List[Message]:
        return list(self._data.get(session_id, []))

    def put(self, session_id: str, messages: List[Message]) -> None:
        self._data[session_id] = list(messages)
