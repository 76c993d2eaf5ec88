from typing import List, Protocol

from .models import Message


class ConversationStore(Protocol):
    """每个会话一条有序消息序列的持久化协议。

    - get: 不存在时返回空列表，而不是报错。
    - put: 整体替换已存储的序列；失败时抛出 StorageError。
    """

    def get(self, session_id: str) -> List[Message]:
        ...

    def put(self, session_id: str, messages: List[Message]) -> None:
        ...
