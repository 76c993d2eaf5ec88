import weakref
from typing import Callable

from chat_memory.sessions.actor import SessionActor


class SessionRegistry:
    """session_id -> SessionActor 的查找表，首次引用时创建。

    Actor 以弱引用保存：只要还有操作在执行（协程持有引用），
    同一 session_id 就只有一个存活的 Actor；空闲后可被垃圾回收，
    下次引用时重新创建，历史仍从存储中读取。
    """

    def __init__(self, factory: Callable[[str], SessionActor]):
        self._factory = factory
        self._actors: "weakref.WeakValueDictionary[str, SessionActor]" = weakref.WeakValueDictionary()

    def get(self, session_id: str) -> SessionActor:
        actor = self._actors.get(session_id)
        if actor is None:
            actor = self._factory(session_id)
            self._actors[session_id] = actor
        return actor

    def __len__(self) -> int:
        return len(self._actors)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._actors
