"""对外 API 服务模块。

提供按 session_id 寻址的 send / clear / history 三个函数，
返回值即为 HTTP 层直接输出的 JSON 结构。
"""

from typing import Any, Dict, Optional

from chat_memory.api.requests import ChatCommand, ClearCommand, SendCommand
from chat_memory.config.settings import settings
from chat_memory.domain.conversation import ConversationStore
from chat_memory.domain.exceptions import StorageError
from chat_memory.domain.models import SendOk, format_timestamp
from chat_memory.infrastructure.logging.logger import logger
from chat_memory.infrastructure.storage import InMemoryConversationStore, JsonConversationStore
from chat_memory.prompts import load_system_prompt
from chat_memory.providers import create_provider
from chat_memory.sessions import SessionActor, SessionRegistry


CLEARED_MESSAGE = "Conversation history cleared!"
CLEAR_FAILED_MESSAGE = "Failed to clear conversation"

_registry: Optional[SessionRegistry] = None


def create_store() -> ConversationStore:
    if settings.storage_backend == "memory":
        return InMemoryConversationStore()
    return JsonConversationStore(root=settings.storage_root)


def get_default_registry() -> SessionRegistry:
    """获取默认的 SessionRegistry 实例（单例）。"""
    global _registry
    if _registry is None:
        store = create_store()
        provider = create_provider()
        system_prompt = load_system_prompt()
        _registry = SessionRegistry(
            lambda session_id: SessionActor(
                session_id=session_id,
                store=store,
                provider=provider,
                system_prompt=system_prompt,
            )
        )
    return _registry


async def send_message(
    session_id: str,
    text: str,
    registry: Optional[SessionRegistry] = None,
) -> Dict[str, Any]:
    """发送一条用户消息。

    Returns:
        成功：{"success": True, "response": ..., "timestamp": ...}
        失败：{"success": False, "error": ...}

    Raises:
        ValidationError: text 为空
    """
    actor = (registry or get_default_registry()).get(session_id)
    result = await actor.send(text)
    if isinstance(result, SendOk):
        return {
            "success": True,
            "response": result.reply,
            "timestamp": format_timestamp(result.timestamp),
        }
    return {"success": False, "error": result.message}


async def clear_conversation(
    session_id: str,
    registry: Optional[SessionRegistry] = None,
) -> Dict[str, Any]:
    actor = (registry or get_default_registry()).get(session_id)
    try:
        await actor.clear()
    except StorageError as e:
        logger.error(f"Clear failed: {e}", extra={"extra": {
            "session_id": session_id,
            "code": e.code,
        }})
        return {"success": False, "error": CLEAR_FAILED_MESSAGE}
    return {"success": True, "message": CLEARED_MESSAGE}


async def get_history(
    session_id: str,
    registry: Optional[SessionRegistry] = None,
) -> Dict[str, Any]:
    """获取最近的消息（最多 10 条）。

    history 是尽力而为的查询：任何内部错误都降级为空列表，从不报错。
    """
    try:
        actor = (registry or get_default_registry()).get(session_id)
        messages = await actor.history()
    except Exception as e:
        logger.error(f"Failed to load history: {e}", extra={"extra": {
            "session_id": session_id,
            "error": str(e),
        }})
        return {"messages": []}
    return {"messages": [m.to_dict() for m in messages]}


async def execute(
    session_id: str,
    command: ChatCommand,
    registry: Optional[SessionRegistry] = None,
) -> Dict[str, Any]:
    if isinstance(command, ClearCommand):
        return await clear_conversation(session_id, registry)
    if isinstance(command, SendCommand):
        return await send_message(session_id, command.text, registry)
    raise TypeError(f"Unknown command: {command!r}")
