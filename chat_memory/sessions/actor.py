"""单个会话的串行化执行单元。

SessionActor 是会话历史的唯一修改者：send / clear / history 在同一个
asyncio.Lock 下执行，从第一次读存储到最后一次写存储之间不会与同一会话的
其他操作交错。asyncio.Lock 按到达顺序唤醒等待者，因此并发请求严格排队。
不同会话各有各的 Actor 与锁，互不等待。
"""

import asyncio
import logging
import time
from datetime import datetime
from typing import Callable, List, Optional

from chat_memory.domain.conversation import ConversationStore
from chat_memory.domain.exceptions import StorageError, ValidationError
from chat_memory.domain.models import (
    ErrorKind,
    GenerationErr,
    Message,
    SendErr,
    SendOk,
    SendResult,
    utc_now,
)
from chat_memory.infrastructure.logging.logger import logger
from chat_memory.memory import build_prompt_window, recent_history
from chat_memory.providers.base import ProviderClient
from chat_memory.providers.errors import GENERIC_MESSAGE


class SessionActor:
    def __init__(
        self,
        session_id: str,
        store: ConversationStore,
        provider: ProviderClient,
        system_prompt: str,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.session_id = session_id
        self._store = store
        self._provider = provider
        self._system_prompt = system_prompt
        self._clock = clock or utc_now
        self._lock = asyncio.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    async def send(self, text: str) -> SendResult:
        """追加用户消息、调用一次生成服务并追加助手回复。

        生成失败时用户消息仍然保留，历史中不会出现半条助手消息；
        存储失败统一转为 ErrorKind.OTHER。
        """

        if not isinstance(text, str) or not text.strip():
            raise ValidationError(code="MESSAGE_REQUIRED", message="Message required")

        async with self._lock:
            start_time = time.monotonic()
            log_ctx = {"session_id": self.session_id, "provider": self._provider.name}
            try:
                history = await self._load()
                history.append(Message(role="user", content=text, created_at=self._clock()))
                # 先落盘用户消息，调用超时或被取消时历史依然一致
                await self._save(history)
            except StorageError as e:
                self._log(logging.ERROR, "Failed to persist user message", log_ctx, code=e.code, error=e.message)
                return SendErr(kind=ErrorKind.OTHER, message=GENERIC_MESSAGE)

            window = build_prompt_window(history, self._system_prompt)
            result = await self._provider.generate(window)
            if isinstance(result, GenerationErr):
                self._log(
                    logging.WARNING,
                    "Generation failed",
                    log_ctx,
                    kind=result.kind.value,
                    detail=result.detail,
                    window_size=len(window),
                )
                return SendErr(kind=result.kind, message=result.message)

            reply = Message(role="assistant", content=result.content, created_at=self._clock())
            history.append(reply)
            try:
                await self._save(history)
            except StorageError as e:
                self._log(logging.ERROR, "Failed to persist assistant reply", log_ctx, code=e.code, error=e.message)
                return SendErr(kind=ErrorKind.OTHER, message=GENERIC_MESSAGE)

            self._log(
                logging.INFO,
                "Completed send",
                log_ctx,
                history_length=len(history),
                elapsed_seconds=round(time.monotonic() - start_time, 2),
            )
            return SendOk(reply=reply.content, timestamp=reply.created_at)

    async def clear(self) -> None:
        """清空会话历史；对空会话重复调用结果相同。"""

        async with self._lock:
            await self._save([])
            self._log(logging.INFO, "Cleared conversation", {"session_id": self.session_id})

    async def history(self) -> List[Message]:
        """返回最近的历史消息（最多 10 条，旧的在前）。"""

        async with self._lock:
            messages = await self._load()
        return recent_history(messages)

    async def _load(self) -> List[Message]:
        return list(await asyncio.to_thread(self._store.get, self.session_id))

    async def _save(self, messages: List[Message]) -> None:
        await asyncio.to_thread(self._store.put, self.session_id, list(messages))

    def _log(self, level: int, msg: str, ctx: dict, **fields) -> None:
        logger.log(level, msg, extra={"extra": {**ctx, **fields}})
