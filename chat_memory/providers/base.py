"""Provider 抽象接口。

SessionActor 不直接依赖具体厂商的 HTTP API，而是依赖此协议：

- 每个厂商实现一个 ProviderClient（如 WorkersAiClient）。
- 负责：将 PromptWindow 转成具体 API 请求，发起且只发起一次调用，
  并把结果归一化为 GenerationOk / GenerationErr。
"""

import asyncio
from typing import Awaitable, Callable, List, Protocol

from chat_memory.domain.models import ChatMessage, GenerationOk, InferenceResult
from chat_memory.providers.errors import classify_failure


class ProviderClient(Protocol):
    """生成服务客户端协议。

    - name: Provider 名称，用于日志。
    - generate(window): 执行一次非流式调用，失败不抛异常而是返回 GenerationErr。
    """

    name: str

    async def generate(self, window: List[ChatMessage]) -> InferenceResult:
        ...


async def run_once(call: Callable[[], Awaitable[str]], timeout: float) -> InferenceResult:
    """在 timeout 秒内执行一次 call，并把任何失败归类为 GenerationErr。

    不重试、不退避、不缓存。取消（CancelledError）照常向上传播。
    """

    try:
        content = await asyncio.wait_for(call(), timeout=timeout)
    except Exception as exc:
        return classify_failure(exc)
    return GenerationOk(content=content)
