"""上下文窗口构建。

纯函数，无 I/O：给定完整历史与固定的 system 提示词，
生成提交给生成服务的有界消息列表。
"""

from typing import List, Sequence

from chat_memory.domain.models import ChatMessage, Message


# 每轮提交给模型的历史消息条数（不含 system 提示词）
CONTEXT_WINDOW_SIZE = 8
# history 查询最多返回的消息条数
HISTORY_LIMIT = 10


def _tail(history: Sequence[Message], limit: int) -> List[Message]:
    if limit <= 0:
        return []
    return list(history[-limit:])


def build_prompt_window(
    history: Sequence[Message],
    system_prompt: str,
    window_size: int = CONTEXT_WINDOW_SIZE,
) -> List[ChatMessage]:
    """system 提示词 + 历史中最后 window_size 条消息（保持原顺序，丢弃时间戳）。"""

    window = [ChatMessage(role="system", content=system_prompt)]
    window.extend(ChatMessage(role=m.role, content=m.content) for m in _tail(history, window_size))
    return window


def recent_history(history: Sequence[Message], limit: int = HISTORY_LIMIT) -> List[Message]:
    """最后 limit 条消息，旧的在前。"""

    return _tail(history, limit)
