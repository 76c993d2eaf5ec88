"""统一的对话与结果数据模型。

本模块定义了会话记忆服务内部共享的标准数据结构：

- Message: 持久化在会话历史中的一条消息（带时间戳，追加后不可变）。
- ChatMessage: 发给生成服务的一条消息（只有 role/content）。
- GenerationOk / GenerationErr: Inference Gateway 的归一化结果。
- SendOk / SendErr: SessionActor.send 的返回值。

所有 Provider 适配器都只依赖这些模型，
并负责在各自的 API JSON 和这些模型之间做转换。
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Union, Dict, Any


# 会话消息角色类型（与 OpenAI / Workers AI 的 role 字段对应）
Role = Literal["system", "user", "assistant"]

ROLES = ("system", "user", "assistant")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """格式化为带毫秒的 UTC ISO-8601 字符串，例如 2024-05-01T12:00:00.000Z。"""

    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass(frozen=True)
class Message:
    """会话历史中的一条消息。

    - role: system/user/assistant。
    - content: 纯文本内容，原样保存。
    - created_at: 追加时间（UTC）。
    """

    role: Role
    content: str
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "content": self.content,
            "timestamp": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        role = data["role"]
        if role not in ROLES:
            raise ValueError(f"Unknown role: {role!r}")
        return cls(
            role=role,
            content=data.get("content") or "",
            created_at=parse_timestamp(data["timestamp"]),
        )


@dataclass(frozen=True)
class ChatMessage:
    """发送给生成服务的消息，不带时间戳。"""

    role: Role
    content: str

    def to_payload(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


class ErrorKind(str, Enum):
    """生成失败的分类。"""

    QUOTA = "quota"
    TIMEOUT = "timeout"
    OTHER = "other"


@dataclass(frozen=True)
class GenerationOk:
    content: str


@dataclass(frozen=True)
class GenerationErr:
    """生成失败。detail 是原始失败描述，只用于日志，不参与比较。"""

    kind: ErrorKind
    message: str
    detail: str = field(default="", compare=False)


InferenceResult = Union[GenerationOk, GenerationErr]


@dataclass(frozen=True)
class SendOk:
    """一次 send 成功：助手回复及其完成时间。"""

    reply: str
    timestamp: datetime


@dataclass(frozen=True)
class SendErr:
    """一次 send 失败：分类与面向用户的提示文本。"""

    kind: ErrorKind
    message: str


SendResult = Union[SendOk, SendErr]
