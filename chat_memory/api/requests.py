"""入站请求校验。

/api/chat 的 JSON 请求体在边界处只校验一次，转换为带标签的命令：
SendCommand(text) 或 ClearCommand。格式不对的输入在到达 SessionActor 之前就被拒绝。
"""

from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, StrictStr
from pydantic import ValidationError as PydanticValidationError

from chat_memory.domain.exceptions import ValidationError


class SendRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: StrictStr


@dataclass(frozen=True)
class SendCommand:
    text: str


@dataclass(frozen=True)
class ClearCommand:
    pass


ChatCommand = Union[SendCommand, ClearCommand]


def parse_chat_request(payload: Any) -> ChatCommand:
    """action == "clear" 优先，其次是非空 message。"""

    if not isinstance(payload, dict):
        raise ValidationError(code="INVALID_REQUEST", message="Invalid request format")
    if payload.get("action") == "clear":
        return ClearCommand()
    try:
        req = SendRequest.model_validate(payload)
    except PydanticValidationError:
        raise ValidationError(code="MESSAGE_REQUIRED", message="Message required") from None
    if not req.message.strip():
        raise ValidationError(code="MESSAGE_REQUIRED", message="Message required")
    return SendCommand(text=req.message)
