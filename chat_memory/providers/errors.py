"""生成失败的分类规则。

生成服务的错误没有统一的结构化分类，因此按失败描述文本做有序的子串匹配：
quota > timeout > 其他，匹配不区分大小写。超时类异常（asyncio / httpx）在匹配前先归一成
包含 "timeout" 的描述，避免依赖第三方库的报错措辞。
"""

import asyncio
from typing import Tuple

import httpx

from chat_memory.domain.exceptions import BusinessError
from chat_memory.domain.models import ErrorKind, GenerationErr


QUOTA_MESSAGE = (
    "Daily AI usage limit reached. Please try again tomorrow "
    "or consider the student plan for higher limits."
)
TIMEOUT_MESSAGE = "Request timed out. Please try again."
GENERIC_MESSAGE = "Sorry, I encountered an error. Please try again."

# (关键字, 分类, 面向用户的提示)，按顺序匹配
CLASSIFICATION_RULES: Tuple[Tuple[str, ErrorKind, str], ...] = (
    ("quota", ErrorKind.QUOTA, QUOTA_MESSAGE),
    ("timeout", ErrorKind.TIMEOUT, TIMEOUT_MESSAGE),
)


def describe_failure(exc: BaseException) -> str:
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError, httpx.TimeoutException)):
        return f"timeout: {exc}"
    if isinstance(exc, BusinessError):
        return f"{exc.code}: {exc.message}"
    return str(exc)


def classify_description(description: str) -> GenerationErr:
    detail = description or ""
    text = detail.lower()
    for keyword, kind, message in CLASSIFICATION_RULES:
        if keyword in text:
            return GenerationErr(kind=kind, message=message, detail=detail)
    return GenerationErr(kind=ErrorKind.OTHER, message=GENERIC_MESSAGE, detail=detail)


def classify_failure(exc: BaseException) -> GenerationErr:
    return classify_description(describe_failure(exc))
