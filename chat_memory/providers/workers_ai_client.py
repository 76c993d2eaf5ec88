"""Cloudflare Workers AI Provider 适配器。

本模块负责：

1. 接收 PromptWindow（system 提示词 + 最近的历史消息）。
2. 将其转换为 Workers AI REST 接口 `/accounts/{id}/ai/run/{model}` 的请求格式。
3. 调用 HTTP 接口，把网络/API 异常转换为业务异常。
4. 从响应 JSON 中取出 `response` 文本。

失败分类与超时控制由 providers.base.run_once 统一处理。
"""

from typing import Any, Dict, List

import httpx

from chat_memory.domain.exceptions import ApiError, ConfigurationError, NetworkError, QuotaExceededError
from chat_memory.domain.models import ChatMessage, InferenceResult
from chat_memory.providers.base import run_once
from chat_memory.providers.registry import WORKERS_AI_CONFIG, ModelConfig

# Workers AI 免费额度用尽时返回的错误码
QUOTA_ERROR_CODES = {4006}


class WorkersAiClient:
    """Workers AI 客户端实现。"""

    name = "workers-ai"

    def __init__(self, settings, model: str = "chat"):
        # Settings 里包含 account_id、api_token、超时等配置
        self._settings = settings
        self._model_cfg: ModelConfig = WORKERS_AI_CONFIG.models[model]

    async def generate(self, window: List[ChatMessage]) -> InferenceResult:
        return await run_once(lambda: self._request(window), self._settings.generation_timeout)

    async def _request(self, window: List[ChatMessage]) -> str:
        account_id = getattr(self._settings, "cloudflare_account_id", None)
        token = getattr(self._settings, "cloudflare_api_token", None)
        if not account_id or not token:
            raise ConfigurationError(
                code="MISSING_API_KEY",
                message="CLOUDFLARE_ACCOUNT_ID / CLOUDFLARE_API_TOKEN not set",
            )
        base = getattr(self._settings, "workers_ai_base_url", None) or WORKERS_AI_CONFIG.base_url
        url = f"{base}/accounts/{account_id}/ai/run/{self._model_cfg.provider_model}"
        try:
            async with httpx.AsyncClient(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = await client.post(
                    url,
                    json=self._build_payload(window),
                    headers={
                        "Authorization": f"Bearer {token}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.TimeoutException as e:
            raise NetworkError(code="NETWORK_TIMEOUT", message=str(e) or "request timeout")
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接被拒等
            raise NetworkError(code="NETWORK_ERROR", message=str(e))
        return self._parse_response(resp)

    def _build_payload(self, window: List[ChatMessage]) -> Dict[str, Any]:
        return {
            "model": self._model_cfg.provider_model,
            "messages": [m.to_payload() for m in window],
            "max_tokens": self._model_cfg.max_tokens,
            "temperature": self._model_cfg.temperature,
        }

    def _parse_response(self, resp) -> str:
        try:
            data = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {}
        errors = [e for e in data.get("errors") or [] if isinstance(e, dict)]
        if resp.status_code >= 400 or data.get("success") is False:
            detail = "; ".join(str(e.get("message", "")) for e in errors) or resp.text
            if any(e.get("code") in QUOTA_ERROR_CODES for e in errors):
                raise QuotaExceededError(code="QUOTA_EXCEEDED", message=detail, http_status=resp.status_code)
            raise ApiError(code="API_ERROR", message=detail, http_status=resp.status_code)
        result = data["result"] if isinstance(data.get("result"), dict) else data
        content = result.get("response")
        if not isinstance(content, str):
            raise ApiError(code="BAD_RESPONSE", message="response field missing", http_status=resp.status_code)
        return content
