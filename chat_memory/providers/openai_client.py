"""OpenAI 兼容接口的 Provider 适配器。

请求 `{base}/chat/completions`，从 `choices[0].message.content` 取回复文本。
适用于 OpenAI 以及提供同样协议的自建/第三方服务。
"""

from typing import Any, Dict, List

import httpx

from chat_memory.domain.exceptions import ApiError, ConfigurationError, NetworkError
from chat_memory.domain.models import ChatMessage, InferenceResult
from chat_memory.providers.base import run_once
from chat_memory.providers.registry import OPENAI_COMPATIBLE_CONFIG, ModelConfig


class OpenAICompatibleClient:
    name = "openai-compatible"

    def __init__(self, settings, model: str = "chat"):
        self._settings = settings
        self._model_cfg: ModelConfig = OPENAI_COMPATIBLE_CONFIG.models[model]

    @property
    def provider_model(self) -> str:
        return getattr(self._settings, "openai_model", None) or self._model_cfg.provider_model

    async def generate(self, window: List[ChatMessage]) -> InferenceResult:
        return await run_once(lambda: self._request(window), self._settings.generation_timeout)

    async def _request(self, window: List[ChatMessage]) -> str:
        if not getattr(self._settings, "openai_api_key", None):
            raise ConfigurationError(code="MISSING_API_KEY", message="OPENAI_API_KEY not set")
        base = getattr(self._settings, "openai_base_url", None) or OPENAI_COMPATIBLE_CONFIG.base_url
        try:
            async with httpx.AsyncClient(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = await client.post(
                    f"{base}/chat/completions",
                    json=self._build_payload(window),
                    headers={
                        "Authorization": f"Bearer {self._settings.openai_api_key}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.TimeoutException as e:
            raise NetworkError(code="NETWORK_TIMEOUT", message=str(e) or "request timeout")
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e))
        if resp.status_code >= 400:
            # 响应体原样保留，额度耗尽时其中带有 "quota" 字样
            raise ApiError(code="API_ERROR", message=resp.text, http_status=resp.status_code)
        return self._parse_response(resp.json())

    def _build_payload(self, window: List[ChatMessage]) -> Dict[str, Any]:
        return {
            "model": self.provider_model,
            "messages": [m.to_payload() for m in window],
            "max_tokens": self._model_cfg.max_tokens,
            "temperature": self._model_cfg.temperature,
        }

    @staticmethod
    def _parse_response(data: Dict[str, Any]) -> str:
        choices = data.get("choices") or []
        if not choices:
            raise ApiError(code="BAD_RESPONSE", message="no choices in response")
        message = choices[0].get("message") or {}
        return message.get("content") or ""
