"""Inference Gateway：生成服务集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 维护 Provider 与模型配置 (registry)。
- 失败分类规则 (errors)。
- 提供各厂商的具体实现 (workers_ai_client、openai_client)。
"""

from typing import Optional

from chat_memory.config.settings import settings
from chat_memory.providers.base import ProviderClient
from chat_memory.providers.openai_client import OpenAICompatibleClient
from chat_memory.providers.workers_ai_client import WorkersAiClient


def create_provider(name: Optional[str] = None) -> ProviderClient:
    """根据名称创建 Provider 实例，默认取配置中的 provider。"""

    provider_name = (name or getattr(settings, "default_provider", "workers-ai")).lower()
    model = getattr(settings, "default_model", "chat")
    if provider_name == "openai-compatible":
        return OpenAICompatibleClient(settings, model=model)
    return WorkersAiClient(settings, model=model)

