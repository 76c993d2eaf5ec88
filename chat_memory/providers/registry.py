"""Provider 与模型配置。

本模块将“逻辑模型名”与“具体厂商模型名”解耦：

- 逻辑名（logical_name）：在代码里使用的统一名称，例如 "chat"。
- provider_model：厂商实际提供的模型 ID，例如 "@cf/meta/llama-3.3-70b-instruct-fp8-fast"。

生成参数（max_tokens、temperature）随模型固定，不在调用时决定。"""

from dataclasses import dataclass
from typing import Dict, Mapping


@dataclass(frozen=True)
class ModelConfig:
    """单个逻辑模型的配置。"""

    logical_name: str
    provider_model: str
    max_tokens: int
    temperature: float


@dataclass(frozen=True)
class ProviderConfig:
    """某个 Provider 的整体配置。"""

    name: str
    base_url: str
    models: Dict[str, ModelConfig]


WORKERS_AI_CONFIG = ProviderConfig(
    name="workers-ai",
    base_url="https://api.cloudflare.com/client/v4",
    models={
        "chat": ModelConfig(
            logical_name="chat",
            provider_model="@cf/meta/llama-3.3-70b-instruct-fp8-fast",
            max_tokens=500,
            temperature=0.7,
        )
    },
)

# OpenAI 兼容接口；provider_model 可被 settings.openai_model 覆盖
OPENAI_COMPATIBLE_CONFIG = ProviderConfig(
    name="openai-compatible",
    base_url="https://api.openai.com/v1",
    models={
        "chat": ModelConfig(
            logical_name="chat",
            provider_model="gpt-4o-mini",
            max_tokens=500,
            temperature=0.7,
        )
    },
)


PROVIDER_REGISTRY: Mapping[str, ProviderConfig] = {
    "workers-ai": WORKERS_AI_CONFIG,
    "openai-compatible": OPENAI_COMPATIBLE_CONFIG,
}


def get_provider_config(name: str) -> ProviderConfig:
    """根据名称获取 ProviderConfig，名称不区分大小写。"""

    key = name.lower()
    for k, cfg in PROVIDER_REGISTRY.items():
        if k.lower() == key:
            return cfg
    raise KeyError(f"Unknown provider: {name!r}")


def get_model_config(provider: str, logical_name: str) -> ModelConfig:
    cfg = get_provider_config(provider)
    try:
        return cfg.models[logical_name]
    except KeyError:
        raise KeyError(f"Unknown model {logical_name!r} for provider {cfg.name!r}") from None
