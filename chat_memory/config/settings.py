"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置（优先级依次降低）。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("CHAT_MEMORY_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if not path or path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class Settings(BaseSettings):
    """服务配置。"""

    # ---- Provider 相关配置 ----
    default_provider: Literal["workers-ai", "openai-compatible"] = Field(
        default="workers-ai",
        description="生成服务 Provider 名称",
    )
    default_model: str = Field(
        default="chat",
        description="逻辑模型名，由 registry 映射为具体厂商模型",
    )

    # Cloudflare Workers AI
    cloudflare_account_id: Optional[str] = Field(default=None, description="Cloudflare 账户 ID")
    cloudflare_api_token: Optional[str] = Field(default=None, description="Workers AI API token")
    workers_ai_base_url: str = Field(
        default="https://api.cloudflare.com/client/v4",
        description="Cloudflare API 基础URL",
    )

    # OpenAI 兼容接口
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI 兼容接口密钥")
    openai_base_url: str = Field(default="https://api.openai.com/v1", description="OpenAI 兼容接口基础URL")
    openai_model: str = Field(default="gpt-4o-mini", description="OpenAI 兼容接口的模型 ID")

    http_timeout: float = Field(default=30.0, ge=1.0, description="HTTP 超时时间（秒）")
    generation_timeout: float = Field(default=60.0, ge=1.0, description="单次生成调用的总时限（秒）")

    storage_backend: Literal["json", "memory"] = Field(default="json", description="存储后端")
    storage_root: str = Field(default=".storage", description="存储根目录")
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    host: str = Field(default="127.0.0.1", description="HTTP 监听地址")
    port: int = Field(default=8787, ge=1, le=65535, description="HTTP 监听端口")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("cloudflare_api_token", "openai_api_key")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) < 10:
            raise ValueError("API key seems too short")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = Settings()
