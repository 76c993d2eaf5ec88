"""系统提示词加载工具。

按语言(locale) 从 prompts/<locale> 目录读取助手的 system prompt 文本，
用于构造 ChatMessage(role="system")。服务启动时加载一次，之后视为常量。
"""

from functools import lru_cache
from pathlib import Path


PROMPTS_DIR = Path(__file__).resolve().parent


@lru_cache(maxsize=None)
def load_system_prompt(locale: str = "en") -> str:
    fname = PROMPTS_DIR / locale / "chat_assistant_system.md"
    return fname.read_text(encoding="utf-8").strip()
