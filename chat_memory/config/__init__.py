from chat_memory.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
