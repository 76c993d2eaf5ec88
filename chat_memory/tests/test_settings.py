import pytest

from chat_memory.config.settings import Settings


def test_settings_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CHAT_MEMORY_CONFIG_FILE", raising=False)
    s = Settings()
    assert s.default_provider == "workers-ai"
    assert s.default_model == "chat"
    assert s.storage_backend == "json"


def test_settings_yaml_then_env(monkeypatch, tmp_path):
    cfg = tmp_path / "custom.yaml"
    cfg.write_text("storage_root: /data/chat\nhttp_timeout: 12\nstorage_backend: memory\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CHAT_MEMORY_CONFIG_FILE", str(cfg))
    monkeypatch.setenv("HTTP_TIMEOUT", "20")
    s = Settings()
    assert s.storage_root == "/data/chat"
    assert s.storage_backend == "memory"
    assert s.http_timeout == 20.0


def test_settings_rejects_short_token(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CLOUDFLARE_API_TOKEN", "short")
    with pytest.raises(ValueError):
        Settings()
