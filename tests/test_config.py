"""Tests for YAML config loading and key resolution."""

from __future__ import annotations

from free_press.config import (
    AppConfig,
    ProviderConfig,
    StorageConfig,
    get_api_key,
    get_supabase_key,
    get_supabase_url,
    load_config,
)


def test_load_config_defaults_without_path():
    cfg = load_config(None)
    assert isinstance(cfg, AppConfig)
    assert cfg.dedup.single_check_threshold == 0.85
    assert cfg.dedup.bulk_scan_threshold == 0.80
    assert cfg.storage.backend == "json"
    assert [p.name for p in cfg.enrichment.providers][:2] == ["openai", "anthropic"]


def test_load_config_merges_sections(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "\n".join(
            [
                "dedup:",
                "  single_check_threshold: 0.9",
                "storage:",
                "  backend: memory",
                "enrichment:",
                "  max_prompt_names: 10",
                "  providers:",
                "    - name: gemini",
                "      model: gemini-2.0-flash",
                "logging:",
                "  level: DEBUG",
                "unknown_section:",
                "  ignored: true",
            ]
        ),
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.dedup.single_check_threshold == 0.9
    assert cfg.dedup.bulk_scan_threshold == 0.80
    assert cfg.storage.backend == "memory"
    assert cfg.storage.path == "data/outlets.json"
    assert cfg.enrichment.max_prompt_names == 10
    assert [(p.name, p.model) for p in cfg.enrichment.providers] == [("gemini", "gemini-2.0-flash")]
    assert cfg.logging.level == "DEBUG"
    assert cfg.langfuse.enabled is False


def test_load_config_empty_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == AppConfig()


def test_get_api_key_precedence(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "default-env")
    monkeypatch.setenv("CUSTOM_KEY", "custom-env")
    assert get_api_key(ProviderConfig(name="anthropic", api_key="inline")) == "inline"
    assert get_api_key(ProviderConfig(name="anthropic", api_key_env="CUSTOM_KEY")) == "custom-env"
    assert get_api_key(ProviderConfig(name="anthropic")) == "default-env"


def test_supabase_settings_from_env(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "env-key")
    cfg = StorageConfig(backend="supabase")
    assert get_supabase_url(cfg) == "https://env.supabase.co"
    assert get_supabase_key(cfg) == "env-key"
    assert get_supabase_key(StorageConfig(supabase_key="inline")) == "inline"
