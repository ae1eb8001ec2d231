"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- DedupConfig: Duplicate detection thresholds
- StorageConfig: Persistence backend settings
- ProviderConfig: One LLM provider in the enrichment cascade
- EnrichmentConfig: Provider cascade order and prompt limits
- DiscoveryConfig: Default filters for outlet discovery
- LoggingConfig: Logging behavior
- LangfuseConfig: Langfuse tracing settings
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from typing import Any

import yaml


@dataclass
class DedupConfig:
    """Configuration for duplicate outlet detection.

    The two thresholds differ: single-candidate checks
    (discovery, manual add) are stricter than the bulk pairwise scan that
    feeds the merge report.

    Attributes:
        single_check_threshold: Name similarity (0-1) above which a candidate
            is rejected as a duplicate of an existing outlet
        bulk_scan_threshold: Name similarity (0-1) above which two existing
            outlets are reported as a duplicate pair
    """

    single_check_threshold: float = 0.85
    bulk_scan_threshold: float = 0.80


@dataclass
class StorageConfig:
    """Configuration for the outlet persistence backend.

    Attributes:
        backend: "json" for a local file, "supabase" for the REST store, "memory" for none
        path: JSON file path when backend is "json"
        supabase_url: Supabase project URL (falls back to supabase_url_env)
        supabase_url_env: Environment variable holding the project URL
        supabase_key: Inline Supabase API key (overrides env var)
        supabase_key_env: Environment variable holding the API key
        table: Table holding outlet rows
        timeout_seconds: HTTP request timeout for the REST store
        trust_env: Whether to respect system proxy settings
    """

    backend: str = "json"
    path: str = "data/outlets.json"
    supabase_url: str | None = None
    supabase_url_env: str = "SUPABASE_URL"
    supabase_key: str | None = None
    supabase_key_env: str = "SUPABASE_ANON_KEY"
    table: str = "media_outlets"
    timeout_seconds: float = 10.0
    trust_env: bool = True


@dataclass
class ProviderConfig:
    """Configuration for a single LLM provider.

    Attributes:
        name: Provider name ("openai", "anthropic", "gemini", "xai", "groq", "perplexity", "openrouter")
        model: Model identifier
        base_url: Base URL for the provider API (provider default when None)
        api_key: Optional inline API key (overrides env var)
        api_key_env: Environment variable name containing the API key
        timeout_seconds: HTTP request timeout
        temperature: Sampling temperature
        max_tokens: Maximum output tokens
        trust_env: Whether to respect system proxy settings for API requests
    """

    name: str = "openai"
    model: str = "gpt-4o-mini"
    base_url: str | None = None
    api_key: str | None = None
    api_key_env: str | None = None
    timeout_seconds: float = 30.0
    temperature: float = 0.3
    max_tokens: int = 2000
    trust_env: bool = True


def _default_providers() -> list[ProviderConfig]:
    return [
        ProviderConfig(name="openai", model="gpt-4o-mini"),
        ProviderConfig(name="anthropic", model="claude-3-5-haiku-latest"),
        ProviderConfig(name="xai", model="grok-2-latest"),
        ProviderConfig(name="groq", model="llama-3.3-70b-versatile"),
        ProviderConfig(name="perplexity", model="sonar"),
        ProviderConfig(name="openrouter", model="openai/gpt-4o-mini"),
        ProviderConfig(name="gemini", model="gemini-2.0-flash"),
    ]


@dataclass
class EnrichmentConfig:
    """Configuration for AI-assisted outlet research.

    Attributes:
        providers: Providers tried in order until one answers
        max_prompt_names: How many existing outlet names a discovery prompt may list
    """

    providers: list[ProviderConfig] = field(default_factory=_default_providers)
    max_prompt_names: int = 50


@dataclass
class DiscoveryConfig:
    """Default filters for outlet discovery.

    Attributes:
        country: Country or region key ("all", "us", "uk", ...)
        media_types: Media types to look for
        min_audience: Minimum monthly audience
        outlets_to_find: Maximum number of candidates to process
        curated_fallback: Whether to use the bundled curated list when no provider answers
    """

    country: str = "all"
    media_types: list[str] = field(default_factory=lambda: ["tv", "print", "social"])
    min_audience: int = 1_000_000
    outlets_to_find: int = 12
    curated_fallback: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
        directory: Directory for log files
        llm_log_enabled: Whether to enable separate LLM interaction logging
        llm_log_detail: LLM log detail level ("response_only", "prompt_response")
        llm_log_redaction: Redaction mode for LLM logs ("none", "redact_content", "redact_urls")
        llm_log_file: Name of the LLM log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "free_press.jsonl"
    directory: str = "logs"
    llm_log_enabled: bool = False
    llm_log_detail: str = "response_only"
    llm_log_redaction: str = "redact_urls"
    llm_log_file: str = "llm.jsonl"


@dataclass
class LangfuseConfig:
    """Configuration for Langfuse tracing.

    Attributes:
        enabled: Whether to enable Langfuse tracing
        public_key: Langfuse public key (optional)
        secret_key: Langfuse secret key (optional)
        host: Langfuse host URL (optional)
        environment: Langfuse environment label (optional)
        release: Langfuse release identifier (optional)
        redaction: Redaction mode for prompt/response payloads
        max_text_chars: Maximum characters for prompt/response payloads
    """

    enabled: bool = False
    public_key: str | None = None
    secret_key: str | None = None
    host: str | None = None
    environment: str | None = None
    release: str | None = None
    redaction: str = "redact_urls"
    max_text_chars: int = 20000


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    dedup: DedupConfig = field(default_factory=DedupConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    enrichment: EnrichmentConfig = field(default_factory=EnrichmentConfig)
    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    langfuse: LangfuseConfig = field(default_factory=LangfuseConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    enrichment_data = dict(data.get("enrichment", {}))
    providers = enrichment_data.pop("providers", None)
    if providers is None:
        provider_cfgs = _default_providers()
    else:
        provider_cfgs = [ProviderConfig(**item) for item in providers if isinstance(item, dict)]

    return AppConfig(
        dedup=DedupConfig(**data["dedup"]),
        storage=StorageConfig(**data["storage"]),
        enrichment=EnrichmentConfig(providers=provider_cfgs, **enrichment_data),
        discovery=DiscoveryConfig(**data["discovery"]),
        logging=LoggingConfig(**data["logging"]),
        langfuse=LangfuseConfig(**data.get("langfuse", {})),
    )


_DEFAULT_KEY_ENVS = {
    "openai": "OPENAI_API_KEY",
    "openai_compatible": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GOOGLE_API_KEY",
    "xai": "XAI_API_KEY",
    "grok": "XAI_API_KEY",
    "groq": "GROQ_API_KEY",
    "perplexity": "PERPLEXITY_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
}


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    if cfg.api_key_env:
        return os.getenv(cfg.api_key_env)
    env_name = _DEFAULT_KEY_ENVS.get(cfg.name.lower().strip(), "OPENAI_API_KEY")
    return os.getenv(env_name)


def get_supabase_url(cfg: StorageConfig) -> str | None:
    """Get Supabase project URL from inline config or environment variable."""
    if cfg.supabase_url:
        return cfg.supabase_url
    return os.getenv(cfg.supabase_url_env)


def get_supabase_key(cfg: StorageConfig) -> str | None:
    """Get Supabase API key from inline config or environment variable."""
    if cfg.supabase_key:
        return cfg.supabase_key
    return os.getenv(cfg.supabase_key_env)
