"""
Prioritized fallback over several LLM providers.

Providers are tried in order; the first non-empty answer wins. A provider
that raises is logged and skipped like one that returns nothing, so a single
misbehaving vendor never stops a research run.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

from ..config import AppConfig, get_api_key
from ..logging_utils import log_event
from .providers.base import EnrichmentProvider
from .providers.factory import create_provider


logger = logging.getLogger(__name__)


@dataclass
class CascadeResult:
    text: str
    provider: str


class ProviderCascade:
    def __init__(self, providers: list[EnrichmentProvider]):
        self.providers = list(providers)

    def __bool__(self) -> bool:
        return bool(self.providers)

    @property
    def names(self) -> list[str]:
        return [provider.name for provider in self.providers]

    def generate(self, prompt: str, system_prompt: str | None = None) -> CascadeResult | None:
        """Return the first provider answer, or None when every provider fails."""
        for provider in self.providers:
            try:
                text = provider.generate(prompt, system_prompt)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Provider %s raised %s", provider.name, exc)
                continue
            if text and text.strip():
                log_event(logger, "Provider answered", provider=provider.name)
                return CascadeResult(text=text, provider=provider.name)
            logger.debug("Provider %s returned no answer", provider.name)
        return None


def build_cascade(cfg: AppConfig, llm_logger: logging.Logger | None = None, transport=None) -> ProviderCascade:
    """Create a cascade from the configured providers, skipping those without API keys."""
    providers: list[EnrichmentProvider] = []
    for provider_cfg in cfg.enrichment.providers:
        if not get_api_key(provider_cfg):
            logger.info("Skipping provider %s: no API key", provider_cfg.name)
            continue
        providers.append(create_provider(provider_cfg, cfg.logging, llm_logger, transport))
    return ProviderCascade(providers)
