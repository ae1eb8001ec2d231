"""
Chat-completions provider for OpenAI and API-compatible vendors.

OpenAI, xAI (Grok), Groq, Perplexity and OpenRouter all accept the same
``/chat/completions`` request shape, so one implementation covers them; only
the base URL and key differ.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ...config import LoggingConfig, ProviderConfig
from ..tracing import record_span_error, set_span_output, start_span
from .base import EnrichmentProvider


logger = logging.getLogger(__name__)

_DEFAULT_BASE_URLS = {
    "openai": "https://api.openai.com/v1",
    "openai_compatible": "https://api.openai.com/v1",
    "xai": "https://api.x.ai/v1",
    "grok": "https://api.x.ai/v1",
    "groq": "https://api.groq.com/openai/v1",
    "perplexity": "https://api.perplexity.ai",
    "openrouter": "https://openrouter.ai/api/v1",
}


class OpenAICompatibleProvider(EnrichmentProvider):
    """Provider for any OpenAI chat-completions compatible endpoint."""

    def __init__(
        self,
        cfg: ProviderConfig,
        api_key: str | None,
        log_cfg: LoggingConfig | None = None,
        llm_logger: logging.Logger | None = None,
        transport=None,
    ):
        self.default_base_url = _DEFAULT_BASE_URLS.get(cfg.name.lower().strip(), _DEFAULT_BASE_URLS["openai"])
        super().__init__(cfg, api_key, log_cfg, llm_logger, transport)

    def generate(self, prompt: str, system_prompt: str | None = None) -> str | None:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        payload = {
            "model": self.cfg.model,
            "messages": messages,
            "temperature": self.cfg.temperature,
            "max_tokens": self.cfg.max_tokens,
        }
        with start_span(
            f"{self.name}.generate",
            kind="llm",
            input_value=prompt,
            attributes={"llm.model": self.cfg.model, "llm.provider": self.name},
        ) as span:
            try:
                data = self._post(payload)
            except (httpx.HTTPError, json.JSONDecodeError) as exc:
                record_span_error(span, exc)
                logger.info("%s request failed: %s", self.name, exc)
                self._log_llm_response("provider_error", str(exc), prompt)
                return None
            content = _extract_text(data)
            set_span_output(span, content)
        if not content.strip():
            self._log_llm_response("empty", "", prompt)
            return None
        self._log_llm_response("ok", content, prompt)
        return content

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}/chat/completions"
        headers = {"Authorization": f"Bearer {self.api_key}"}
        with httpx.Client(
            timeout=self.cfg.timeout_seconds,
            trust_env=self.cfg.trust_env,
            transport=self.transport,
        ) as client:
            resp = client.post(url, headers=headers, json=payload)
            resp.raise_for_status()
            return resp.json()


def _extract_text(data: dict[str, Any]) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except Exception:  # noqa: BLE001
        return ""
    return content if isinstance(content, str) else ""
