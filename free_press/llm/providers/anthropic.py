"""Anthropic messages API provider."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ..tracing import record_span_error, set_span_output, start_span
from .base import EnrichmentProvider


logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(EnrichmentProvider):
    default_base_url = "https://api.anthropic.com"

    def generate(self, prompt: str, system_prompt: str | None = None) -> str | None:
        payload: dict[str, Any] = {
            "model": self.cfg.model,
            "max_tokens": self.cfg.max_tokens,
            "temperature": self.cfg.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system_prompt:
            payload["system"] = system_prompt
        with start_span(
            "anthropic.generate",
            kind="llm",
            input_value=prompt,
            attributes={"llm.model": self.cfg.model, "llm.provider": "anthropic"},
        ) as span:
            try:
                data = self._post(payload)
            except (httpx.HTTPError, json.JSONDecodeError) as exc:
                record_span_error(span, exc)
                logger.info("anthropic request failed: %s", exc)
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
        headers = {"x-api-key": self.api_key, "anthropic-version": ANTHROPIC_VERSION}
        with httpx.Client(
            timeout=self.cfg.timeout_seconds,
            trust_env=self.cfg.trust_env,
            transport=self.transport,
        ) as client:
            resp = client.post(f"{self.base_url}/v1/messages", headers=headers, json=payload)
            resp.raise_for_status()
            return resp.json()


def _extract_text(data: dict[str, Any]) -> str:
    """Join the text blocks of a messages API response."""
    try:
        blocks = data["content"]
        return "".join(b.get("text", "") for b in blocks if b.get("type") == "text")
    except Exception:  # noqa: BLE001
        return ""
