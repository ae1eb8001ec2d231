"""Google Gemini provider using the generateContent REST API."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ..tracing import record_span_error, set_span_output, start_span
from .base import EnrichmentProvider


logger = logging.getLogger(__name__)


class GeminiProvider(EnrichmentProvider):
    default_base_url = "https://generativelanguage.googleapis.com"

    def generate(self, prompt: str, system_prompt: str | None = None) -> str | None:
        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.cfg.temperature,
                "maxOutputTokens": self.cfg.max_tokens,
            },
        }
        if system_prompt:
            payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        with start_span(
            "gemini.generate",
            kind="llm",
            input_value=prompt,
            attributes={"llm.model": self.cfg.model, "llm.provider": "gemini"},
        ) as span:
            try:
                data = self._post(payload)
            except (httpx.HTTPError, json.JSONDecodeError) as exc:
                record_span_error(span, exc)
                logger.info("gemini request failed: %s", exc)
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
        url = f"{self.base_url}/v1beta/models/{self.cfg.model}:generateContent"
        params = {"key": self.api_key}
        with httpx.Client(
            timeout=self.cfg.timeout_seconds,
            trust_env=self.cfg.trust_env,
            transport=self.transport,
        ) as client:
            resp = client.post(url, params=params, json=payload)
            resp.raise_for_status()
            return resp.json()


def _extract_text(data: dict[str, Any]) -> str:
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"]
    except Exception:  # noqa: BLE001
        return ""
