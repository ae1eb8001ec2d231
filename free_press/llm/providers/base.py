"""Abstract interface for LLM research providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
import logging

from ...config import LoggingConfig, ProviderConfig
from ...logging_utils import log_event, redact_text, truncate_text


class EnrichmentProvider(ABC):
    """One LLM vendor behind a plain text-in, text-out capability.

    ``generate`` returns None when the vendor fails (network or HTTP error,
    empty answer) so the caller can move on to the next provider.
    """

    default_base_url = ""

    def __init__(
        self,
        cfg: ProviderConfig,
        api_key: str | None,
        log_cfg: LoggingConfig | None = None,
        llm_logger: logging.Logger | None = None,
        transport=None,
    ):
        if not api_key:
            raise ValueError(f"Missing API key for provider {cfg.name}")
        self.cfg = cfg
        self.api_key = api_key
        self.log_cfg = log_cfg or LoggingConfig()
        self.llm_logger = llm_logger
        self.transport = transport
        self.base_url = (cfg.base_url or self.default_base_url).rstrip("/")

    @property
    def name(self) -> str:
        return self.cfg.name

    @abstractmethod
    def generate(self, prompt: str, system_prompt: str | None = None) -> str | None:
        """Return the model's text answer, or None on failure."""
        raise NotImplementedError

    def _log_llm_response(self, status: str, content: str, prompt: str) -> None:
        if self.llm_logger is None:
            return
        redaction = self.log_cfg.llm_log_redaction
        payload = {
            "event": "llm_response",
            "status": status,
            "provider": self.name,
            "model": self.cfg.model,
            "raw_response": truncate_text(redact_text(content or "", redaction)),
        }
        if self.log_cfg.llm_log_detail == "prompt_response":
            payload["raw_prompt"] = truncate_text(redact_text(prompt, redaction))
        log_event(self.llm_logger, "LLM response", **payload)
