"""LLM research providers, prompt rendering and observability."""

from .cascade import CascadeResult, ProviderCascade, build_cascade
from .json_parser import parse_json_array, parse_json_object
from .providers.base import EnrichmentProvider
from .providers.factory import available_providers, create_provider
from .tracing import flush, record_span_error, set_span_output, setup_langfuse, start_span

__all__ = [
    "EnrichmentProvider",
    "ProviderCascade",
    "CascadeResult",
    "build_cascade",
    "create_provider",
    "available_providers",
    "parse_json_object",
    "parse_json_array",
    "setup_langfuse",
    "flush",
    "start_span",
    "set_span_output",
    "record_span_error",
]
