"""Tests for the provider cascade and tolerant JSON parsing."""

from __future__ import annotations

from free_press.config import AppConfig, EnrichmentConfig, ProviderConfig
from free_press.llm.cascade import ProviderCascade, build_cascade
from free_press.llm.json_parser import parse_json_array, parse_json_object
from free_press.llm.providers.base import EnrichmentProvider


class FakeProvider(EnrichmentProvider):
    def __init__(self, name: str, answer=None, error: Exception | None = None):
        super().__init__(ProviderConfig(name=name, model="fake"), api_key="k")
        self.answer = answer
        self.error = error
        self.calls = 0

    def generate(self, prompt, system_prompt=None):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.answer


def test_cascade_returns_first_answer():
    first = FakeProvider("openai", None)
    second = FakeProvider("anthropic", "  ")
    third = FakeProvider("gemini", '{"ok": 1}')
    fourth = FakeProvider("groq", "never asked")

    result = ProviderCascade([first, second, third, fourth]).generate("prompt")

    assert result.text == '{"ok": 1}'
    assert result.provider == "gemini"
    assert fourth.calls == 0


def test_cascade_skips_raising_provider():
    result = ProviderCascade([FakeProvider("openai", error=RuntimeError("boom")), FakeProvider("xai", "hi")]).generate(
        "prompt"
    )
    assert result.provider == "xai"


def test_cascade_returns_none_when_all_fail():
    cascade = ProviderCascade([FakeProvider("openai"), FakeProvider("xai", "")])
    assert cascade.generate("prompt") is None


def test_empty_cascade_is_falsy():
    assert not ProviderCascade([])
    assert ProviderCascade([]).generate("prompt") is None


def test_build_cascade_skips_providers_without_keys(monkeypatch):
    for env in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GOOGLE_API_KEY"):
        monkeypatch.delenv(env, raising=False)
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ak")
    cfg = AppConfig(
        enrichment=EnrichmentConfig(
            providers=[
                ProviderConfig(name="openai", model="gpt-4o-mini"),
                ProviderConfig(name="anthropic", model="claude"),
                ProviderConfig(name="gemini", model="gemini-2.0-flash", api_key="inline"),
            ]
        )
    )
    assert build_cascade(cfg).names == ["anthropic", "gemini"]


def test_parse_json_object_variants():
    assert parse_json_object('{"a": 1}') == {"a": 1}
    assert parse_json_object('```json\n{"a": 2}\n```') == {"a": 2}
    assert parse_json_object('Here you go: {"a": 3} Hope that helps.') == {"a": 3}
    assert parse_json_object("[1, 2]") is None
    assert parse_json_object("no json here") is None
    assert parse_json_object("") is None
    assert parse_json_object(None) is None


def test_parse_json_array_variants():
    assert parse_json_array('[{"name": "Vox"}]') == [{"name": "Vox"}]
    assert parse_json_array('```\n[1, 2]\n```') == [1, 2]
    assert parse_json_array('Results:\n[{"name": "Axios"}]\n') == [{"name": "Axios"}]
    assert parse_json_array('{"outlets": [{"name": "Vox"}]}') == [{"name": "Vox"}]
    assert parse_json_array('{"a": [1], "b": [2]}') is None
    assert parse_json_array("nothing") is None
