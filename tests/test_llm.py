import logging
from types import SimpleNamespace

import anthropic
import httpx
import pytest

from llm import LLMConfig, LLMConfigError, LLMError, SeoAssistant, is_known_model, resolve_config


class FakeMessages:
    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=[
            SimpleNamespace(type="text", text=self.text),
        ])


class FakeClient:
    def __init__(self, text="", error=None):
        self.messages = FakeMessages(text, error)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("ANTHROPIC_API_KEY", "ANTHROPIC_MODEL", "ANTHROPIC_BASE_URL"):
        monkeypatch.delenv(name, raising=False)


def test_config_from_environment(monkeypatch, store):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "env-key")
    monkeypatch.setenv("ANTHROPIC_MODEL", "claude-3-5-haiku-20241022")
    store.save_credentials({"anthropic": {"apiKey": "stored-key"}})
    config = resolve_config(store)
    assert config == LLMConfig(api_key="env-key", model="claude-3-5-haiku-20241022", base_url=None)


def test_config_from_store(store):
    store.save_credentials({"anthropic": {"apiKey": "stored-key", "model": "", "baseUrl": "http://proxy"}})
    config = resolve_config(store)
    assert config.api_key == "stored-key"
    assert config.model == "claude-sonnet-4-5-20250929"
    assert config.base_url == "http://proxy"


def test_config_missing(store):
    with pytest.raises(LLMConfigError):
        resolve_config(store)
    with pytest.raises(LLMConfigError):
        resolve_config(None)


def test_suggestions_request_shape():
    client = FakeClient(text="  1. Add an H1.  ")
    assistant = SeoAssistant(LLMConfig(api_key="k", model="m"), client=client)
    assert assistant.generate_seo_suggestions("https://example.com", "Body text") == "1. Add an H1."
    [call] = client.messages.calls
    assert call["model"] == "m"
    assert call["max_tokens"] == 800
    assert "SEO consultant" in call["system"]
    assert "https://example.com" in call["messages"][0]["content"]


def test_meta_description_strips_quotes():
    client = FakeClient(text='"Compare the best SEO tools of the year."')
    assistant = SeoAssistant(LLMConfig(api_key="k", model="m"), client=client)
    assert assistant.generate_meta_description("SEO tools", "...") == "Compare the best SEO tools of the year."


def test_keyword_difficulty_lists_competitors():
    client = FakeClient(text="Medium difficulty.")
    assistant = SeoAssistant(LLMConfig(api_key="k", model="m"), client=client)
    assistant.analyze_keyword_difficulty("seo tools", ["a.com", "b.com"])
    assert "a.com, b.com" in client.messages.calls[0]["messages"][0]["content"]
    assert client.messages.calls[0]["max_tokens"] == 500


def test_from_store_uses_stored_key(store):
    store.save_credentials({"anthropic": {"apiKey": "stored-key", "model": "m"}})
    client = FakeClient(text="ok")
    assistant = SeoAssistant.from_store(store, client=client)
    assert assistant.config.api_key == "stored-key"
    assert assistant.analyze_keyword_difficulty("seo", []) == "ok"


def test_sdk_errors_are_wrapped():
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    client = FakeClient(error=anthropic.APIConnectionError(request=request))
    assistant = SeoAssistant(LLMConfig(api_key="k", model="m"), client=client)
    with pytest.raises(LLMError, match="Anthropic API error"):
        assistant.generate_seo_suggestions("https://example.com", "Body")


def test_meta_description_prompt_shape():
    client = FakeClient(text="Short summary.")
    assistant = SeoAssistant(LLMConfig(api_key="k", model="m"), client=client)
    assistant.generate_meta_description("SEO tools", "Body text")
    [call] = client.messages.calls
    assert call["max_tokens"] == 200
    assert call["messages"][0]["content"].endswith("Title: SEO tools\nContent: Body text")


def test_content_brief_request_shape():
    client = FakeClient(text="  ## Outline\n- Intro  ")
    assistant = SeoAssistant(LLMConfig(api_key="k", model="m"), client=client)
    assert assistant.generate_content_brief("rank tracking", "small business owners") == "## Outline\n- Intro"
    [call] = client.messages.calls
    assert call["max_tokens"] == 1000
    assert "content strategist" in call["system"]
    prompt = call["messages"][0]["content"]
    assert '"rank tracking"' in prompt
    assert "for small business owners." in prompt


def test_known_models():
    assert is_known_model("claude-sonnet-4-5-20250929")
    assert not is_known_model("gpt-4")


def test_unknown_model_is_kept_with_warning(store, caplog):
    store.save_credentials({"anthropic": {"apiKey": "stored-key", "model": "gpt-4"}})
    with caplog.at_level(logging.WARNING, logger="llm"):
        config = resolve_config(store)
    assert config.model == "gpt-4"
    assert "gpt-4" in caplog.text


def test_known_model_logs_nothing(monkeypatch, caplog):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "env-key")
    with caplog.at_level(logging.WARNING, logger="llm"):
        resolve_config()
    assert caplog.records == []
