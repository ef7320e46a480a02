from __future__ import annotations

from types import SimpleNamespace

import httpx
import openai
import pytest

from newsreader.config import Settings
from newsreader.errors import MissingCredentialError, UpstreamError
from newsreader.models import ChatArticle, ChatMessage
from newsreader.services import language_model
from newsreader.services.language_model import (
    LanguageModel,
    build_chat_prompt,
    build_summary_prompt,
    build_translation_prompt,
    get_language_model,
)


class FakeCompletions:
    def __init__(self, outcomes: list) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        message = SimpleNamespace(content=outcome)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(outcomes: list) -> SimpleNamespace:
    return SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(outcomes)))


def _status_error(status_code: int, message: str) -> openai.APIStatusError:
    request = httpx.Request("POST", "https://generativelanguage.googleapis.com/v1beta/openai/chat/completions")
    response = httpx.Response(status_code, request=request)
    return openai.APIStatusError(message, response=response, body=None)


def test_generate_sends_prompt_and_strips_reply() -> None:
    client = _client(["  - Point one\n- Point two  "])
    model = LanguageModel(client, "gemini-2.5-flash", sleep=lambda _delay: None)

    assert model.generate("Hello") == "- Point one\n- Point two"
    assert client.chat.completions.calls == [
        {"model": "gemini-2.5-flash", "messages": [{"role": "user", "content": "Hello"}]}
    ]


def test_generate_retries_then_succeeds() -> None:
    delays: list[float] = []
    client = _client([_status_error(503, "overloaded"), "Recovered"])
    model = LanguageModel(client, "gemini-2.5-flash", sleep=delays.append)

    assert model.generate("Hello") == "Recovered"
    assert delays == [1.0]


def test_generate_maps_provider_errors_after_exhausting_attempts() -> None:
    delays: list[float] = []
    errors = [_status_error(429, f"quota {n}") for n in range(3)]
    model = LanguageModel(_client(errors), "gemini-2.5-flash", sleep=delays.append)

    with pytest.raises(UpstreamError) as excinfo:
        model.generate("Hello")

    assert excinfo.value.status_code == 429
    assert excinfo.value.message == "quota 2"
    assert delays == [1.0, 2.0, 4.0]


def test_empty_reply_becomes_empty_string() -> None:
    model = LanguageModel(_client([None]), "gemini-2.5-flash")

    assert model.generate("Hello") == ""


def test_summary_and_translation_prompts() -> None:
    summary_prompt = build_summary_prompt("Rates were held.")
    translation_prompt = build_translation_prompt("Hello", "Spanish")

    assert "3–4 bullet point summary" in summary_prompt
    assert "Article:\nRates were held." in summary_prompt
    assert translation_prompt.startswith("Translate the following text to Spanish.")
    assert translation_prompt.endswith("Hello")


def test_chat_prompt_embeds_article_and_recent_history() -> None:
    article = ChatArticle(
        title="Coral reefs recover",
        url="https://www.sciencedaily.com/releases/a.htm",
        key_points=["Reefs regrow"],
        content="x" * 5000,
    )
    history = [ChatMessage(role="user", content=f"question {n}") for n in range(12)]
    history.append(ChatMessage(role="assistant", content="Earlier answer"))

    prompt = build_chat_prompt("Why does this matter?", article, history)

    assert "Title: Coral reefs recover" in prompt
    assert "Date: N/A" in prompt
    assert "- Reefs regrow" in prompt
    assert "x" * 4000 in prompt and "x" * 4001 not in prompt
    assert "User: question 0" not in prompt
    assert "User: question 11" in prompt
    assert "Assistant: Earlier answer" in prompt
    assert prompt.index("Assistant: Earlier answer") < prompt.index('User message: "Why does this matter?"')


def test_chat_prompt_without_article_uses_placeholders() -> None:
    prompt = build_chat_prompt("Hi")

    assert "Title: Unknown" in prompt
    assert "Description: No summary provided." in prompt
    assert "Conversation so far" not in prompt


def test_get_language_model_requires_key(monkeypatch) -> None:
    monkeypatch.setattr(language_model, "_client", None)

    with pytest.raises(MissingCredentialError, match="GEMINI_API_KEY"):
        get_language_model(Settings())


def test_client_is_created_once(monkeypatch) -> None:
    created: list[dict] = []

    class FakeOpenAI:
        def __init__(self, **kwargs) -> None:
            created.append(kwargs)

    monkeypatch.setattr(language_model, "_client", None)
    monkeypatch.setattr(language_model, "OpenAI", FakeOpenAI)
    settings = Settings(gemini_api_key="key", gemini_model="gemini-pro")

    first = get_language_model(settings)
    second = get_language_model(settings)

    assert len(created) == 1
    assert created[0]["api_key"] == "key"
    assert first._client is second._client
    assert first.model == "gemini-pro"
