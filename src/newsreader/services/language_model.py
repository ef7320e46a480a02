"""Text generation helpers backed by Google Gemini.

Gemini is reached through its OpenAI-compatible endpoint, so the ``openai``
client is used for transport.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Sequence

import openai
from openai import OpenAI

from newsreader.config import Settings
from newsreader.errors import MissingCredentialError, UpstreamError
from newsreader.models import ChatArticle, ChatMessage
from newsreader.services.retry import DEFAULT_MAX_ATTEMPTS, call_with_retry

__all__ = [
    "LanguageModel",
    "build_chat_prompt",
    "build_summary_prompt",
    "build_translation_prompt",
    "get_language_model",
]

logger = logging.getLogger(__name__)

MAX_CONTEXT_CHARS = 4000
MAX_HISTORY_MESSAGES = 10

_client: OpenAI | None = None


def _get_client(settings: Settings) -> OpenAI:
    """Return the process-wide client, creating it on first use."""

    if not settings.gemini_api_key:
        raise MissingCredentialError("GEMINI_API_KEY")

    global _client
    if _client is None:
        _client = OpenAI(api_key=settings.gemini_api_key, base_url=settings.gemini_base_url)
    return _client


def build_summary_prompt(content: str) -> str:
    return "\n".join(
        [
            "You are a professional news summarizer.",
            "Provide a concise 3–4 bullet point summary of the following news article, "
            "highlighting the key facts, main developments, and implications.",
            "Keep each point clear and factual.",
            "",
            f"Article:\n{content}",
            "",
            'Return the result as 3–4 lines, each starting with a bullet like "- ".',
        ]
    )


def build_translation_prompt(content: str, target_language: str) -> str:
    return (
        f"Translate the following text to {target_language}.\n"
        "Maintain the original meaning, tone, and formatting.\n"
        "Provide only the translation without any additional explanation.\n\n"
        f"{content}"
    )


def build_chat_prompt(
    message: str,
    article: ChatArticle | None = None,
    history: Sequence[ChatMessage] = (),
) -> str:
    """Compose the chat prompt from the article context, earlier turns and ``message``.

    Only the last :data:`MAX_HISTORY_MESSAGES` turns are included and article
    body text is cut at :data:`MAX_CONTEXT_CHARS` characters.
    """

    article = article or ChatArticle()
    lines: List[str] = [
        "You are an AI news assistant. The user is chatting about the following article:",
        "",
        f"Title: {article.title or 'Unknown'}",
        f"URL: {article.url or 'N/A'}",
        f"Date: {article.date or 'N/A'}",
        f"Description: {article.description or 'No summary provided.'}",
    ]
    if article.summary:
        lines.append(f"Summary:\n{article.summary}")
    if article.key_points:
        lines.append("Key points:")
        lines.extend(f"- {point}" for point in article.key_points)
    if article.content:
        lines.append(f"Content:\n{article.content[:MAX_CONTEXT_CHARS]}")

    recent = list(history)[-MAX_HISTORY_MESSAGES:]
    if recent:
        lines.extend(["", "Conversation so far:"])
        for turn in recent:
            speaker = "User" if turn.role == "user" else "Assistant"
            lines.append(f"{speaker}: {turn.content}")

    lines.extend(
        [
            "",
            f'User message: "{message}"',
            "",
            "Respond naturally and informatively based on the article context.",
            "If the message is unrelated to the article, respond helpfully but stay concise.",
            "Do not fabricate scientific facts; only generalize responsibly.",
        ]
    )
    return "\n".join(lines)


class LanguageModel:
    """Single-prompt text generation with retry."""

    def __init__(
        self,
        client: OpenAI,
        model: str,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._client = client
        self.model = model
        self.max_attempts = max_attempts
        self._sleep = sleep

    def generate(self, prompt: str) -> str:
        """Return the model's reply to ``prompt``, retrying failed calls."""

        return call_with_retry(lambda: self._complete(prompt), self.max_attempts, sleep=self._sleep)

    def summarize(self, content: str) -> str:
        return self.generate(build_summary_prompt(content))

    def translate(self, content: str, target_language: str) -> str:
        return self.generate(build_translation_prompt(content, target_language))

    def chat(
        self,
        message: str,
        article: ChatArticle | None = None,
        history: Sequence[ChatMessage] = (),
    ) -> str:
        return self.generate(build_chat_prompt(message, article, history))

    def _complete(self, prompt: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.APIStatusError as exc:
            raise UpstreamError(exc.message, status_code=exc.status_code) from exc
        except openai.OpenAIError as exc:
            raise UpstreamError(str(exc)) from exc

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()


def get_language_model(settings: Settings) -> LanguageModel:
    """Return a :class:`LanguageModel` bound to the shared client."""

    return LanguageModel(_get_client(settings), settings.gemini_model)
