"""Runtime configuration for the News Reader service."""

from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, Field

__all__ = [
    "Settings",
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_GEMINI_BASE_URL",
    "DEFAULT_CACHE_TTL_SECONDS",
]

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_CACHE_TTL_SECONDS = 900


def _optional(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(name, "").strip()
    return value or None


def _integer(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from exc


class Settings(BaseModel):
    """Upstream credentials and tunables, read from the process environment."""

    news_api_key: str | None = Field(default=None, description="NewsAPI.org key")
    newsdata_api_key: str | None = Field(default=None, description="NewsData.io key")
    gemini_api_key: str | None = Field(default=None, description="Google Gemini key")
    gemini_model: str = Field(default=DEFAULT_GEMINI_MODEL)
    gemini_base_url: str = Field(
        default=DEFAULT_GEMINI_BASE_URL,
        description="OpenAI-compatible endpoint serving the Gemini models",
    )
    cache_ttl_seconds: int = Field(
        default=DEFAULT_CACHE_TTL_SECONDS,
        description="Lifetime of cached listing and scrape responses. Zero disables caching.",
    )
    log_level: str = Field(default="INFO")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from ``environ`` (defaults to :data:`os.environ`).

        Missing API keys are not an error here; the routes that need them
        answer with a 500 instead.
        """

        env = os.environ if environ is None else environ
        return cls(
            news_api_key=_optional(env, "NEWS_API_KEY"),
            newsdata_api_key=_optional(env, "NEWSDATA_API_KEY"),
            gemini_api_key=_optional(env, "GEMINI_API_KEY"),
            gemini_model=_optional(env, "GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
            gemini_base_url=_optional(env, "GEMINI_BASE_URL") or DEFAULT_GEMINI_BASE_URL,
            cache_ttl_seconds=_integer(env, "NEWS_CACHE_TTL", DEFAULT_CACHE_TTL_SECONDS),
            log_level=(_optional(env, "LOG_LEVEL") or "INFO").upper(),
        )

    def configured_providers(self) -> dict[str, bool]:
        """Return which upstream providers have credentials configured."""

        return {
            "newsapi": bool(self.news_api_key),
            "newsdata": bool(self.newsdata_api_key),
            "gemini": bool(self.gemini_api_key),
        }
