"""
SEO assistant backed by the Anthropic Messages API.

Credentials come from the environment first, then from the local store.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import anthropic

from config import LLM, LLM_MODELS
from prompts import (
    CONTENT_BRIEF_SYSTEM,
    KEYWORD_RESEARCH_SYSTEM,
    META_DESCRIPTION_SYSTEM,
    SEO_CONSULTANT_SYSTEM,
    get_content_brief_prompt,
    get_keyword_difficulty_prompt,
    get_meta_description_prompt,
    get_suggestions_prompt,
)

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """An assistant request failed."""


class LLMConfigError(LLMError):
    """No API key was found in the environment or the store."""


@dataclass(frozen=True)
class LLMConfig:
    api_key: str
    model: str
    base_url: Optional[str] = None


def is_known_model(model_id: str) -> bool:
    return any(model["id"] == model_id for model in LLM_MODELS)


def _checked(config: LLMConfig) -> LLMConfig:
    if not is_known_model(config.model):
        logger.warning("Model %s is not in the supported model list; using it as configured", config.model)
    return config


def resolve_config(store=None) -> LLMConfig:
    api_key = os.environ.get(LLM["env_api_key"])
    if api_key:
        return _checked(LLMConfig(
            api_key=api_key,
            model=os.environ.get(LLM["env_model"]) or LLM["default_model"],
            base_url=os.environ.get(LLM["env_base_url"]) or None,
        ))

    if store is not None:
        stored = store.get_credentials().get("anthropic") or {}
        if isinstance(stored, dict) and stored.get("apiKey"):
            return _checked(LLMConfig(
                api_key=stored["apiKey"],
                model=stored.get("model") or LLM["default_model"],
                base_url=stored.get("baseUrl") or None,
            ))

    raise LLMConfigError("Anthropic API key not found in environment variables or storage")


def make_client(config: LLMConfig) -> anthropic.Anthropic:
    if config.base_url:
        return anthropic.Anthropic(api_key=config.api_key, base_url=config.base_url)
    return anthropic.Anthropic(api_key=config.api_key)


class SeoAssistant:
    def __init__(self, config: LLMConfig, client=None):
        self.config = config
        self.client = client if client is not None else make_client(config)

    @classmethod
    def from_store(cls, store=None, client=None) -> "SeoAssistant":
        return cls(resolve_config(store), client=client)

    def _call(self, system: str, prompt: str, max_tokens: int) -> str:
        try:
            message = self.client.messages.create(
                model=self.config.model,
                max_tokens=max_tokens,
                temperature=LLM["temperature"],
                system=system,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            logger.error("Anthropic request failed: %s", e)
            raise LLMError(f"Anthropic API error: {e}") from e
        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        return text.strip()

    def generate_seo_suggestions(self, url: str, content: str) -> str:
        return self._call(
            SEO_CONSULTANT_SYSTEM,
            get_suggestions_prompt(url, content),
            LLM["max_tokens"]["suggestions"],
        )

    def generate_meta_description(self, title: str, content: str) -> str:
        text = self._call(
            META_DESCRIPTION_SYSTEM,
            get_meta_description_prompt(title, content),
            LLM["max_tokens"]["meta_description"],
        )
        return text.strip('"')

    def analyze_keyword_difficulty(self, keyword: str, competitors: list[str]) -> str:
        return self._call(
            KEYWORD_RESEARCH_SYSTEM,
            get_keyword_difficulty_prompt(keyword, competitors),
            LLM["max_tokens"]["keyword_difficulty"],
        )

    def generate_content_brief(self, keyword: str, target_audience: str) -> str:
        return self._call(
            CONTENT_BRIEF_SYSTEM,
            get_content_brief_prompt(keyword, target_audience),
            LLM["max_tokens"]["content_brief"],
        )
