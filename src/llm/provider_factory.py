from __future__ import annotations
import os

from llm.providers.base import LLMProvider


def get_provider(name: str | None = None) -> LLMProvider:
    """Build the provider named by LLM_PROVIDER (openai, ollama or mock)."""
    name = (name or os.getenv("LLM_PROVIDER", "openai")).strip().lower()

    if name == "openai":
        from llm.providers.openai_provider import OpenAIProvider
        return OpenAIProvider()
    if name == "ollama":
        from llm.providers.ollama_provider import OllamaProvider
        return OllamaProvider()
    if name == "mock":
        from llm.providers.mock_provider import MockProvider
        return MockProvider()

    raise ValueError(f"Unknown LLM_PROVIDER: {name}")
