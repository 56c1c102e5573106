from __future__ import annotations
import os
import httpx

from addy.errors import ModelError
from .base import LLMProvider

class OpenAIProvider(LLMProvider):
    name = "openai"

    def __init__(self, client: httpx.Client | None = None):
        self.api_key = os.getenv("OPENAI_API_KEY", "").strip()
        self.model = os.getenv("OPENAI_MODEL", "gpt-4-turbo-preview").strip()
        self.base_url = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").strip()
        self._client = client

        if not self.api_key:
            raise RuntimeError("OPENAI_API_KEY is missing")

    def generate(self, *, system: str, user: str, json_mode: bool = False) -> str:
        url = f"{self.base_url}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        if self._client is not None:
            r = self._client.post(url, headers=headers, json=payload)
        else:
            with httpx.Client(timeout=60.0) as client:
                r = client.post(url, headers=headers, json=payload)
        r.raise_for_status()

        try:
            data = r.json()
            return data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ModelError("Completion response carried no message content") from e
