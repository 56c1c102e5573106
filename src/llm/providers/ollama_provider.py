from __future__ import annotations
import os
import httpx

from addy.errors import ModelError
from .base import LLMProvider

class OllamaProvider(LLMProvider):
    name = "ollama"

    def __init__(self, client: httpx.Client | None = None):
        self.model = os.getenv("OLLAMA_MODEL", "llama3.1").strip()
        self.base_url = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434").strip()
        self._client = client

    def generate(self, *, system: str, user: str, json_mode: bool = False) -> str:
        url = f"{self.base_url}/api/chat"
        payload = {
            "model": self.model,
            "stream": False,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "options": {"temperature": 0.2},
        }
        if json_mode:
            payload["format"] = "json"

        if self._client is not None:
            r = self._client.post(url, json=payload)
        else:
            with httpx.Client(timeout=120.0) as client:
                r = client.post(url, json=payload)
        r.raise_for_status()

        try:
            data = r.json()
            return data["message"]["content"]
        except (ValueError, KeyError, TypeError) as e:
            raise ModelError("Ollama response carried no message content") from e
