import json
import logging
from typing import Any, Optional

import httpx

from addy.errors import ModelError, UpstreamError
from llm.provider_factory import get_provider
from llm.providers.base import LLMProvider

logger = logging.getLogger(__name__)


def _extract_json_object(text: str) -> Optional[dict]:
    """Parse `text` as a JSON object, tolerating chatter around the braces."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError):
        start = text.find("{") if isinstance(text, str) else -1
        end = text.rfind("}") if isinstance(text, str) else -1
        if start == -1 or end <= start:
            return None
        try:
            data = json.loads(text[start:end + 1])
        except ValueError:
            return None
    return data if isinstance(data, dict) else None


class LLMClient:
    """Thin wrapper that turns provider text into decoded JSON objects."""

    def __init__(self, provider: Optional[LLMProvider] = None):
        self._provider = provider

    @property
    def provider(self) -> LLMProvider:
        # resolved lazily so a missing API key only fails on first use
        if self._provider is None:
            try:
                self._provider = get_provider()
            except (RuntimeError, ValueError) as e:
                raise ModelError(f"Completion provider unavailable: {e}") from e
        return self._provider

    @property
    def provider_name(self) -> str:
        return getattr(self.provider, "name", type(self.provider).__name__)

    def complete_json(self, *, system: str, user: str) -> dict[str, Any]:
        try:
            text = self.provider.generate(system=system, user=user, json_mode=True)
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                f"Completion API responded with status: {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Completion API request failed: {e}") from e

        data = _extract_json_object(text)
        if data is None:
            logger.warning(f"Unparseable model reply: {str(text)[:200]!r}")
            raise ModelError("Model reply is not a JSON object")
        return data
