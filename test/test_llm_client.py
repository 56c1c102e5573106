import json

import httpx
import pytest

from addy.errors import ModelError, UpstreamError
from llm.llm_client import LLMClient
from llm.provider_factory import get_provider
from llm.providers.mock_provider import MockProvider
from llm.providers.openai_provider import OpenAIProvider


def test_complete_json_parses_object(fake_provider_factory):
    provider = fake_provider_factory('{"recommendations": []}')
    client = LLMClient(provider=provider)
    assert client.complete_json(system="s", user="u") == {"recommendations": []}
    assert provider.calls[0]["json_mode"] is True


def test_llm_extra_text_around_json(fake_provider_factory):
    provider = fake_provider_factory(
        'Sure! Here is the result: {"recommendations": [{"taskName": "Call mom"}]} Thanks.'
    )
    out = LLMClient(provider=provider).complete_json(system="s", user="u")
    assert out["recommendations"][0]["taskName"] == "Call mom"


@pytest.mark.parametrize("reply", ["INVALID OUTPUT", "[1, 2, 3]", "", "{broken"])
def test_llm_unparseable_reply_raises_model_error(fake_provider_factory, reply):
    client = LLMClient(provider=fake_provider_factory(reply))
    with pytest.raises(ModelError):
        client.complete_json(system="s", user="u")


def test_provider_http_error_is_upstream_error():
    class FailingProvider:
        def generate(self, *, system, user, json_mode=False):
            request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
            response = httpx.Response(429, request=request)
            raise httpx.HTTPStatusError("rate limited", request=request, response=response)

    with pytest.raises(UpstreamError) as exc:
        LLMClient(provider=FailingProvider()).complete_json(system="s", user="u")
    assert exc.value.status_code == 429


def test_openai_provider_requests_json_mode(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    seen = []

    def handler(request):
        seen.append(json.loads(request.content))
        return httpx.Response(
            200, json={"choices": [{"message": {"content": '{"recommendations": []}'}}]}
        )

    provider = OpenAIProvider(client=httpx.Client(transport=httpx.MockTransport(handler)))
    text = provider.generate(system="sys", user="usr", json_mode=True)

    assert text == '{"recommendations": []}'
    assert seen[0]["response_format"] == {"type": "json_object"}
    assert [m["role"] for m in seen[0]["messages"]] == ["system", "user"]


def test_openai_provider_without_choices_raises_model_error(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={"choices": []})))
    with pytest.raises(ModelError):
        OpenAIProvider(client=client).generate(system="s", user="u")


def test_openai_provider_requires_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(RuntimeError):
        OpenAIProvider()


def test_get_provider_by_name():
    assert isinstance(get_provider("mock"), MockProvider)
    with pytest.raises(ValueError):
        get_provider("nope")


def test_mock_provider_reply_is_valid_json():
    text = MockProvider().generate(system="", user="What are the top 5 tasks I should work on?")
    assert "recommendations" in json.loads(text)


def test_unknown_provider_is_model_error(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "nope")
    with pytest.raises(ModelError, match="Unknown LLM_PROVIDER: nope"):
        LLMClient().complete_json(system="s", user="u")
