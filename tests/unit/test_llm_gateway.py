import pytest

from config import LlmRoute
from llm_gateway import DEFAULT_TEXT, LlmGatewayError, generate


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text="", bad_json=False):
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self._bad_json = bad_json

    def json(self):
        if self._bad_json:
            raise ValueError("not json")
        return self._payload


class FakeClient:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, *, json, headers, timeout):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def _route() -> LlmRoute:
    return LlmRoute(
        name="test",
        base_url="http://example.com",
        model="test-model",
        timeout_s=1.0,
        api_key_env="ZONE_TEST_KEY",
    )


def _reply(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_generate_posts_prompt_and_returns_text(monkeypatch):
    monkeypatch.setenv("ZONE_TEST_KEY", "secret")
    client = FakeClient(FakeResponse(payload=_reply("Hello there")))
    assert generate("Say hi", cfg=_route(), client=client) == "Hello there"

    call = client.calls[0]
    assert call["url"] == "http://example.com/v1beta/models/test-model:generateContent"
    assert call["json"] == {"contents": [{"parts": [{"text": "Say hi"}]}]}
    assert call["headers"]["x-goog-api-key"] == "secret"
    assert call["timeout"] == 1.0


def test_generate_uses_model_override():
    client = FakeClient(FakeResponse(payload=_reply("ok")))
    generate("hi", cfg=_route(), model="other-model", client=client)
    assert client.calls[0]["url"].endswith("/models/other-model:generateContent")


def test_missing_candidate_text_uses_default():
    client = FakeClient(FakeResponse(payload={"candidates": []}))
    assert generate("hi", cfg=_route(), client=client) == DEFAULT_TEXT


def test_error_status_raises_with_details():
    client = FakeClient(FakeResponse(status_code=503, text="overloaded"))
    with pytest.raises(LlmGatewayError) as excinfo:
        generate("hi", cfg=_route(), client=client)
    assert excinfo.value.status_code == 503
    assert excinfo.value.details == "overloaded"


def test_transport_failure_raises_gateway_error():
    client = FakeClient(error=ConnectionError("down"))
    with pytest.raises(LlmGatewayError) as excinfo:
        generate("hi", cfg=_route(), client=client)
    assert excinfo.value.status_code is None


def test_non_json_payload_raises():
    client = FakeClient(FakeResponse(bad_json=True))
    with pytest.raises(LlmGatewayError):
        generate("hi", cfg=_route(), client=client)
