"""
Controller <-> GeminiLLMProvider over an httpx.MockTransport endpoint.
"""

import json

import httpx
import pytest

from text_transformer.controller import InteractionController, ManualScheduler
from text_transformer.errors import EmptyGenerationError, MissingCredentialError, TransportError, UpstreamError
from text_transformer.providers import GeminiLLMProvider
from text_transformer.types import StatusKind


class Endpoint:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


def _controller(endpoint):
    provider = GeminiLLMProvider(transport=httpx.MockTransport(endpoint))
    c = InteractionController(provider=provider, scheduler=ManualScheduler())
    c.set_input_text("The quick brown fox jumps over the lazy dog.")
    c.set_api_key("test-key")
    return c


def test_success_round_trip():
    endpoint = Endpoint(
        httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "Hello"}]}}]})
    )
    c = _controller(endpoint)

    c.summarize()

    assert c.state.output_text == "Hello"
    assert c.state.status.kind == StatusKind.SUCCESS
    assert c.state.is_loading is False

    sent = json.loads(endpoint.requests[0].content)
    assert sent["contents"][0]["role"] == "user"
    assert sent["contents"][0]["parts"][0]["text"] == (
        'Summarize the following text: "The quick brown fox jumps over the lazy dog.". '
        "Provide a standard length summary."
    )


def test_quota_error_is_upstream_error():
    c = _controller(Endpoint(httpx.Response(429, json={"error": {"message": "quota exceeded"}})))

    c.paraphrase()

    assert isinstance(c.state.last_error, UpstreamError)
    assert c.state.last_error.status_code == 429
    assert "quota exceeded" in c.state.status.text
    assert c.state.status.kind == StatusKind.ERROR
    assert c.state.is_loading is False


def test_empty_candidates_is_empty_generation_not_upstream_error():
    c = _controller(Endpoint(httpx.Response(200, json={"candidates": []})))

    c.summarize()

    assert isinstance(c.state.last_error, EmptyGenerationError)
    assert not isinstance(c.state.last_error, UpstreamError)
    assert c.state.status.text == "No content generated. Please try again."
    assert c.state.output_text == ""


def test_network_failure_is_transport_error():
    c = _controller(Endpoint(error=httpx.ConnectError("connection refused")))

    c.summarize()

    assert isinstance(c.state.last_error, TransportError)
    assert c.state.status.text == "Error: connection refused"
    assert c.state.is_loading is False


@pytest.mark.parametrize("key", ["", "   "])
def test_missing_key_never_reaches_endpoint(key):
    endpoint = Endpoint(httpx.Response(200, json={}))
    c = _controller(endpoint)
    c.set_api_key(key)

    c.summarize()

    assert endpoint.requests == []
    assert isinstance(c.state.last_error, MissingCredentialError)


def test_blank_input_never_reaches_endpoint():
    endpoint = Endpoint(httpx.Response(200, json={}))
    c = _controller(endpoint)
    c.set_input_text("   ")

    c.paraphrase()

    assert endpoint.requests == []
    assert c.state.status.text == "Please enter text to paraphrase."
