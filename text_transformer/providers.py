from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import httpx

from text_transformer.errors import (
    EmptyGenerationError,
    MissingCredentialError,
    TransportError,
    UpstreamError,
)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL_NAME = "gemini-2.0-flash"
DEFAULT_TIMEOUT_S = 60.0


class LLMProvider(ABC):
    """Turns one prompt into generated text, authenticated with the caller's key."""

    @abstractmethod
    def generate(self, prompt: str, api_key: str) -> str:
        raise NotImplementedError


@dataclass
class MockLLMProvider(LLMProvider):
    """Deterministic provider for tests.

    Configure a fixed response, a response factory based on prompt, or an
    error to raise. Every prompt received is recorded in `prompts`.
    """

    fixed_response: Optional[str] = None
    response_factory: Optional[Callable[[str], str]] = None
    error: Optional[Exception] = None
    prompts: list[str] = field(default_factory=list)

    def generate(self, prompt: str, api_key: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        if self.response_factory is not None:
            return self.response_factory(prompt)
        if self.fixed_response is not None:
            return self.fixed_response
        raise ValueError("MockLLMProvider requires fixed_response, response_factory or error")


def build_request_payload(prompt: str) -> dict[str, Any]:
    return {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}


def extract_generated_text(body: Any) -> str:
    """Return `candidates[0].content.parts[0].text` or raise EmptyGenerationError."""
    try:
        candidates = body["candidates"]
        parts = candidates[0]["content"]["parts"]
        text = parts[0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise EmptyGenerationError(body) from e
    if not isinstance(text, str):
        raise EmptyGenerationError(body)
    return text


def _upstream_message(response: httpx.Response) -> Optional[str]:
    try:
        data = response.json()
    except ValueError:
        return None
    error = data.get("error") if isinstance(data, dict) else None
    if not isinstance(error, dict):
        return None
    message = error.get("message")
    return str(message) if message else None


def redact(text: str, secret: str) -> str:
    return text.replace(secret, "***") if secret else text


class GeminiLLMProvider(LLMProvider):
    """Calls the Gemini `generateContent` REST endpoint.

    The API key travels as the `key` query parameter and is never stored on
    the provider. Pass `transport` to route requests through an
    `httpx.MockTransport` in tests.
    """

    def __init__(
        self,
        model_name: str = DEFAULT_MODEL_NAME,
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.model_name = model_name
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.transport = transport

    @property
    def endpoint_url(self) -> str:
        return f"{self.base_url}/models/{self.model_name}:generateContent"

    def generate(self, prompt: str, api_key: str) -> str:
        api_key = (api_key or "").strip()
        if not api_key:
            raise MissingCredentialError()

        try:
            with httpx.Client(timeout=self.timeout_s, transport=self.transport) as client:
                resp = client.post(
                    self.endpoint_url,
                    params={"key": api_key},
                    headers={"Content-Type": "application/json"},
                    json=build_request_payload(prompt),
                )
        except httpx.HTTPError as e:
            raise TransportError(redact(str(e) or type(e).__name__, api_key)) from e

        if not resp.is_success:
            raise UpstreamError(
                status_code=resp.status_code,
                reason=resp.reason_phrase,
                upstream_message=_upstream_message(resp),
            )

        try:
            body = resp.json()
        except ValueError as e:
            print("Unexpected non-JSON response from text-generation endpoint", file=sys.stderr)
            raise EmptyGenerationError(resp.text) from e

        try:
            return extract_generated_text(body)
        except EmptyGenerationError:
            print(f"Unexpected API response structure: {body!r}", file=sys.stderr)
            raise
