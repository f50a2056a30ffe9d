from __future__ import annotations

from typing import Any, Optional


class TextTransformerError(Exception):
    """Base error. `str(err)` is the short text shown in the status banner."""


class MissingCredentialError(TextTransformerError):
    def __init__(self, message: str = "Please enter your Gemini API key."):
        super().__init__(message)


class EmptyInputError(TextTransformerError):
    def __init__(self, message: str = "Please enter text."):
        super().__init__(message)


class UpstreamError(TextTransformerError):
    """Non-2xx answer from the text-generation endpoint."""

    def __init__(self, status_code: int, reason: str = "", upstream_message: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        self.upstream_message = upstream_message
        detail = upstream_message or "Unknown error"
        head = f"{status_code} {reason}".strip()
        super().__init__(f"Error: API error: {head} - {detail}")


class EmptyGenerationError(TextTransformerError):
    """2xx answer without a usable candidate text."""

    def __init__(self, body: Any = None, message: str = "No content generated. Please try again."):
        self.body = body
        super().__init__(message)


class TransportError(TextTransformerError):
    """Network-level failure before any HTTP response was received."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Error: {detail}")


class ClipboardError(TextTransformerError):
    def __init__(self, message: str = "Failed to copy text. Please copy manually."):
        super().__init__(message)
