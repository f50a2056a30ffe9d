"""Summarize / paraphrase text through a remote text-generation endpoint.

- `types`: option enums, status banner and session state.
- `prompts`: prompt construction from input text + selected option.
- `providers`: provider bridge (Gemini over httpx, deterministic mock).
- `controller`: session state transitions, status timer, request lifecycle.
"""

from .types import (
    ActionMode,
    ParaphraseStyle,
    SessionState,
    StatusKind,
    StatusMessage,
    SummaryLength,
)
from .errors import (
    ClipboardError,
    EmptyGenerationError,
    EmptyInputError,
    MissingCredentialError,
    TextTransformerError,
    TransportError,
    UpstreamError,
)
from .prompts import build_prompt, paraphrase_prompt, summarize_prompt
from .providers import GeminiLLMProvider, LLMProvider, MockLLMProvider
from .controller import InteractionController, ManualScheduler, run_inline

__all__ = [
    "ActionMode",
    "ParaphraseStyle",
    "SessionState",
    "StatusKind",
    "StatusMessage",
    "SummaryLength",
    "ClipboardError",
    "EmptyGenerationError",
    "EmptyInputError",
    "MissingCredentialError",
    "TextTransformerError",
    "TransportError",
    "UpstreamError",
    "build_prompt",
    "paraphrase_prompt",
    "summarize_prompt",
    "GeminiLLMProvider",
    "LLMProvider",
    "MockLLMProvider",
    "InteractionController",
    "ManualScheduler",
    "run_inline",
]
