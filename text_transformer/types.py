from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from text_transformer.errors import TextTransformerError


class SummaryLength(str, Enum):
    CONCISE = "concise"
    STANDARD = "standard"
    DETAILED = "detailed"


class ParaphraseStyle(str, Enum):
    FORMAL = "formal"
    CASUAL = "casual"
    CREATIVE = "creative"


class ActionMode(str, Enum):
    SUMMARIZE = "summarize"
    PARAPHRASE = "paraphrase"


class StatusKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    """Transient banner shown after an action."""

    text: str = ""
    kind: Optional[StatusKind] = None

    @classmethod
    def empty(cls) -> "StatusMessage":
        return cls()

    def is_empty(self) -> bool:
        return not self.text


@dataclass
class SessionState:
    """Everything the window shows. Lives in memory only, never persisted."""

    input_text: str = ""
    output_text: str = ""
    is_loading: bool = False
    status: StatusMessage = field(default_factory=StatusMessage.empty)
    summary_length: SummaryLength = SummaryLength.STANDARD
    paraphrase_style: ParaphraseStyle = ParaphraseStyle.FORMAL
    api_key: str = field(default="", repr=False)
    last_error: Optional[TextTransformerError] = None

    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())


def coerce_summary_length(value: Union[SummaryLength, str]) -> SummaryLength:
    try:
        return SummaryLength(value)
    except ValueError as e:
        raise ValueError(f"Unknown summary length: {value!r}") from e


def coerce_paraphrase_style(value: Union[ParaphraseStyle, str]) -> ParaphraseStyle:
    try:
        return ParaphraseStyle(value)
    except ValueError as e:
        raise ValueError(f"Unknown paraphrase style: {value!r}") from e
