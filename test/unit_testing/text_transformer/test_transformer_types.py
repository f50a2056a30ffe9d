import pytest

from text_transformer.errors import MissingCredentialError, UpstreamError
from text_transformer.types import (
    ParaphraseStyle,
    SessionState,
    StatusKind,
    StatusMessage,
    SummaryLength,
    coerce_paraphrase_style,
    coerce_summary_length,
)


def test_session_state_defaults():
    state = SessionState()
    assert state.input_text == ""
    assert state.output_text == ""
    assert state.is_loading is False
    assert state.status.is_empty()
    assert state.summary_length == SummaryLength.STANDARD
    assert state.paraphrase_style == ParaphraseStyle.FORMAL
    assert state.api_key == ""
    assert state.last_error is None


def test_session_state_repr_never_contains_api_key():
    state = SessionState(api_key="AIzaSy-secret")
    assert "AIzaSy-secret" not in repr(state)


@pytest.mark.parametrize("key, expected", [("", False), ("   ", False), ("k", True), ("  k  ", True)])
def test_has_api_key_trims(key, expected):
    assert SessionState(api_key=key).has_api_key() is expected


def test_status_message_empty_and_kind():
    assert StatusMessage.empty().is_empty()
    msg = StatusMessage("done", StatusKind.SUCCESS)
    assert not msg.is_empty()
    assert msg.kind == StatusKind.SUCCESS


def test_coerce_options_accept_enum_and_string():
    assert coerce_summary_length("concise") == SummaryLength.CONCISE
    assert coerce_summary_length(SummaryLength.DETAILED) == SummaryLength.DETAILED
    assert coerce_paraphrase_style("casual") == ParaphraseStyle.CASUAL


@pytest.mark.parametrize("fn", [coerce_summary_length, coerce_paraphrase_style])
def test_coerce_options_reject_unknown_values(fn):
    with pytest.raises(ValueError, match="Unknown"):
        fn("loud")


def test_error_messages_are_user_facing():
    assert str(MissingCredentialError()) == "Please enter your Gemini API key."
    err = UpstreamError(status_code=429, reason="Too Many Requests", upstream_message="quota exceeded")
    assert str(err) == "Error: API error: 429 Too Many Requests - quota exceeded"
    assert "Unknown error" in str(UpstreamError(status_code=500, reason="Internal Server Error"))
