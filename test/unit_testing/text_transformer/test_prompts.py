import pytest

from text_transformer.prompts import (
    build_prompt,
    paraphrase_prompt,
    style_clause,
    summarize_prompt,
    task_clause,
)
from text_transformer.types import ActionMode, ParaphraseStyle, SummaryLength


@pytest.mark.parametrize(
    "option, clause",
    [
        (SummaryLength.CONCISE, "Make the summary very concise and brief."),
        (SummaryLength.STANDARD, "Provide a standard length summary."),
        (SummaryLength.DETAILED, "Provide a detailed and comprehensive summary."),
        ("something-else", "Provide a standard length summary."),
        (None, "Provide a standard length summary."),
    ],
)
def test_summary_style_clauses(option, clause):
    assert build_prompt(ActionMode.SUMMARIZE, option, "abc") == (
        f'Summarize the following text: "abc". {clause}'
    )


@pytest.mark.parametrize(
    "option, clause",
    [
        (ParaphraseStyle.FORMAL, "Use a formal tone and vocabulary."),
        (ParaphraseStyle.CASUAL, "Use a casual and informal tone."),
        (ParaphraseStyle.CREATIVE, "Be creative and imaginative in your rephrasing."),
        ("FORMAL", "Be creative and imaginative in your rephrasing."),
    ],
)
def test_paraphrase_style_clauses(option, clause):
    assert build_prompt(ActionMode.PARAPHRASE, option, "abc") == (
        f'Paraphrase the following text: "abc". {clause}'
    )


def test_string_mode_and_option_are_accepted():
    assert build_prompt("summarize", "concise", "x") == summarize_prompt("x", SummaryLength.CONCISE)
    assert build_prompt("paraphrase", "casual", "x") == paraphrase_prompt("x", ParaphraseStyle.CASUAL)


def test_input_is_embedded_verbatim():
    text = '  He said "hi"\nand left.  '
    prompt = summarize_prompt(text)
    assert prompt.startswith(f'Summarize the following text: "{text}". ')


def test_prompt_is_deterministic():
    assert paraphrase_prompt("same", "formal") == paraphrase_prompt("same", "formal")


def test_changing_option_only_changes_style_clause():
    task = task_clause(ActionMode.SUMMARIZE, "some text")
    prompts = [summarize_prompt("some text", option) for option in SummaryLength]

    for option, prompt in zip(SummaryLength, prompts):
        assert prompt.startswith(task)
        assert prompt[len(task):] == style_clause(ActionMode.SUMMARIZE, option)
    assert len(set(prompts)) == len(prompts)


def test_defaults_match_default_options():
    assert summarize_prompt("t").endswith("Provide a standard length summary.")
    assert paraphrase_prompt("t").endswith("Use a formal tone and vocabulary.")
