from __future__ import annotations

from typing import Union

from text_transformer.types import ActionMode, ParaphraseStyle, SummaryLength

_SUMMARY_CLAUSES = {
    SummaryLength.CONCISE.value: "Make the summary very concise and brief.",
    SummaryLength.DETAILED.value: "Provide a detailed and comprehensive summary.",
}
_SUMMARY_FALLBACK = "Provide a standard length summary."

_PARAPHRASE_CLAUSES = {
    ParaphraseStyle.FORMAL.value: "Use a formal tone and vocabulary.",
    ParaphraseStyle.CASUAL.value: "Use a casual and informal tone.",
}
_PARAPHRASE_FALLBACK = "Be creative and imaginative in your rephrasing."


def _option_value(option: Union[str, SummaryLength, ParaphraseStyle, None]) -> str:
    if option is None:
        return ""
    return option.value if hasattr(option, "value") else str(option)


def task_clause(mode: ActionMode, input_text: str) -> str:
    # input is embedded verbatim, no trimming or escaping
    if ActionMode(mode) == ActionMode.SUMMARIZE:
        return f'Summarize the following text: "{input_text}". '
    return f'Paraphrase the following text: "{input_text}". '


def style_clause(mode: ActionMode, option: Union[str, SummaryLength, ParaphraseStyle, None]) -> str:
    value = _option_value(option)
    if ActionMode(mode) == ActionMode.SUMMARIZE:
        return _SUMMARY_CLAUSES.get(value, _SUMMARY_FALLBACK)
    return _PARAPHRASE_CLAUSES.get(value, _PARAPHRASE_FALLBACK)


def build_prompt(
    mode: ActionMode,
    option: Union[str, SummaryLength, ParaphraseStyle, None],
    input_text: str,
) -> str:
    """Task clause with the quoted input, followed by the style clause.

    Options are matched exactly; anything unrecognised falls back to the
    standard summary / creative paraphrase clause.
    """
    return task_clause(mode, input_text) + style_clause(mode, option)


def summarize_prompt(input_text: str, length: Union[str, SummaryLength] = SummaryLength.STANDARD) -> str:
    return build_prompt(ActionMode.SUMMARIZE, length, input_text)


def paraphrase_prompt(input_text: str, style: Union[str, ParaphraseStyle] = ParaphraseStyle.FORMAL) -> str:
    return build_prompt(ActionMode.PARAPHRASE, style, input_text)
