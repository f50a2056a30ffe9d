from __future__ import annotations

import sys
import traceback
from typing import Any, Callable, Optional, Union

from text_transformer.errors import (
    ClipboardError,
    EmptyInputError,
    MissingCredentialError,
    TextTransformerError,
    TransportError,
)
from text_transformer.prompts import build_prompt
from text_transformer.providers import LLMProvider, redact
from text_transformer.types import (
    ActionMode,
    ParaphraseStyle,
    SessionState,
    StatusKind,
    StatusMessage,
    SummaryLength,
    coerce_paraphrase_style,
    coerce_summary_length,
)

STATUS_WINDOW_MS = 3000

SUCCESS_TEXT = "Operation successful!"
COPIED_TEXT = "Result copied to clipboard!"
NOTHING_TO_COPY_TEXT = "Nothing to copy!"
CLEARED_TEXT = "Input cleared!"

Done = Callable[[Optional[str], Optional[BaseException]], None]
Runner = Callable[[Callable[[], str], Done], None]


class ManualScheduler:
    """Scheduler driven by an explicit clock. Timers fire only on `advance()`.

    Used as the default outside the GUI and in tests; the GUI plugs in a
    scheduler backed by `master.after`.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self._next_handle = 1
        self._pending: dict[int, tuple[int, Callable[[], Any]]] = {}

    def schedule(self, delay_ms: int, callback: Callable[[], Any]) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = (self.now_ms + int(delay_ms), callback)
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def pending_count(self) -> int:
        return len(self._pending)

    def advance(self, delay_ms: int) -> None:
        self.now_ms += int(delay_ms)
        due = sorted(
            (due_at, handle)
            for handle, (due_at, _cb) in self._pending.items()
            if due_at <= self.now_ms
        )
        for _due_at, handle in due:
            entry = self._pending.pop(handle, None)
            if entry is not None:
                entry[1]()


def run_inline(work: Callable[[], str], done: Done) -> None:
    """Runner that performs the call synchronously on the caller's thread."""
    try:
        result = work()
    except Exception as e:
        done(None, e)
        return
    done(result, None)


class InteractionController:
    """Owns the session state and every transition on it.

    The view forwards user events here and re-renders from `state` whenever
    `on_change` fires. The provider call is handed to `runner`; its
    completion must come back through `finish_request` on the UI thread.

    `scheduler` defaults to a `ManualScheduler`, whose timers only fire on
    `advance()`: status banners then never auto-clear. That default is meant
    for tests; any embedding with a real event loop must pass a scheduler
    bound to it (the tkinter window passes `TkScheduler`).
    """

    def __init__(
        self,
        provider: LLMProvider,
        scheduler: Optional[Any] = None,
        runner: Optional[Runner] = None,
        status_window_ms: int = STATUS_WINDOW_MS,
        on_change: Optional[Callable[[SessionState], None]] = None,
    ):
        self.provider = provider
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.runner = runner or run_inline
        self.status_window_ms = status_window_ms
        self.on_change = on_change
        self.state = SessionState()
        self._dismiss_handle: Optional[Any] = None
        self._request_key = ""

    # ---------------- Field edits ----------------

    def set_input_text(self, text: str) -> None:
        self.state.input_text = text or ""
        self._notify()

    def set_api_key(self, api_key: str) -> None:
        self.state.api_key = api_key or ""
        self._notify()

    def set_summary_length(self, value: Union[SummaryLength, str]) -> None:
        self.state.summary_length = coerce_summary_length(value)
        self._notify()

    def set_paraphrase_style(self, value: Union[ParaphraseStyle, str]) -> None:
        self.state.paraphrase_style = coerce_paraphrase_style(value)
        self._notify()

    # ---------------- Actions ----------------

    def build_prompt(self, mode: ActionMode) -> str:
        mode = ActionMode(mode)
        if mode == ActionMode.SUMMARIZE:
            option: Union[SummaryLength, ParaphraseStyle] = self.state.summary_length
        else:
            option = self.state.paraphrase_style
        return build_prompt(mode, option, self.state.input_text)

    def summarize(self) -> bool:
        return self._run_action(ActionMode.SUMMARIZE)

    def paraphrase(self) -> bool:
        return self._run_action(ActionMode.PARAPHRASE)

    def _run_action(self, mode: ActionMode) -> bool:
        if self.state.is_loading:
            print(f"Ignoring {mode.value}: a request is already in flight", file=sys.stderr)
            return False
        if not self.state.input_text.strip():
            self._fail(EmptyInputError(f"Please enter text to {mode.value}."))
            return False
        return self.generate(self.build_prompt(mode))

    def generate(self, prompt: str, api_key: Optional[str] = None) -> bool:
        """Dispatch one provider call. Returns True if a request was issued."""
        if self.state.is_loading:
            print("Ignoring request: a request is already in flight", file=sys.stderr)
            return False

        key = self.state.api_key if api_key is None else (api_key or "")
        if not key.strip():
            self._fail(MissingCredentialError())
            return False

        self._cancel_dismiss()
        self.state.is_loading = True
        self.state.output_text = ""
        self.state.status = StatusMessage.empty()
        self.state.last_error = None
        self._request_key = key.strip()
        self._notify()

        self.runner(lambda: self.provider.generate(prompt, key), self.finish_request)
        return True

    def finish_request(self, result: Optional[str], error: Optional[BaseException] = None) -> None:
        self.state.is_loading = False
        key, self._request_key = self._request_key, ""

        if error is None:
            self.state.output_text = result or ""
            self.state.last_error = None
            self.show_status(SUCCESS_TEXT, StatusKind.SUCCESS)
            return

        if not isinstance(error, TextTransformerError):
            details = "".join(traceback.format_exception(type(error), error, error.__traceback__))
            print("Error calling text-generation provider:", file=sys.stderr)
            print(redact(details, key), file=sys.stderr, end="")
            error = TransportError(redact(str(error) or type(error).__name__, key))
        self._fail(error)

    def copy_result(self, clipboard: Any) -> bool:
        text = self.state.output_text
        if not text:
            self.show_status(NOTHING_TO_COPY_TEXT, StatusKind.ERROR)
            return False

        try:
            clipboard.copy(text)
        except ClipboardError as e:
            print(f"Copy command failed: {e.__cause__ or e}", file=sys.stderr)
            self._fail(e)
            return False
        except Exception as e:
            print(f"Copy command failed: {e}", file=sys.stderr)
            err = ClipboardError()
            err.__cause__ = e
            self._fail(err)
            return False

        self.show_status(COPIED_TEXT, StatusKind.SUCCESS)
        return True

    def clear_input(self) -> None:
        self._cancel_dismiss()
        self.state.input_text = ""
        self.state.output_text = ""
        self.state.status = StatusMessage.empty()
        self.state.last_error = None
        self._notify()
        self.show_status(CLEARED_TEXT, StatusKind.SUCCESS)

    # ---------------- Status banner ----------------

    def show_status(self, text: str, kind: Union[StatusKind, str]) -> None:
        """Replace the banner and restart its dismiss timer."""
        self._cancel_dismiss()
        self.state.status = StatusMessage(text=text, kind=StatusKind(kind))
        self._dismiss_handle = self.scheduler.schedule(self.status_window_ms, self._dismiss_status)
        self._notify()

    def _dismiss_status(self) -> None:
        self._dismiss_handle = None
        self.state.status = StatusMessage.empty()
        self._notify()

    def _cancel_dismiss(self) -> None:
        if self._dismiss_handle is not None:
            self.scheduler.cancel(self._dismiss_handle)
        self._dismiss_handle = None

    def dispose(self) -> None:
        self._cancel_dismiss()

    # ---------------- Helpers ----------------

    def _fail(self, error: TextTransformerError) -> None:
        self.state.last_error = error
        self.show_status(str(error), StatusKind.ERROR)

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.state)
