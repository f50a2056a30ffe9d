from __future__ import annotations

import threading
from typing import Any, Callable, Optional

import tkinter as tk
from tkinter import ttk
from tkinter.scrolledtext import ScrolledText

from text_transformer.controller import Done, InteractionController
from text_transformer.errors import ClipboardError
from text_transformer.providers import GeminiLLMProvider, LLMProvider
from text_transformer.types import (
    ParaphraseStyle,
    SessionState,
    StatusKind,
    SummaryLength,
)

API_KEY_HELP = (
    "Get your free API key from Google AI Studio (https://aistudio.google.com/app/apikey). "
    "The app will use this key when you click Summarize or Paraphrase. Your key is not stored."
)

_STATUS_COLORS = {
    StatusKind.SUCCESS: "#15803d",
    StatusKind.ERROR: "#b91c1c",
}


class TkScheduler:
    """Status-banner timers on top of the Tk event loop."""

    def __init__(self, master: tk.Misc):
        self.master = master

    def schedule(self, delay_ms: int, callback: Callable[[], Any]) -> str:
        return self.master.after(delay_ms, callback)

    def cancel(self, handle: str) -> None:
        try:
            self.master.after_cancel(handle)
        except tk.TclError:
            pass


class TkThreadRunner:
    """Runs the provider call on a daemon thread and posts the outcome back
    onto the Tk loop with `after(0, ...)`."""

    def __init__(self, master: tk.Misc):
        self.master = master

    def __call__(self, work: Callable[[], str], done: Done) -> None:
        def _target() -> None:
            try:
                result = work()
            except BaseException as e:
                def _ui_err(err: BaseException = e) -> None:
                    done(None, err)

                self.master.after(0, _ui_err)
                if not isinstance(e, Exception):
                    raise
                return

            def _ui_done(text: str = result) -> None:
                done(text, None)

            self.master.after(0, _ui_done)

        t = threading.Thread(target=_target, daemon=True)
        t.start()


class TkClipboard:
    def __init__(self, master: tk.Misc):
        self.master = master

    def copy(self, text: str) -> None:
        try:
            self.master.clipboard_clear()
            self.master.clipboard_append(text)
        except tk.TclError as e:
            raise ClipboardError() from e


class TextTransformerGUI:
    def __init__(
        self,
        master: tk.Misc,
        provider: Optional[LLMProvider] = None,
        controller: Optional[InteractionController] = None,
    ):
        self.master = master
        self.clipboard = TkClipboard(master)
        self.controller = controller or InteractionController(
            provider=provider or GeminiLLMProvider(),
            scheduler=TkScheduler(master),
            runner=TkThreadRunner(master),
        )
        self.controller.on_change = self._render

        # --- ui ---
        self._build_ui()
        self._render(self.controller.state)

        self.master.protocol("WM_DELETE_WINDOW", self._on_close)

    # ---------------- UI ----------------

    def _build_ui(self) -> None:
        self.master.title("Text Transformer")
        self.master.geometry("760x720")
        self.master.grid_columnconfigure(0, weight=1)

        state = self.controller.state

        # Status banner
        self._status_var = tk.StringVar(value="")
        self._status_label = ttk.Label(self.master, textvariable=self._status_var, anchor="center")
        self._status_label.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 0))

        # API key
        key_frame = ttk.LabelFrame(self.master, text="Enter your Gemini API Key")
        key_frame.grid(row=1, column=0, sticky="ew", padx=10, pady=(6, 0))
        key_frame.grid_columnconfigure(0, weight=1)

        self._api_key_var = tk.StringVar(value=state.api_key)
        self._api_key_entry = ttk.Entry(key_frame, textvariable=self._api_key_var, show="*")
        self._api_key_entry.grid(row=0, column=0, sticky="ew", padx=10, pady=(8, 4))

        ttk.Label(key_frame, text=API_KEY_HELP, foreground="#444", wraplength=700).grid(
            row=1, column=0, sticky="w", padx=10, pady=(0, 8)
        )

        # Input
        input_frame = ttk.LabelFrame(self.master, text="Enter your text")
        input_frame.grid(row=2, column=0, sticky="nsew", padx=10, pady=(10, 0))
        input_frame.grid_columnconfigure(0, weight=1)
        input_frame.grid_rowconfigure(0, weight=1)
        self.master.grid_rowconfigure(2, weight=1)

        self._input_text = ScrolledText(input_frame, height=8, wrap="word")
        self._input_text.grid(row=0, column=0, sticky="nsew", padx=10, pady=(8, 4))
        self._input_text.bind("<<Modified>>", self._on_input_edited)

        self._clear_btn = ttk.Button(input_frame, text="Clear Input", command=self._on_clear_clicked)
        self._clear_btn.grid(row=1, column=0, sticky="w", padx=10, pady=(0, 8))

        # Options
        options = ttk.Frame(self.master)
        options.grid(row=3, column=0, sticky="ew", padx=10, pady=(10, 0))
        options.grid_columnconfigure(0, weight=1)
        options.grid_columnconfigure(1, weight=1)

        summary_frame = ttk.LabelFrame(options, text="Summarization")
        summary_frame.grid(row=0, column=0, sticky="nsew", padx=(0, 5))
        self._summary_var = tk.StringVar(value=state.summary_length.value)
        self._summary_radios: list[ttk.Radiobutton] = []
        for i, option in enumerate(SummaryLength):
            radio = ttk.Radiobutton(
                summary_frame,
                text=option.value.capitalize(),
                value=option.value,
                variable=self._summary_var,
                command=self._on_summary_length_changed,
            )
            radio.grid(row=i, column=0, sticky="w", padx=10, pady=2)
            self._summary_radios.append(radio)

        paraphrase_frame = ttk.LabelFrame(options, text="Paraphrasing")
        paraphrase_frame.grid(row=0, column=1, sticky="nsew", padx=(5, 0))
        self._paraphrase_var = tk.StringVar(value=state.paraphrase_style.value)
        self._paraphrase_radios: list[ttk.Radiobutton] = []
        for i, option in enumerate(ParaphraseStyle):
            radio = ttk.Radiobutton(
                paraphrase_frame,
                text=option.value.capitalize(),
                value=option.value,
                variable=self._paraphrase_var,
                command=self._on_paraphrase_style_changed,
            )
            radio.grid(row=i, column=0, sticky="w", padx=10, pady=2)
            self._paraphrase_radios.append(radio)

        # Actions
        actions = ttk.Frame(self.master)
        actions.grid(row=4, column=0, sticky="ew", padx=10, pady=(10, 0))
        actions.grid_columnconfigure(0, weight=1)
        actions.grid_columnconfigure(1, weight=1)

        self._summarize_btn = ttk.Button(actions, text="Summarize", command=self._on_summarize_clicked)
        self._summarize_btn.grid(row=0, column=0, sticky="ew", padx=(0, 5))

        self._paraphrase_btn = ttk.Button(actions, text="Paraphrase", command=self._on_paraphrase_clicked)
        self._paraphrase_btn.grid(row=0, column=1, sticky="ew", padx=(5, 0))

        # Result
        out = ttk.LabelFrame(self.master, text="Result")
        out.grid(row=5, column=0, sticky="nsew", padx=10, pady=10)
        self.master.grid_rowconfigure(5, weight=1)
        out.grid_columnconfigure(0, weight=1)
        out.grid_rowconfigure(0, weight=1)

        self._output_text = ScrolledText(out, height=8, wrap="word", state="disabled")
        self._output_text.grid(row=0, column=0, sticky="nsew", padx=10, pady=(8, 4))

        self._copy_btn = ttk.Button(out, text="Copy Result", command=self._on_copy_clicked)
        self._copy_btn.grid(row=1, column=0, sticky="ew", padx=10, pady=(0, 8))

    # ---------------- UI events ----------------

    def _on_input_edited(self, _event) -> None:
        if not self._input_text.edit_modified():
            return
        self._input_text.edit_modified(False)
        self.controller.set_input_text(self._get_input_text())

    def _on_summary_length_changed(self) -> None:
        self._pull_fields()
        self.controller.set_summary_length(self._summary_var.get())

    def _on_paraphrase_style_changed(self) -> None:
        self._pull_fields()
        self.controller.set_paraphrase_style(self._paraphrase_var.get())

    def _on_summarize_clicked(self) -> None:
        self._pull_fields()
        self.controller.summarize()

    def _on_paraphrase_clicked(self) -> None:
        self._pull_fields()
        self.controller.paraphrase()

    def _on_copy_clicked(self) -> None:
        self.controller.copy_result(self.clipboard)

    def _on_clear_clicked(self) -> None:
        self.controller.clear_input()
        self._reset_input_widget()

    def _on_close(self) -> None:
        self.controller.dispose()
        self.master.destroy()

    def _pull_fields(self) -> None:
        # text can land in the widget before <<Modified>> is delivered
        self.controller.set_input_text(self._get_input_text())
        self.controller.set_api_key(self._api_key_var.get())

    # ---------------- Rendering ----------------

    def _render(self, state: SessionState) -> None:
        # the input box is the source of input_text; only clear writes into it
        self._set_output_text(state.output_text)

        self._summary_var.set(state.summary_length.value)
        self._paraphrase_var.set(state.paraphrase_style.value)

        self._status_var.set(state.status.text)
        color = _STATUS_COLORS.get(state.status.kind) if state.status.kind else None
        self._status_label.configure(foreground=color or "")

        self._set_running_state(state.is_loading)

    def _set_running_state(self, running: bool) -> None:
        state = "disabled" if running else "normal"

        self._summarize_btn.configure(state=state, text="Working..." if running else "Summarize")
        self._paraphrase_btn.configure(state=state, text="Working..." if running else "Paraphrase")
        self._clear_btn.configure(state=state)
        self._api_key_entry.configure(state=state)
        self._input_text.configure(state=state)
        for radio in self._summary_radios + self._paraphrase_radios:
            radio.configure(state=state)

    # ---------------- Text helpers ----------------

    def _reset_input_widget(self) -> None:
        previous = str(self._input_text.cget("state"))
        self._input_text.configure(state="normal")
        self._input_text.delete("1.0", "end")
        self._input_text.configure(state=previous)
        self._input_text.edit_modified(False)

    def _get_input_text(self) -> str:
        return self._input_text.get("1.0", "end-1c")

    def _get_output_text(self) -> str:
        return self._output_text.get("1.0", "end-1c")

    def _set_output_text(self, text: str) -> None:
        if self._get_output_text() == text:
            return
        self._output_text.configure(state="normal")
        self._output_text.delete("1.0", "end")
        self._output_text.insert("1.0", text)
        self._output_text.configure(state="disabled")


def main() -> None:
    root = tk.Tk()
    TextTransformerGUI(root)
    root.mainloop()


if __name__ == "__main__":
    main()
