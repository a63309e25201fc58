from __future__ import annotations
import contextlib
import tkinter as tk
from typing import Callable, Dict, Optional

from devblog.services.code_highlighter import CodeHighlighter
from devblog.services.compose_converter import ComposeConverter, ConverterState
from devblog.services.debounce import TkScheduler
from devblog.ui.theme import DARK_THEME, ThemeColors, feedback_colors

CODE_FONT = ("Consolas", 11)


class ConverterPanel(tk.Frame):
    """Compose manifest and docker run editors kept in sync as you type."""

    def __init__(
        self,
        master: tk.Misc,
        theme: ThemeColors = DARK_THEME,
        debounce_ms: int = 300,
    ) -> None:
        super().__init__(master, bg=theme.background)
        self.theme = theme
        self.converter = ComposeConverter(TkScheduler(self), delay_ms=debounce_ms)
        self._highlighters: Dict[str, CodeHighlighter] = {
            "manifest": CodeHighlighter("yaml", theme),
            "commands": CodeHighlighter("bash", theme),
        }
        self._highlight_after_id: Optional[str] = None

        self.manifest_text = self._build_editor("Docker Compose (YAML)", height=16, wrap=tk.NONE)
        self.commands_text = self._build_editor("Docker Run (Commands)", height=8, wrap=tk.WORD)
        self._build_feedback()
        self._build_buttons()

        self.manifest_text.bind(
            "<<Modified>>",
            self._on_modified(self.manifest_text, "manifest_text", self.converter.edit_manifest),
        )
        self.commands_text.bind(
            "<<Modified>>",
            self._on_modified(self.commands_text, "commands_text", self.converter.edit_commands),
        )
        self._unsubscribe = self.converter.subscribe(self._render)
        self._render(self.converter.state)
        self.bind("<Destroy>", self._on_destroy, add=True)

    # ---------- Layout ----------
    def _build_editor(self, label: str, height: int, wrap: str) -> tk.Text:
        tk.Label(
            self,
            text=label,
            anchor="w",
            bg=self.theme.background,
            fg=self.theme.muted_fg,
        ).pack(side=tk.TOP, fill=tk.X, padx=8, pady=(8, 2))
        text = tk.Text(
            self,
            height=height,
            wrap=wrap,
            undo=True,
            font=CODE_FONT,
            bg=self.theme.panel_bg,
            fg=self.theme.foreground,
            insertbackground=self.theme.caret,
            selectbackground=self.theme.selection_bg,
            selectforeground=self.theme.selection_fg,
            relief=tk.FLAT,
            padx=6,
            pady=6,
        )
        text.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=8)
        return text

    def _build_feedback(self) -> None:
        self.feedback_label = tk.Label(self, anchor="w", justify=tk.LEFT, padx=8, pady=6)
        self.feedback_label.bind(
            "<Configure>",
            lambda e: self.feedback_label.configure(wraplength=max(e.width - 16, 100)),
        )

    def _build_buttons(self) -> None:
        self.button_bar = tk.Frame(self, bg=self.theme.background)
        self.button_bar.pack(side=tk.BOTTOM, fill=tk.X, padx=8, pady=8)
        for label, command in (
            ("Clear", self.converter.clear),
            ("Load Complex", self.converter.load_complex_example),
            ("Load Simple", self.converter.load_simple_example),
        ):
            tk.Button(
                self.button_bar,
                text=label,
                command=command,
                bg=self.theme.button_bg,
                fg=self.theme.foreground,
                activebackground=self.theme.button_active_bg,
                relief=tk.FLAT,
                padx=10,
            ).pack(side=tk.RIGHT, padx=(6, 0))

    # ---------- Events ----------
    def _on_modified(
        self, widget: tk.Text, field: str, edit: Callable[[str], None]
    ) -> Callable[[object], None]:
        def _handler(_event=None) -> None:
            # Reset the modified flag or the event will not fire again
            with contextlib.suppress(Exception):
                widget.edit_modified(False)
            value = widget.get("1.0", "end-1c")
            # Programmatic updates from _render arrive here too
            if value == getattr(self.converter.state, field):
                return
            edit(value)

        return _handler

    def _on_destroy(self, event) -> None:
        if event.widget is not self:
            return
        if self._highlight_after_id is not None:
            with contextlib.suppress(Exception):
                self.after_cancel(self._highlight_after_id)
        self._unsubscribe()
        self.converter.dispose()

    # ---------- Rendering ----------
    def _replace_text(self, widget: tk.Text, value: str) -> None:
        if widget.get("1.0", "end-1c") == value:
            return
        insert = widget.index("insert")
        widget.delete("1.0", tk.END)
        widget.insert("1.0", value)
        with contextlib.suppress(Exception):
            widget.mark_set("insert", insert)
            widget.edit_modified(False)

    def _render(self, state: ConverterState) -> None:
        self._replace_text(self.manifest_text, state.manifest_text)
        self._replace_text(self.commands_text, state.commands_text)

        message = state.feedback_message
        if message:
            bg, fg = feedback_colors(self.theme, state.feedback_kind)
            self.feedback_label.configure(text=message, bg=bg, fg=fg)
            self.feedback_label.pack(side=tk.TOP, fill=tk.X, padx=8, pady=(8, 0))
        else:
            self.feedback_label.pack_forget()
        self._schedule_highlight()

    def _schedule_highlight(self) -> None:
        if self._highlight_after_id is not None:
            with contextlib.suppress(Exception):
                self.after_cancel(self._highlight_after_id)
        self._highlight_after_id = self.after(20, self._apply_highlighting)

    def _apply_highlighting(self) -> None:
        with contextlib.suppress(Exception):
            self._highlighters["manifest"].highlight(self.manifest_text)
            self._highlighters["commands"].highlight(self.commands_text)
        self._highlight_after_id = None
