from __future__ import annotations
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ThemeColors:
    """Colors for the window, the code editors and the widget cards."""

    # App and editor
    background: str
    foreground: str
    caret: str
    selection_bg: str
    selection_fg: str
    panel_bg: str
    muted_fg: str
    button_bg: str
    button_active_bg: str

    # Feedback area: error, info (placeholder) and success
    error_bg: str
    error_fg: str
    info_bg: str
    info_fg: str
    success_bg: str
    success_fg: str

    # Lifecycle demo cards
    image_bg: str
    image_building_bg: str
    container_running_bg: str
    container_stopped_bg: str

    # Code syntax colors
    code_kw_fg: str
    code_key_fg: str
    code_name_fg: str
    code_str_fg: str
    code_num_fg: str
    code_cmt_fg: str
    code_op_fg: str
    code_punc_fg: str
    code_var_fg: str


DARK_THEME = ThemeColors(
    background="#111827",  # gray-900
    foreground="#e5e7eb",  # gray-200
    caret="#f3f4f6",  # gray-100
    selection_bg="#374151",  # gray-700
    selection_fg="#f9fafb",  # gray-50
    panel_bg="#1f2937",  # gray-800
    muted_fg="#9ca3af",  # gray-400
    button_bg="#374151",
    button_active_bg="#4b5563",  # gray-600
    error_bg="#450a0a",
    error_fg="#fecaca",  # red-200
    info_bg="#172554",
    info_fg="#bfdbfe",  # blue-200
    success_bg="#052e16",
    success_fg="#bbf7d0",  # green-200
    image_bg="#1e3a8a",  # blue-900
    image_building_bg="#1e40af",
    container_running_bg="#14532d",  # green-900
    container_stopped_bg="#7f1d1d",  # red-900
    code_kw_fg="#c084fc",  # purple-400
    code_key_fg="#93c5fd",  # blue-300
    code_name_fg="#e5e7eb",
    code_str_fg="#34d399",  # emerald-400
    code_num_fg="#fbbf24",  # amber-400
    code_cmt_fg="#6b7280",  # gray-500
    code_op_fg="#f472b6",  # pink-400
    code_punc_fg="#9ca3af",
    code_var_fg="#fca5a5",  # red-300
)

LIGHT_THEME = ThemeColors(
    background="#ffffff",
    foreground="#1f2937",
    caret="#111827",
    selection_bg="#bfdbfe",
    selection_fg="#111827",
    panel_bg="#f3f4f6",
    muted_fg="#6b7280",
    button_bg="#e5e7eb",
    button_active_bg="#d1d5db",
    error_bg="#fee2e2",
    error_fg="#b91c1c",
    info_bg="#dbeafe",
    info_fg="#1d4ed8",
    success_bg="#dcfce7",
    success_fg="#15803d",
    image_bg="#bfdbfe",
    image_building_bg="#dbeafe",
    container_running_bg="#bbf7d0",
    container_stopped_bg="#fecaca",
    code_kw_fg="#7c3aed",
    code_key_fg="#1d4ed8",
    code_name_fg="#1f2937",
    code_str_fg="#047857",
    code_num_fg="#b45309",
    code_cmt_fg="#6b7280",
    code_op_fg="#be185d",
    code_punc_fg="#4b5563",
    code_var_fg="#b91c1c",
)

THEMES = {"dark": DARK_THEME, "light": LIGHT_THEME}


def theme_by_name(name: str) -> ThemeColors:
    return THEMES.get(name, DARK_THEME)


def feedback_colors(theme: ThemeColors, kind: str) -> tuple:
    """Return ``(background, foreground)`` for a feedback kind."""
    if kind == "error":
        return theme.error_bg, theme.error_fg
    if kind == "info":
        return theme.info_bg, theme.info_fg
    return theme.success_bg, theme.success_fg


def apply_theme_to_root(root: Any, theme: ThemeColors) -> None:
    """Apply base colors to the Tk root and ttk widgets.

    Best-effort; option database keys and ttk themes vary by platform.
    """
    try:
        root.configure(bg=theme.background)
        root.option_add("*Background", theme.background)
        root.option_add("*Foreground", theme.foreground)
        root.option_add("*Button.background", theme.button_bg)
        root.option_add("*Button.activeBackground", theme.button_active_bg)
        root.option_add("*Button.relief", "flat")
    except Exception:
        pass
    try:
        from tkinter import ttk

        style = ttk.Style(root)
        style.configure("TNotebook", background=theme.background, borderwidth=0)
        style.configure("TNotebook.Tab", background=theme.panel_bg, foreground=theme.foreground)
        style.map("TNotebook.Tab", background=[("selected", theme.button_active_bg)])
    except Exception:
        pass
