from __future__ import annotations
import contextlib
import logging
import tkinter as tk
from tkinter import messagebox, ttk
from typing import List, Optional

from devblog.config import SiteConfig
from devblog.models.post import ContentError, Post
from devblog.services.code_highlighter import CodeHighlighter
from devblog.services.content_service import ContentService
from devblog.services.feed_service import FeedService
from devblog.ui.converter_panel import CODE_FONT, ConverterPanel
from devblog.ui.lifecycle_panel import LifecyclePanel
from devblog.ui.theme import ThemeColors, apply_theme_to_root, theme_by_name

logger = logging.getLogger(__name__)


class MainWindow(tk.Tk):
    """Blog posts, the compose converter and the lifecycle demo in tabs."""

    def __init__(self, config: SiteConfig, theme: Optional[ThemeColors] = None) -> None:
        super().__init__()
        self.config_data = config
        self.theme = theme or theme_by_name(config.theme)
        self.title(config.title)
        self.geometry("960x720")

        self.content = ContentService(config.content_dir)
        self.feed = FeedService(config.title, config.description, config.site_url)
        self.posts: List[Post] = []
        self.post_highlighter = CodeHighlighter("markdown", self.theme)

        apply_theme_to_root(self, self.theme)

        self.notebook = ttk.Notebook(self)
        self.notebook.pack(fill=tk.BOTH, expand=True)
        self.notebook.add(self._build_posts_tab(), text="Posts")
        self.notebook.add(
            ConverterPanel(self.notebook, self.theme, debounce_ms=config.debounce_ms),
            text="Compose Converter",
        )
        self.notebook.add(
            LifecyclePanel(self.notebook, self.theme, build_delay_ms=config.build_delay_ms),
            text="Images & Containers",
        )

        self.bind("<F5>", lambda e: self.reload_posts())
        self.reload_posts()

    def _build_posts_tab(self) -> tk.Frame:
        frame = tk.Frame(self.notebook, bg=self.theme.background)

        toolbar = tk.Frame(frame, bg=self.theme.background)
        toolbar.pack(side=tk.TOP, fill=tk.X, padx=8, pady=8)
        for label, command in (("Reload", self.reload_posts), ("Export RSS", self.export_feed)):
            tk.Button(
                toolbar,
                text=label,
                command=command,
                bg=self.theme.button_bg,
                fg=self.theme.foreground,
                activebackground=self.theme.button_active_bg,
                relief=tk.FLAT,
                padx=10,
            ).pack(side=tk.LEFT, padx=(0, 6))
        self.status_label = tk.Label(
            toolbar, anchor="e", bg=self.theme.background, fg=self.theme.muted_fg
        )
        self.status_label.pack(side=tk.RIGHT)

        body = tk.PanedWindow(frame, orient=tk.HORIZONTAL, bg=self.theme.background, bd=0)
        body.pack(fill=tk.BOTH, expand=True, padx=8, pady=(0, 8))
        self.post_list = tk.Listbox(
            body,
            bg=self.theme.panel_bg,
            fg=self.theme.foreground,
            selectbackground=self.theme.selection_bg,
            selectforeground=self.theme.selection_fg,
            activestyle="none",
            relief=tk.FLAT,
            highlightthickness=0,
        )
        self.post_list.bind("<<ListboxSelect>>", self._on_post_selected)
        body.add(self.post_list, width=280)
        self.preview = tk.Text(
            body,
            wrap=tk.WORD,
            font=CODE_FONT,
            bg=self.theme.panel_bg,
            fg=self.theme.foreground,
            relief=tk.FLAT,
            padx=8,
            pady=8,
        )
        body.add(self.preview)
        return frame

    def _set_status(self, text: str) -> None:
        with contextlib.suppress(Exception):
            self.status_label.configure(text=text)

    def reload_posts(self) -> None:
        try:
            self.posts = self.content.visible_posts()
        except (ContentError, OSError) as exc:
            logger.error("Failed to load posts: %s", exc)
            messagebox.showerror("Posts", str(exc))
            self.posts = []
        self.post_list.delete(0, tk.END)
        for post in self.posts:
            self.post_list.insert(tk.END, f"{post.date:%Y-%m-%d}  {post.title}")
        self._set_status(f"{len(self.posts)} posts in {self.content.blog_dir}")
        self._show_post(self.posts[0] if self.posts else None)

    def _on_post_selected(self, _event=None) -> None:
        selection = self.post_list.curselection()
        if selection:
            self._show_post(self.posts[selection[0]])

    def _show_post(self, post: Optional[Post]) -> None:
        self.preview.configure(state=tk.NORMAL)
        self.preview.delete("1.0", tk.END)
        if post is not None:
            header = f"# {post.title}\n\n"
            if post.description:
                header += f"> {post.description}\n\n"
            self.preview.insert("1.0", header + post.body)
            with contextlib.suppress(Exception):
                self.post_highlighter.highlight(self.preview)
        self.preview.configure(state=tk.DISABLED)

    def export_feed(self) -> None:
        try:
            path = self.feed.write(self.posts, self.config_data.feed_path)
        except OSError as exc:
            logger.error("Failed to write feed: %s", exc)
            messagebox.showerror("Export RSS", str(exc))
            return
        self._set_status(f"Feed written to {path}")
