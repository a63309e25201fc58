from __future__ import annotations
import contextlib
import tkinter as tk

from devblog.services.debounce import DebounceTimer, TkScheduler
from devblog.services.lifecycle_demo import DemoState, LifecycleDemo
from devblog.ui.theme import DARK_THEME, ThemeColors

CODE_FONT = ("Consolas", 11)


class LifecyclePanel(tk.Frame):
    """Dockerfile, images and containers of the simulated lifecycle demo."""

    def __init__(
        self,
        master: tk.Misc,
        theme: ThemeColors = DARK_THEME,
        build_delay_ms: int = 2000,
    ) -> None:
        super().__init__(master, bg=theme.background)
        self.theme = theme
        self.demo = LifecycleDemo(TkScheduler(self), build_delay_ms=build_delay_ms)

        header = tk.Frame(self, bg=theme.background)
        header.pack(side=tk.TOP, fill=tk.X, padx=8, pady=(8, 2))
        tk.Label(header, text="Dockerfile", bg=theme.background, fg=theme.muted_fg).pack(
            side=tk.LEFT
        )
        self.build_btn = self._button(header, "Build", self.demo.build)
        self.build_btn.pack(side=tk.RIGHT)

        self.dockerfile_text = tk.Text(
            self,
            height=7,
            font=CODE_FONT,
            bg=theme.panel_bg,
            fg=theme.foreground,
            insertbackground=theme.caret,
            relief=tk.FLAT,
            padx=6,
            pady=6,
        )
        self.dockerfile_text.insert("1.0", self.demo.state.dockerfile)
        self.dockerfile_text.edit_modified(False)
        self.dockerfile_text.bind("<<Modified>>", self._on_dockerfile_modified)
        self.dockerfile_text.pack(side=tk.TOP, fill=tk.X, padx=8)

        grid = tk.Frame(self, bg=theme.background)
        grid.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=8, pady=8)
        grid.columnconfigure(0, weight=1, uniform="col")
        grid.columnconfigure(1, weight=1, uniform="col")
        tk.Label(grid, text="Images", bg=theme.background, fg=theme.muted_fg).grid(
            row=0, column=0, sticky="w"
        )
        tk.Label(grid, text="Containers", bg=theme.background, fg=theme.muted_fg).grid(
            row=0, column=1, sticky="w"
        )
        self.images_frame = tk.Frame(grid, bg=theme.background)
        self.images_frame.grid(row=1, column=0, sticky="nsew", padx=(0, 4))
        self.containers_frame = tk.Frame(grid, bg=theme.background)
        self.containers_frame.grid(row=1, column=1, sticky="nsew", padx=(4, 0))

        tk.Label(
            self,
            text="Click Run on an image to start a container.",
            bg=theme.background,
            fg=theme.muted_fg,
        ).pack(side=tk.BOTTOM, anchor="w", padx=8, pady=(0, 8))

        self._render_timer = DebounceTimer(TkScheduler(self), delay_ms=0)
        self._unsubscribe = self.demo.subscribe(self._on_state_changed)
        self._render(self.demo.state)
        self.bind("<Destroy>", self._on_destroy, add=True)

    def _button(self, master: tk.Misc, text: str, command) -> tk.Button:
        return tk.Button(
            master,
            text=text,
            command=command,
            bg=self.theme.button_bg,
            fg=self.theme.foreground,
            activebackground=self.theme.button_active_bg,
            relief=tk.FLAT,
            padx=8,
        )

    def _on_dockerfile_modified(self, _event=None) -> None:
        with contextlib.suppress(Exception):
            self.dockerfile_text.edit_modified(False)
        code = self.dockerfile_text.get("1.0", "end-1c")
        if code != self.demo.state.dockerfile:
            self.demo.update_dockerfile(code)

    def _on_state_changed(self, _state: DemoState) -> None:
        # Cards are rebuilt later so a button is never destroyed inside its own command
        self._render_timer.trigger(lambda: self._render(self.demo.state))

    def _on_destroy(self, event) -> None:
        if event.widget is self:
            self._render_timer.cancel()
            self._unsubscribe()
            self.demo.dispose()

    def _render(self, state: DemoState) -> None:
        self.build_btn.configure(state=tk.DISABLED if state.is_building else tk.NORMAL)
        for child in self.images_frame.winfo_children():
            child.destroy()
        for child in self.containers_frame.winfo_children():
            child.destroy()

        if not state.images:
            self._placeholder(self.images_frame, "No images yet. Build one!")
        for image in state.images:
            bg = self.theme.image_building_bg if image.is_building else self.theme.image_bg
            card = tk.Frame(self.images_frame, bg=bg, padx=6, pady=4)
            card.pack(side=tk.TOP, fill=tk.X, pady=2)
            caption = f"{image.reference}  (building...)" if image.is_building else image.reference
            tk.Label(card, text=caption, bg=bg, fg=self.theme.foreground).pack(side=tk.LEFT)
            if not image.is_building:
                self._button(card, "Delete", lambda i=image.id: self.demo.delete_image(i)).pack(
                    side=tk.RIGHT, padx=(4, 0)
                )
                self._button(card, "Run", lambda i=image.id: self.demo.run_container(i)).pack(
                    side=tk.RIGHT
                )

        if not state.containers:
            self._placeholder(self.containers_frame, "No containers running.")
        for container in state.containers:
            bg = (
                self.theme.container_running_bg
                if container.is_running
                else self.theme.container_stopped_bg
            )
            card = tk.Frame(self.containers_frame, bg=bg, padx=6, pady=4)
            card.pack(side=tk.TOP, fill=tk.X, pady=2)
            tk.Label(
                card, text=f"{container.name} ({container.status})", bg=bg, fg=self.theme.foreground
            ).pack(side=tk.LEFT)
            self._button(
                card, "Delete", lambda c=container.id: self.demo.delete_container(c)
            ).pack(side=tk.RIGHT, padx=(4, 0))
            if container.is_running:
                toggle = self._button(card, "Stop", lambda c=container.id: self.demo.stop_container(c))
            else:
                toggle = self._button(card, "Start", lambda c=container.id: self.demo.start_container(c))
            toggle.pack(side=tk.RIGHT)

    def _placeholder(self, master: tk.Misc, text: str) -> None:
        tk.Label(master, text=text, bg=self.theme.background, fg=self.theme.muted_fg).pack(
            side=tk.TOP, anchor="w"
        )
