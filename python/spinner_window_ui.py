#!/usr/bin/env python3
"""UI layout and event binding for the spinner window."""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk

INFO_OPEN_ICON = "ⓘ"
INFO_CLOSE_ICON = "X"
INFO_TEXT = (
    "Press SPIN (or the space bar) and wait for the wheel to stop.\n"
    "The animal under the arrow makes its sound.\n\n"
    "Use the set buttons to change the animals on the wheel.\n"
    "Sets cannot be changed while the wheel is turning."
)


class SpinnerWindowUI:
    def _build_ui(self) -> None:
        """Canvas on the left, control panel on the right, info overlay on top."""
        self.configure(bg=self.colors["panel_bg"])

        header = tk.Frame(self, bg=self.colors["panel_bg"], padx=10, pady=8)
        header.pack(fill=tk.X)
        tk.Label(
            header,
            text="Sound Spinner",
            font=("Helvetica", 18, "bold"),
            bg=self.colors["panel_bg"],
            fg=self.colors["title_fg"],
        ).pack(side=tk.LEFT)
        self.info_button = tk.Button(
            header,
            text=INFO_OPEN_ICON,
            width=3,
            relief=tk.FLAT,
            bg=self.colors["panel_bg"],
            fg=self.colors["title_fg"],
            command=self._toggle_info,
        )
        self.info_button.pack(side=tk.RIGHT)

        container = tk.Frame(self, bg=self.colors["panel_bg"])
        container.pack(fill=tk.BOTH, expand=True)

        self.canvas = tk.Canvas(container, bg=self.colors["canvas_bg"], highlightthickness=0, width=600, height=600)
        self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=10, pady=10)
        self.canvas.bind("<Configure>", self._handle_resize)

        control = ttk.Frame(container, width=200, padding=10)
        control.pack(side=tk.RIGHT, fill=tk.Y)
        self.spin_button = ttk.Button(control, text="SPIN", command=self._handle_spin)
        self.spin_button.pack(fill=tk.X, pady=(0, 12))

        ttk.Label(control, text="Sets", font=("Helvetica", 12, "bold")).pack(anchor=tk.W, pady=(0, 6))
        self.set_buttons: list[ttk.Button] = []
        for name in self.settings.segment_sets:
            button = ttk.Button(control, text=name.title(), command=lambda n=name: self._handle_set_change(n))
            button.pack(fill=tk.X, pady=2)
            self.set_buttons.append(button)

        ttk.Label(control, textvariable=self.set_var, foreground="#888").pack(anchor=tk.W, pady=(12, 0))
        ttk.Label(control, textvariable=self.result_var, font=("Helvetica", 12, "bold")).pack(anchor=tk.W, pady=(6, 0))

        self.info_panel = tk.Frame(self.canvas, bg=self.colors["overlay_bg"], padx=16, pady=12)
        tk.Label(
            self.info_panel,
            text=INFO_TEXT,
            justify=tk.LEFT,
            bg=self.colors["overlay_bg"],
            fg=self.colors["title_fg"],
            font=("Helvetica", 11),
        ).pack(anchor=tk.W)
        ttk.Button(self.info_panel, text="Close", command=self._close_info).pack(anchor=tk.E, pady=(10, 0))

        self.bind_all("<space>", lambda event: self._handle_spin())

    # ---------------- info overlay ----------------
    def _toggle_info(self) -> None:
        if self.info_visible:
            self._close_info()
        else:
            self._open_info()

    def _open_info(self) -> None:
        self.info_button.configure(text=INFO_CLOSE_ICON)
        self.info_panel.place(relx=0.5, rely=0.5, anchor=tk.CENTER)
        self.info_visible = True

    def _close_info(self) -> None:
        self.info_button.configure(text=INFO_OPEN_ICON)
        self.info_panel.place_forget()
        self.info_visible = False

    # ---------------- controls ----------------
    def _set_controls_enabled(self, enabled: bool) -> None:
        state = "!disabled" if enabled else "disabled"
        self.spin_button.state([state])
        for button in self.set_buttons:
            button.state([state])
