#!/usr/bin/env python3
"""Spinner window: draws the wheel and wires its controls to the controller."""

from __future__ import annotations

import logging
import tkinter as tk
from typing import Any

from sound_player import SoundPlayer
from spinner import Landing, SpinnerConfig, TkScheduler, WheelController, lookup_set
from spinner_window_render import SpinnerWindowRender
from spinner_window_ui import SpinnerWindowUI

logger = logging.getLogger(__name__)


class SpinnerWindow(SpinnerWindowUI, SpinnerWindowRender, tk.Frame):
    """Wheel view; all spin state lives in the WheelController."""

    def __init__(self, master: tk.Misc, config: SpinnerConfig, player: SoundPlayer | None = None) -> None:
        super().__init__(master)
        self.settings = config
        self.colors = {
            "panel_bg": "#1b1428",
            "canvas_bg": "#121423",
            "overlay_bg": "#2a2140",
            "title_fg": "#ffe66d",
            "segment_text": "#1b1428",
            "pointer": "#ffe66d",
            "hub": "#f4c542",
            "wheel_colors": ["#ff5e5b", "#ffe66d", "#00f5d4", "#9b5de5", "#f15bb5", "#5ee1ff", "#f4a261", "#90be6d"],
        }
        self.set_var = tk.StringVar(value=f"Set: {config.default_set}")
        self.result_var = tk.StringVar(value="Press SPIN")
        self.display_angle = 0.0
        self.anim_start_angle = 0.0
        self.anim_target_angle = 0.0
        self.anim_start_time = 0.0
        self.anim_duration = 0.0
        self.anim_after_id: str | None = None
        self.segment_images: list[Any] = []
        self.image_cache: dict[tuple[str, int], Any] = {}
        self.missing_images: set[str] = set()
        self.image_size = 0
        self.info_visible = False

        self.controller = WheelController(
            lookup_set(config, config.default_set),
            TkScheduler(self),
            player=player,
            config=config,
            on_rotate=self._start_rotation,
            on_lock_change=self._handle_lock_change,
            on_landed=self._handle_landed,
        )

        self._build_ui()
        self._load_images()
        self._render_wheel()

    def _handle_spin(self) -> None:
        self.controller.request_spin()

    def _handle_set_change(self, name: str) -> None:
        if not self.controller.set_segments(lookup_set(self.settings, name)):
            return
        logger.info("Segment set changed to %s", name)
        self.set_var.set(f"Set: {name}")
        self.result_var.set("Press SPIN")
        self._load_images()
        self._render_wheel()

    def _handle_lock_change(self, locked: bool) -> None:
        self._set_controls_enabled(not locked)
        if locked:
            self.result_var.set("Spinning...")

    def _handle_landed(self, landing: Landing) -> None:
        self.result_var.set(f"It's the {landing.label}!")

    def close(self) -> None:
        if self.anim_after_id:
            self.after_cancel(self.anim_after_id)
            self.anim_after_id = None
        if self.controller.player is not None:
            self.controller.player.stop()
        self.destroy()
