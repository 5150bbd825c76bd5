#!/usr/bin/env python3
"""Rendering helpers for the spinner window."""

from __future__ import annotations

import logging
import math
import time
import tkinter as tk
from pathlib import Path

from PIL import Image, ImageTk

from spinner import SEGMENT_COUNT, SEGMENT_DEGREES

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 16
DEFAULT_CANVAS_SIZE = 600


def canvas_extent(actual: int, requested: int) -> int:
    """Usable canvas length; Tk reports 1 until the widget is mapped."""
    if actual > 1:
        return actual
    if requested > 1:
        return requested
    return DEFAULT_CANVAS_SIZE


def ease_out_cubic(progress: float) -> float:
    progress = min(1.0, max(0.0, progress))
    return 1 - (1 - progress) ** 3


def segment_arc_start(index: int, rotation: float) -> float:
    """Tk arc start for a segment.

    Segments are laid out clockwise from the top while Tk measures arcs
    counter-clockwise from 3 o'clock.
    """
    clockwise_start = index * SEGMENT_DEGREES + rotation
    return (90 - clockwise_start - SEGMENT_DEGREES) % 360


def orbit_position(angle: float, cx: float, cy: float, radius: float) -> tuple[float, float]:
    """Canvas point at ``angle`` degrees clockwise from the top."""
    rad = math.radians(angle)
    return cx + radius * math.sin(rad), cy - radius * math.cos(rad)


class SpinnerWindowRender:
    # ---------------- animation ----------------
    def _start_rotation(self, rotation: float, duration_ms: int) -> None:
        """Animate from the displayed angle to the absolute ``rotation``."""
        self.anim_start_angle = self.display_angle
        self.anim_target_angle = rotation
        self.anim_start_time = time.monotonic()
        self.anim_duration = duration_ms / 1000
        if self.anim_after_id is None:
            self._animate()

    def _animate(self) -> None:
        elapsed = time.monotonic() - self.anim_start_time
        progress = 1.0 if self.anim_duration <= 0 else elapsed / self.anim_duration
        eased = ease_out_cubic(progress)
        self.display_angle = self.anim_start_angle + (self.anim_target_angle - self.anim_start_angle) * eased
        self._render_wheel()
        if progress < 1.0:
            self.anim_after_id = self.after(FRAME_INTERVAL_MS, self._animate)
        else:
            self.display_angle = self.anim_target_angle
            self.anim_after_id = None

    # ---------------- images ----------------
    def _load_images(self) -> None:
        """Load one image per segment, sized to fit inside its slice."""
        width, height = self._canvas_size()
        size = max(16, int(min(width, height) * 0.14))
        if size != self.image_size:
            # Only the current size is kept alive.
            self.image_cache.clear()
        self.segment_images = []
        for label in self.controller.segments:
            self.segment_images.append(self._image_for(label, size))
        self.image_size = size

    def _image_for(self, label: str, size: int) -> ImageTk.PhotoImage | None:
        key = (label, size)
        if key in self.image_cache:
            return self.image_cache[key]
        path = Path(self.settings.image_dir) / f"{label}{self.settings.image_ext}"
        if not path.exists():
            if label not in self.missing_images:
                logger.warning("Image for %r not found: %s", label, path)
                self.missing_images.add(label)
            self.image_cache[key] = None
            return None
        try:
            with Image.open(path) as original:
                picture = original.convert("RGBA")
        except OSError as exc:
            logger.warning("Could not load image %s: %s", path, exc)
            self.image_cache[key] = None
            return None
        picture.thumbnail((size, size), Image.Resampling.LANCZOS)
        photo = ImageTk.PhotoImage(picture)
        self.image_cache[key] = photo
        return photo

    # ---------------- render ----------------
    def _canvas_size(self) -> tuple[int, int]:
        return (
            canvas_extent(self.canvas.winfo_width(), self.canvas.winfo_reqwidth()),
            canvas_extent(self.canvas.winfo_height(), self.canvas.winfo_reqheight()),
        )

    def _handle_resize(self, event: tk.Event) -> None:
        self._load_images()
        self._render_wheel()

    def _render_wheel(self) -> None:
        self.canvas.delete("wheel")
        width, height = self._canvas_size()
        radius = min(width, height) * 0.42
        cx = width / 2
        cy = height / 2 + 12
        rotation = self.display_angle % 360
        palette = self.colors["wheel_colors"]

        for index in range(SEGMENT_COUNT):
            self.canvas.create_arc(
                cx - radius,
                cy - radius,
                cx + radius,
                cy + radius,
                start=segment_arc_start(index, rotation),
                extent=SEGMENT_DEGREES,
                fill=palette[index % len(palette)],
                outline=self.colors["canvas_bg"],
                width=2,
                tags="wheel",
            )

        # Images orbit with the wheel but Tk never rotates them, so they stay upright.
        for index, label in enumerate(self.controller.segments):
            mid_angle = index * SEGMENT_DEGREES + SEGMENT_DEGREES / 2 + rotation
            x, y = orbit_position(mid_angle, cx, cy, radius * 0.66)
            image = self.segment_images[index] if index < len(self.segment_images) else None
            if image is not None:
                self.canvas.create_image(x, y, image=image, tags="wheel")
            else:
                self.canvas.create_text(
                    x,
                    y,
                    text=label,
                    fill=self.colors["segment_text"],
                    font=("Helvetica", 12, "bold"),
                    tags="wheel",
                )

        hub = radius * 0.08
        self.canvas.create_oval(cx - hub, cy - hub, cx + hub, cy + hub, fill=self.colors["hub"], outline="", tags="wheel")

        # Fixed pointer at the top.
        pointer_size = 16
        self.canvas.create_polygon(
            cx,
            cy - radius + 10,
            cx - pointer_size,
            cy - radius - 22,
            cx + pointer_size,
            cy - radius - 22,
            fill=self.colors["pointer"],
            outline="",
            tags="wheel",
        )
