#!/usr/bin/env python3
"""Tkinter desktop app for the sound spinner."""

from __future__ import annotations

import logging
import sys
import tkinter as tk
from pathlib import Path
from tkinter import messagebox

from sound_player import SoundPlayer
from spinner import load_config
from spinner_window import SpinnerWindow


class SpinnerApp:
    def __init__(self, root: tk.Tk, config_path: Path) -> None:
        self.root = root
        self.root.title("Sound Spinner")
        self.config_path = config_path

        self.config = self._load_config()
        self.player = SoundPlayer(self.config.sound_dir, self.config.sound_ext)
        self.window = SpinnerWindow(self.root, self.config, player=self.player)
        self.window.pack(fill=tk.BOTH, expand=True)
        self.root.protocol("WM_DELETE_WINDOW", self._handle_close)

    def _load_config(self):
        try:
            return load_config(self.config_path)
        except (OSError, ValueError) as exc:
            messagebox.showerror("Config error", f"Could not load {self.config_path}: {exc}")
            raise SystemExit(1)

    def _handle_close(self) -> None:
        self.window.close()
        self.root.destroy()


def main() -> None:
    config_path = Path("python/config.json")
    if len(sys.argv) > 1:
        config_path = Path(sys.argv[1])
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    root = tk.Tk()
    root.geometry("900x700")
    SpinnerApp(root, config_path)
    root.mainloop()


if __name__ == "__main__":
    main()
