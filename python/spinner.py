#!/usr/bin/env python3
"""Sound spinner core: rotation engine, segment resolver and headless runner.

Usage examples:
  python python/spinner.py spin --count 3 --seed 7
  python python/spinner.py spin --set two --mute
  python python/spinner.py resolve 1282.5
  python python/spinner.py sets
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import math
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from sound_player import SoundPlayer

logger = logging.getLogger(__name__)

SEGMENT_COUNT = 8
SEGMENT_DEGREES = 360 / SEGMENT_COUNT
# Jitter must keep the landing at least this far from a segment edge.
MIN_EDGE_MARGIN = 1.0
MAX_JITTER_DEGREES = SEGMENT_DEGREES / 2 - MIN_EDGE_MARGIN

DEFAULT_SEGMENT_SETS: Dict[str, List[str]] = {
    "one": ["turkey", "horse", "sheep", "cat", "duck", "dog", "rooster", "cow"],
    "two": ["whale", "lion", "elephant", "dinosaur", "hippo", "zebra", "tiger", "panda"],
    "three": ["hyena", "otter", "owl", "snake", "bee", "wolf", "falcon", "frog"],
    "hidden": ["penguin", "wave", "penguin", "penguin", "penguin", "wave", "penguin", "penguin"],
}


@dataclass
class SpinnerConfig:
    spin_duration_ms: int = 5000
    jitter_degrees: float = 18.0
    min_turns: int = 3
    max_turns: int = 9
    min_forward_degrees: float = 45.0
    image_dir: Path = Path("img")
    image_ext: str = ".png"
    sound_dir: Path = Path("sounds")
    sound_ext: str = ".mp3"
    segment_sets: Dict[str, List[str]] = field(default_factory=lambda: dict(DEFAULT_SEGMENT_SETS))
    default_set: str = "one"
    seed: Optional[int] = None


@dataclass(frozen=True)
class Landing:
    rotation: float
    pointer_angle: float
    index: int
    label: str


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def resolve_path(base_dir: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if candidate.is_absolute():
        return candidate
    return base_dir / raw_path


def validate_segments(segments: Any) -> List[str]:
    if not isinstance(segments, (list, tuple)):
        raise ValueError(f"Segment set must be a list of labels: {segments!r}")
    if not all(isinstance(label, str) for label in segments):
        raise ValueError(f"Segment labels must be strings: {segments!r}")
    labels = [label.strip() for label in segments]
    if len(labels) != SEGMENT_COUNT:
        raise ValueError(f"Segment set must have exactly {SEGMENT_COUNT} labels, got {len(labels)}")
    if not all(labels):
        raise ValueError(f"Segment set contains an empty label: {segments!r}")
    return labels


def _config_number(config: Dict[str, Any], key: str, kind: Callable[[Any], Any]) -> Any:
    value = config[key]
    if isinstance(value, bool):
        raise ValueError(f"Invalid {key}: {value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {key}: {value!r}") from None


def parse_config(raw: Dict[str, Any], base_dir: Path) -> SpinnerConfig:
    if not isinstance(raw, dict):
        raise ValueError("Config data must be an object.")
    config = dict(raw)
    config.setdefault("spin_duration_ms", 5000)
    config.setdefault("jitter_degrees", 18)
    config.setdefault("min_turns", 3)
    config.setdefault("max_turns", 9)
    config.setdefault("min_forward_degrees", 45)
    config.setdefault("image_dir", "img")
    config.setdefault("image_ext", ".png")
    config.setdefault("sound_dir", "sounds")
    config.setdefault("sound_ext", ".mp3")
    config.setdefault("segment_sets", DEFAULT_SEGMENT_SETS)
    config.setdefault("default_set", "one")
    config.setdefault("seed", None)

    duration = _config_number(config, "spin_duration_ms", int)
    if duration <= 0:
        raise ValueError(f"Invalid spin_duration_ms: {duration}")
    jitter = _config_number(config, "jitter_degrees", float)
    if not 0 <= jitter <= MAX_JITTER_DEGREES:
        raise ValueError(f"Invalid jitter_degrees: {jitter} (allowed 0..{MAX_JITTER_DEGREES})")
    min_turns = _config_number(config, "min_turns", int)
    max_turns = _config_number(config, "max_turns", int)
    if min_turns < 1 or max_turns < min_turns:
        raise ValueError(f"Invalid turn range: {min_turns}..{max_turns}")
    min_forward = _config_number(config, "min_forward_degrees", float)
    if not 0 <= min_forward < 360:
        raise ValueError(f"Invalid min_forward_degrees: {min_forward}")

    raw_sets = config["segment_sets"]
    if not isinstance(raw_sets, dict) or not raw_sets:
        raise ValueError("segment_sets must be a non-empty object.")
    segment_sets = {str(name): validate_segments(labels) for name, labels in raw_sets.items()}
    default_set = str(config["default_set"])
    if default_set not in segment_sets:
        raise ValueError(f"Unknown default_set: {default_set}")
    seed = None if config["seed"] is None else _config_number(config, "seed", int)

    return SpinnerConfig(
        spin_duration_ms=duration,
        jitter_degrees=jitter,
        min_turns=min_turns,
        max_turns=max_turns,
        min_forward_degrees=min_forward,
        image_dir=resolve_path(base_dir, str(config["image_dir"])),
        image_ext=str(config["image_ext"]),
        sound_dir=resolve_path(base_dir, str(config["sound_dir"])),
        sound_ext=str(config["sound_ext"]),
        segment_sets=segment_sets,
        default_set=default_set,
        seed=seed,
    )


def load_config(path: Path) -> SpinnerConfig:
    if not path.exists():
        logger.info("Config %s not found, using defaults", path)
        return parse_config({}, path.parent)
    return parse_config(read_json(path), path.parent)


def normalize_rotation(rotation: float) -> float:
    normalized = rotation % 360
    # Tiny negative values round up to exactly 360.0.
    return 0.0 if normalized >= 360 else normalized


def pointer_angle(rotation: float) -> float:
    """Angle in the wheel's own frame that sits under the fixed top pointer."""
    return (360 - normalize_rotation(rotation)) % 360


def resolve_segment(rotation: float, segments: List[str]) -> Tuple[int, str]:
    """Return the segment index and label under the pointer for ``rotation``.

    Segment ``i`` covers pointer angles ``[45*i, 45*i + 45)``, so a rotation
    of exactly 0 lands on segment 0.
    """
    if not math.isfinite(rotation):
        raise ValueError(f"Rotation must be finite: {rotation}")
    index = int(pointer_angle(rotation) // SEGMENT_DEGREES) % SEGMENT_COUNT
    return index, segments[index]


def target_remainder(segment_index: int) -> float:
    """Rotation (mod 360) that parks the pointer on the segment midpoint."""
    midpoint = segment_index * SEGMENT_DEGREES + SEGMENT_DEGREES / 2
    return (360 - midpoint) % 360


class TkScheduler:
    """One-shot timers on a Tk widget's event loop."""

    def __init__(self, widget: Any) -> None:
        self.widget = widget

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.widget.after(delay_ms, callback)


class AsyncioScheduler:
    """One-shot timers on an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self.loop = loop

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        loop = self.loop or asyncio.get_running_loop()
        loop.call_later(delay_ms / 1000, callback)


class WheelController:
    """Owns the wheel state and serializes spins behind the spin lock."""

    def __init__(
        self,
        segments: List[str],
        scheduler: Any,
        player: Optional[SoundPlayer] = None,
        rng: Optional[random.Random] = None,
        config: Optional[SpinnerConfig] = None,
        rotation: float = 0.0,
        on_rotate: Optional[Callable[[float, int], None]] = None,
        on_lock_change: Optional[Callable[[bool], None]] = None,
        on_landed: Optional[Callable[[Landing], None]] = None,
    ) -> None:
        if not math.isfinite(rotation) or rotation < 0:
            raise ValueError(f"Initial rotation must be a non-negative number: {rotation}")
        self.config = config or SpinnerConfig()
        self.segments = validate_segments(segments)
        self.scheduler = scheduler
        self.player = player
        self.rng = rng or random.Random(self.config.seed)
        self.rotation = float(rotation)
        self.last_segment: Optional[int] = None
        self.spinning = False
        self.on_rotate = on_rotate
        self.on_lock_change = on_lock_change
        self.on_landed = on_landed

    def set_segments(self, segments: List[str]) -> bool:
        """Replace the active set; returns False while a spin is in flight."""
        if self.spinning:
            logger.debug("Set change ignored: wheel is spinning")
            return False
        self.segments = validate_segments(segments)
        self.last_segment = None
        return True

    def pick_target(self) -> int:
        candidates = [index for index in range(SEGMENT_COUNT) if index != self.last_segment]
        return self.rng.choice(candidates)

    def spin_delta(self, target: int) -> float:
        jitter = self.rng.uniform(-self.config.jitter_degrees, self.config.jitter_degrees)
        remainder = (target_remainder(target) + jitter) % 360
        full_turns = self.rng.randint(self.config.min_turns, self.config.max_turns) * 360
        forward = (remainder - self.rotation % 360) % 360
        if forward < self.config.min_forward_degrees:
            forward += 360
        return full_turns + forward

    def request_spin(self) -> Optional[float]:
        """Start a spin and return the new absolute rotation.

        Returns None without touching any state when a spin is already
        running. Completion is scheduled ``spin_duration_ms`` later.
        """
        if self.spinning:
            logger.debug("Spin ignored: wheel is already spinning")
            return None
        target = self.pick_target()
        self.rotation += self.spin_delta(target)
        logger.debug("Spin towards segment %d, rotation now %.2f", target, self.rotation)
        self.spinning = True
        if self.on_rotate:
            self.on_rotate(self.rotation, self.config.spin_duration_ms)
        if self.on_lock_change:
            self.on_lock_change(True)
        self.scheduler.call_later(self.config.spin_duration_ms, self._finish_spin)
        return self.rotation

    def resolve(self, rotation: Optional[float] = None) -> Landing:
        """Resolve the segment under the pointer and request its sound."""
        if rotation is None:
            rotation = self.rotation
        index, label = resolve_segment(rotation, self.segments)
        landing = Landing(rotation=rotation, pointer_angle=pointer_angle(rotation), index=index, label=label)
        logger.info(
            "rotation: %.2f | pointer: %.2f | segment: %d | label: %s",
            landing.rotation,
            landing.pointer_angle,
            landing.index,
            landing.label,
        )
        if self.player is not None:
            try:
                self.player.play(label)
            except Exception as exc:
                logger.warning("Audio play failed for %r: %s", label, exc)
        return landing

    def _finish_spin(self) -> None:
        landing = self.resolve()
        self.last_segment = landing.index
        self.spinning = False
        if self.on_lock_change:
            self.on_lock_change(False)
        if self.on_landed:
            self.on_landed(landing)


def lookup_set(config: SpinnerConfig, name: Optional[str]) -> List[str]:
    name = name or config.default_set
    if name not in config.segment_sets:
        options = ", ".join(config.segment_sets)
        raise ValueError(f"Unknown segment set: {name}. Available sets: {options}")
    return config.segment_sets[name]


async def run_spins(
    controller: WheelController, count: int, player: Optional[SoundPlayer] = None
) -> List[Landing]:
    """Run ``count`` consecutive spins, waiting for each to land.

    When a player is given, the last sound is allowed to finish before
    returning.
    """
    loop = asyncio.get_running_loop()
    landings: List[Landing] = []
    for _ in range(count):
        landed: asyncio.Future = loop.create_future()
        controller.on_landed = landed.set_result
        controller.request_spin()
        landings.append(await landed)
    controller.on_landed = None
    while player is not None and player.busy():
        await asyncio.sleep(0.05)
    return landings


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sound spinner (headless runner).")
    parser.add_argument(
        "--config",
        default="python/config.json",
        help="Path to config.json (default: python/config.json)",
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducible spins")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    spin_parser = subparsers.add_parser("spin", help="Spin the wheel and play the landed sound")
    spin_parser.add_argument("--count", type=int, default=1, help="Number of consecutive spins")
    spin_parser.add_argument("--set", dest="set_name", help="Segment set to spin")
    spin_parser.add_argument("--mute", action="store_true", help="Do not play sounds")

    resolve_parser = subparsers.add_parser("resolve", help="Show the segment under the pointer")
    resolve_parser.add_argument("rotation", type=float, help="Absolute rotation in degrees")
    resolve_parser.add_argument("--set", dest="set_name", help="Segment set to resolve against")

    subparsers.add_parser("sets", help="List configured segment sets")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(Path(args.config))
        if args.seed is not None:
            config.seed = args.seed

        if args.command == "sets":
            for name, labels in config.segment_sets.items():
                marker = "*" if name == config.default_set else " "
                print(f"{marker} {name}: {', '.join(labels)}")
            return

        segments = lookup_set(config, args.set_name)
        if args.command == "resolve":
            index, label = resolve_segment(args.rotation, segments)
            print(f"{args.rotation} -> segment {index} ({label})")
            return

        if args.count <= 0:
            raise ValueError(f"Invalid spin count: {args.count}")
    except ValueError as exc:
        raise SystemExit(str(exc))

    player = None if args.mute else SoundPlayer(config.sound_dir, config.sound_ext)
    controller = WheelController(segments, AsyncioScheduler(), player=player, config=config)
    landings = asyncio.run(run_spins(controller, args.count, player))
    for number, landing in enumerate(landings, start=1):
        print(f"#{number} | rotation {landing.rotation:.1f} | segment {landing.index} | {landing.label}")


if __name__ == "__main__":
    main()
