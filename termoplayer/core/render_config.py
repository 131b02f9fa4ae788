"""Mutable rendering state shared by the input poller, argument builder and HUD."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_FPS = 30
DEFAULT_EDGE_THRESHOLD = 0.10
DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24
MIN_DIMENSION = 4

COLOR_DEPTH_CYCLE: tuple[Optional[int], ...] = (None, 4, 8, 24)
BACKGROUND_CYCLE: tuple[Optional[str], ...] = (None, "dark", "light")
WEIGHT_CHANNELS = ("red", "green", "blue")
BOOLEAN_FIELDS = (
    "use_color",
    "edges_only",
    "invert",
    "border",
    "flip_x",
    "flip_y",
    "term_fit",
    "term_center",
    "term_zoom",
    "grayscale",
    "fill",
    "use_explicit_size",
    "show_hud",
)


def clamp_unit(value: float) -> float:
    """Clamp to [0.00, 1.00] at two-decimal precision."""

    return round(min(1.0, max(0.0, value)), 2)


def next_in_cycle(cycle: tuple, current):
    """Advance through a closed cycle; values outside it fall back to the first member."""

    if current not in cycle:
        return cycle[0]
    index = cycle.index(current)
    return cycle[(index + 1) % len(cycle)]


@dataclass(frozen=True)
class RenderSnapshot:
    """Read-only view of every display option, taken once per tick."""

    fps: int = DEFAULT_FPS
    use_color: bool = False
    edges_only: bool = False
    edge_threshold: Optional[float] = None
    invert: bool = False
    color_depth: Optional[int] = None
    chars: Optional[str] = None
    border: bool = False
    flip_x: bool = False
    flip_y: bool = False
    term_fit: bool = False
    term_center: bool = False
    term_zoom: bool = False
    grayscale: bool = False
    background: Optional[str] = None
    fill: bool = False
    red_weight: Optional[float] = None
    green_weight: Optional[float] = None
    blue_weight: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None
    use_explicit_size: bool = False
    show_hud: bool = True
    extra_options: tuple[str, ...] = ()

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.fps


@dataclass
class RenderConfig:
    """The single mutable bag of display options for one player run.

    Fields may be read directly. Mutations go through the methods below so
    that float fields stay inside [0.00, 1.00], width and height never drop
    below ``MIN_DIMENSION``, and fps never drops below 1.
    """

    fps: int = DEFAULT_FPS
    use_color: bool = False
    edges_only: bool = False
    edge_threshold: Optional[float] = None
    invert: bool = False
    color_depth: Optional[int] = None
    chars: Optional[str] = None
    border: bool = False
    flip_x: bool = False
    flip_y: bool = False
    term_fit: bool = False
    term_center: bool = False
    term_zoom: bool = False
    grayscale: bool = False
    background: Optional[str] = None
    fill: bool = False
    red_weight: Optional[float] = None
    green_weight: Optional[float] = None
    blue_weight: Optional[float] = None
    width: Optional[int] = None
    height: Optional[int] = None
    use_explicit_size: bool = False
    show_hud: bool = True
    extra_options: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        self.set_fps(self.fps)
        if self.edge_threshold is not None:
            self.set_edge_threshold(self.edge_threshold)
        for channel in WEIGHT_CHANNELS:
            value = getattr(self, f"{channel}_weight")
            if value is not None:
                self.set_weight(channel, value)
        if self.width is not None:
            self.set_width(self.width)
        if self.height is not None:
            self.set_height(self.height)
        self.extra_options = tuple(self.extra_options)

    @property
    def frame_interval(self) -> float:
        """Seconds between two frames at the current rate."""

        return 1.0 / self.fps

    # -- validated setters -------------------------------------------------

    def set_fps(self, value: int) -> None:
        self.fps = max(1, int(value))

    def set_edge_threshold(self, value: Optional[float]) -> None:
        self.edge_threshold = None if value is None else clamp_unit(value)

    def set_weight(self, channel: str, value: Optional[float]) -> None:
        if channel not in WEIGHT_CHANNELS:
            raise ValueError(f"Unknown weight channel: {channel}")
        setattr(self, f"{channel}_weight", None if value is None else clamp_unit(value))

    def set_width(self, value: Optional[int]) -> None:
        self.width = None if value is None else max(MIN_DIMENSION, int(value))

    def set_height(self, value: Optional[int]) -> None:
        self.height = None if value is None else max(MIN_DIMENSION, int(value))

    # -- interactive mutations ---------------------------------------------

    def toggle(self, name: str) -> bool:
        """Flip one boolean option and return its new value."""

        if name not in BOOLEAN_FIELDS:
            raise ValueError(f"Not a toggleable option: {name}")
        if name == "edges_only":
            return self.toggle_edges_only()
        value = not getattr(self, name)
        setattr(self, name, value)
        return value

    def toggle_edges_only(self) -> bool:
        self.edges_only = not self.edges_only
        if self.edges_only and self.edge_threshold is None:
            self.edge_threshold = DEFAULT_EDGE_THRESHOLD
        return self.edges_only

    def cycle_color_depth(self) -> Optional[int]:
        # Depths set from the command line outside the cycle reset to unset.
        self.color_depth = next_in_cycle(COLOR_DEPTH_CYCLE, self.color_depth)
        return self.color_depth

    def cycle_background(self) -> Optional[str]:
        self.background = next_in_cycle(BACKGROUND_CYCLE, self.background)
        return self.background

    def adjust_weight(self, channel: str, delta: float) -> float:
        current = getattr(self, f"{channel}_weight") if channel in WEIGHT_CHANNELS else None
        self.set_weight(channel, (current or 0.0) + delta)
        return getattr(self, f"{channel}_weight")

    def adjust_edge_threshold(self, delta: float) -> float:
        if self.edge_threshold is None:
            self.edge_threshold = DEFAULT_EDGE_THRESHOLD if delta > 0 else 0.0
        self.set_edge_threshold(self.edge_threshold + delta)
        return self.edge_threshold

    def adjust_width(self, delta: int) -> int:
        self.set_width((self.width if self.width is not None else DEFAULT_WIDTH) + delta)
        return self.width

    def adjust_height(self, delta: int) -> int:
        self.set_height((self.height if self.height is not None else DEFAULT_HEIGHT) + delta)
        return self.height

    def adjust_fps(self, delta: int) -> int:
        self.set_fps(self.fps + delta)
        logger.debug("Frame rate now %s fps (interval %.4fs)", self.fps, self.frame_interval)
        return self.fps

    def snapshot(self) -> RenderSnapshot:
        """Return an immutable copy for one tick's readers."""

        return RenderSnapshot(**{f.name: getattr(self, f.name) for f in fields(self)})
