"""Translate a render snapshot into rasterizer (jp2a) command-line directives."""

from __future__ import annotations

from . import RenderSnapshot
from .render_config import DEFAULT_EDGE_THRESHOLD


def _unit(value: float) -> str:
    return f"{value:.2f}"


def build_rasterizer_args(snapshot: RenderSnapshot) -> list[str]:
    """Return the ordered directive list for one frame.

    The image path is not included; the caller appends it.
    """

    args: list[str] = []

    if snapshot.edges_only:
        args.append("--edges-only")
        threshold = snapshot.edge_threshold
        if threshold is None:
            threshold = DEFAULT_EDGE_THRESHOLD
        args.append(f"--edge-threshold={_unit(threshold)}")
    elif snapshot.edge_threshold is not None:
        args.append(f"--edge-threshold={_unit(snapshot.edge_threshold)}")

    if snapshot.invert:
        args.append("--invert")
    if snapshot.use_color:
        args.append("--colors")
    if snapshot.color_depth is not None:
        args.append(f"--color-depth={snapshot.color_depth}")
    if snapshot.chars:
        args.append(f"--chars={snapshot.chars}")

    flags = (
        (snapshot.border, "--border"),
        (snapshot.flip_x, "--flipx"),
        (snapshot.flip_y, "--flipy"),
        (snapshot.term_fit, "--term-fit"),
        (snapshot.term_center, "--term-center"),
        (snapshot.term_zoom, "--term-zoom"),
        (snapshot.grayscale, "--grayscale"),
    )
    args.extend(flag for enabled, flag in flags if enabled)
    if snapshot.background:
        args.append(f"--background={snapshot.background}")
    if snapshot.fill:
        args.append("--fill")

    for name, value in (
        ("red", snapshot.red_weight),
        ("green", snapshot.green_weight),
        ("blue", snapshot.blue_weight),
    ):
        if value is not None:
            args.append(f"--{name}={_unit(value)}")

    if snapshot.use_explicit_size and snapshot.width is not None and snapshot.height is not None:
        args.append(f"--size={snapshot.width}x{snapshot.height}")
    else:
        if snapshot.width is not None:
            args.append(f"--width={snapshot.width}")
        if snapshot.height is not None:
            args.append(f"--height={snapshot.height}")

    args.extend(snapshot.extra_options)
    return args
