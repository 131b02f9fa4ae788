"""Three-line status overlay printed under each frame in interactive mode."""

from __future__ import annotations

from . import RenderSnapshot


def _switch(value: bool) -> str:
    return "on" if value else "off"


def _or(value, fallback: str) -> str:
    if value is None:
        return fallback
    if isinstance(value, float):
        return f"{value:.2f}"
    return str(value)


def format_hud(snapshot: RenderSnapshot) -> list[str]:
    """Describe every option of the snapshot, grouped by key row."""

    return [
        (
            f"1:color={_switch(snapshot.use_color)}  "
            f"2:edges={_switch(snapshot.edges_only)}(th={_or(snapshot.edge_threshold, 'none')})  "
            f"3:invert={_switch(snapshot.invert)}  "
            f"4:depth={_or(snapshot.color_depth, 'none')}  "
            f"←/→ FPS={snapshot.fps}  ↑/↓ edge-th  q:quit  "
            f"p:HUD={_switch(snapshot.show_hud)}"
        ),
        (
            f"5:border={_switch(snapshot.border)}  "
            f"6:flipx={_switch(snapshot.flip_x)}  "
            f"7:flipy={_switch(snapshot.flip_y)}  "
            f"8:fit={_switch(snapshot.term_fit)}  "
            f"9:center={_switch(snapshot.term_center)}  "
            f"0:zoom={_switch(snapshot.term_zoom)}  "
            f"x:gray={_switch(snapshot.grayscale)}  "
            f"y:bg={_or(snapshot.background, 'none')}  "
            f"f:fill={_switch(snapshot.fill)}"
        ),
        (
            f"r/R:red={_or(snapshot.red_weight, 'auto')}  "
            f"g/G:green={_or(snapshot.green_weight, 'auto')}  "
            f"b/B:blue={_or(snapshot.blue_weight, 'auto')}  "
            f"w/W:width={_or(snapshot.width, 'auto')}  "
            f"h/H:height={_or(snapshot.height, 'auto')}  "
            f"s:size={_switch(snapshot.use_explicit_size)}  "
            f"chars={snapshot.chars or 'default'}  "
            f"extra={' '.join(snapshot.extra_options) or 'none'}"
        ),
    ]


def render_hud(snapshot: RenderSnapshot) -> str:
    """HUD text including the blank separator line above it."""

    return "\n" + "\n".join(format_hud(snapshot)) + "\n"
