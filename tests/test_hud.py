from termoplayer.core import RenderConfig
from termoplayer.core.hud import format_hud, render_hud


def test_hud_has_three_lines_reflecting_every_option():
    config = RenderConfig(
        use_color=True,
        edges_only=True,
        edge_threshold=0.25,
        color_depth=8,
        background="light",
        red_weight=0.5,
        width=82,
        chars="@#",
        extra_options=("--contrast",),
    )
    lines = format_hud(config.snapshot())
    assert len(lines) == 3
    assert "1:color=on" in lines[0]
    assert "2:edges=on(th=0.25)" in lines[0]
    assert "4:depth=8" in lines[0]
    assert "FPS=30" in lines[0]
    assert "y:bg=light" in lines[1]
    assert "5:border=off" in lines[1]
    assert "r/R:red=0.50" in lines[2]
    assert "g/G:green=auto" in lines[2]
    assert "w/W:width=82" in lines[2]
    assert "h/H:height=auto" in lines[2]
    assert "chars=@#" in lines[2]
    assert "extra=--contrast" in lines[2]


def test_render_hud_starts_on_a_new_line():
    text = render_hud(RenderConfig().snapshot())
    assert text.startswith("\n1:color=off")
    assert text.endswith("\n")
    assert "th=none" in text
