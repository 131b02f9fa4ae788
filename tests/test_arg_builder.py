from termoplayer.core import RenderConfig
from termoplayer.core.arg_builder import build_rasterizer_args


def _args(**fields):
    return build_rasterizer_args(RenderConfig(**fields).snapshot())


def test_defaults_produce_no_directives():
    assert _args() == []


def test_edges_only_without_threshold_uses_default():
    assert _args(edges_only=True) == ["--edges-only", "--edge-threshold=0.10"]


def test_edges_only_with_configured_threshold():
    assert _args(edges_only=True, edge_threshold=0.42) == ["--edges-only", "--edge-threshold=0.42"]


def test_threshold_alone_is_forwarded_without_edges_only():
    assert _args(edge_threshold=0.35) == ["--edge-threshold=0.35"]


def test_explicit_size_emits_single_geometry_directive():
    args = _args(use_explicit_size=True, width=80, height=24)
    assert args == ["--size=80x24"]


def test_explicit_size_needs_both_dimensions():
    assert _args(use_explicit_size=True, width=80) == ["--width=80"]


def test_width_only_without_explicit_size():
    assert _args(width=80) == ["--width=80"]


def test_separate_dimensions_keep_width_before_height():
    assert _args(width=80, height=24) == ["--width=80", "--height=24"]


def test_full_directive_order():
    config = RenderConfig(
        edges_only=True,
        edge_threshold=0.2,
        invert=True,
        use_color=True,
        color_depth=8,
        chars=" .:#",
        border=True,
        flip_x=True,
        flip_y=True,
        term_fit=True,
        term_center=True,
        term_zoom=True,
        grayscale=True,
        background="dark",
        fill=True,
        red_weight=0.3,
        green_weight=0.59,
        blue_weight=0.11,
        width=100,
        height=30,
        use_explicit_size=True,
        extra_options=("--contrast", "--verbose"),
    )
    assert build_rasterizer_args(config.snapshot()) == [
        "--edges-only",
        "--edge-threshold=0.20",
        "--invert",
        "--colors",
        "--color-depth=8",
        "--chars= .:#",
        "--border",
        "--flipx",
        "--flipy",
        "--term-fit",
        "--term-center",
        "--term-zoom",
        "--grayscale",
        "--background=dark",
        "--fill",
        "--red=0.30",
        "--green=0.59",
        "--blue=0.11",
        "--size=100x30",
        "--contrast",
        "--verbose",
    ]


def test_only_set_weights_are_emitted():
    assert _args(green_weight=0.5) == ["--green=0.50"]


def test_builder_does_not_mutate_config():
    config = RenderConfig(edges_only=True)
    build_rasterizer_args(config.snapshot())
    assert config.edge_threshold is None
