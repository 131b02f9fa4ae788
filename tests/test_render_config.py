import random
from dataclasses import FrozenInstanceError

import pytest

from termoplayer.core.render_config import BOOLEAN_FIELDS, MIN_DIMENSION, RenderConfig


def test_weight_adjustments_stay_within_unit_range():
    rng = random.Random(1234)
    for channel in ("red", "green", "blue"):
        config = RenderConfig()
        for _ in range(500):
            value = config.adjust_weight(channel, rng.choice((-0.01, 0.01, -0.37, 0.42)))
            assert 0.0 <= value <= 1.0


def test_weight_clamping_is_absorbing_at_both_bounds():
    config = RenderConfig()
    for _ in range(150):
        config.adjust_weight("red", 0.01)
    assert config.red_weight == 1.0
    config.adjust_weight("red", 0.01)
    assert config.red_weight == 1.0

    for _ in range(150):
        config.adjust_weight("red", -0.01)
    assert config.red_weight == 0.0


def test_unset_weight_is_treated_as_zero():
    config = RenderConfig()
    assert config.adjust_weight("green", 0.01) == 0.01
    assert config.adjust_weight("blue", -0.01) == 0.0


def test_width_and_height_never_drop_below_floor():
    config = RenderConfig()
    for _ in range(100):
        config.adjust_width(-2)
        config.adjust_height(-1)
        assert config.width >= MIN_DIMENSION
        assert config.height >= MIN_DIMENSION
    assert config.width == MIN_DIMENSION
    assert config.height == MIN_DIMENSION


def test_width_and_height_default_on_first_adjustment():
    config = RenderConfig()
    assert config.adjust_width(2) == 82
    assert config.adjust_height(-1) == 23


def test_color_depth_cycle_returns_to_unset_after_four_steps():
    config = RenderConfig()
    seen = [config.cycle_color_depth() for _ in range(4)]
    assert seen == [4, 8, 24, None]


def test_color_depth_outside_cycle_resets_to_unset():
    config = RenderConfig(color_depth=16)
    assert config.cycle_color_depth() is None
    assert config.cycle_color_depth() == 4


def test_background_cycle_returns_to_unset_after_three_steps():
    config = RenderConfig()
    seen = [config.cycle_background() for _ in range(3)]
    assert seen == ["dark", "light", None]


@pytest.mark.parametrize("name", BOOLEAN_FIELDS)
def test_toggling_twice_restores_original_value(name):
    config = RenderConfig()
    original = getattr(config, name)
    config.toggle(name)
    assert getattr(config, name) is not original
    config.toggle(name)
    assert getattr(config, name) is original


def test_thirteen_boolean_options():
    assert len(BOOLEAN_FIELDS) == 13


def test_enabling_edges_sets_default_threshold_once():
    config = RenderConfig()
    config.toggle("edges_only")
    assert config.edges_only is True
    assert config.edge_threshold == 0.10

    config.edge_threshold = 0.5
    config.toggle("edges_only")
    config.toggle("edges_only")
    assert config.edge_threshold == 0.5


def test_edge_threshold_auto_initializes_by_direction():
    up = RenderConfig()
    assert up.adjust_edge_threshold(0.01) == 0.11
    down = RenderConfig()
    assert down.adjust_edge_threshold(-0.01) == 0.0


def test_fps_floor_and_interval():
    config = RenderConfig()
    assert config.fps == 30
    for _ in range(29):
        config.adjust_fps(-1)
    assert config.fps == 1
    assert config.frame_interval == 1.0
    config.adjust_fps(-1)
    assert config.fps == 1


def test_constructor_clamps_values():
    config = RenderConfig(fps=0, edge_threshold=1.7, red_weight=-3, width=1, height=2)
    assert config.fps == 1
    assert config.edge_threshold == 1.0
    assert config.red_weight == 0.0
    assert config.width == MIN_DIMENSION
    assert config.height == MIN_DIMENSION


def test_toggle_rejects_unknown_option():
    with pytest.raises(ValueError):
        RenderConfig().toggle("chars")


def test_snapshot_is_detached_from_later_mutations():
    config = RenderConfig(extra_options=["--contrast"])
    snapshot = config.snapshot()
    config.toggle("invert")
    config.adjust_fps(5)
    assert snapshot.invert is False
    assert snapshot.fps == 30
    assert snapshot.extra_options == ("--contrast",)
    with pytest.raises(FrozenInstanceError):
        snapshot.invert = True
