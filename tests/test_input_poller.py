import os
import time

import pytest

from termoplayer.core import RenderConfig
from termoplayer.core.input_poller import InputPoller


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    os.close(read_fd)
    os.close(write_fd)


def _poller(pipe, data: bytes, **kwargs):
    read_fd, write_fd = pipe
    os.write(write_fd, data)
    config = kwargs.pop("config", None) or RenderConfig()
    return config, InputPoller(config, fd=read_fd, **kwargs)


def test_poll_with_no_input_returns_within_budget(pipe):
    _, poller = _poller(pipe, b"")
    started = time.monotonic()
    assert poller.poll() is False
    assert time.monotonic() - started < 0.5


def test_keys_mutate_config(pipe):
    config, poller = _poller(pipe, b"13xYfpRgwhS5")
    assert poller.poll() is False
    assert config.use_color is True
    assert config.invert is True
    assert config.grayscale is True
    assert config.background == "dark"
    assert config.fill is True
    assert config.show_hud is False
    assert config.red_weight == 0.01
    assert config.green_weight == 0.0
    assert config.width == 82
    assert config.height == 25
    assert config.use_explicit_size is True
    assert config.border is True


def test_digit_row_toggles(pipe):
    config, poller = _poller(pipe, b"67890")
    poller.poll()
    assert (config.flip_x, config.flip_y, config.term_fit, config.term_center, config.term_zoom) == (
        True,
        True,
        True,
        True,
        True,
    )


def test_edges_key_initializes_threshold(pipe):
    config, poller = _poller(pipe, b"2")
    poller.poll()
    assert config.edges_only is True
    assert config.edge_threshold == 0.10


def test_depth_key_cycles(pipe):
    config, poller = _poller(pipe, b"444")
    poller.poll()
    assert config.color_depth == 24


def test_quit_key_stops_draining(pipe):
    config, poller = _poller(pipe, b"1Q3")
    assert poller.poll() is True
    assert config.use_color is True
    assert config.invert is False


def test_left_arrow_lowers_fps_to_floor(pipe):
    config, poller = _poller(pipe, b"\x1b[D" * 29)
    poller.poll()
    assert config.fps == 1
    assert config.frame_interval == 1.0

    os.write(pipe[1], b"\x1b[D")
    poller.poll()
    assert config.fps == 1


def test_right_arrow_raises_fps(pipe):
    config, poller = _poller(pipe, b"\x1b[C\x1b[C")
    poller.poll()
    assert config.fps == 32


def test_up_and_down_arrows_adjust_threshold(pipe):
    config, poller = _poller(pipe, b"\x1b[A")
    poller.poll()
    assert config.edge_threshold == 0.11

    os.write(pipe[1], b"\x1b[B\x1b[B")
    poller.poll()
    assert config.edge_threshold == 0.09


def test_unknown_escape_sequence_is_discarded(pipe):
    config, poller = _poller(pipe, b"\x1b[Z3")
    poller.poll()
    assert config.fps == 30
    assert config.invert is True


def test_incomplete_escape_sequence_is_discarded(pipe):
    config, poller = _poller(pipe, b"\x1b[")
    before = config.snapshot()
    assert poller.poll() is False
    assert config.snapshot() == before


def test_closed_input_disables_polling():
    read_fd, write_fd = os.pipe()
    os.write(write_fd, b"1")
    os.close(write_fd)
    config = RenderConfig()
    poller = InputPoller(config, fd=read_fd)
    try:
        poller.poll()
        assert config.use_color is True
        assert poller.active is False
        assert poller.poll() is False
    finally:
        os.close(read_fd)


def test_non_interactive_poller_reads_nothing(pipe):
    config, poller = _poller(pipe, b"1", interactive=False)
    assert poller.poll() is False
    assert config.use_color is False
    assert os.read(pipe[0], 1) == b"1"


def test_dispatch_ignores_unbound_keys():
    config = RenderConfig()
    poller = InputPoller(config, fd=None)
    assert poller.dispatch("z") is False
    assert config.snapshot() == RenderConfig().snapshot()


def test_dispatch_sequence_applies_arrows_without_requesting_quit():
    config = RenderConfig()
    poller = InputPoller(config, fd=None)
    assert poller.dispatch_sequence("[C") is False
    assert config.fps == 31
    assert poller.dispatch_sequence("OD") is False
    assert config.fps == 30
    assert poller.dispatch_sequence("[Z") is False
