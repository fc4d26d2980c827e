import numpy as np
import pytest

from arenanet.game_state import LEVEL_0_WALLS, GameState, Player
from arenanet.render import (
    BACKGROUND_COLOR,
    PLAYER_COLOR,
    WALL_COLOR,
    Camera,
    Renderer,
    render_rect,
)


def _buffer():
    return np.zeros((32, 64), dtype=np.uint32)


def _camera():
    return Camera(pos_x=0.0, pos_y=0.0, half_width=16.0, aspect_ratio=0.5)


def test_centred_rect_fills_exact_block():
    fb = _buffer()
    render_rect(fb, _camera(), 0.0, 0.0, 4.0, 4.0, 0xAABBCCDD)
    assert np.count_nonzero(fb) == 64
    assert (fb[12:20, 28:36] == 0xAABBCCDD).all()


def test_rect_covering_view_fills_everything():
    fb = _buffer()
    render_rect(fb, _camera(), 0.0, 0.0, 1000.0, 1000.0, 7)
    assert (fb == 7).all()


def test_rect_is_clipped_at_left_edge_without_wrapping():
    fb = _buffer()
    render_rect(fb, _camera(), -16.0, 0.0, 4.0, 4.0, 9)
    assert (fb[:, 0] == 9).any()
    assert not (fb[:, -1] == 9).any()


def test_rect_outside_view_draws_nothing():
    fb = _buffer()
    render_rect(fb, _camera(), -100.0, 0.0, 4.0, 4.0, 9)
    render_rect(fb, _camera(), 0.0, 100.0, 4.0, 4.0, 9)
    assert np.count_nonzero(fb) == 0


def test_positive_world_y_is_drawn_towards_top():
    fb = _buffer()
    render_rect(fb, _camera(), 0.0, 4.0, 2.0, 2.0, 5)
    rows = np.nonzero((fb == 5).any(axis=1))[0]
    assert rows.size > 0
    assert rows.max() < fb.shape[0] // 2


def test_camera_offset_moves_rect():
    fb_a = _buffer()
    fb_b = _buffer()
    render_rect(fb_a, _camera(), 0.0, 0.0, 4.0, 4.0, 1)
    moved = Camera(pos_x=-4.0, pos_y=0.0, half_width=16.0, aspect_ratio=0.5)
    render_rect(fb_b, moved, 0.0, 0.0, 4.0, 4.0, 1)
    cols_a = np.nonzero(fb_a.any(axis=0))[0]
    cols_b = np.nonzero(fb_b.any(axis=0))[0]
    assert cols_b.min() > cols_a.min()
    assert np.count_nonzero(fb_a) == np.count_nonzero(fb_b)


def test_nan_rect_is_ignored():
    fb = _buffer()
    render_rect(fb, _camera(), float("nan"), 0.0, 4.0, 4.0, 3)
    assert np.count_nonzero(fb) == 0


def test_renderer_rejects_tiny_and_huge_buffers():
    with pytest.raises(ValueError):
        Renderer(2, 2)
    with pytest.raises(ValueError):
        Renderer(5000, 10)


def test_renderer_default_camera_uses_aspect_ratio():
    renderer = Renderer(64, 32)
    assert renderer.camera.aspect_ratio == 0.5
    assert renderer.camera.half_width == 15.0
    assert (renderer.width, renderer.height) == (64, 32)


def test_clear_fills_buffer():
    renderer = Renderer(16, 8)
    renderer.clear(BACKGROUND_COLOR)
    assert (renderer.frame_buffer == BACKGROUND_COLOR).all()


def test_render_game_state_draws_players_and_walls():
    renderer = Renderer(64, 32)
    state = GameState(players=[Player(sparse_id=0)], walls=list(LEVEL_0_WALLS))
    fb = renderer.render_game_state(state)
    assert fb is renderer.frame_buffer
    assert fb[0, 0] == WALL_COLOR
    assert (fb == PLAYER_COLOR).any()
    assert (fb == BACKGROUND_COLOR).any()


def test_later_players_are_drawn_taller():
    renderer = Renderer(64, 32, Camera(half_width=16.0, aspect_ratio=0.5))
    state = GameState(players=[Player(1, pos_x=-8.0), Player(2, pos_x=8.0)])
    fb = renderer.render_game_state(state)
    player = fb == PLAYER_COLOR
    left = np.count_nonzero(player[:, :32])
    right = np.count_nonzero(player[:, 32:])
    assert left > 0
    assert right > left


def test_draw_world_rect_uses_renderer_camera():
    renderer = Renderer(64, 32, _camera())
    renderer.draw_world_rect(0.0, 0.0, 4.0, 4.0, 0x11)
    expected = _buffer()
    render_rect(expected, _camera(), 0.0, 0.0, 4.0, 4.0, 0x11)
    assert np.array_equal(renderer.frame_buffer, expected)