import math

import pytest

from arenanet.game_input import GameInput, PlayerInput
from arenanet.game_state import (
    LEVEL_0_WALLS,
    GameState,
    Player,
    Wall,
    update_game_state,
)


def _input(*entries):
    game_input = GameInput()
    for sparse_id, mx, my in entries:
        game_input.sparse_player_ids.append(sparse_id)
        game_input.player_move_x.append(mx)
        game_input.player_move_y.append(my)
    return game_input


def test_new_state_is_empty():
    state = GameState()
    assert state.num_players == 0
    assert state.num_walls == 0


def test_dense_player_id_lookup():
    state = GameState(players=[Player(5), Player(9), Player(2)])
    assert state.dense_player_id(9) == 1
    assert state.dense_player_id(2) == 2
    assert state.dense_player_id(77) is None


def test_dense_player_id_last_match_wins():
    state = GameState(players=[Player(4), Player(4)])
    assert state.dense_player_id(4) == 1


def test_player_position_known_and_unknown():
    state = GameState(players=[Player(3, pos_x=1.5, pos_y=-2.0)])
    assert state.player_position(3) == (1.5, -2.0)
    assert state.player_position(8) == (0.0, 0.0)


def test_update_sets_level_walls():
    state = update_game_state(GameState(), _input())
    assert state.walls == list(LEVEL_0_WALLS)
    assert state.walls[0] == Wall(-12.0, 12.0, 16.0, 16.0)
    assert state.walls[3] == Wall(12.0, -12.0, 16.0, 16.0)


def test_zero_input_stays_at_rest():
    state = update_game_state(GameState(), _input((1, 0.0, 0.0)))
    assert state.players == [Player(1, 0.0, 0.0, 0.0, 0.0)]


def test_rightward_input_accelerates_right():
    state = update_game_state(GameState(), _input((1, 1.0, 0.0)))
    player = state.players[0]
    assert player.vel_x > 0.0
    assert player.pos_x > 0.0
    assert player.vel_y == 0.0
    assert player.pos_y == 0.0


def test_left_and_right_are_symmetric():
    right = update_game_state(GameState(), _input((1, 1.0, 0.0))).players[0]
    left = update_game_state(GameState(), _input((1, -1.0, 0.0))).players[0]
    assert left.vel_x == -right.vel_x
    assert left.pos_x == -right.pos_x


def test_input_magnitude_is_normalized():
    full = update_game_state(GameState(), _input((1, 1.0, 0.0))).players[0]
    half = update_game_state(GameState(), _input((1, 0.25, 0.0))).players[0]
    assert half.vel_x == pytest.approx(full.vel_x)


def test_diagonal_speed_matches_axis_speed():
    axis = update_game_state(GameState(), _input((1, 1.0, 0.0))).players[0]
    diag = update_game_state(GameState(), _input((1, 1.0, 1.0))).players[0]
    assert diag.vel_x == pytest.approx(diag.vel_y)
    assert math.hypot(diag.vel_x, diag.vel_y) == pytest.approx(axis.vel_x, rel=1e-5)


def test_velocity_carries_over_between_frames():
    first = update_game_state(GameState(), _input((1, 1.0, 0.0)))
    second = update_game_state(first, _input((1, 1.0, 0.0)))
    assert second.players[0].vel_x > first.players[0].vel_x
    assert second.players[0].pos_x > first.players[0].pos_x


def test_drag_slows_a_coasting_player():
    moving = update_game_state(GameState(), _input((1, 1.0, 0.0)))
    coasting = update_game_state(moving, _input((1, 0.0, 0.0)))
    assert 0.0 < coasting.players[0].vel_x < moving.players[0].vel_x
    assert coasting.players[0].pos_x > moving.players[0].pos_x


def test_velocity_approaches_terminal_speed():
    state = GameState()
    for _ in range(2000):
        state = update_game_state(state, _input((1, 0.0, 1.0)))
    assert state.players[0].vel_y == pytest.approx(10.0, rel=1e-3)


def test_players_follow_input_order_and_are_dropped():
    prev = GameState(players=[Player(1, pos_x=5.0), Player(2, pos_x=-5.0)])
    state = update_game_state(prev, _input((2, 0.0, 0.0), (7, 0.0, 0.0)))
    assert [p.sparse_id for p in state.players] == [2, 7]
    assert state.players[0].pos_x == -5.0
    assert state.players[1].pos_x == 0.0


def test_works_with_real_player_input():
    game_input = GameInput()
    game_input.add_player_input(4, PlayerInput(254, 127))
    state = update_game_state(GameState(), game_input)
    assert state.players[0].sparse_id == 4
    assert state.players[0].vel_x > 0.0