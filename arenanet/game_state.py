"""Simulation state of players and level walls, and the per-frame update."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from arenanet.game_input import FRAME_DURATION_NS, GameInput

MAX_WALLS = 64

_F32 = np.float32
_DT = _F32(FRAME_DURATION_NS / 1_000_000_000.0)
_HALF_DT2 = _F32(0.5) * (_DT * _DT)
_MAX_ACCEL = _F32(400.0)
_PLAYER_DRAG = _F32(-40.0)


@dataclass(frozen=True)
class Player:
    """One player's identity and kinematic state."""

    sparse_id: int
    pos_x: float = 0.0
    pos_y: float = 0.0
    vel_x: float = 0.0
    vel_y: float = 0.0


@dataclass(frozen=True)
class Wall:
    """An axis-aligned wall, centred on its position."""

    pos_x: float
    pos_y: float
    width: float
    height: float


LEVEL_0_WALLS: tuple[Wall, ...] = (
    Wall(-12.0, 12.0, 16.0, 16.0),
    Wall(12.0, 12.0, 16.0, 16.0),
    Wall(-12.0, -12.0, 16.0, 16.0),
    Wall(12.0, -12.0, 16.0, 16.0),
)


@dataclass
class GameState:
    """All players, in dense order, and the walls of the current level."""

    players: list[Player] = field(default_factory=list)
    walls: list[Wall] = field(default_factory=list)

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def num_walls(self) -> int:
        return len(self.walls)

    def dense_player_id(self, sparse_player_id: int) -> int | None:
        """Index of the player with this sparse id, or None if absent.

        When several players share the id, the last one wins.
        """
        result = None
        for index, player in enumerate(self.players):
            if player.sparse_id == sparse_player_id:
                result = index
        return result

    def player_position(self, sparse_player_id: int) -> tuple[float, float]:
        """Position of a player; the origin for a player not in the game."""
        dense = self.dense_player_id(sparse_player_id)
        if dense is None:
            return (0.0, 0.0)
        player = self.players[dense]
        return (player.pos_x, player.pos_y)


def _step_player(prev: Player | None, sparse_id: int, move_x: float, move_y: float) -> Player:
    if prev is None:
        pos_x = pos_y = vel_x = vel_y = _F32(0.0)
    else:
        pos_x, pos_y = _F32(prev.pos_x), _F32(prev.pos_y)
        vel_x, vel_y = _F32(prev.vel_x), _F32(prev.vel_y)

    accel_x, accel_y = _F32(move_x), _F32(move_y)
    length = np.sqrt(accel_x * accel_x + accel_y * accel_y)
    if length == 0.0 or np.isnan(length):
        accel_x = accel_y = _F32(0.0)
    else:
        accel_x = accel_x / length
        accel_y = accel_y / length
    accel_x = accel_x * _MAX_ACCEL
    accel_y = accel_y * _MAX_ACCEL

    # Drag opposes the previous velocity.
    accel_x = vel_x * _PLAYER_DRAG + accel_x
    accel_y = vel_y * _PLAYER_DRAG + accel_y

    new_vel_x = accel_x * _DT + vel_x
    new_vel_y = accel_y * _DT + vel_y
    new_pos_x = accel_x * _HALF_DT2 + (vel_x * _DT + pos_x)
    new_pos_y = accel_y * _HALF_DT2 + (vel_y * _DT + pos_y)

    return Player(
        sparse_id=sparse_id,
        pos_x=float(new_pos_x),
        pos_y=float(new_pos_y),
        vel_x=float(new_vel_x),
        vel_y=float(new_vel_y),
    )


def update_game_state(prev_game_state: GameState, game_input: GameInput) -> GameState:
    """Advance one frame: players follow the input order, walls come from level 0.

    Players absent from the input are dropped; players new to the input
    start at rest at the origin.
    """
    players = []
    for sparse_id, move_x, move_y in zip(
        game_input.sparse_player_ids, game_input.player_move_x, game_input.player_move_y
    ):
        dense = prev_game_state.dense_player_id(sparse_id)
        prev = None if dense is None else prev_game_state.players[dense]
        players.append(_step_player(prev, sparse_id, move_x, move_y))
    return GameState(players=players, walls=list(LEVEL_0_WALLS))