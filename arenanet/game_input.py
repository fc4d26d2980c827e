"""Per-frame player input collected for a game-state update."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

MAX_ACTIVE_PLAYERS = 32
FRAME_DURATION_NS = 8_000_000

_AXIS_SCALE = np.float32(1.0 / 254.0)


@dataclass(frozen=True)
class PlayerInput:
    """Raw stick input: each axis is a byte, 127 is centred, 0 and 254 the extremes."""

    move_x: int
    move_y: int

    def __post_init__(self) -> None:
        for name in ("move_x", "move_y"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFF:
                raise ValueError(f"{name} must fit in a byte, got {value}")


def _axis(value: int) -> float:
    scaled = np.float32(value) * _AXIS_SCALE
    return float((scaled - np.float32(0.5)) * np.float32(2.0))


@dataclass
class GameInput:
    """Movement input of every active player, in dense player order."""

    sparse_player_ids: list[int] = field(default_factory=list)
    player_move_x: list[float] = field(default_factory=list)
    player_move_y: list[float] = field(default_factory=list)

    @property
    def num_players(self) -> int:
        return len(self.sparse_player_ids)

    def __len__(self) -> int:
        return self.num_players

    def add_player_input(self, sparse_player_id: int, player_input: PlayerInput) -> None:
        """Append a player's input, mapping each axis to roughly [-1, 1]."""
        if self.num_players >= MAX_ACTIVE_PLAYERS:
            raise OverflowError(
                f"game input is full: {self.num_players} / {MAX_ACTIVE_PLAYERS} players"
            )
        self.sparse_player_ids.append(sparse_player_id)
        self.player_move_x.append(_axis(player_input.move_x))
        self.player_move_y.append(_axis(player_input.move_y))