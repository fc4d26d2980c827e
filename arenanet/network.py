"""Datagram packets exchanged between client and server."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field

from arenanet.game_input import MAX_ACTIVE_PLAYERS, PlayerInput
from arenanet.game_state import MAX_WALLS, GameState, Player, Wall

NETWORK_NO_USER_ID = 0xFFFFFFFF

_PLAYER_SLOTS = MAX_ACTIVE_PLAYERS + 8

_HEADER = struct.Struct("<B3xIBB2x")
_PLAYERS = struct.Struct(
    f"<I{_PLAYER_SLOTS}I{_PLAYER_SLOTS}f{_PLAYER_SLOTS}f{_PLAYER_SLOTS}f{_PLAYER_SLOTS}f"
)
_WALLS = struct.Struct(f"<I{MAX_WALLS}f{MAX_WALLS}f{MAX_WALLS}f{MAX_WALLS}f")

PACKET_SIZE = _HEADER.size + _PLAYERS.size + _WALLS.size


class PacketType(enum.IntEnum):
    INPUTS = 0
    GAME_STATE = 1
    REQUEST_ID = 2
    RESPOND_ID = 3


def _pad(values: list, size: int, fill=0) -> list:
    return values + [fill] * (size - len(values))


def _columns(flat: tuple, count: int, width: int) -> list[tuple]:
    return [flat[start:start + width] for start in range(0, count * width, width)]


@dataclass
class NetworkPacket:
    """A fixed-size packet; every packet carries every field."""

    packet_type: PacketType
    sparse_player_id: int = 0
    player_input: PlayerInput = field(default_factory=lambda: PlayerInput(0, 0))
    game_state: GameState = field(default_factory=GameState)

    def to_bytes(self) -> bytes:
        state = self.game_state
        if state.num_players > MAX_ACTIVE_PLAYERS:
            raise ValueError(f"too many players: {state.num_players}")
        if state.num_walls > MAX_WALLS:
            raise ValueError(f"too many walls: {state.num_walls}")
        players = state.players
        walls = state.walls
        try:
            header = _HEADER.pack(
                int(self.packet_type),
                self.sparse_player_id,
                self.player_input.move_x,
                self.player_input.move_y,
            )
            player_block = _PLAYERS.pack(
                len(players),
                *_pad([p.sparse_id for p in players], _PLAYER_SLOTS),
                *_pad([p.pos_x for p in players], _PLAYER_SLOTS, 0.0),
                *_pad([p.pos_y for p in players], _PLAYER_SLOTS, 0.0),
                *_pad([p.vel_x for p in players], _PLAYER_SLOTS, 0.0),
                *_pad([p.vel_y for p in players], _PLAYER_SLOTS, 0.0),
            )
            wall_block = _WALLS.pack(
                len(walls),
                *_pad([w.pos_x for w in walls], MAX_WALLS, 0.0),
                *_pad([w.pos_y for w in walls], MAX_WALLS, 0.0),
                *_pad([w.width for w in walls], MAX_WALLS, 0.0),
                *_pad([w.height for w in walls], MAX_WALLS, 0.0),
            )
        except struct.error as exc:
            raise ValueError(f"packet field out of range: {exc}") from exc
        return header + player_block + wall_block

    @classmethod
    def from_bytes(cls, data: bytes) -> NetworkPacket:
        """Decode a packet; raises ValueError for malformed data."""
        if len(data) != PACKET_SIZE:
            raise ValueError(f"expected {PACKET_SIZE} bytes, got {len(data)}")
        type_value, sparse_id, move_x, move_y = _HEADER.unpack_from(data, 0)
        packet_type = PacketType(type_value)

        player_fields = _PLAYERS.unpack_from(data, _HEADER.size)
        num_players = player_fields[0]
        if num_players > MAX_ACTIVE_PLAYERS:
            raise ValueError(f"too many players: {num_players}")
        ids, pos_x, pos_y, vel_x, vel_y = _columns(player_fields[1:], 5, _PLAYER_SLOTS)
        players = [
            Player(ids[i], pos_x[i], pos_y[i], vel_x[i], vel_y[i]) for i in range(num_players)
        ]

        wall_fields = _WALLS.unpack_from(data, _HEADER.size + _PLAYERS.size)
        num_walls = wall_fields[0]
        if num_walls > MAX_WALLS:
            raise ValueError(f"too many walls: {num_walls}")
        wx, wy, ww, wh = _columns(wall_fields[1:], 4, MAX_WALLS)
        walls = [Wall(wx[i], wy[i], ww[i], wh[i]) for i in range(num_walls)]

        return cls(
            packet_type=packet_type,
            sparse_player_id=sparse_id,
            player_input=PlayerInput(move_x, move_y),
            game_state=GameState(players=players, walls=walls),
        )