"""UDP server that hands out player ids, gathers inputs and broadcasts state."""

from __future__ import annotations

import errno
import socket
from dataclasses import dataclass

from arenanet.game_input import MAX_ACTIVE_PLAYERS, GameInput, PlayerInput
from arenanet.game_state import GameState
from arenanet.network import PACKET_SIZE, NetworkPacket, PacketType

DEFAULT_PORT = 4242

# Sparse id 0 belongs to the server's own local player.
FIRST_REMOTE_PLAYER_ID = 1
PLAYER_TIMEOUT_FRAMES = 32

_MAX_PLAYER_ID = 0xFFFFFFFF
_RECEIVE_ATTEMPTS = MAX_ACTIVE_PLAYERS * 2
_NOMINAL_ERRNOS = {errno.EWOULDBLOCK, errno.EAGAIN, errno.ECONNRESET, errno.ENOTCONN}


def _is_nominal(exc: OSError) -> bool:
    return isinstance(exc, (BlockingIOError, ConnectionResetError)) or exc.errno in _NOMINAL_ERRNOS


@dataclass
class _RemotePlayer:
    sparse_id: int
    last_frame_heard_from: int
    player_input: PlayerInput
    address: tuple


class NetworkServer:
    """A non-blocking UDP game server."""

    def __init__(self, host: str = "localhost", port: int = DEFAULT_PORT) -> None:
        family, socktype, proto, _, address = socket.getaddrinfo(
            host, port, socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP
        )[0]
        self._socket = socket.socket(family, socktype, proto)
        try:
            self._socket.setblocking(False)
            self._socket.bind(address)
        except OSError:
            self._socket.close()
            raise
        self.next_sparse_player_id = FIRST_REMOTE_PLAYER_ID
        self._players: list[_RemotePlayer] = []

    @property
    def address(self) -> tuple:
        """The address the server is bound to."""
        return self._socket.getsockname()

    @property
    def num_players(self) -> int:
        return len(self._players)

    @property
    def sparse_player_ids(self) -> list[int]:
        return [player.sparse_id for player in self._players]

    def _find(self, sparse_id: int) -> _RemotePlayer | None:
        found = None
        for player in self._players:
            if player.sparse_id == sparse_id:
                found = player
        return found

    def _handle_inputs(self, frame_num: int, packet: NetworkPacket, address: tuple) -> None:
        player = self._find(packet.sparse_player_id)
        if player is not None:
            player.last_frame_heard_from = frame_num
            player.player_input = packet.player_input
            return
        if len(self._players) + 1 >= MAX_ACTIVE_PLAYERS:
            raise OverflowError("active player overflow")
        self._players.append(
            _RemotePlayer(packet.sparse_player_id, frame_num, packet.player_input, address)
        )

    def _handle_id_request(self, address: tuple) -> None:
        reply = NetworkPacket(PacketType.RESPOND_ID, sparse_player_id=self.next_sparse_player_id)
        self._socket.sendto(reply.to_bytes(), address)
        self.next_sparse_player_id += 1
        if self.next_sparse_player_id >= _MAX_PLAYER_ID:
            raise OverflowError("player id overflow")

    def _drop_stale_players(self, frame_num: int) -> None:
        # Swap-remove, as the slot order is the dense player order.
        index = 0
        while index < len(self._players):
            if frame_num - self._players[index].last_frame_heard_from > PLAYER_TIMEOUT_FRAMES:
                self._players[index] = self._players[-1]
                self._players.pop()
            index += 1

    def receive_client_inputs(self, frame_num: int, game_input: GameInput) -> None:
        """Process pending datagrams, drop silent players and add all inputs.

        Raises ValueError for a malformed datagram and OverflowError when the
        player table or the id space is exhausted.
        """
        for _ in range(_RECEIVE_ATTEMPTS):
            try:
                data, address = self._socket.recvfrom(PACKET_SIZE + 1)
            except OSError as exc:
                if _is_nominal(exc):
                    continue
                raise
            packet = NetworkPacket.from_bytes(data)
            if packet.packet_type == PacketType.INPUTS:
                self._handle_inputs(frame_num, packet, address)
            elif packet.packet_type == PacketType.REQUEST_ID:
                self._handle_id_request(address)

        self._drop_stale_players(frame_num)

        for player in self._players:
            game_input.add_player_input(player.sparse_id, player.player_input)

    def send_game_state(self, game_state: GameState) -> None:
        """Send the game state to every known remote player."""
        payload = NetworkPacket(PacketType.GAME_STATE, game_state=game_state).to_bytes()
        for player in self._players:
            self._socket.sendto(payload, player.address)

    def close(self) -> None:
        self._socket.close()

    def __enter__(self) -> NetworkServer:
        return self

    def __exit__(self, *args) -> None:
        self.close()