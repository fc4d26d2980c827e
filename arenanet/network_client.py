"""UDP client that obtains a player id and exchanges inputs for game state."""

from __future__ import annotations

import errno
import socket

from arenanet.game_input import PlayerInput
from arenanet.game_state import GameState
from arenanet.network import NETWORK_NO_USER_ID, PACKET_SIZE, NetworkPacket, PacketType

DEFAULT_PORT = 4242

_NOMINAL_ERRNOS = {errno.EWOULDBLOCK, errno.EAGAIN, errno.ECONNRESET, errno.ENOTCONN}


def _is_nominal(exc: OSError) -> bool:
    return isinstance(exc, (BlockingIOError, ConnectionResetError)) or exc.errno in _NOMINAL_ERRNOS


class NetworkClient:
    """A non-blocking UDP client talking to one game server."""

    def __init__(self, host: str = "localhost", port: int = DEFAULT_PORT) -> None:
        family, socktype, proto, _, address = socket.getaddrinfo(
            host, port, socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP
        )[0]
        self.server_address = address
        self.sparse_player_id = NETWORK_NO_USER_ID
        self._socket = socket.socket(family, socktype, proto)
        self._socket.setblocking(False)

    @property
    def has_player_id(self) -> bool:
        return self.sparse_player_id != NETWORK_NO_USER_ID

    def _receive(self) -> NetworkPacket | None:
        try:
            data = self._socket.recv(PACKET_SIZE + 1)
        except OSError as exc:
            if _is_nominal(exc):
                return None
            raise
        return NetworkPacket.from_bytes(data)

    def update(self, game_state: GameState, player_input: PlayerInput) -> GameState:
        """Send one frame's message and return the newest known game state.

        Until the server has assigned an id, an id request is sent instead of
        inputs. Raises ValueError for a malformed reply.
        """
        requesting = not self.has_player_id
        if requesting:
            packet = NetworkPacket(PacketType.REQUEST_ID)
        else:
            packet = NetworkPacket(
                PacketType.INPUTS,
                sparse_player_id=self.sparse_player_id,
                player_input=player_input,
            )
        self._socket.sendto(packet.to_bytes(), self.server_address)

        reply = self._receive()
        if reply is None:
            return game_state
        if requesting:
            if reply.packet_type == PacketType.RESPOND_ID:
                self.sparse_player_id = reply.sparse_player_id
            return game_state
        if reply.packet_type == PacketType.GAME_STATE:
            return reply.game_state
        return game_state

    def close(self) -> None:
        self._socket.close()

    def __enter__(self) -> NetworkClient:
        return self

    def __exit__(self, *args) -> None:
        self.close()