import pytest

from arenanet.game_input import PlayerInput
from arenanet.game_state import LEVEL_0_WALLS, GameState, Player
from arenanet.network import (
    NETWORK_NO_USER_ID,
    PACKET_SIZE,
    NetworkPacket,
    PacketType,
)


@pytest.mark.parametrize(
    "name, value",
    [("INPUTS", 0), ("GAME_STATE", 1), ("REQUEST_ID", 2), ("RESPOND_ID", 3)],
)
def test_packet_type_encoded_as_wire_value(name, value):
    packet_type = PacketType[name]
    data = NetworkPacket(packet_type).to_bytes()
    assert data[0] == value
    assert NetworkPacket.from_bytes(data).packet_type is packet_type


def test_packet_size_matches_layout():
    assert PACKET_SIZE == 1844
    assert len(NetworkPacket(PacketType.REQUEST_ID).to_bytes()) == PACKET_SIZE


def test_first_byte_is_packet_type():
    data = NetworkPacket(PacketType.RESPOND_ID, sparse_player_id=7).to_bytes()
    assert data[0] == PacketType.RESPOND_ID
    assert data[4:8] == (7).to_bytes(4, "little")


def test_default_packet_is_zeroed_after_header():
    data = NetworkPacket(PacketType.INPUTS).to_bytes()
    assert data[1:] == bytes(PACKET_SIZE - 1)


def test_inputs_round_trip():
    packet = NetworkPacket(PacketType.INPUTS, sparse_player_id=12, player_input=PlayerInput(254, 0))
    decoded = NetworkPacket.from_bytes(packet.to_bytes())
    assert decoded == packet


def test_game_state_round_trip():
    state = GameState(
        players=[Player(0, 1.5, -2.25, 0.5, 4.0), Player(3, -8.0, 0.125, -1.0, 0.0)],
        walls=list(LEVEL_0_WALLS),
    )
    packet = NetworkPacket(PacketType.GAME_STATE, game_state=state)
    decoded = NetworkPacket.from_bytes(packet.to_bytes())
    assert decoded.packet_type is PacketType.GAME_STATE
    assert decoded.game_state == state


def test_no_user_id_round_trips():
    packet = NetworkPacket(PacketType.REQUEST_ID, sparse_player_id=NETWORK_NO_USER_ID)
    assert NetworkPacket.from_bytes(packet.to_bytes()).sparse_player_id == NETWORK_NO_USER_ID


def test_wrong_length_rejected():
    data = NetworkPacket(PacketType.INPUTS).to_bytes()
    with pytest.raises(ValueError):
        NetworkPacket.from_bytes(data[:-1])


def test_unknown_type_rejected():
    data = bytearray(NetworkPacket(PacketType.INPUTS).to_bytes())
    data[0] = 9
    with pytest.raises(ValueError):
        NetworkPacket.from_bytes(bytes(data))


def test_too_many_players_rejected():
    data = bytearray(NetworkPacket(PacketType.GAME_STATE).to_bytes())
    data[12:16] = (200).to_bytes(4, "little")
    with pytest.raises(ValueError):
        NetworkPacket.from_bytes(bytes(data))


def test_out_of_range_id_rejected_on_encode():
    with pytest.raises(ValueError):
        NetworkPacket(PacketType.INPUTS, sparse_player_id=-1).to_bytes()