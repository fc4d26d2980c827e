# arenanet

A small networked arena game. The server runs the simulation at a fixed step
of 8 ms per frame. Clients send their movement input over UDP and get the
whole game state back each frame. Each side draws the arena into a software
frame buffer, and the view follows that side's own player.

## Install

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Playing

Start a server. The server has its own local player, who always has player
id 0:

```
arenanet server
```

Start one or more clients in other terminals:

```
arenanet client
```

Both use `localhost` and UDP port 4242 unless you pass `--host` and
`--port`. Run `arenanet --help` to see the options.

Controls:

- `W` `A` `S` `D` move the player. Opposite keys held together cancel out.
- In the client, hold left `Ctrl` and move the mouse to drag the window.
- `Esc` or closing the window quits.

A client first asks the server for a player id. Once it has one, it sends its
input every frame and shows the newest game state the server sent back. The
server drops remote players it has not heard from for more than 32 frames.

## Using the library

The simulation does not depend on the window or the network code:

```python
from arenanet.game_input import GameInput, PlayerInput
from arenanet.game_state import GameState, update_game_state

state = GameState()
game_input = GameInput()
game_input.add_player_input(0, PlayerInput(move_x=254, move_y=127))
state = update_game_state(state, game_input)
print(state.player_position(0))
```

Each axis of `PlayerInput` is a byte: 127 is centred, 0 and 254 are the
extremes. `update_game_state` returns a new `GameState`. Players that are not
in the input are dropped. New players start at rest at the origin. The walls
always come from the one built-in level.

Other modules:

- `arenanet.network`: `NetworkPacket`, the fixed-size wire format, with
  `to_bytes` and `from_bytes`. `PacketType` lists the kinds of message.
- `arenanet.network_client.NetworkClient` and
  `arenanet.network_server.NetworkServer`: the non-blocking UDP endpoints.
  Both work as context managers.
- `arenanet.input`: `InputState` tracks keys, mouse buttons and the cursor,
  and `to_player_input` turns WASD into a `PlayerInput`.
- `arenanet.render`: `Renderer` and `Camera` draw a `GameState` into a NumPy
  `uint32` frame buffer. `render_rect` fills one world-space rectangle.
- `arenanet.app`: `FrameClock` for fixed-step timing, the pygame `Window`,
  and `run_client`, `run_server` and `main`.
- `arenanet.vecmath`: small vector and matrix types (`V2`, `V3`, `Mtx4x4`),
  interpolation helpers, the polynomial `approx_sin` and `approx_cos`, and
  xorshift-style `rand_u32` and `rand8_u32`.

## What it does not do

- Players do not collide with the walls or with each other. The walls are
  only drawn.
- The client does not predict or interpolate. It shows whatever state
  arrived last.
- There is no reliable delivery, authentication or encryption. A malformed
  datagram raises `ValueError`, and a full player table raises
  `OverflowError` in the server.
- There is only one level, and no scoring or game rules beyond movement.