"""Game client and server main loops, window handling and frame pacing."""

from __future__ import annotations

import argparse
import os
import string
import time

import numpy as np
import pygame

from arenanet.game_input import FRAME_DURATION_NS, GameInput
from arenanet.game_state import GameState, update_game_state
from arenanet.input import InputState, KeyboardKey, MouseButton
from arenanet.network_client import NetworkClient
from arenanet.network_server import NetworkServer
from arenanet.render import Renderer

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 4242

WINDOW_WIDTH = 1000
WINDOW_HEIGHT = (WINDOW_WIDTH * 3) // 4

CLIENT_WINDOW_POS = (1280 + 140, 345)
SERVER_WINDOW_POS = (140, 345)

# Sparse id of the player sitting at the server.
SERVER_LOCAL_PLAYER_ID = 0

_PYGAME_MOUSE_BUTTONS = {1: MouseButton.LEFT, 3: MouseButton.RIGHT}


class FrameClock:
    """Accumulates elapsed time and releases fixed-length simulation frames."""

    def __init__(self, start_ns: int, frame_duration_ns: int = FRAME_DURATION_NS) -> None:
        if frame_duration_ns <= 0:
            raise ValueError(f"frame duration must be positive, got {frame_duration_ns}")
        self.frame_duration_ns = frame_duration_ns
        self._last_ns = start_ns
        self._timer_ns = 0

    @property
    def pending_ns(self) -> int:
        """Time accumulated but not yet consumed by a frame."""
        return self._timer_ns

    def tick(self, now_ns: int) -> bool:
        """Advance to ``now_ns``; True when a whole frame is due and was consumed."""
        self._timer_ns += now_ns - self._last_ns
        self._last_ns = now_ns
        if self._timer_ns < self.frame_duration_ns:
            return False
        self._timer_ns -= self.frame_duration_ns
        return True


def _build_key_map() -> dict[int, KeyboardKey]:
    mapping = {
        pygame.K_ESCAPE: KeyboardKey.ESCAPE,
        pygame.K_SPACE: KeyboardKey.SPACE,
        pygame.K_LCTRL: KeyboardKey.LCTRL,
        pygame.K_LALT: KeyboardKey.ALT,
    }
    for digit in range(10):
        mapping[getattr(pygame, f"K_{digit}")] = KeyboardKey[f"KEY_{digit}"]
    for letter in string.ascii_lowercase:
        mapping[getattr(pygame, f"K_{letter}")] = KeyboardKey[letter.upper()]
    return mapping


_KEY_MAP = _build_key_map()


def pygame_key_to_keyboard_key(key: int) -> KeyboardKey:
    """Map a pygame key code to a KeyboardKey, NOT_SUPPORTED for unmapped keys."""
    return _KEY_MAP.get(key, KeyboardKey.NOT_SUPPORTED)


def _frame_buffer_to_rgb(frame_buffer: np.ndarray) -> np.ndarray:
    pixels = frame_buffer.T
    return np.stack(
        ((pixels >> 16) & 0xFF, (pixels >> 8) & 0xFF, pixels & 0xFF), axis=-1
    ).astype(np.uint8)


class Window:
    """A borderless window that shows a 32-bit 0xAARRGGBB frame buffer."""

    def __init__(self, x: int, y: int, width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT) -> None:
        os.environ["SDL_VIDEO_WINDOW_POS"] = f"{x},{y}"
        pygame.init()
        try:
            pygame.display.set_caption("Game")
            self._surface = pygame.display.set_mode((width, height), pygame.NOFRAME)
        except pygame.error:
            pygame.quit()
            raise
        self._sdl_window = None
        try:
            from pygame._sdl2.video import Window as _SdlWindow

            self._sdl_window = _SdlWindow.from_display_module()
        except (ImportError, AttributeError, pygame.error):
            # Moving the window is unavailable on this platform.
            self._sdl_window = None

    @property
    def width(self) -> int:
        return self._surface.get_width()

    @property
    def height(self) -> int:
        return self._surface.get_height()

    def pump_events(self, input_state: InputState) -> bool:
        """Feed pending events into ``input_state``; False once the window is closed."""
        running = True
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            if event.type == pygame.KEYDOWN:
                input_state.set_key(pygame_key_to_keyboard_key(event.key))
            elif event.type == pygame.KEYUP:
                input_state.clear_key(pygame_key_to_keyboard_key(event.key))
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button in _PYGAME_MOUSE_BUTTONS:
                input_state.set_mouse_button(_PYGAME_MOUSE_BUTTONS[event.button])
            elif event.type == pygame.MOUSEBUTTONUP and event.button in _PYGAME_MOUSE_BUTTONS:
                input_state.clear_mouse_button(_PYGAME_MOUSE_BUTTONS[event.button])
        input_state.sample_mouse(*pygame.mouse.get_pos())
        return running

    def move_by(self, dx: int, dy: int) -> None:
        """Shift the window on screen by the given number of pixels."""
        if self._sdl_window is None:
            return
        x, y = self._sdl_window.position
        self._sdl_window.position = (x + dx, y + dy)

    def present(self, frame_buffer: np.ndarray) -> None:
        """Copy a (height, width) frame buffer to the window and show it."""
        if frame_buffer.shape != (self.height, self.width):
            raise ValueError(
                f"frame buffer is {frame_buffer.shape[1]}x{frame_buffer.shape[0]}, "
                f"window is {self.width}x{self.height}"
            )
        pygame.surfarray.blit_array(self._surface, _frame_buffer_to_rgb(frame_buffer))
        pygame.display.flip()

    def close(self) -> None:
        pygame.quit()

    def __enter__(self) -> Window:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def _wait() -> None:
    time.sleep(0)


def run_client(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Run the client until the window closes or Escape is pressed."""
    with Window(*CLIENT_WINDOW_POS) as window, NetworkClient(host, port) as client:
        renderer = Renderer(window.width, window.height)
        input_state = InputState()
        game_state = GameState()
        clock = FrameClock(time.perf_counter_ns())

        while True:
            now_ns = time.perf_counter_ns()
            if not window.pump_events(input_state):
                break
            if input_state.is_key_down(KeyboardKey.ESCAPE):
                break
            if input_state.is_key_down(KeyboardKey.LCTRL):
                window.move_by(*input_state.mouse_delta())
            if not clock.tick(now_ns):
                _wait()
                continue

            game_state = client.update(game_state, input_state.to_player_input())

            renderer.camera.pos_x, renderer.camera.pos_y = game_state.player_position(
                client.sparse_player_id
            )
            window.present(renderer.render_game_state(game_state))
            input_state.end_frame()


def run_server(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Run the authoritative server, with its own local player, until closed."""
    with Window(*SERVER_WINDOW_POS) as window, NetworkServer(host, port) as server:
        renderer = Renderer(window.width, window.height)
        input_state = InputState()
        prev_state = GameState()
        clock = FrameClock(time.perf_counter_ns())
        frame_num = 0

        while True:
            now_ns = time.perf_counter_ns()
            if not window.pump_events(input_state):
                break
            if input_state.is_key_down(KeyboardKey.ESCAPE):
                break
            if not clock.tick(now_ns):
                _wait()
                continue

            game_input = GameInput()
            game_input.add_player_input(SERVER_LOCAL_PLAYER_ID, input_state.to_player_input())
            server.receive_client_inputs(frame_num, game_input)

            next_state = update_game_state(prev_state, game_input)

            renderer.camera.pos_x, renderer.camera.pos_y = next_state.player_position(
                SERVER_LOCAL_PLAYER_ID
            )
            server.send_game_state(next_state)
            window.present(renderer.render_game_state(next_state))

            prev_state = next_state
            input_state.end_frame()
            frame_num += 1


def _port(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}") from None
    if not 1 <= value <= 0xFFFF:
        raise argparse.ArgumentTypeError(f"port out of range: {value}")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="arenanet", description="Networked arena game.")
    parser.add_argument("role", choices=("client", "server"), help="which side to run")
    parser.add_argument("--host", default=DEFAULT_HOST, help="server address")
    parser.add_argument("--port", type=_port, default=DEFAULT_PORT, help="server UDP port")
    return parser


def main(argv=None) -> int:
    args = _parser().parse_args(argv)
    if args.role == "client":
        run_client(args.host, args.port)
    else:
        run_server(args.host, args.port)
    return 0