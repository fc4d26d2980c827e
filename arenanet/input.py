"""Keyboard and mouse state tracking and mapping to player input."""

from __future__ import annotations

import enum
import string
from dataclasses import dataclass, field

from arenanet.game_input import PlayerInput

_AXIS_MIN = 0
_AXIS_CENTRE = 127
_AXIS_MAX = 254


class KeyboardKey(enum.IntEnum):
    NOT_SUPPORTED = 0
    ESCAPE = 1
    SPACE = 2
    LCTRL = 3
    ALT = 4
    KEY_0 = 5
    KEY_1 = 6
    KEY_2 = 7
    KEY_3 = 8
    KEY_4 = 9
    KEY_5 = 10
    KEY_6 = 11
    KEY_7 = 12
    KEY_8 = 13
    KEY_9 = 14
    A = 15
    B = 16
    C = 17
    D = 18
    E = 19
    F = 20
    G = 21
    H = 22
    I = 23  # noqa: E741
    J = 24
    K = 25
    L = 26
    M = 27
    N = 28
    O = 29  # noqa: E741
    P = 30
    Q = 31
    R = 32
    S = 33
    T = 34
    U = 35
    V = 36
    W = 37
    X = 38
    Y = 39
    Z = 40


class MouseButton(enum.IntEnum):
    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


_VK_TABLE_SIZE = 0xA5

_VK_MAP: dict[int, KeyboardKey] = {
    0x11: KeyboardKey.LCTRL,
    0x1B: KeyboardKey.ESCAPE,
    0x20: KeyboardKey.SPACE,
    0xA2: KeyboardKey.LCTRL,
    0xA4: KeyboardKey.ALT,
}
_VK_MAP.update({0x30 + digit: KeyboardKey[f"KEY_{digit}"] for digit in range(10)})
_VK_MAP.update({ord(letter): KeyboardKey[letter] for letter in string.ascii_uppercase})


def vk_code_to_keyboard_key(vk_code: int) -> KeyboardKey:
    """Map a virtual-key code to a KeyboardKey; raises ValueError past the table."""
    if not 0 <= vk_code < _VK_TABLE_SIZE:
        raise ValueError(f"invalid virtual-key code {vk_code}")
    return _VK_MAP.get(vk_code, KeyboardKey.NOT_SUPPORTED)


def _axis(negative: bool, positive: bool) -> int:
    if negative and positive:
        return _AXIS_CENTRE
    if negative:
        return _AXIS_MIN
    if positive:
        return _AXIS_MAX
    return _AXIS_CENTRE


@dataclass
class InputState:
    """Current and previous-frame keyboard, mouse button and cursor state."""

    keys: set[KeyboardKey] = field(default_factory=set)
    prev_keys: set[KeyboardKey] = field(default_factory=set)
    mouse_buttons: set[MouseButton] = field(default_factory=set)
    prev_mouse_buttons: set[MouseButton] = field(default_factory=set)
    mouse_x: int = 0
    mouse_y: int = 0
    prev_mouse_x: int = 0
    prev_mouse_y: int = 0

    def set_key(self, key: KeyboardKey) -> None:
        self.keys.add(KeyboardKey(key))

    def clear_key(self, key: KeyboardKey) -> None:
        self.keys.discard(KeyboardKey(key))

    def is_key_down(self, key: KeyboardKey) -> bool:
        return KeyboardKey(key) in self.keys

    def set_mouse_button(self, button: MouseButton) -> None:
        self.mouse_buttons.add(MouseButton(button))

    def clear_mouse_button(self, button: MouseButton) -> None:
        self.mouse_buttons.discard(MouseButton(button))

    def is_mouse_button_down(self, button: MouseButton) -> bool:
        return MouseButton(button) in self.mouse_buttons

    def sample_mouse(self, x: int, y: int) -> None:
        """Record the cursor position in window coordinates."""
        self.mouse_x = x
        self.mouse_y = y

    @property
    def mouse_position(self) -> tuple[int, int]:
        return (self.mouse_x, self.mouse_y)

    def mouse_delta(self) -> tuple[int, int]:
        """Cursor movement since the end of the previous frame."""
        return (self.mouse_x - self.prev_mouse_x, self.mouse_y - self.prev_mouse_y)

    def end_frame(self) -> None:
        self.prev_keys = set(self.keys)
        self.prev_mouse_buttons = set(self.mouse_buttons)
        self.prev_mouse_x = self.mouse_x
        self.prev_mouse_y = self.mouse_y

    def to_player_input(self) -> PlayerInput:
        """Map WASD to a movement input; opposing keys cancel out."""
        return PlayerInput(
            move_x=_axis(self.is_key_down(KeyboardKey.A), self.is_key_down(KeyboardKey.D)),
            move_y=_axis(self.is_key_down(KeyboardKey.S), self.is_key_down(KeyboardKey.W)),
        )