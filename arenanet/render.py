"""Software rasteriser that draws world-space rectangles into a frame buffer."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from arenanet.game_state import GameState
from arenanet.vecmath import round_neg_inf

MAX_FRAME_BUFFER_WIDTH = 2560
MAX_FRAME_BUFFER_HEIGHT = 1440

BACKGROUND_COLOR = 0xFF191E18
PLAYER_COLOR = 0xFFC4A033
WALL_COLOR = 0x7C4B0E

PLAYER_WIDTH = 0.7
PLAYER_HEIGHT_STEP = 1.0
DEFAULT_HALF_WIDTH = 15.0

_F32 = np.float32
_MIN_PIXELS = 8


@dataclass
class Camera:
    """A 2-D camera: the world point at the centre and the visible half width."""

    pos_x: float = 0.0
    pos_y: float = 0.0
    half_width: float = DEFAULT_HALF_WIDTH
    aspect_ratio: float = 1.0  # height / width


def _f32_max(a, b):
    return a if a > b else b


def _f32_min(a, b):
    return a if a < b else b


def render_rect(frame_buffer: np.ndarray, camera: Camera, pos_x: float, pos_y: float,
                w: float, h: float, color: int) -> None:
    """Fill a world-space rectangle centred on (pos_x, pos_y), clipped to the buffer.

    World y points up; row 0 of the buffer is the top of the view.
    """
    height, width = frame_buffer.shape
    with np.errstate(all="ignore"):
        cam_hw = _F32(camera.half_width)
        cam_hh = cam_hw * _F32(camera.aspect_ratio)
        cam_l = _F32(camera.pos_x) - cam_hw
        cam_b = _F32(camera.pos_y) - cam_hh

        fb_pos_x = ((_F32(pos_x) - cam_l) / (cam_hw * _F32(2.0))) * _F32(width)
        fb_pos_y = (_F32(1.0) - ((_F32(pos_y) - cam_b) / (cam_hh * _F32(2.0)))) * _F32(height)
        fb_w = (_F32(w) / (cam_hw * _F32(2.0))) * _F32(width)
        fb_h = (_F32(h) / (cam_hh * _F32(2.0))) * _F32(height)

        half = _F32(0.5)
        edges = (
            _f32_max(fb_pos_x - fb_w * half, _F32(0.0)),
            _f32_min(fb_pos_x + fb_w * half, _F32(width)),
            _f32_max(fb_pos_y - fb_h * half, _F32(0.0)),
            _f32_min(fb_pos_y + fb_h * half, _F32(height)),
        )
    if not all(math.isfinite(float(edge)) for edge in edges):
        return
    left, right, bottom, top = (int(round_neg_inf(float(edge))) for edge in edges)
    if right > left and top > bottom:
        frame_buffer[bottom:top, left:right] = color & 0xFFFFFFFF


class Renderer:
    """Owns a 32-bit colour frame buffer and the camera used to draw into it."""

    def __init__(self, width: int, height: int, camera: Camera | None = None) -> None:
        if width <= 0 or height <= 0 or width * height < _MIN_PIXELS:
            raise ValueError(f"frame buffer too small: {width}x{height}")
        if width > MAX_FRAME_BUFFER_WIDTH or height > MAX_FRAME_BUFFER_HEIGHT:
            raise ValueError(f"frame buffer too large: {width}x{height}")
        self.frame_buffer = np.zeros((height, width), dtype=np.uint32)
        self.camera = camera if camera is not None else Camera(aspect_ratio=height / width)

    @property
    def width(self) -> int:
        return self.frame_buffer.shape[1]

    @property
    def height(self) -> int:
        return self.frame_buffer.shape[0]

    def clear(self, color: int) -> None:
        self.frame_buffer.fill(color & 0xFFFFFFFF)

    def draw_world_rect(self, pos_x: float, pos_y: float, w: float, h: float, color: int) -> None:
        render_rect(self.frame_buffer, self.camera, pos_x, pos_y, w, h, color)

    def render_game_state(self, game_state: GameState) -> np.ndarray:
        """Draw background, players and walls; returns the frame buffer."""
        self.clear(BACKGROUND_COLOR)
        for index, player in enumerate(game_state.players):
            self.draw_world_rect(
                player.pos_x,
                player.pos_y,
                PLAYER_WIDTH,
                PLAYER_HEIGHT_STEP * (index + 1),
                PLAYER_COLOR,
            )
        for wall in game_state.walls:
            self.draw_world_rect(wall.pos_x, wall.pos_y, wall.width, wall.height, WALL_COLOR)
        return self.frame_buffer