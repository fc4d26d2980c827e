"""Vector, matrix, interpolation and pseudo-random helpers."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

H_PI = 1.57079637
PI = 3.14159274
TAU = 6.28318548
INV_PI = 0.318309873
INV_H_PI = 0.636620
INV_TAU = 0.159154937

_U32_MASK = 0xFFFFFFFF
_SIN_BLEND_THRESHOLD = 0.6403


@dataclass(frozen=True)
class V2:
    """A two-component vector."""

    x: float = 0.0
    y: float = 0.0

    def dot(self, other: V2) -> float:
        return self.x * other.x + self.y * other.y

    def scale(self, s: float) -> V2:
        return V2(self.x * s, self.y * s)

    def normalize(self) -> V2:
        """Return a unit vector; raises ZeroDivisionError for the zero vector."""
        return self.scale(1.0 / math.sqrt(self.dot(self)))

    def normalize_or_zero(self) -> V2:
        """Return a unit vector, or the zero vector when the length is zero."""
        length = math.sqrt(self.dot(self))
        if length == 0.0:
            return V2()
        return self.scale(1.0 / length)


@dataclass(frozen=True)
class V3:
    """A three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def dot(self, other: V3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: V3) -> V3:
        return V3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def __add__(self, other: V3) -> V3:
        if not isinstance(other, V3):
            return NotImplemented
        return V3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: V3) -> V3:
        if not isinstance(other, V3):
            return NotImplemented
        return V3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, s: float) -> V3:
        return V3(self.x * s, self.y * s, self.z * s)

    def normalize(self) -> V3:
        """Return a unit vector; raises ZeroDivisionError for the zero vector."""
        return self.scale(1.0 / math.sqrt(self.dot(self)))


_IDENTITY = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
)


@dataclass(frozen=True)
class Mtx4x4:
    """A row-major 4x4 matrix stored as 16 floats."""

    m: tuple[float, ...] = _IDENTITY

    def __post_init__(self) -> None:
        values = tuple(float(v) for v in self.m)
        if len(values) != 16:
            raise ValueError(f"a 4x4 matrix needs 16 values, got {len(values)}")
        object.__setattr__(self, "m", values)

    @classmethod
    def identity(cls) -> Mtx4x4:
        return cls()

    def rows(self) -> list[tuple[float, ...]]:
        return [self.m[start:start + 4] for start in range(0, 16, 4)]

    def __matmul__(self, other: Mtx4x4) -> Mtx4x4:
        if not isinstance(other, Mtx4x4):
            return NotImplemented
        columns = list(zip(*other.rows()))
        return Mtx4x4(tuple(
            sum(a * b for a, b in zip(row, column))
            for row in self.rows()
            for column in columns
        ))


def round_neg_inf(a: float) -> float:
    """Round towards negative infinity."""
    if not math.isfinite(a):
        return a
    return float(math.floor(a))


def lerp(a, b, t):
    return (1.0 - t) * a + t * b


def inv_lerp(a, b, t):
    return (t - a) / (b - a)


def inv_smooth_lerp(a, b, t):
    r = (t - a) / (b - a)
    r2 = r * r
    r3 = r2 * r
    return -2.0 * r3 + 3.0 * r2


def clamp(lo, hi, t):
    """Clamp ``t`` into ``[lo, hi]``."""
    return max(min(t, hi), lo)


def _approx_sin32(x: np.ndarray) -> np.ndarray:
    f32 = np.float32
    pi = f32(PI)
    h_pi = f32(H_PI)

    # Range reduce to [0, 2*pi] to decide on the sign of the result.
    turns = x * f32(INV_TAU)
    turns = turns - np.floor(turns)
    negative = ~(turns < f32(0.5))

    x = np.abs(x)

    # Range reduce to [0, pi] to decide whether to mirror x.
    half_turns = x * f32(INV_PI)
    half_turns = half_turns - np.trunc(half_turns)
    flip = ~(half_turns < f32(0.5))

    # Range reduce to [0, pi/2] for evaluation.
    x = x * f32(INV_H_PI)
    x = x - np.trunc(x)
    x = x * h_pi
    x = np.where(flip, h_pi - x, x).astype(f32)

    eval0 = x - (x * x * x) * f32(1.0 / 6.0)

    t = pi - x * f32(2.0)
    t2 = t * t
    t4 = t2 * t2
    eval1 = f32(1.0 / 384.0) * t4 - f32(1.0 / 8.0) * t2 + f32(1.0)

    result = np.where(x < f32(_SIN_BLEND_THRESHOLD), eval0, eval1)
    return np.where(negative, -np.abs(result), result).astype(f32)


def approx_sin(x):
    """Polynomial sine approximation in single precision.

    Accepts a scalar (returns a float) or an array (returns a float32 array).
    """
    values = np.asarray(x, dtype=np.float32)
    with np.errstate(invalid="ignore", over="ignore"):
        result = _approx_sin32(values)
    return float(result) if result.ndim == 0 else result


def approx_cos(x):
    """Cosine via :func:`approx_sin` shifted by a quarter turn."""
    values = np.asarray(x, dtype=np.float32)
    return approx_sin(values - np.float32(0.5 * 3.14159265))


def _sin_cos_turns(turns: float) -> tuple[float, float]:
    angle = np.float32(TAU) * np.float32(turns)
    sin_a, cos_a = approx_sin(np.array([angle, angle + np.float32(H_PI)], dtype=np.float32))
    return float(sin_a), float(cos_a)


def x_rotation_matrix(turns: float) -> Mtx4x4:
    """Rotation about the X axis by a number of full turns."""
    s, c = _sin_cos_turns(turns)
    return Mtx4x4((
        1.0, 0.0, 0.0, 0.0,
        0.0, c, -s, 0.0,
        0.0, s, c, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ))


def y_rotation_matrix(turns: float) -> Mtx4x4:
    """Rotation about the Y axis by a number of full turns."""
    s, c = _sin_cos_turns(turns)
    return Mtx4x4((
        c, 0.0, s, 0.0,
        0.0, 1.0, 0.0, 0.0,
        -s, 0.0, c, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ))


def translation_matrix(v: V3) -> Mtx4x4:
    return Mtx4x4((
        1.0, 0.0, 0.0, v.x,
        0.0, 1.0, 0.0, v.y,
        0.0, 0.0, 1.0, v.z,
        0.0, 0.0, 0.0, 1.0,
    ))


def rand_u32(n: int) -> int:
    """One xorshift32 step."""
    n &= _U32_MASK
    n ^= (n << 13) & _U32_MASK
    n ^= n >> 17
    n ^= (n << 5) & _U32_MASK
    return n


def _rand_lane(n: int) -> int:
    n ^= (n << 13) & _U32_MASK
    n = (n * 182376581) & _U32_MASK
    n ^= n >> 17
    n = (n * 783456103) & _U32_MASK
    n ^= (n << 5) & _U32_MASK
    n = (n * 53523) & _U32_MASK
    return n


def rand8_u32(lanes: Iterable[int]) -> tuple[int, ...]:
    """Advance eight independent 32-bit generator lanes.

    Seed the lanes with distinct values; lanes seeded from each other's
    outputs repeat the same sequence.
    """
    values = [int(v) & _U32_MASK for v in lanes]
    if len(values) != 8:
        raise ValueError(f"expected 8 lanes, got {len(values)}")
    return tuple(_rand_lane(v) for v in values)