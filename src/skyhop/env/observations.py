# src/skyhop/env/observations.py
from __future__ import annotations
from typing import List, Sequence, Tuple
import numpy as np

from skyhop.game.config import MAX_FALL_SPEED, JUMP_VELOCITY, Viewport
from skyhop.game.level import Platform, PlatformKind
from skyhop.game.player import Player

# Number of nearest solid platforms described in the observation
N_PLATFORMS = 4
PLAYER_FEATURES = 4     # x_norm, y_norm, vy_norm, difficulty
PLATFORM_FEATURES = 4   # dx_norm, dy_norm, width_norm, kind_code
OBS_SIZE = PLAYER_FEATURES + N_PLATFORMS * PLATFORM_FEATURES

KIND_CODES = {
    PlatformKind.STATIC: 0.0,
    PlatformKind.MOVING: 0.5,
    PlatformKind.BREAKABLE: 1.0,
}

# Slot used when fewer than N_PLATFORMS solid platforms exist
EMPTY_SLOT = (0.0, 1.0, 0.0, 0.0)


def _clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else (hi if x > hi else x)


def _wrapped_dx(dx: float, width: float) -> float:
    """Shortest horizontal offset on a screen that wraps around."""
    half = width / 2
    if dx > half:
        dx -= width
    elif dx < -half:
        dx += width
    return dx


def observation_bounds() -> Tuple[np.ndarray, np.ndarray]:
    low = np.array([0.0, 0.0, -1.0, 0.0] + [-1.0, -1.0, 0.0, 0.0] * N_PLATFORMS, dtype=np.float32)
    high = np.array([1.0, 1.0, 1.0, 1.0] + [1.0, 1.0, 1.0, 1.0] * N_PLATFORMS, dtype=np.float32)
    return low, high


def nearest_platforms(player: Player, platforms: Sequence[Platform], n: int = N_PLATFORMS) -> List[Platform]:
    """Solid platforms ordered by vertical distance to the player's feet."""
    solid = [p for p in platforms if p.solid]
    solid.sort(key=lambda p: abs(p.y - player.bottom))
    return solid[:n]


def build_observation(player: Player, platforms: Sequence[Platform],
                      viewport: Viewport, difficulty: float) -> np.ndarray:
    """
    Fixed-size float32 vector for the agent.

    [x_norm, y_norm, vy_norm, difficulty] followed by N_PLATFORMS blocks of
    [dx_norm, dy_norm, width_norm, kind_code] for the nearest solid platforms.
    dx is centre-to-centre with wraparound, dy is platform top minus player
    feet (positive = below), both scaled by the viewport and clipped to [-1, 1].
    """
    w, h = float(viewport.width), float(viewport.height)
    vy_span = max(MAX_FALL_SPEED, abs(JUMP_VELOCITY))

    obs: List[float] = [
        _clamp((player.x + player.width / 2) / w, 0.0, 1.0),
        _clamp(player.y / h, 0.0, 1.0),
        _clamp(player.vy / vy_span, -1.0, 1.0),
        _clamp(difficulty, 0.0, 1.0),
    ]

    near = nearest_platforms(player, platforms)
    for p in near:
        dx = _wrapped_dx((p.x + p.width / 2) - player.center_x, w)
        obs.extend([
            _clamp(dx / (w / 2), -1.0, 1.0),
            _clamp((p.y - player.bottom) / h, -1.0, 1.0),
            _clamp(p.width / w, 0.0, 1.0),
            KIND_CODES[p.kind],
        ])
    for _ in range(N_PLATFORMS - len(near)):
        obs.extend(EMPTY_SLOT)

    return np.asarray(obs, dtype=np.float32)
