# src/skyhop/game/config.py
from __future__ import annotations
import math
from dataclasses import dataclass

from .errors import ConfigError

# --- Display ---
WIDTH = 450
HEIGHT = 700
FPS = 60

# --- Player physics (per frame, not per second) ---
PLAYER_W = 60
PLAYER_H = 60
MOVE_SPEED = 8.0            # horizontal speed while a direction is held
GRAVITY = 0.6               # added to vy every frame
JUMP_VELOCITY = -15.0       # vy right after a bounce (negative = up)
MAX_FALL_SPEED = 20.0       # downward clamp only
PLAYER_START_OFFSET = 100   # start y = HEIGHT - offset

# --- Platforms ---
PLATFORM_W = 80             # base width at zero difficulty
PLATFORM_H = 20
PLATFORM_MIN_W = 30         # hard floor, whatever the difficulty
PLATFORM_SHRINK = 40        # width lost at full difficulty
FIRST_PLATFORM_CLEARANCE = 10

# --- Gaps between successive platforms ---
GAP_MIN = 50
GAP_MAX = 120
GAP_GROWTH = 40             # added to both bounds at full difficulty
GAP_SAFETY_MARGIN = 12.5    # kept below the physics jump limit
GAP_MIN_SPREAD = 10         # capped max - min never below this

# --- Platform mix ---
STATIC_CHANCE_BASE = 0.8
STATIC_CHANCE_DROP = 0.5    # static share lost at full difficulty
MOVING_BAND_BASE = 0.15
MOVING_BAND_GROWTH = 0.35
MOVING_SPEED_BASE = 2.0
MOVING_SPEED_GROWTH = 3.0

# --- Difficulty ---
DIFFICULTY_START_SCORE = 50
DIFFICULTY_MAX_SCORE = 5000

# --- Run ---
SCROLL_THRESHOLD = 0.4      # fraction of viewport height from the top
PLATFORM_COUNT = 10         # active platforms kept alive
PRUNE_MARGIN = 50           # px below the viewport before a platform is dropped
SCORE_DIVISOR = 10          # px of climb per point
SEED_DEFAULT = 12345

# --- Particles ---
PARTICLE_BURST = 8
PARTICLE_MIN_SIZE = 2.0
PARTICLE_SIZE_SPREAD = 4.0
PARTICLE_SPEED_SPREAD = 4.0
PARTICLE_MIN_DECAY = 0.01
PARTICLE_DECAY_SPREAD = 0.02

# --- Colors (RGB) ---
COLOR_BG = (22, 28, 52)
COLOR_FG = (230, 238, 255)
COLOR_PLAYER = (255, 107, 157)
COLOR_PLAYER_DEAD = (255, 86, 110)
COLOR_STATIC = (104, 216, 214)
COLOR_MOVING = (255, 140, 66)
COLOR_BREAKABLE = (155, 190, 200)
COLOR_PARTICLE = (104, 216, 214)


@dataclass(frozen=True)
class Viewport:
    """Screen geometry for one run. Validated once, never mutated."""
    width: float = WIDTH
    height: float = HEIGHT

    def __post_init__(self):
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"viewport {name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise ConfigError(f"viewport {name} must be finite and > 0, got {value!r}")
        if self.width < PLATFORM_W:
            raise ConfigError(
                f"viewport width {self.width} is narrower than a platform ({PLATFORM_W})"
            )

    @property
    def scroll_threshold(self) -> float:
        return self.height * SCROLL_THRESHOLD

    @property
    def prune_line(self) -> float:
        return self.height + PRUNE_MARGIN
