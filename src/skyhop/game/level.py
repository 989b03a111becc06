# src/skyhop/game/level.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, List, Optional, Tuple
import pygame
from .config import (
    PLATFORM_W, PLATFORM_H, PLATFORM_MIN_W, PLATFORM_SHRINK, FIRST_PLATFORM_CLEARANCE,
    GAP_MIN, GAP_MAX, GAP_GROWTH, GAP_SAFETY_MARGIN, GAP_MIN_SPREAD,
    STATIC_CHANCE_BASE, STATIC_CHANCE_DROP, MOVING_BAND_BASE, MOVING_BAND_GROWTH,
    MOVING_SPEED_BASE, MOVING_SPEED_GROWTH,
    DIFFICULTY_START_SCORE, DIFFICULTY_MAX_SCORE,
    JUMP_VELOCITY, GRAVITY, PLAYER_H, PLAYER_START_OFFSET, PLATFORM_COUNT,
    COLOR_STATIC, COLOR_MOVING, COLOR_BREAKABLE,
    Viewport,
)

logger = logging.getLogger(__name__)


class PlatformKind(Enum):
    STATIC = "static"
    MOVING = "moving"
    BREAKABLE = "breakable"


@dataclass
class Platform:
    x: float
    y: float
    width: float = PLATFORM_W
    height: float = PLATFORM_H
    broken: bool = False

    kind: ClassVar[PlatformKind] = PlatformKind.STATIC

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def solid(self) -> bool:
        return not self.broken

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))

    def update(self, viewport_width: float):
        """Per-frame motion. Only moving platforms move."""

    def on_bounce(self):
        """Called once for each bounce the player takes off this platform."""


@dataclass
class StaticPlatform(Platform):
    kind: ClassVar[PlatformKind] = PlatformKind.STATIC


@dataclass
class MovingPlatform(Platform):
    speed: float = MOVING_SPEED_BASE
    direction: int = 1  # +1 right, -1 left

    kind: ClassVar[PlatformKind] = PlatformKind.MOVING

    def update(self, viewport_width: float):
        if self.broken:
            return
        self.x += self.speed * self.direction
        # Turn around on touching either edge
        if self.x <= 0 or self.x + self.width >= viewport_width:
            self.direction *= -1


@dataclass
class BreakablePlatform(Platform):
    kind: ClassVar[PlatformKind] = PlatformKind.BREAKABLE

    def on_bounce(self):
        self.broken = True


# --- Difficulty curve ---

def difficulty_factor(score: float,
                      start_score: float = DIFFICULTY_START_SCORE,
                      max_score: float = DIFFICULTY_MAX_SCORE) -> float:
    """0 below start_score, linear ramp to 1 at max_score, clamped to [0, 1]."""
    if score < start_score:
        return 0.0
    span = max_score - start_score
    if span <= 0:
        return 1.0
    progress = (score - start_score) / span
    return min(1.0, max(0.0, progress))


def max_jump_height(jump_velocity: float = JUMP_VELOCITY, gravity: float = GRAVITY) -> float:
    """Apex of a single bounce: v^2 = u^2 + 2as with v = 0."""
    return jump_velocity * jump_velocity / (2.0 * gravity)


def safe_max_gap(jump_velocity: float = JUMP_VELOCITY, gravity: float = GRAVITY,
                 margin: float = GAP_SAFETY_MARGIN) -> float:
    return max_jump_height(jump_velocity, gravity) - margin


def gap_range(d: float, cap: Optional[float] = None) -> Tuple[float, float]:
    """
    (min, max) vertical gap for difficulty d. The max is capped first,
    then the min is pulled under the capped max so the range never inverts.
    """
    if cap is None:
        cap = safe_max_gap()
    lo = GAP_MIN + d * GAP_GROWTH
    hi = GAP_MAX + d * GAP_GROWTH
    hi = min(hi, cap)
    lo = min(lo, hi - GAP_MIN_SPREAD)
    return lo, hi


def platform_width(d: float) -> float:
    return max(PLATFORM_MIN_W, PLATFORM_W - d * PLATFORM_SHRINK)


def kind_thresholds(d: float) -> Tuple[float, float]:
    """Cumulative (static, static+moving) thresholds; the remainder is breakable."""
    static_chance = STATIC_CHANCE_BASE - d * STATIC_CHANCE_DROP
    moving_chance = static_chance + MOVING_BAND_BASE + d * MOVING_BAND_GROWTH
    return static_chance, moving_chance


def pick_kind(u: float, d: float) -> PlatformKind:
    static_chance, moving_chance = kind_thresholds(d)
    if u < static_chance:
        return PlatformKind.STATIC
    if u < moving_chance:
        return PlatformKind.MOVING
    return PlatformKind.BREAKABLE


def moving_speed(d: float) -> float:
    return MOVING_SPEED_BASE + d * MOVING_SPEED_GROWTH


class LevelGen:
    """
    Keeps an endless column of platforms above the player.
    The list is ordered oldest (lowest) to newest (highest); new platforms
    always stack on top of the last one generated.
    """
    def __init__(self, viewport: Viewport, seed: int | None,
                 target_count: int = PLATFORM_COUNT):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.viewport = viewport
        self.target_count = target_count
        self.platforms: List[Platform] = []
        self._init_start()

    @property
    def start_y(self) -> float:
        return self.viewport.height - PLAYER_START_OFFSET

    def _init_start(self):
        # Guaranteed landing right under the spawn point
        self.platforms.append(StaticPlatform(
            x=self.viewport.width / 2 - PLATFORM_W / 2,
            y=self.start_y + PLAYER_H + FIRST_PLATFORM_CLEARANCE,
        ))
        self.replenish(score=0)

    def _create_platform(self, y: float, d: float) -> Platform:
        w = platform_width(d)
        x = self.rng.random() * (self.viewport.width - w)
        kind = pick_kind(self.rng.random(), d)

        if kind is PlatformKind.MOVING:
            direction = 1 if self.rng.random() > 0.5 else -1
            return MovingPlatform(x=x, y=y, width=w, speed=moving_speed(d), direction=direction)
        if kind is PlatformKind.BREAKABLE:
            return BreakablePlatform(x=x, y=y, width=w)
        return StaticPlatform(x=x, y=y, width=w)

    def replenish(self, score: int) -> List[Platform]:
        """Generate platforms upward until the active count reaches the target."""
        current_y = self.platforms[-1].y if self.platforms else self.start_y
        d = difficulty_factor(score)
        lo, hi = gap_range(d)

        created: List[Platform] = []
        while len(self.platforms) < self.target_count:
            gap = self.rng.random() * (hi - lo) + lo
            current_y -= gap
            plat = self._create_platform(current_y, d)
            self.platforms.append(plat)
            created.append(plat)

        if created:
            logger.debug("generated %d platforms at difficulty %.3f (top y=%.1f)",
                         len(created), d, current_y)
        return created

    def update(self):
        for platform in self.platforms:
            platform.update(self.viewport.width)

    def scroll(self, dy: float):
        for platform in self.platforms:
            platform.y += dy

    def prune(self) -> int:
        """Drop platforms that sank below the viewport. Returns how many went."""
        before = len(self.platforms)
        line = self.viewport.prune_line
        self.platforms = [p for p in self.platforms if p.y < line]
        return before - len(self.platforms)

    def draw(self, surf: pygame.Surface):
        """Draw all solid platforms; broken ones are invisible."""
        colors = {
            PlatformKind.STATIC: COLOR_STATIC,
            PlatformKind.MOVING: COLOR_MOVING,
            PlatformKind.BREAKABLE: COLOR_BREAKABLE,
        }
        for platform in self.platforms:
            if platform.broken:
                continue
            rect = platform.rect
            pygame.draw.rect(surf, colors[platform.kind], rect, border_radius=8)
            if platform.kind is PlatformKind.BREAKABLE:
                # Crack down the middle
                cx = rect.centerx
                pygame.draw.line(surf, (22, 72, 99), (cx - 4, rect.top + 2), (cx + 3, rect.bottom - 3), 2)
