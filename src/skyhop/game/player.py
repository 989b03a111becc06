# src/skyhop/game/player.py
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Iterable, List
from .config import (
    PLAYER_W, PLAYER_H, MOVE_SPEED, GRAVITY, JUMP_VELOCITY, MAX_FALL_SPEED
)
from .level import Platform


def _sign(direction: int) -> int:
    return (direction > 0) - (direction < 0)


@dataclass
class Player:
    """
    Auto-bouncing player:
    - y grows downward (0 = top of the viewport)
    - no horizontal inertia, vx is set from the input every frame
    - leaving one side of the screen re-enters from the other
    """
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    facing: int = 1     # +1 right, -1 left
    width: float = PLAYER_W
    height: float = PLAYER_H

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def falling(self) -> bool:
        return self.vy > 0.0

    def update_physics(self, direction: int, viewport_width: float):
        """Integrate one frame: direct-set horizontal speed, wrap, gravity with a fall cap."""
        direction = _sign(direction)
        if direction:
            self.facing = direction

        self.vx = direction * MOVE_SPEED
        self.x += self.vx

        # Wrap around, never clamp
        if self.x + self.width < 0:
            self.x = viewport_width
        elif self.x > viewport_width:
            self.x = -self.width

        self.vy += GRAVITY
        if self.vy > MAX_FALL_SPEED:
            self.vy = MAX_FALL_SPEED

        self.y += self.vy

    def bounce(self):
        self.vy = JUMP_VELOCITY

    def touches_from_above(self, platform: Platform) -> bool:
        """AABB test with the feet strictly inside the platform's vertical band."""
        if self.x >= platform.right or self.x + self.width <= platform.x:
            return False
        return platform.y < self.bottom < platform.bottom

    def resolve_platform_bounces(self, platforms: Iterable[Platform]) -> List[Platform]:
        """
        Bounce off every solid platform the feet landed in this frame.
        Only checked while falling; the falling test is taken once so that
        overlapping platforms all register their hit. Returns the hit platforms.
        """
        if not self.falling:
            return []

        hits = [p for p in platforms if p.solid and self.touches_from_above(p)]
        for platform in hits:
            self.bounce()
            platform.on_bounce()
        return hits
