# src/skyhop/game/particles.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List
from .config import (
    PARTICLE_BURST, PARTICLE_MIN_SIZE, PARTICLE_SIZE_SPREAD,
    PARTICLE_SPEED_SPREAD, PARTICLE_MIN_DECAY, PARTICLE_DECAY_SPREAD,
)


@dataclass
class Particle:
    """Cosmetic spark. Has no effect on gameplay."""
    x: float
    y: float
    vx: float
    vy: float
    size: float
    life: float = 1.0
    decay: float = PARTICLE_MIN_DECAY

    @property
    def dead(self) -> bool:
        return self.life <= 0.0

    def update(self):
        self.x += self.vx
        self.y += self.vy
        self.life -= self.decay


def spawn_burst(rng: random.Random, x: float, y: float,
                count: int = PARTICLE_BURST) -> List[Particle]:
    return [
        Particle(
            x=x,
            y=y,
            vx=(rng.random() - 0.5) * PARTICLE_SPEED_SPREAD,
            vy=(rng.random() - 0.5) * PARTICLE_SPEED_SPREAD,
            size=rng.random() * PARTICLE_SIZE_SPREAD + PARTICLE_MIN_SIZE,
            decay=rng.random() * PARTICLE_DECAY_SPREAD + PARTICLE_MIN_DECAY,
        )
        for _ in range(count)
    ]


def step_particles(particles: List[Particle]) -> List[Particle]:
    """Advance every particle one frame and return the survivors."""
    alive = []
    for p in particles:
        p.update()
        if not p.dead:
            alive.append(p)
    return alive
