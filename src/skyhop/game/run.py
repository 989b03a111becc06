# src/skyhop/game/run.py
from __future__ import annotations
import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
from .config import PLAYER_W, PLAYER_START_OFFSET, SCORE_DIVISOR, Viewport
from .level import LevelGen, Platform, difficulty_factor
from .particles import Particle, spawn_burst, step_particles
from .player import Player

logger = logging.getLogger(__name__)


class RunStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    OVER = "over"


@dataclass
class RunState:
    score: int = 0
    camera_y: float = 0.0     # cumulative scroll, goes negative as the camera climbs
    max_height: float = 0.0
    status: RunStatus = RunStatus.IDLE
    frames: int = 0


@dataclass(frozen=True)
class RunOutcome:
    final_score: int
    best_score: int
    new_best: bool


class Run:
    """
    One play session, from spawn to fall.

    The host drives it: call start(), then tick(direction) once per frame
    while is_running(). Nothing here schedules itself; once the player falls
    out of the viewport the run is over and further ticks are ignored until
    start() rebuilds everything from scratch.

    direction: -1 left, 0 none, +1 right.
    """
    def __init__(self, viewport: Optional[Viewport] = None,
                 seed: int | None = None, best_score: int = 0):
        self.viewport = viewport if viewport is not None else Viewport()
        # Pick a random seed up front so it can be shown before the first start()
        self.seed = seed if seed is not None else random.randrange(0, 2**32 - 1)
        self.best_score = best_score
        self.state = RunState()
        self.outcome: Optional[RunOutcome] = None
        self.level: Optional[LevelGen] = None
        self.player: Optional[Player] = None
        self.particles: List[Particle] = []
        self.fx_rng: Optional[random.Random] = None

    # -------------------- Lifecycle --------------------

    def start(self):
        """(Re)build the world. Works from any state; there is no resume."""
        self.level = LevelGen(self.viewport, self.seed)
        # Particles draw from their own stream so effects never shift the level
        self.fx_rng = random.Random(self.seed)
        self.player = Player(
            x=self.viewport.width / 2 - PLAYER_W / 2,
            y=self.viewport.height - PLAYER_START_OFFSET,
        )
        self.particles = []
        self.state = RunState(status=RunStatus.RUNNING)
        self.outcome = None
        logger.info("run started (seed=%s, viewport=%sx%s)",
                    self.seed, self.viewport.width, self.viewport.height)

    def is_running(self) -> bool:
        return self.state.status is RunStatus.RUNNING

    @property
    def is_over(self) -> bool:
        return self.state.status is RunStatus.OVER

    @property
    def platforms(self) -> List[Platform]:
        return self.level.platforms if self.level is not None else []

    @property
    def difficulty(self) -> float:
        return difficulty_factor(self.state.score)

    # -------------------- Frame --------------------

    def tick(self, direction: int = 0) -> Optional[RunOutcome]:
        """Advance one frame. Returns the outcome on the frame the run ends."""
        if not self.is_running():
            return None
        assert self.level is not None and self.player is not None

        self.player.update_physics(direction, self.viewport.width)
        self.level.update()

        for platform in self.player.resolve_platform_bounces(self.level.platforms):
            self.particles.extend(spawn_burst(self.fx_rng, self.player.center_x, platform.y))

        self.particles = step_particles(self.particles)
        self._scroll_camera()

        self.level.prune()
        if len(self.level.platforms) < self.level.target_count:
            self.level.replenish(self.state.score)

        self.state.frames += 1

        if self.player.y > self.viewport.height:
            return self._finish()
        return None

    def _scroll_camera(self):
        """Pin the player at the threshold and push the world down instead."""
        threshold = self.viewport.scroll_threshold
        if self.player.y >= threshold:
            return

        deficit = threshold - self.player.y
        self.state.camera_y -= deficit
        self.player.y = threshold
        self.level.scroll(deficit)

        self.state.max_height = max(self.state.max_height, -self.state.camera_y)
        self.state.score = int(math.floor(self.state.max_height / SCORE_DIVISOR))

    def _finish(self) -> RunOutcome:
        score = self.state.score
        new_best = score > self.best_score
        if new_best:
            self.best_score = score
        self.state.status = RunStatus.OVER
        self.outcome = RunOutcome(final_score=score, best_score=self.best_score, new_best=new_best)
        logger.info("run over after %d frames: score=%d best=%d%s",
                    self.state.frames, score, self.best_score, " (new best)" if new_best else "")
        return self.outcome
