# src/skyhop/env/skyhop_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from skyhop.game.config import FPS, Viewport
from skyhop.game.render import draw_world
from skyhop.game.run import Run
from skyhop.env.observations import OBS_SIZE, build_observation, observation_bounds

# Action index -> horizontal direction
ACTION_DIRECTIONS = (0, -1, 1)   # 0 = NOOP, 1 = LEFT, 2 = RIGHT


class SkyhopEnv(gym.Env):
    """
    Skyhop Gymnasium environment (vector observations).
    - The simulation advances in whole frames (60 per second of play).
    - The agent acts every `frame_skip` frames (default 4) and the chosen
      direction is held for all of them.
    - Reward: score gained during the decision step. The step on which the run
      ends also carries a -1 penalty on top of that gain.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0,
                 viewport: Optional[Viewport] = None):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.viewport = viewport if viewport is not None else Viewport()

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        self.action_space = gym.spaces.Discrete(len(ACTION_DIRECTIONS))
        low, high = observation_bounds()
        self.observation_space = gym.spaces.Box(low=low, high=high, shape=(OBS_SIZE,), dtype=np.float32)

        # --- Runtime state ---
        self.game: Optional[Run] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # A given seed fixes the platform column; None lets the run pick one.
        self.game = Run(self.viewport, seed=int(seed) if seed is not None else None)
        self.game.start()
        self.timestep = 0
        self.current_seed = self.game.seed

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), self._info()

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.game is not None, "Call reset() before step()"

        direction = ACTION_DIRECTIONS[int(action)]
        score_before = self.game.state.score

        for _ in range(self.frame_skip):
            self.game.tick(direction)
            if not self.game.is_running():
                break

        terminated = self.game.is_over
        reward = float(self.game.state.score - score_before)
        if terminated:
            reward -= 1.0

        self.timestep += 1
        truncated = False
        if (not terminated and self.time_limit_decisions is not None
                and self.timestep >= self.time_limit_decisions):
            truncated = True

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), reward, terminated, truncated, self._info()

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.game is not None
        return build_observation(self.game.player, self.game.platforms,
                                 self.viewport, self.game.difficulty)

    def _info(self) -> Dict[str, Any]:
        assert self.game is not None
        return {
            "seed": self.current_seed,
            "score": self.game.state.score,
            "camera_y": self.game.state.camera_y,
            "timestep": self.timestep,
            "frames": self.game.state.frames,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.game is None:
            return None

        size = (int(self.viewport.width), int(self.viewport.height))
        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                pygame.display.set_caption("Skyhop — Gym Env")
                self.screen = pygame.display.set_mode(size)
            else:
                self.screen = pygame.Surface(size)
            self.clock = pygame.time.Clock()

        if self.render_mode == "human":
            # Keep the window responsive
            pygame.event.pump()

        draw_world(self.screen, self.game)

        if self.render_mode == "human":
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
