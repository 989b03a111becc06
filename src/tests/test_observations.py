# src/tests/test_observations.py
from __future__ import annotations
import numpy as np
import pytest

from skyhop.env.observations import (
    OBS_SIZE, N_PLATFORMS, EMPTY_SLOT, KIND_CODES, build_observation, nearest_platforms,
    observation_bounds,
)
from skyhop.game.config import Viewport
from skyhop.game.level import StaticPlatform, MovingPlatform, BreakablePlatform, PlatformKind
from skyhop.game.player import Player

VP = Viewport(450, 700)


def test_shape_and_dtype():
    obs = build_observation(Player(x=195.0, y=600.0), [], VP, 0.0)
    assert obs.shape == (OBS_SIZE,)
    assert obs.dtype == np.float32


def test_empty_slots_when_no_platforms():
    obs = build_observation(Player(x=195.0, y=600.0), [], VP, 0.0)
    for i in range(N_PLATFORMS):
        b = 4 + 4 * i
        assert tuple(obs[b:b + 4]) == EMPTY_SLOT


def test_platform_block_describes_nearest_platform():
    player = Player(x=195.0, y=600.0)  # feet at 660, centre x 225
    plat = StaticPlatform(x=185.0, y=670.0, width=80.0)
    obs = build_observation(player, [plat], VP, 0.25)
    assert obs[3] == pytest.approx(0.25)
    dx, dy, w, kind = obs[4:8]
    assert dx == pytest.approx(0.0)
    assert dy == pytest.approx(10.0 / 700.0)
    assert w == pytest.approx(80.0 / 450.0)
    assert kind == KIND_CODES[PlatformKind.STATIC]


def test_dx_uses_the_short_way_around():
    player = Player(x=-10.0, y=300.0)            # centre x 20
    plat = StaticPlatform(x=400.0, y=380.0, width=80.0)  # centre x 440
    obs = build_observation(player, [plat], VP, 0.0)
    assert obs[4] == pytest.approx(-30.0 / 225.0)


def test_broken_platforms_are_ignored_and_order_is_by_height():
    player = Player(x=100.0, y=300.0)  # feet at 360
    broken = BreakablePlatform(x=100.0, y=365.0, broken=True)
    near = MovingPlatform(x=100.0, y=380.0)
    far = StaticPlatform(x=100.0, y=100.0)
    assert nearest_platforms(player, [far, broken, near]) == [near, far]


def test_values_stay_inside_bounds():
    low, high = observation_bounds()
    player = Player(x=5000.0, y=-900.0, vy=-99.0)
    plats = [StaticPlatform(x=0.0, y=5000.0), BreakablePlatform(x=10.0, y=-5000.0)]
    obs = build_observation(player, plats, VP, 3.0)
    assert np.all(obs >= low) and np.all(obs <= high)
