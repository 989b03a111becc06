# src/tests/test_run.py
"""
Run loop: lifecycle, camera scroll and scoring, game over, restart.
"""

from __future__ import annotations
import copy
import random

import pytest

from skyhop.game.config import Viewport, PLATFORM_COUNT, JUMP_VELOCITY, PARTICLE_BURST
from skyhop.game.errors import ConfigError
from skyhop.game.run import Run, RunOutcome, RunStatus


def started(seed: int = 42, **kwargs) -> Run:
    run = Run(seed=seed, **kwargs)
    run.start()
    return run


# ------------------------ Lifecycle ------------------------

def test_new_run_is_idle_and_ignores_ticks():
    run = Run(seed=1)
    assert run.state.status is RunStatus.IDLE
    assert not run.is_running()
    assert run.tick(1) is None
    assert run.state.frames == 0
    assert run.platforms == []


def test_start_builds_the_world():
    run = started()
    assert run.is_running()
    assert run.player.x == pytest.approx(450 / 2 - 30)
    assert run.player.y == pytest.approx(600.0)
    assert len(run.platforms) == PLATFORM_COUNT
    assert run.state.score == 0 and run.state.camera_y == 0.0


def test_viewport_can_change_between_runs():
    run = Run(Viewport(600, 800), seed=3)
    run.start()
    assert run.player.x == pytest.approx(270.0)
    assert run.player.y == pytest.approx(700.0)


def test_first_fall_lands_on_the_start_platform():
    run = started()
    for _ in range(10):
        run.tick(0)
        if run.player.vy < 0:
            break
    assert run.player.vy == pytest.approx(JUMP_VELOCITY)
    assert len(run.particles) == PARTICLE_BURST
    assert run.is_running()


# ------------------------ Scroll & score ------------------------

def test_scroll_pins_player_and_moves_world_down():
    run = started()
    run.player.y = 200.0
    before = [p.y for p in run.platforms]

    run._scroll_camera()

    assert run.state.camera_y == pytest.approx(-80.0)
    assert run.player.y == pytest.approx(280.0)
    assert [p.y for p in run.platforms] == pytest.approx([y + 80.0 for y in before])
    assert run.state.max_height == pytest.approx(80.0)
    assert run.state.score == 8


def test_no_scroll_below_threshold():
    run = started()
    run.player.y = 300.0
    before = [p.y for p in run.platforms]
    run._scroll_camera()
    assert run.state.camera_y == 0.0
    assert run.player.y == 300.0
    assert [p.y for p in run.platforms] == before
    assert run.state.score == 0


def test_score_is_floor_of_height_over_ten():
    run = started()
    run.player.y = 280.0 - 59.9
    run._scroll_camera()
    assert run.state.score == 5


def test_score_never_decreases():
    run = started(seed=11)
    rng = random.Random(0)
    last_score, last_height = 0, 0.0
    direction = 0
    for frame in range(5000):
        if frame % 20 == 0:
            direction = rng.choice((-1, 0, 1))
        run.tick(direction)
        assert run.state.score >= last_score
        assert run.state.max_height >= last_height
        assert run.state.camera_y <= 0.0
        last_score, last_height = run.state.score, run.state.max_height
        if not run.is_running():
            break


def test_platform_count_is_maintained():
    run = started(seed=5)
    rng = random.Random(1)
    for _ in range(2000):
        run.tick(rng.choice((-1, 0, 1)))
        if not run.is_running():
            break
        assert len(run.platforms) >= PLATFORM_COUNT
        assert all(p.y < run.viewport.prune_line for p in run.platforms)


# ------------------------ Game over ------------------------

def test_falling_out_ends_the_run_and_stops_ticks():
    run = started()
    run.player.y = 720.0
    run.player.vy = 0.0
    outcome = run.tick(0)

    assert isinstance(outcome, RunOutcome)
    assert run.state.status is RunStatus.OVER
    assert not run.is_running() and run.is_over
    assert run.outcome == outcome

    frames, y = run.state.frames, run.player.y
    assert run.tick(1) is None
    assert run.state.frames == frames
    assert run.player.y == y


def test_new_best_is_reported():
    run = started(best_score=0)
    run.state.score = 12
    run.player.y = 720.0
    outcome = run.tick(0)
    assert outcome == RunOutcome(final_score=12, best_score=12, new_best=True)
    assert run.best_score == 12


def test_lower_or_equal_score_is_not_a_new_best():
    for best in (12, 30):
        run = started(best_score=best)
        run.state.score = 12
        run.player.y = 720.0
        outcome = run.tick(0)
        assert outcome.new_best is False
        assert outcome.best_score == best


def test_restart_reinitialises_from_scratch():
    run = started(seed=9)
    initial_platforms = copy.deepcopy(run.platforms)
    for _ in range(200):
        run.tick(1)
    run.player.y = 720.0
    run.tick(0)
    assert run.is_over

    run.start()
    assert run.is_running()
    assert run.outcome is None
    assert run.state.score == 0 and run.state.camera_y == 0.0 and run.state.frames == 0
    assert run.particles == []
    assert run.platforms == initial_platforms


def test_best_score_survives_restart():
    run = started(best_score=0)
    run.state.score = 7
    run.player.y = 720.0
    run.tick(0)
    run.start()
    assert run.best_score == 7


def test_same_seed_and_inputs_replay_identically():
    def trace(seed):
        run = started(seed=seed)
        rng = random.Random(123)
        out = []
        for _ in range(600):
            run.tick(rng.choice((-1, 0, 1)))
            out.append((run.player.x, run.player.y, run.player.vy, run.state.score))
            if not run.is_running():
                break
        return out

    assert trace(77) == trace(77)


def test_random_seed_is_frozen_on_start():
    run = Run(seed=None)
    assert isinstance(run.seed, int)
    seed = run.seed
    run.start()
    assert run.seed == seed
    assert run.level.seed == seed


def _next_platform_after_first_bounce(monkeypatch, burst):
    if not burst:
        monkeypatch.setattr("skyhop.game.run.spawn_burst", lambda rng, x, y: [])
    run = started(seed=42)
    for _ in range(10):
        run.tick(0)
        if run.player.vy < 0:
            break
    assert run.player.vy == pytest.approx(JUMP_VELOCITY)
    run.level.platforms = run.level.platforms[:1]
    new = run.level.replenish(0)[0]
    return new.x, new.y, new.kind


def test_particles_do_not_shift_level_generation(monkeypatch):
    with_bursts = _next_platform_after_first_bounce(monkeypatch, burst=True)
    without_bursts = _next_platform_after_first_bounce(monkeypatch, burst=False)
    assert with_bursts == without_bursts


# ------------------------ Configuration ------------------------

@pytest.mark.parametrize("width,height", [
    (0, 700), (450, -1), (450, float("nan")), (float("inf"), 700), ("450", 700), (40, 700), (True, 700),
])
def test_malformed_viewport_is_rejected(width, height):
    with pytest.raises(ConfigError):
        Viewport(width, height)


def test_config_error_is_a_value_error():
    assert issubclass(ConfigError, ValueError)


def test_viewport_thresholds():
    vp = Viewport(450, 700)
    assert vp.scroll_threshold == pytest.approx(280.0)
    assert vp.prune_line == pytest.approx(750.0)
