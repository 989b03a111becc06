# src/tests/test_player.py
"""
Kinematics checks for Player.update_physics.

Usage (from repo root):
  python -m pytest src/tests/test_player.py
  python src/tests/test_player.py
"""

from __future__ import annotations
import pytest

from skyhop.game.config import WIDTH, PLAYER_W, MOVE_SPEED, GRAVITY, MAX_FALL_SPEED
from skyhop.game.player import Player


def test_horizontal_speed_is_direct_set():
    p = Player(x=100.0, y=100.0, vx=5.0)
    p.update_physics(0, WIDTH)
    assert p.vx == 0.0, "no inertia: vx comes from the input only"
    assert p.x == 100.0

    p.update_physics(1, WIDTH)
    assert p.vx == MOVE_SPEED
    assert p.x == 100.0 + MOVE_SPEED

    p.update_physics(-1, WIDTH)
    assert p.vx == -MOVE_SPEED
    assert p.x == 100.0


def test_direction_is_reduced_to_its_sign():
    p = Player(x=100.0, y=100.0)
    p.update_physics(5, WIDTH)
    assert p.vx == MOVE_SPEED
    p.update_physics(-3, WIDTH)
    assert p.vx == -MOVE_SPEED


def test_facing_follows_last_nonzero_direction():
    p = Player(x=100.0, y=100.0)
    assert p.facing == 1
    p.update_physics(-1, WIDTH)
    assert p.facing == -1
    p.update_physics(0, WIDTH)
    assert p.facing == -1, "releasing the keys keeps the facing"


def test_exit_right_reenters_left():
    p = Player(x=WIDTH - 5.0, y=100.0)
    p.update_physics(1, WIDTH)
    assert p.x == -PLAYER_W
    assert p.vx == MOVE_SPEED, "wrapping must not touch the velocity"


def test_exit_left_reenters_right():
    p = Player(x=-PLAYER_W + 5.0, y=100.0)
    p.update_physics(-1, WIDTH)
    assert p.x == WIDTH
    assert p.vx == -MOVE_SPEED


def test_no_wrap_while_still_touching_the_screen():
    p = Player(x=WIDTH - MOVE_SPEED, y=100.0)
    p.update_physics(1, WIDTH)
    assert p.x == WIDTH  # right on the edge, not past it

    q = Player(x=-PLAYER_W + MOVE_SPEED, y=100.0)
    q.update_physics(-1, WIDTH)
    assert q.x == -PLAYER_W


def test_gravity_accumulates():
    p = Player(x=100.0, y=100.0, vy=0.0)
    p.update_physics(0, WIDTH)
    assert p.vy == pytest.approx(GRAVITY)
    assert p.y == pytest.approx(100.0 + GRAVITY)


def test_fall_speed_is_capped_downward_only():
    p = Player(x=100.0, y=100.0, vy=MAX_FALL_SPEED - 0.2)
    p.update_physics(0, WIDTH)
    assert p.vy == MAX_FALL_SPEED
    assert p.y == pytest.approx(100.0 + MAX_FALL_SPEED)

    up = Player(x=100.0, y=100.0, vy=-30.0)
    up.update_physics(0, WIDTH)
    assert up.vy == pytest.approx(-30.0 + GRAVITY), "upward speed is never clamped"


def main():
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"✓ {name}")


if __name__ == "__main__":
    main()
