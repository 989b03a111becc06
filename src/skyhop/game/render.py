# src/skyhop/game/render.py
from __future__ import annotations
from typing import Iterable
import pygame
from .config import COLOR_BG, COLOR_PLAYER, COLOR_PLAYER_DEAD, COLOR_PARTICLE
from .particles import Particle
from .player import Player
from .run import Run


def draw_player(surf: pygame.Surface, player: Player, alive: bool = True):
    rect = player.rect
    color = COLOR_PLAYER if alive else COLOR_PLAYER_DEAD
    pygame.draw.ellipse(surf, color, rect)

    # Eyes look the way the player is facing
    eye_dx = 6 * player.facing
    for ex in (rect.centerx - 10, rect.centerx + 10):
        pygame.draw.circle(surf, (255, 255, 255), (ex + eye_dx // 2, rect.centery - 5), 4)


def draw_particles(surf: pygame.Surface, particles: Iterable[Particle]):
    for p in particles:
        radius = max(1, int(p.size))
        dot = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        alpha = int(255 * max(0.0, min(1.0, p.life)))
        pygame.draw.circle(dot, (*COLOR_PARTICLE, alpha), (radius, radius), radius)
        surf.blit(dot, (int(p.x) - radius, int(p.y) - radius))


def draw_world(surf: pygame.Surface, run: Run):
    """Platforms, particles, then the player on top."""
    surf.fill(COLOR_BG)
    if run.level is not None:
        run.level.draw(surf)
    draw_particles(surf, run.particles)
    if run.player is not None:
        draw_player(surf, run.player, alive=not run.is_over)
