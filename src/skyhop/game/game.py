# src/skyhop/game/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_RETURN, K_ESCAPE, K_r, K_n, K_LEFT, K_RIGHT, K_a, K_d
from .config import FPS, WIDTH, HEIGHT, SEED_DEFAULT, COLOR_FG, Viewport
from .errors import ConfigError
from .render import draw_world
from .run import Run, RunStatus

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Skyhop: bounce as high as you can.")
    p.add_argument("--seed", type=int, default=None,
                   help="Platform seed. Omit for SEED_DEFAULT, use -1 for random each launch.")
    p.add_argument("--width", type=int, default=WIDTH, help="Window width in px")
    p.add_argument("--height", type=int, default=HEIGHT, help="Window height in px")
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def read_direction(pressed) -> int:
    """Held keys -> -1 / 0 / +1. Left and right together cancel out."""
    left = pressed[K_LEFT] or pressed[K_a]
    right = pressed[K_RIGHT] or pressed[K_d]
    return int(bool(right)) - int(bool(left))


def _blit_centered(screen, font, text, y, color=COLOR_FG):
    surf = font.render(text, True, color)
    screen.blit(surf, (screen.get_width() // 2 - surf.get_width() // 2, y))


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None
    else:
        launch_seed = args.seed

    try:
        viewport = Viewport(args.width, args.height)
    except ConfigError as e:
        logger.error("bad window geometry: %s", e)
        sys.exit(2)

    pygame.init()
    pygame.display.set_caption("Skyhop")
    screen = pygame.display.set_mode((int(viewport.width), int(viewport.height)))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 20)
    big_font = pygame.font.SysFont("jetbrainsmono", 34, bold=True)

    best_score = 0
    game = Run(viewport, seed=launch_seed, best_score=best_score)

    try:
        while True:
            clock.tick(FPS)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN:
                    if event.key == K_ESCAPE:
                        return
                    if event.key in (K_SPACE, K_RETURN) and not game.is_running():
                        # Start from the title screen, or replay the same seed after a fall
                        game.start()
                    if event.key == K_r and game.is_over:
                        game.start()
                    if event.key == K_n and game.is_over:
                        # Fresh random column
                        game = Run(viewport, seed=None, best_score=best_score)
                        game.start()

            if game.is_running():
                outcome = game.tick(read_direction(pygame.key.get_pressed()))
                if outcome is not None:
                    best_score = outcome.best_score

            # --- Render ---
            draw_world(screen, game)
            hud = f"Score: {game.state.score}   Best: {best_score}   Seed: {game.seed}"
            screen.blit(font.render(hud, True, COLOR_FG), (12, 10))

            mid = screen.get_height() // 2
            if game.state.status is RunStatus.IDLE:
                _blit_centered(screen, big_font, "SKYHOP", mid - 60)
                _blit_centered(screen, font, "SPACE to start | arrows / A D to steer", mid)
            elif game.is_over:
                outcome = game.outcome
                _blit_centered(screen, big_font, "Game Over", mid - 70)
                _blit_centered(screen, font, f"Final score: {outcome.final_score}", mid - 20)
                if outcome.new_best:
                    _blit_centered(screen, font, "New best!", mid + 10, (255, 214, 102))
                _blit_centered(screen, font, "R / SPACE same seed | N new seed | ESC quit", mid + 45)

            pygame.display.flip()
    finally:
        pygame.quit()


if __name__ == "__main__":
    run()
