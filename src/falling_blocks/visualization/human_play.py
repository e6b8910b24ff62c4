from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

import pygame

from falling_blocks.game import Action, FallingBlockGame, GameConfig, GameLoop
from falling_blocks.logging_config import setup_logging
from .renderer import Renderer

logger = logging.getLogger(__name__)


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.ROTATE,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the falling-block game with the keyboard.")
    p.add_argument("--gravity-ms", type=int, default=300)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="INFO")
    p.add_argument("--log-file", type=str, default=None)
    return p


def run(config: Optional[GameConfig] = None, cell_size: int = 28) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = FallingBlockGame(config)
        loop = GameLoop(game)
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game.config.height, game.config.width))
        pygame.display.set_caption("Falling Blocks")
        logger.info("Started %dx%d board, gravity every %d ms",
                    game.config.width, game.config.height, game.config.gravity_ms)

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            loop.push(action)

            loop.update(clock.tick(60))
            renderer.draw(screen, game.get_state())
    finally:
        pygame.quit()
        logger.info("Stopped")


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)
    try:
        config = GameConfig(gravity_ms=args.gravity_ms, random_seed=args.seed)
    except ValueError as exc:
        build_parser().error(str(exc))
    run(config, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
