#!/usr/bin/env python3
"""PaddleBall - Standalone Entry Point.

Two players share one screen: the top player drags inside the top control
zone, the bottom player inside the bottom one. Mouse works for testing.

Usage:
    paddleball
    paddleball --preset classic --target-score 7
    paddleball --width 720 --height 1280 --record
"""

import argparse
import sys

import pygame

from paddleball import config as host_config
from paddleball.config_loader import ConfigLoader
from paddleball.game_mode import PaddleBallMode
from paddleball.input import InputManager
from paddleball.input.sources import PygamePointerSource
from paddleball.logging import (
    close_all_sinks,
    configure_logging,
    create_sink_for_environment,
    get_logger,
    register_sink,
    set_module_setting,
)

log = get_logger('host')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PaddleBall - Standalone")

    # Display options
    parser.add_argument('--width', type=int, default=host_config.SCREEN_WIDTH, help='Screen width')
    parser.add_argument('--height', type=int, default=host_config.SCREEN_HEIGHT, help='Screen height')
    parser.add_argument('--fullscreen', action='store_true', default=host_config.FULLSCREEN,
                        help='Run fullscreen')
    parser.add_argument('--fps', type=int, default=host_config.FPS, help='Frame rate cap')

    # Game options
    parser.add_argument('--preset', type=str, default=host_config.PRESET,
                        choices=ConfigLoader().list_presets(),
                        help='Rule preset')
    parser.add_argument('--target-score', type=int, default=host_config.TARGET_SCORE,
                        help='Score that ends the match (0 = endless)')

    # Diagnostics
    parser.add_argument('--record', action='store_true', default=host_config.RECORD_MATCH,
                        help='Write match events (goals, progression) to a JSONL file')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Console log level (TRACE, DEBUG, INFO, ...)')
    return parser


def main(argv=None) -> int:
    """Run PaddleBall standalone."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        configure_logging(level=args.log_level)
    if args.record:
        set_module_setting('match', 'enabled', True)
    register_sink('match', create_sink_for_environment('match'))

    pygame.init()
    pygame.font.init()

    if args.fullscreen:
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        width, height = screen.get_size()
    else:
        width, height = args.width, args.height
        screen = pygame.display.set_mode((width, height))

    pygame.display.set_caption(PaddleBallMode.NAME)

    game = PaddleBallMode(
        width=width,
        height=height,
        preset=args.preset,
        target_score=args.target_score,
    )
    input_manager = InputManager(PygamePointerSource(width, height))

    clock = pygame.time.Clock()
    running = True

    print("\n" + "=" * 50)
    print("PADDLEBALL")
    print("=" * 50)
    print("Controls:")
    print("  - Drag inside your control zone to move your paddle")
    print("  - P to pause, R to restart")
    print("  - ESC to quit")
    print("=" * 50 + "\n")

    try:
        while running:
            dt = clock.tick(args.fps) / 1000.0

            # Pointer events are consumed here; everything else is re-posted
            input_manager.update(dt)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        game.reset()
                        log.info("Game restarted")
                    elif event.key == pygame.K_p:
                        game.toggle_pause()

            game.handle_input(input_manager.get_events())
            game.update(dt)

            game.render(screen)
            pygame.display.flip()
    finally:
        close_all_sinks()
        pygame.quit()

    return 0


if __name__ == "__main__":
    sys.exit(main())
