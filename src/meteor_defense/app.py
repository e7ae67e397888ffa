"""
Main application for Meteor Defense using pygame.
"""

from __future__ import annotations

import logging

import pygame
from mini_arcade_core.utils import find_assets_root, logger
from mini_arcade_core.utils.logging import configure_logging

from meteor_defense.backend import PygameAudio, PygameRenderer
from meteor_defense.config import GameConfig
from meteor_defense.constants import FRAME_CAP, TITLE
from meteor_defense.entities import KeyAction, Ship
from meteor_defense.game import Game, GameLoop
from meteor_defense.timers import Scheduler
from meteor_defense.utils import set_screen

KEY_BINDINGS = {
    pygame.K_LEFT: KeyAction.MOVE_LEFT,
    pygame.K_RIGHT: KeyAction.MOVE_RIGHT,
    pygame.K_s: KeyAction.FIRE,
    pygame.K_SPACE: KeyAction.FIRE,
}


def handle_event(event: pygame.event.Event, ship: Ship) -> bool:
    """
    Forward one pygame event to the ship.

    :return: False when the window was closed
    :rtype: bool
    """
    if event.type == pygame.QUIT:
        logger.debug("Quitting the game")
        return False
    if event.type in (pygame.KEYDOWN, pygame.KEYUP):
        action = KEY_BINDINGS.get(event.key)
        if action is not None:
            ship.handle_input(action, event.type == pygame.KEYDOWN)
    return True


def run(config: GameConfig | None = None):
    """
    Main entry point for Meteor Defense.

    - Validates the configuration before anything is opened.
    - Opens the window and loads sprites and sounds from `assets/` if present.
    - Pumps pygame events into the ship and advances the scheduler by the
      wall-clock time of each frame; the loop and spawner run as timers.
    - Keeps the last frame on screen after game over until the window closes.
    """
    configure_logging(logging.INFO)
    config = (config or GameConfig()).validate()
    logger.info(config.to_dict())

    try:
        assets_root = find_assets_root(__file__)
    except FileNotFoundError as e:
        logger.warning(f"{e} Falling back to plain shapes and tones.")
        assets_root = None

    pygame.init()
    screen = set_screen(TITLE, int(config.field_width), int(config.field_height))

    renderer = PygameRenderer.from_assets(screen, assets_root)
    audio = PygameAudio.from_assets(assets_root)

    scheduler = Scheduler()
    game = Game(config, scheduler, audio)
    loop = GameLoop(game, renderer, scheduler)
    loop.start()

    clock = pygame.time.Clock()
    carry_on = True
    while carry_on:
        elapsed = clock.tick(FRAME_CAP)
        for event in pygame.event.get():
            carry_on = handle_event(event, game.ship) and carry_on
        scheduler.advance(elapsed)
        pygame.display.flip()

    loop.stop()
    pygame.quit()


if __name__ == "__main__":
    run()
