"""
Constants for the game.
"""

from __future__ import annotations

TITLE = "Meteor Defense"

WINDOW_SIZE = (800, 600)

# Simulation ticks per second. The display is flipped once per frame, capped
# at FRAME_CAP frames per second.
TICK_RATE = 400
FRAME_CAP = 400

# Milliseconds
METEOR_SPAWN_INTERVAL = 600
RELOAD_TIME = 300

SHIP_SIZE = (120, 120)
SHIP_SPEED = 2

PROJECTILE_SIZE = (20, 40)
PROJECTILE_SPEED = 4

METEOR_SIZE = (60, 60)
METEOR_SPEED = 1

# Horizontal slack on each side of a meteor when testing for a hit
HIT_TOLERANCE = 10

UP = -1
DOWN = 1
LEFT = -1
RIGHT = 1

SCORE_COLOR = (0, 255, 255)
SCORE_FONT_SIZE = 30
SCORE_POSITION = (30, 30)
BACKGROUND_COLOR = (0, 0, 0)

# Flat colours used when a sprite image is not available
FALLBACK_COLORS = {
    "ship": (255, 255, 255),
    "projectile": (255, 0, 0),
    "meteor": (160, 110, 60),
}

SPRITE_FILES = {
    "ship": "ship.png",
    "projectile": "laser.png",
    "meteor": "meteor.png",
}

SOUND_FILES = {
    "laser": "laser.mp3",
}
