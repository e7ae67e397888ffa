"""
Meteor Defense utils
"""

from __future__ import annotations

import math
import struct
from pathlib import Path

import pygame

TONE_SAMPLE_RATE = 22050


def load_image(filename: str | Path) -> pygame.Surface:
    """
    Load an image

    :param filename: Name of the file
    :type filename: str | Path

    :return: pygame.Surface
    """
    try:
        image = pygame.image.load(str(filename))
    except pygame.error as message:
        raise SystemExit(message) from message

    if pygame.display.get_surface() is not None:
        image = image.convert_alpha()

    return image


def make_tone(freq: int, ms: int, volume: float) -> pygame.mixer.Sound:
    """
    Synthesize a short sine tone as 16-bit mono samples.

    The mixer must already be initialised.
    """
    n = max(1, int(TONE_SAMPLE_RATE * (ms / 1000.0)))
    amp = int(32767 * volume)
    buf = bytearray()
    for i in range(n):
        t = i / TONE_SAMPLE_RATE
        buf += struct.pack("<h", int(amp * math.sin(2 * math.pi * freq * t)))
    return pygame.mixer.Sound(buffer=bytes(buf))


def set_screen(caption: str, width: int, height: int) -> pygame.Surface:
    """
    Set the screen

    :param caption: Caption of the screen
    :type caption: str

    :param width: Width of the screen
    :type width: int

    :param height: Height of the screen
    :type height: int

    :return: pygame.Surface
    """
    screen = pygame.display.set_mode((width, height))
    pygame.display.set_caption(caption)

    return screen
