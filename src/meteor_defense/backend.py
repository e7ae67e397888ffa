"""
Rendering and audio backends, plus the drawables that make up a frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import pygame
from mini_arcade_core.utils import logger

from meteor_defense import constants
from meteor_defense.entities import Entity
from meteor_defense.utils import load_image, make_tone

if TYPE_CHECKING:
    from meteor_defense.game import MeteorWorld


class Renderer:
    """
    Drawable surface the game renders to
    """

    def clear(self) -> None:
        """
        Clear the whole field

        :raise NotImplementedError: Subclasses must implement this method
        """
        raise NotImplementedError("Subclasses must implement this method")

    def draw_sprite(
        self, name: str, x: float, y: float, width: float, height: float
    ) -> None:
        """
        Blit the sprite called ``name`` into the given rectangle

        :raise NotImplementedError: Subclasses must implement this method
        """
        raise NotImplementedError("Subclasses must implement this method")

    def draw_text(self, text: str, x: float, y: float) -> None:
        """
        Draw a line of text with its baseline origin at (x, y)

        :raise NotImplementedError: Subclasses must implement this method
        """
        raise NotImplementedError("Subclasses must implement this method")


class PygameRenderer(Renderer):
    """
    Renderer backed by a pygame surface. Sprites without an image are drawn
    as flat-coloured rectangles.
    """

    def __init__(
        self,
        surface: pygame.Surface,
        sprites: dict[str, pygame.Surface] | None = None,
        font: pygame.font.Font | None = None,
    ):
        self._surface = surface
        self._sprites = sprites or {}
        self._scaled: dict[tuple[str, int, int], pygame.Surface] = {}
        self._font = font

    @classmethod
    def from_assets(
        cls, surface: pygame.Surface, assets_root: Path | None
    ) -> "PygameRenderer":
        """
        Load the sprite images found under ``assets_root``.
        """
        sprites = {}
        for name, filename in constants.SPRITE_FILES.items():
            path = assets_root / filename if assets_root else None
            if path is None or not path.is_file():
                logger.warning(f"No image for {name}, drawing a plain rectangle")
                continue
            logger.debug(f"Loading image {path}")
            sprites[name] = load_image(path)

        if not pygame.font.get_init():
            pygame.font.init()
        font = pygame.font.Font(None, constants.SCORE_FONT_SIZE)
        return cls(surface, sprites, font)

    def clear(self) -> None:
        self._surface.fill(constants.BACKGROUND_COLOR)

    def draw_sprite(
        self, name: str, x: float, y: float, width: float, height: float
    ) -> None:
        rect = pygame.Rect(int(x), int(y), int(width), int(height))
        image = self._sprites.get(name)
        if image is None:
            color = constants.FALLBACK_COLORS.get(name, (255, 255, 255))
            pygame.draw.rect(self._surface, color, rect)
            return

        key = (name, rect.width, rect.height)
        scaled = self._scaled.get(key)
        if scaled is None:
            scaled = pygame.transform.scale(image, rect.size)
            self._scaled[key] = scaled
        self._surface.blit(scaled, rect)

    def draw_text(self, text: str, x: float, y: float) -> None:
        if self._font is None:
            return
        image = self._font.render(text, True, constants.SCORE_COLOR)
        # y is the text baseline
        top = int(y) - self._font.get_ascent()
        self._surface.blit(image, (int(x), top))


class AudioSink:
    """
    Fire-and-forget sound player
    """

    def play(self, name: str) -> None:
        """
        :raise NotImplementedError: Subclasses must implement this method
        """
        raise NotImplementedError("Subclasses must implement this method")


class NullAudio(AudioSink):
    """Plays nothing."""

    def play(self, name: str) -> None:
        return None


class PygameAudio(AudioSink):
    """
    Plays pygame mixer sounds on free channels
    """

    def __init__(self, sounds: dict[str, pygame.mixer.Sound]):
        self._sounds = sounds

    @classmethod
    def from_assets(cls, assets_root: Path | None) -> AudioSink:
        """
        Initialise the mixer and load sounds, synthesising a short tone for
        any sound file that is missing. Returns ``NullAudio`` when no audio
        device is available.
        """
        try:
            pygame.mixer.pre_init(frequency=22050, size=-16, channels=1, buffer=512)
            pygame.mixer.init()
        except pygame.error as e:
            logger.warning(f"Audio disabled: {e}")
            return NullAudio()

        sounds = {}
        for name, filename in constants.SOUND_FILES.items():
            path = assets_root / filename if assets_root else None
            if path is not None and path.is_file():
                try:
                    sounds[name] = pygame.mixer.Sound(str(path))
                    continue
                except pygame.error as e:
                    logger.warning(f"Failed to load sound {path}: {e}")
            logger.debug(f"Synthesising sound {name}")
            sounds[name] = make_tone(880, 60, 0.25)
        return cls(sounds)

    def play(self, name: str) -> None:
        sound = self._sounds.get(name)
        if sound is not None:
            sound.play()


@dataclass
class DrawBackground:
    def draw(self, renderer: Renderer, world: "MeteorWorld"):
        renderer.clear()


@dataclass
class DrawScore:
    position: tuple[float, float] = constants.SCORE_POSITION

    def draw(self, renderer: Renderer, world: "MeteorWorld"):
        renderer.draw_text(str(world.score), *self.position)


def _draw_entity(renderer: Renderer, entity: Entity) -> None:
    renderer.draw_sprite(
        entity.sprite, *entity.position.to_tuple(), *entity.size.to_tuple()
    )


@dataclass
class DrawShip:
    def draw(self, renderer: Renderer, world: "MeteorWorld"):
        _draw_entity(renderer, world.ship)


@dataclass
class DrawProjectiles:
    def draw(self, renderer: Renderer, world: "MeteorWorld"):
        for projectile in world.ship.projectiles:
            _draw_entity(renderer, projectile)


@dataclass
class DrawMeteors:
    def draw(self, renderer: Renderer, world: "MeteorWorld"):
        for meteor in world.meteors:
            _draw_entity(renderer, meteor)


@dataclass
class FrameRenderer:
    """
    Draws a whole frame: background, score, ship, projectiles, meteors.
    """

    drawables: list = field(
        default_factory=lambda: [
            DrawBackground(),
            DrawScore(),
            DrawShip(),
            DrawProjectiles(),
            DrawMeteors(),
        ]
    )

    def draw(self, renderer: Renderer, world: "MeteorWorld") -> None:
        for drawable in self.drawables:
            drawable.draw(renderer, world)
