"""
Meteor Defense entities
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from mini_arcade_core.spaces.d2.collision2d import RectCollider
from mini_arcade_core.spaces.geometry.bounds import Position2D, Size2D
from mini_arcade_core.utils import logger

from meteor_defense import constants

if TYPE_CHECKING:
    from meteor_defense.backend import AudioSink
    from meteor_defense.timers import Scheduler


class KeyAction(str, Enum):
    """Logical actions the ship responds to."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    FIRE = "fire"


@dataclass
class Entity:
    """
    Something with a position and a size that moves along one axis.
    """

    axis: ClassVar[str] = "y"
    sprite: ClassVar[str] = ""

    position: Position2D
    size: Size2D
    speed: float

    def move(self, direction: int) -> None:
        """
        Step ``speed`` pixels along the entity's axis.

        :param direction: -1 (up / left) or +1 (down / right)
        :type direction: int

        :raise ValueError: If direction is not -1 or +1
        """
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or 1, got {direction!r}")
        value = getattr(self.position, self.axis) + direction * self.speed
        if not math.isfinite(value):
            raise ValueError(f"{type(self).__name__} moved to a non-finite {self.axis}")
        setattr(self.position, self.axis, value)

    @property
    def collider(self) -> RectCollider:
        return RectCollider(self.position, self.size)

    @property
    def bottom(self) -> float:
        return self.position.y + self.size.height


@dataclass
class Projectile(Entity):
    """
    Laser shot travelling up the field
    """

    sprite: ClassVar[str] = "projectile"

    size: Size2D = field(default_factory=lambda: Size2D(*constants.PROJECTILE_SIZE))
    speed: float = constants.PROJECTILE_SPEED

    def advance(self) -> None:
        self.move(constants.UP)

    @property
    def overflowed(self) -> bool:
        """Fully above the top edge."""
        return self.bottom <= 0


@dataclass
class Meteor(Entity):
    """
    Meteor falling down the field
    """

    sprite: ClassVar[str] = "meteor"

    size: Size2D = field(default_factory=lambda: Size2D(*constants.METEOR_SIZE))
    speed: float = constants.METEOR_SPEED

    def advance(self) -> None:
        self.move(constants.DOWN)

    def overflowed(self, field_height: float) -> bool:
        """Top edge at or past the bottom of the field."""
        return self.position.y >= field_height

    def landed(self, field_height: float) -> bool:
        """Bottom edge has reached the bottom of the field."""
        return self.bottom >= field_height


@dataclass
class Ship(Entity):  # pylint: disable=too-many-instance-attributes
    """
    Player ship. Moves horizontally and fires projectiles, one per reload.
    """

    axis: ClassVar[str] = "x"
    sprite: ClassVar[str] = "ship"

    size: Size2D = field(default_factory=lambda: Size2D(*constants.SHIP_SIZE))
    speed: float = constants.SHIP_SPEED

    moving_left: bool = False
    moving_right: bool = False
    wants_fire: bool = False

    reloading: bool = False
    reload_time: float = constants.RELOAD_TIME
    shots_fired: int = 0

    projectile_size: tuple[float, float] = constants.PROJECTILE_SIZE
    projectile_speed: float = constants.PROJECTILE_SPEED
    projectiles: list[Projectile] = field(default_factory=list)

    @classmethod
    def spawn(
        cls,
        field_width: float,
        field_height: float,
        size: Size2D | None = None,
        **kwargs,
    ) -> "Ship":
        """
        Create a ship centred on the bottom edge of the field.
        """
        size = size or Size2D(*constants.SHIP_SIZE)
        return cls(
            position=Position2D(
                field_width / 2 - size.width / 2, field_height - size.height
            ),
            size=size,
            **kwargs,
        )

    def handle_input(self, action: KeyAction, pressed: bool) -> None:
        """
        Record a key-down (``pressed=True``) or key-up for one action.

        :param action: The logical key
        :type action: KeyAction

        :param pressed: Key state
        :type pressed: bool
        """
        if action is KeyAction.MOVE_LEFT:
            self.moving_left = pressed
        elif action is KeyAction.MOVE_RIGHT:
            self.moving_right = pressed
        elif action is KeyAction.FIRE:
            self.wants_fire = pressed

    def fire(self, scheduler: "Scheduler", audio: "AudioSink") -> Projectile | None:
        """
        Fire one projectile unless the gun is reloading.

        The reload finishes on a scheduler timer, ``reload_time`` ms later.
        """
        if self.reloading:
            return None

        self.reloading = True
        projectile = Projectile(
            position=Position2D(
                self.position.x + self.size.width / 2, self.position.y
            ),
            size=Size2D(*self.projectile_size),
            speed=self.projectile_speed,
        )
        self.projectiles.append(projectile)
        self.shots_fired += 1
        audio.play("laser")
        scheduler.call_later(self.reload_time, self._reloaded)

        logger.debug(f"Shooting projectile at {projectile.position.to_tuple()}")
        return projectile

    def _reloaded(self) -> None:
        self.reloading = False

    def tick(self, scheduler: "Scheduler", audio: "AudioSink") -> None:
        """
        Apply movement and fire intent, then advance every projectile.
        """
        if self.moving_left:
            self.move(constants.LEFT)
        if self.moving_right:
            self.move(constants.RIGHT)

        if self.wants_fire:
            self.fire(scheduler, audio)

        for projectile in self.projectiles:
            projectile.advance()
