"""
Meteor spawner
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mini_arcade_core.spaces.geometry.bounds import Position2D, Size2D
from mini_arcade_core.utils import logger

from meteor_defense.entities import Meteor
from meteor_defense.timers import Scheduler, TimerHandle

if TYPE_CHECKING:
    from meteor_defense.game import MeteorWorld


@dataclass
class MeteorSpawner:
    """
    Drops a new meteor at the top of the field every ``interval`` ms.
    """

    world: "MeteorWorld"
    scheduler: Scheduler
    interval: float
    meteor_size: tuple[float, float]
    meteor_speed: float
    rng: random.Random = field(default_factory=random.Random)
    _handle: TimerHandle | None = field(default=None, init=False, repr=False)

    def start(self) -> None:
        if self.running:
            return
        logger.debug(f"Spawning meteors every {self.interval} ms")
        self._handle = self.scheduler.call_every(self.interval, self.spawn)

    def stop(self) -> None:
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def spawn(self) -> Meteor:
        """
        Append one meteor at a random x, flush with the top edge.
        """
        width, height = self.meteor_size
        x = self.rng.randint(0, int(self.world.field_width - width))
        meteor = Meteor(
            position=Position2D(x, 0.0),
            size=Size2D(width, height),
            speed=self.meteor_speed,
        )
        self.world.meteors.append(meteor)
        logger.debug(f"Meteor spawned at x={x} ({len(self.world.meteors)} live)")
        return meteor
