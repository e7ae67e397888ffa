"""
Meteor Defense game state and the fixed-rate loop that drives it.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from mini_arcade_core.scenes.systems import SystemPipeline
from mini_arcade_core.spaces.geometry.bounds import Size2D
from mini_arcade_core.utils import logger

from meteor_defense.backend import AudioSink, FrameRenderer, NullAudio, Renderer
from meteor_defense.config import GameConfig
from meteor_defense.entities import Meteor, Ship
from meteor_defense.spawner import MeteorSpawner
from meteor_defense.systems import default_systems
from meteor_defense.timers import Scheduler, TimerHandle


@dataclass
class MeteorWorld:
    """
    Everything that is alive in one game session
    """

    field_width: int
    field_height: int
    ship: Ship
    meteors: list[Meteor] = field(default_factory=list)
    score: int = 0
    running: bool = True


@dataclass
class TickContext:
    """
    State shared by the systems during one tick
    """

    world: MeteorWorld
    scheduler: Scheduler
    audio: AudioSink
    hits: int = 0
    game_over: bool = False


class Game:
    """
    Owns the world, the meteor spawner and the update pipeline.
    """

    def __init__(
        self,
        config: GameConfig,
        scheduler: Scheduler,
        audio: AudioSink | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config.validate()
        self.scheduler = scheduler
        self.audio = audio or NullAudio()

        ship = Ship.spawn(
            config.field_width,
            config.field_height,
            size=Size2D(config.ship_width, config.ship_height),
            speed=config.ship_speed,
            reload_time=config.reload_time,
            projectile_size=(config.projectile_width, config.projectile_height),
            projectile_speed=config.projectile_speed,
        )
        self.world = MeteorWorld(
            field_width=int(config.field_width),
            field_height=int(config.field_height),
            ship=ship,
        )
        self.spawner = MeteorSpawner(
            world=self.world,
            scheduler=scheduler,
            interval=config.spawn_interval,
            meteor_size=(config.meteor_width, config.meteor_height),
            meteor_speed=config.meteor_speed,
            rng=rng or random.Random(config.seed),
        )
        self.pipeline: SystemPipeline[TickContext] = SystemPipeline()
        self.pipeline.extend(default_systems())
        self.frame = FrameRenderer()

    @property
    def ship(self) -> Ship:
        return self.world.ship

    @property
    def score(self) -> int:
        return self.world.score

    def render(self, renderer: Renderer) -> None:
        self.frame.draw(renderer, self.world)

    def update(self) -> TickContext:
        """
        Advance the simulation by one tick.
        """
        ctx = TickContext(
            world=self.world, scheduler=self.scheduler, audio=self.audio
        )
        self.pipeline.step(ctx)
        return ctx


class GameLoop:
    """
    Runs render-then-update ``tick_rate`` times per second on the scheduler
    until a meteor lands.
    """

    def __init__(self, game: Game, renderer: Renderer, scheduler: Scheduler):
        self.game = game
        self.renderer = renderer
        self.scheduler = scheduler
        self.ticks = 0
        self._handle: TimerHandle | None = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        if self.running or not self.game.world.running:
            return
        interval = self.game.config.tick_interval
        logger.info(
            f"Starting game loop at {self.game.config.tick_rate} ticks/s "
            f"on a {self.game.world.field_width}x{self.game.world.field_height} field"
        )
        self._handle = self.scheduler.call_every(interval, self.tick)
        self.game.spawner.start()

    def tick(self) -> None:
        if not self.running:
            return
        self.ticks += 1
        self.game.render(self.renderer)
        ctx = self.game.update()
        if ctx.game_over:
            logger.info(
                f"Game over! Score: {self.game.score} after {self.ticks} ticks"
            )
            self.game.world.running = False
            self.stop()

    def stop(self) -> None:
        """
        Cancel the tick and spawn timers. Only a landed meteor ends the game;
        a loop stopped from outside can be started again.
        """
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None
        self.game.spawner.stop()
        logger.info("Game loop stopped")
