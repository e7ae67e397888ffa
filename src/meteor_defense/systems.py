"""
Per-tick simulation systems.

Each system runs once per tick from a ``SystemPipeline``, in ``order``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mini_arcade_core.scenes.systems import BaseSystem, SystemPhase
from mini_arcade_core.utils import logger

from meteor_defense import constants
from meteor_defense.entities import Meteor, Projectile

if TYPE_CHECKING:
    from meteor_defense.game import MeteorWorld, TickContext


def prune_overflow(world: "MeteorWorld") -> tuple[int, int]:
    """
    Drop meteors that fell past the bottom and projectiles that left through
    the top. Returns how many meteors and projectiles were removed.
    """
    ship = world.ship
    meteors = [m for m in world.meteors if not m.overflowed(world.field_height)]
    projectiles = [p for p in ship.projectiles if not p.overflowed]

    removed = (
        len(world.meteors) - len(meteors),
        len(ship.projectiles) - len(projectiles),
    )
    world.meteors[:] = meteors
    ship.projectiles[:] = projectiles
    return removed


def is_hit(
    projectile: Projectile,
    meteor: Meteor,
    tolerance: float = constants.HIT_TOLERANCE,
) -> bool:
    """
    The projectile has reached the meteor's bottom edge and lies within the
    meteor's span widened by ``tolerance`` on both sides.
    """
    collider = meteor.collider
    left = collider.position.x
    right = left + collider.size.width
    bottom = collider.position.y + collider.size.height
    x, y = projectile.position.to_tuple()
    return y <= bottom and left - tolerance <= x <= right + tolerance


def resolve_collisions(world: "MeteorWorld") -> int:
    """
    Remove every meteor/projectile pair that hit, one hit per entity, and
    add one point per pair. Returns the number of hits.
    """
    ship = world.ship
    spent: set[int] = set()
    destroyed: set[int] = set()

    for meteor in world.meteors:
        for projectile in ship.projectiles:
            if id(projectile) in spent:
                continue
            if is_hit(projectile, meteor):
                spent.add(id(projectile))
                destroyed.add(id(meteor))
                break

    if not destroyed:
        return 0

    world.meteors[:] = [m for m in world.meteors if id(m) not in destroyed]
    ship.projectiles[:] = [p for p in ship.projectiles if id(p) not in spent]
    world.score += len(destroyed)
    logger.debug(f"Hit! x{len(destroyed)}, score: {world.score}")
    return len(destroyed)


def is_game_over(world: "MeteorWorld") -> bool:
    return any(m.landed(world.field_height) for m in world.meteors)


@dataclass
class OverflowSystem(BaseSystem["TickContext"]):
    name: str = "meteor_overflow"
    phase: int = SystemPhase.SIMULATION
    order: int = 10

    def step(self, ctx: "TickContext"):
        prune_overflow(ctx.world)


@dataclass
class ShipSystem(BaseSystem["TickContext"]):
    """
    Apply input intent, fire, advance projectiles.
    """

    name: str = "meteor_ship"
    phase: int = SystemPhase.SIMULATION
    order: int = 20

    def step(self, ctx: "TickContext"):
        ctx.world.ship.tick(ctx.scheduler, ctx.audio)


@dataclass
class MeteorMotionSystem(BaseSystem["TickContext"]):
    name: str = "meteor_motion"
    phase: int = SystemPhase.SIMULATION
    order: int = 30

    def step(self, ctx: "TickContext"):
        for meteor in ctx.world.meteors:
            meteor.advance()


@dataclass
class CollisionSystem(BaseSystem["TickContext"]):
    name: str = "meteor_collision"
    phase: int = SystemPhase.SIMULATION
    order: int = 40

    def step(self, ctx: "TickContext"):
        ctx.hits = resolve_collisions(ctx.world)


@dataclass
class GameOverSystem(BaseSystem["TickContext"]):
    name: str = "meteor_game_over"
    phase: int = SystemPhase.SIMULATION
    order: int = 50

    def step(self, ctx: "TickContext"):
        ctx.game_over = is_game_over(ctx.world)


def default_systems() -> list[BaseSystem["TickContext"]]:
    return [
        OverflowSystem(),
        ShipSystem(),
        MeteorMotionSystem(),
        CollisionSystem(),
        GameOverSystem(),
    ]
