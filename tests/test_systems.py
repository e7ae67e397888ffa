import pytest
from mini_arcade_core.scenes.systems import BaseSystem, SystemPipeline
from mini_arcade_core.spaces.geometry.bounds import Position2D

from meteor_defense.entities import Meteor, Projectile
from meteor_defense.game import TickContext
from meteor_defense.systems import (
    default_systems,
    is_game_over,
    is_hit,
    prune_overflow,
    resolve_collisions,
)


def meteor_at(x, y):
    return Meteor(Position2D(x, y))


def projectile_at(x, y):
    return Projectile(Position2D(x, y))


def test_projectile_inside_meteor_span_hits(world):
    world.meteors.append(meteor_at(100, 100))
    world.ship.projectiles.append(projectile_at(130, 150))

    assert resolve_collisions(world) == 1

    assert world.score == 1
    assert world.meteors == []
    assert world.ship.projectiles == []


@pytest.mark.parametrize(
    "x, hit",
    [(81, False), (89, False), (90, True), (170, True), (171, False)],
)
def test_horizontal_tolerance_edges(x, hit):
    assert is_hit(projectile_at(x, 150), meteor_at(100, 100)) is hit


def test_vertical_test_only_checks_the_meteor_bottom():
    meteor = meteor_at(100, 100)

    assert is_hit(projectile_at(130, 160), meteor)
    assert not is_hit(projectile_at(130, 161), meteor)
    # already above the meteor's top edge
    assert is_hit(projectile_at(130, 10), meteor)


def test_each_entity_is_consumed_by_at_most_one_hit(world):
    world.meteors.extend([meteor_at(100, 100), meteor_at(120, 100)])
    world.ship.projectiles.append(projectile_at(130, 150))

    assert resolve_collisions(world) == 1

    assert world.score == 1
    assert len(world.meteors) == 1
    assert world.ship.projectiles == []


def test_two_projectiles_on_one_meteor_spend_only_one(world):
    world.meteors.append(meteor_at(100, 100))
    world.ship.projectiles.extend([projectile_at(130, 150), projectile_at(140, 150)])

    resolve_collisions(world)

    assert world.score == 1
    assert len(world.ship.projectiles) == 1


def test_simultaneous_hits_are_all_resolved(world):
    world.score = 4
    keep = meteor_at(600, 0)
    world.meteors.extend([meteor_at(0, 100), keep, meteor_at(300, 100)])
    world.ship.projectiles.extend(
        [projectile_at(320, 150), projectile_at(10, 150), projectile_at(700, 400)]
    )

    assert resolve_collisions(world) == 2

    assert world.score == 6
    assert world.meteors == [keep]
    assert [p.position.x for p in world.ship.projectiles] == [700]


def test_no_hits_leaves_everything_alone(world):
    world.meteors.append(meteor_at(0, 0))
    world.ship.projectiles.append(projectile_at(500, 300))

    assert resolve_collisions(world) == 0
    assert world.score == 0
    assert len(world.meteors) == 1
    assert len(world.ship.projectiles) == 1


def test_prune_removes_adjacent_overflowed_entities(world):
    live_meteor = meteor_at(0, 100)
    world.meteors.extend([meteor_at(0, 600), meteor_at(0, 650), live_meteor])
    live_projectile = projectile_at(0, -39)
    world.ship.projectiles.extend(
        [projectile_at(0, -40), projectile_at(0, -100), live_projectile]
    )

    assert prune_overflow(world) == (2, 2)

    assert world.meteors == [live_meteor]
    assert world.ship.projectiles == [live_projectile]


def test_prune_keeps_order_and_is_idempotent(world):
    meteors = [meteor_at(i, y) for i, y in enumerate([10, 700, 20, 30, 600])]
    world.meteors.extend(meteors)
    ship_projectiles = world.ship.projectiles

    prune_overflow(world)
    first = list(world.meteors)
    assert prune_overflow(world) == (0, 0)

    assert world.meteors == first == [meteors[0], meteors[2], meteors[3]]
    assert world.ship.projectiles is ship_projectiles


def test_game_over_when_a_meteor_bottom_reaches_the_floor(world):
    world.meteors.append(meteor_at(0, 539))
    assert not is_game_over(world)

    world.meteors[0].advance()
    assert is_game_over(world)


def test_systems_follow_the_base_system_contract():
    for system in default_systems():
        assert isinstance(system, BaseSystem)
        assert system.enabled(None)


def test_pipeline_runs_systems_in_order(world, scheduler, audio):
    pipeline = SystemPipeline()
    pipeline.extend(reversed(default_systems()))

    assert [s.name for s in pipeline.systems] == [
        "meteor_overflow",
        "meteor_ship",
        "meteor_motion",
        "meteor_collision",
        "meteor_game_over",
    ]

    world.meteors.append(meteor_at(0, 539))
    ctx = TickContext(world=world, scheduler=scheduler, audio=audio)
    pipeline.step(ctx)

    assert world.meteors[0].position.y == 540
    assert ctx.game_over
    assert ctx.hits == 0
