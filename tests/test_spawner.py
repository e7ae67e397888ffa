import random

from meteor_defense.spawner import MeteorSpawner


def make_spawner(world, scheduler, seed=7):
    return MeteorSpawner(
        world=world,
        scheduler=scheduler,
        interval=600,
        meteor_size=(60, 60),
        meteor_speed=1,
        rng=random.Random(seed),
    )


def test_spawn_places_meteor_on_top_edge_inside_field(world, scheduler):
    spawner = make_spawner(world, scheduler)

    for _ in range(200):
        meteor = spawner.spawn()
        assert meteor.position.y == 0
        assert 0 <= meteor.position.x <= 740
        assert meteor.position.x == int(meteor.position.x)

    assert len(world.meteors) == 200


def test_meteor_as_wide_as_field_always_spawns_at_zero(world, scheduler):
    world.field_width = 60
    spawner = make_spawner(world, scheduler)

    assert {spawner.spawn().position.x for _ in range(20)} == {0}


def test_spawns_on_its_interval_until_stopped(world, scheduler):
    spawner = make_spawner(world, scheduler)
    spawner.start()
    spawner.start()

    scheduler.advance(599)
    assert world.meteors == []

    scheduler.advance(1201)
    assert len(world.meteors) == 3

    spawner.stop()
    assert not spawner.running
    scheduler.advance(6000)
    assert len(world.meteors) == 3


def test_same_seed_same_positions(world, scheduler):
    a = make_spawner(world, scheduler, seed=3)
    b = make_spawner(world, scheduler, seed=3)

    first = [a.spawn().position.x for _ in range(10)]
    second = [b.spawn().position.x for _ in range(10)]

    assert first == second
