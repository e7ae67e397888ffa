from __future__ import annotations

import random

import pytest

from meteor_defense.backend import AudioSink, Renderer
from meteor_defense.config import GameConfig
from meteor_defense.entities import Ship
from meteor_defense.game import Game, GameLoop, MeteorWorld
from meteor_defense.timers import Scheduler


class RecordingRenderer(Renderer):
    def __init__(self):
        self.calls = []

    def clear(self):
        self.calls.append(("clear",))

    def draw_sprite(self, name, x, y, width, height):
        self.calls.append(("sprite", name, x, y, width, height))

    def draw_text(self, text, x, y):
        self.calls.append(("text", text, x, y))


class RecordingAudio(AudioSink):
    def __init__(self):
        self.played = []

    def play(self, name):
        self.played.append(name)


@pytest.fixture
def scheduler():
    return Scheduler()


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def world():
    return MeteorWorld(field_width=800, field_height=600, ship=Ship.spawn(800, 600))


@pytest.fixture
def config():
    return GameConfig(seed=1234)


@pytest.fixture
def game(config, scheduler, audio):
    return Game(config, scheduler, audio, rng=random.Random(1234))


@pytest.fixture
def loop(game, renderer, scheduler):
    return GameLoop(game, renderer, scheduler)
