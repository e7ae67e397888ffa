"""
Game configuration.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Any

from meteor_defense import constants


class ConfigError(ValueError):
    """Raised when the game configuration cannot be used."""


@dataclass
class GameConfig:  # pylint: disable=too-many-instance-attributes
    """
    Tunables for one game session. Sizes and speeds are in pixels,
    intervals in milliseconds.
    """

    field_width: int = constants.WINDOW_SIZE[0]
    field_height: int = constants.WINDOW_SIZE[1]
    tick_rate: float = constants.TICK_RATE
    spawn_interval: float = constants.METEOR_SPAWN_INTERVAL
    reload_time: float = constants.RELOAD_TIME

    ship_width: float = constants.SHIP_SIZE[0]
    ship_height: float = constants.SHIP_SIZE[1]
    ship_speed: float = constants.SHIP_SPEED

    projectile_width: float = constants.PROJECTILE_SIZE[0]
    projectile_height: float = constants.PROJECTILE_SIZE[1]
    projectile_speed: float = constants.PROJECTILE_SPEED

    meteor_width: int = constants.METEOR_SIZE[0]
    meteor_height: float = constants.METEOR_SIZE[1]
    meteor_speed: float = constants.METEOR_SPEED

    seed: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameConfig":
        """
        Build a config from a plain dictionary and validate it.

        :param data: Mapping of field name to value
        :type data: dict

        :raise ConfigError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        config = cls(**data)
        config.validate()
        return config

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def validate(self) -> "GameConfig":
        """
        Check every value once, before the game starts.

        :raise ConfigError: If a value is out of range
        """
        for f in fields(self):
            if f.name == "seed":
                continue
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{f.name} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise ConfigError(f"{f.name} must be positive and finite, got {value!r}")

        for name in ("field_width", "field_height", "meteor_width"):
            if int(getattr(self, name)) != getattr(self, name):
                raise ConfigError(f"{name} must be a whole number of pixels")

        if self.field_width < self.meteor_width:
            raise ConfigError("field_width must be at least meteor_width")
        if self.field_height < self.ship_height:
            raise ConfigError("field_height must be at least ship_height")
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int)
        ):
            raise ConfigError(f"seed must be an integer, got {self.seed!r}")

        return self

    @property
    def tick_interval(self) -> float:
        """Milliseconds between two ticks."""
        return 1000.0 / self.tick_rate
