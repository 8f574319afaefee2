from __future__ import annotations

import math
from typing import Optional, Protocol

import numpy as np

from drive_mad import config
from drive_mad.entities import Obstacle, Pickup, PlayingField


def spawn_cadence(base_cadence: float, speed_multiplier: float) -> int:
    """Frames between spawn ticks; shrinks with difficulty, never below MIN_CADENCE."""
    return max(config.MIN_CADENCE, math.floor(base_cadence - speed_multiplier * config.CADENCE_SLOPE))


class SpawnPolicy(Protocol):
    def maybe_spawn_obstacle(self, frame: int, cadence: int, speed_multiplier: float) -> Optional[Obstacle]:
        ...

    def maybe_spawn_pickup(self, probability: float, speed_multiplier: float) -> Optional[Pickup]:
        ...


class Spawner:
    def __init__(self, field: PlayingField, rng: Optional[np.random.Generator] = None) -> None:
        self.field = field
        self.rng = rng if rng is not None else np.random.default_rng()

    def reseed(self, seed=None) -> None:
        # default_rng hands an existing Generator back unchanged, so the env can share its np_random.
        self.rng = np.random.default_rng(seed)

    def maybe_spawn_obstacle(self, frame: int, cadence: int, speed_multiplier: float) -> Optional[Obstacle]:
        if frame % cadence != 0:
            return None

        lane = int(self.rng.integers(self.field.lane_count))
        w, h = config.OBSTACLE_WIDTH, config.OBSTACLE_HEIGHT
        speed = (
            config.OBSTACLE_BASE_SPEED
            + self.rng.uniform(0, config.OBSTACLE_SPEED_JITTER)
            + speed_multiplier * config.SPEED_DIFFICULTY_FACTOR
        )
        color = config.OBSTACLE_PALETTE[int(self.rng.integers(len(config.OBSTACLE_PALETTE)))]
        return Obstacle(
            x=self.field.lane_x(lane, w),
            y=-h - int(self.rng.integers(config.OBSTACLE_SPAWN_JITTER)),
            w=w,
            h=h,
            speed=float(speed),
            color=color,
        )

    def maybe_spawn_pickup(self, probability: float, speed_multiplier: float) -> Optional[Pickup]:
        if self.rng.random() >= probability:
            return None

        lane = int(self.rng.integers(self.field.lane_count))
        size = config.PICKUP_SIZE
        return Pickup(
            x=self.field.lane_x(lane, size),
            y=-size - int(self.rng.integers(config.PICKUP_SPAWN_JITTER)),
            size=size,
            speed=config.PICKUP_BASE_SPEED + speed_multiplier * config.SPEED_DIFFICULTY_FACTOR,
        )


class NullSpawner:
    """Never spawns anything; lets a session run on a hand-built entity set."""

    def maybe_spawn_obstacle(self, frame, cadence, speed_multiplier):
        return None

    def maybe_spawn_pickup(self, probability, speed_multiplier):
        return None
