from __future__ import annotations

from dataclasses import dataclass

from drive_mad import config


@dataclass(frozen=True)
class PlayingField:
    width: float
    height: float
    left_edge: float
    right_edge: float
    lane_count: int = 3

    def __post_init__(self) -> None:
        if self.left_edge >= self.right_edge:
            raise ValueError("left_edge must be < right_edge")
        if self.lane_count < 1:
            raise ValueError("lane_count must be >= 1")

    @classmethod
    def default(cls) -> PlayingField:
        return cls(
            width=config.WIDTH,
            height=config.HEIGHT,
            left_edge=config.ROAD_LEFT,
            right_edge=config.ROAD_RIGHT,
            lane_count=config.LANE_COUNT,
        )

    @property
    def lane_width(self) -> float:
        return (self.right_edge - self.left_edge) / self.lane_count

    def lane_x(self, lane_index: int, entity_width: float) -> float:
        """Left x that centres an entity of `entity_width` in the given lane."""
        if not 0 <= lane_index < self.lane_count:
            raise ValueError(f"lane index {lane_index} outside 0..{self.lane_count - 1}")
        lane_w = self.lane_width
        return self.left_edge + lane_index * lane_w + (lane_w - entity_width) / 2

    def lane_of(self, x: float, entity_width: float) -> int:
        centre = x + entity_width / 2
        lane = int((centre - self.left_edge) // self.lane_width)
        return max(0, min(self.lane_count - 1, lane))


@dataclass
class Player:
    x: float
    y: float
    w: float = config.PLAYER_WIDTH
    h: float = config.PLAYER_HEIGHT
    vx: float = config.PLAYER_VX

    @classmethod
    def centred(cls, field: PlayingField) -> Player:
        return cls(x=field.width / 2 - config.PLAYER_WIDTH / 2, y=config.PLAYER_Y)


@dataclass
class Obstacle:
    x: float
    y: float
    w: float
    h: float
    speed: float
    color: tuple[int, int, int]


@dataclass
class Pickup:
    x: float
    y: float
    size: float
    speed: float

    # Pickups are squares; expose the same box shape as the cars.
    @property
    def w(self) -> float:
        return self.size

    @property
    def h(self) -> float:
        return self.size
