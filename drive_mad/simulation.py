from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from drive_mad import config
from drive_mad.entities import Obstacle, Pickup, Player, PlayingField
from drive_mad.input_state import InputState
from drive_mad.spawner import SpawnPolicy, spawn_cadence


@dataclass
class SimulationState:
    player: Player
    frame: int = 0
    running: bool = False
    paused: bool = False
    score: float = 0.0
    speed_multiplier: float = 1.0
    obstacles: list[Obstacle] = field(default_factory=list)
    pickups: list[Pickup] = field(default_factory=list)
    base_cadence: int = config.BASE_CADENCE

    @classmethod
    def fresh(cls, playing_field: PlayingField) -> SimulationState:
        return cls(player=Player.centred(playing_field))

    @property
    def active(self) -> bool:
        return self.running and not self.paused

    @property
    def display_score(self) -> int:
        return math.floor(self.score)


@dataclass(frozen=True)
class StepResult:
    advanced: bool = False
    collision: Optional[Obstacle] = None
    collected: int = 0
    passed: int = 0


def rects_overlap(a, b) -> bool:
    """Axis-aligned box overlap with inclusive edges (touching counts)."""
    return not (
        a.x + a.w < b.x
        or b.x + b.w < a.x
        or a.y + a.h < b.y
        or b.y + b.h < a.y
    )


def player_bounds(playing_field: PlayingField, player: Player) -> tuple[float, float]:
    lo = playing_field.left_edge + config.PLAYER_MARGIN
    hi = playing_field.right_edge - player.w - config.PLAYER_MARGIN
    return lo, hi


def step(
    state: SimulationState,
    playing_field: PlayingField,
    inp: InputState,
    spawner: SpawnPolicy,
) -> StepResult:
    """Advance the session by one frame.

    Does nothing unless the session is running and not paused. On the first
    obstacle hit the step stops right there and reports the obstacle; the
    caller is responsible for ending the session.
    """
    if not state.active:
        return StepResult()

    # --- 1. Frame counter ---
    state.frame += 1

    # --- 2. Spawning ---
    cadence = spawn_cadence(state.base_cadence, state.speed_multiplier)
    obstacle = spawner.maybe_spawn_obstacle(state.frame, cadence, state.speed_multiplier)
    if obstacle is not None:
        state.obstacles.append(obstacle)
        pickup = spawner.maybe_spawn_pickup(config.PICKUP_PROBABILITY, state.speed_multiplier)
        if pickup is not None:
            state.pickups.append(pickup)

    # --- 3. Difficulty ---
    if state.frame % config.DIFFICULTY_PERIOD == 0:
        state.speed_multiplier += config.DIFFICULTY_STEP

    # --- 4. Move traffic and fuel ---
    scroll = 1 + state.speed_multiplier * config.SCROLL_DIFFICULTY_FACTOR
    for o in state.obstacles:
        o.y += o.speed * scroll
    for p in state.pickups:
        p.y += p.speed * scroll

    # --- 5. Garbage collection well below the field ---
    despawn_y = playing_field.height + config.DESPAWN_LINE
    state.obstacles = [o for o in state.obstacles if o.y < despawn_y]
    state.pickups = [p for p in state.pickups if p.y < despawn_y]

    # --- 6. Steering (both held cancels out) ---
    player = state.player
    if inp.steer_left:
        player.x -= player.vx
    if inp.steer_right:
        player.x += player.vx

    # --- 7. Keep the car on the road ---
    lo, hi = player_bounds(playing_field, player)
    player.x = max(lo, min(hi, player.x))

    # --- 8. Crash ---
    for o in state.obstacles:
        if rects_overlap(player, o):
            return StepResult(advanced=True, collision=o)

    # --- 9. Fuel ---
    collected = 0
    for i in range(len(state.pickups) - 1, -1, -1):
        if rects_overlap(player, state.pickups[i]):
            del state.pickups[i]
            collected += 1
            state.score += config.PICKUP_BONUS
            state.speed_multiplier = max(
                config.MIN_SPEED_MULTIPLIER, state.speed_multiplier - config.PICKUP_RELIEF
            )

    # --- 10. Time-based score ---
    state.score += config.SCORE_PER_TICK + state.speed_multiplier * config.SCORE_DIFFICULTY_FACTOR

    # --- 11. Reward cars that made it past ---
    pass_y = playing_field.height + config.PASS_LINE
    remaining = []
    passed = 0
    for o in state.obstacles:
        if o.y > pass_y:
            passed += 1
            state.score += config.PASS_BONUS
        else:
            remaining.append(o)
    state.obstacles = remaining

    return StepResult(advanced=True, collected=collected, passed=passed)
