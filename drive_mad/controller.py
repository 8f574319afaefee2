from __future__ import annotations

import enum
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, Protocol

from drive_mad.entities import PlayingField
from drive_mad.frames import FrameSource
from drive_mad.input_state import InputState, SteeringInput
from drive_mad.persistence import HighScoreStore
from drive_mad.simulation import SimulationState, StepResult, step
from drive_mad.spawner import SpawnPolicy

logger = logging.getLogger(__name__)


class GamePhase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Readout:
    score: int
    high_score: int
    speed: str
    phase: GamePhase


class Renderer(Protocol):
    def render(self, state: SimulationState) -> None:
        ...


class GameListener(Protocol):
    def on_readout(self, readout: Readout) -> None:
        ...

    def on_phase_changed(self, old: GamePhase, new: GamePhase, final_score: Optional[int]) -> None:
        ...


class GameController:
    """
    Owns the session state and the run/pause/game-over state machine.

    At most one frame handle is held at any time: it is acquired on start and
    resume and released on pause, game over and reset.
    """

    def __init__(
        self,
        playing_field: PlayingField,
        *,
        spawner: SpawnPolicy,
        store: HighScoreStore,
        frames: FrameSource,
        steering: Optional[SteeringInput] = None,
        renderer: Optional[Renderer] = None,
        listeners: Iterable[GameListener] = (),
    ) -> None:
        self.field = playing_field
        self.spawner = spawner
        self.store = store
        self.frames = frames
        self.steering = steering if steering is not None else SteeringInput()
        self.renderer = renderer
        self.listeners = list(listeners)

        self.state = SimulationState.fresh(playing_field)
        self.phase = GamePhase.IDLE
        self.last_step = StepResult()
        self._handle: Optional[int] = None
        self._high_score = self.store.read_high_score()

    @property
    def high_score(self) -> int:
        return self._high_score

    @property
    def has_frame_handle(self) -> bool:
        return self._handle is not None

    # ---------- Transitions ----------

    def start(self) -> None:
        if self.phase not in (GamePhase.IDLE, GamePhase.GAME_OVER):
            return
        self.state = SimulationState.fresh(self.field)
        self.state.running = True
        self.last_step = StepResult()
        self._set_phase(GamePhase.RUNNING)
        self._acquire_frames()

    def pause(self) -> None:
        if self.phase is not GamePhase.RUNNING:
            return
        self.state.paused = True
        self._release_frames()
        self._set_phase(GamePhase.PAUSED)

    def resume(self) -> None:
        if self.phase is not GamePhase.PAUSED:
            return
        self.state.paused = False
        self._set_phase(GamePhase.RUNNING)
        self._acquire_frames()

    def toggle_pause(self) -> None:
        if self.phase is GamePhase.RUNNING:
            self.pause()
        elif self.phase is GamePhase.PAUSED:
            self.resume()

    def focus_lost(self) -> None:
        # Never auto-resumes; the player has to toggle back.
        if self.phase is GamePhase.RUNNING:
            logger.info("Focus lost, pausing at frame %d", self.state.frame)
            self.pause()

    def end_game(self) -> None:
        if self.phase is not GamePhase.RUNNING:
            return
        self.state.running = False
        self.state.paused = False
        self._release_frames()

        final = self.state.display_score
        if final > self._high_score:
            logger.info("New high score %d (was %d)", final, self._high_score)
            self._high_score = final
            self.store.write_high_score(final)
        self._set_phase(GamePhase.GAME_OVER, final_score=final)

    def reset(self) -> None:
        self._release_frames()
        self.state = SimulationState.fresh(self.field)
        self.last_step = StepResult()
        self._set_phase(GamePhase.IDLE)

    def restart(self) -> None:
        self.reset()
        self.start()

    # ---------- Per-frame ----------

    def tick(self) -> None:
        self.last_step = step(self.state, self.field, self.sample_input(), self.spawner)
        if self.last_step.collision is not None:
            self.end_game()
        self.present()

    def sample_input(self) -> InputState:
        return self.steering.sample()

    def readout(self) -> Readout:
        return Readout(
            score=self.state.display_score,
            high_score=self._high_score,
            speed=f"{self.state.speed_multiplier:.2f}",
            phase=self.phase,
        )

    def present(self) -> None:
        if self.renderer is not None:
            self.renderer.render(self.state)
        readout = self.readout()
        for listener in self.listeners:
            listener.on_readout(readout)

    # ---------- Internals ----------

    def _set_phase(self, new: GamePhase, final_score: Optional[int] = None) -> None:
        old = self.phase
        if old is new:
            return
        self.phase = new
        if final_score is not None:
            logger.info("Phase %s -> %s (final score %d)", old.value, new.value, final_score)
        else:
            logger.info("Phase %s -> %s", old.value, new.value)
        for listener in self.listeners:
            listener.on_phase_changed(old, new, final_score)

    def _acquire_frames(self) -> None:
        self._release_frames()
        self._handle = self.frames.request(self.tick)

    def _release_frames(self) -> None:
        if self._handle is not None:
            self.frames.cancel(self._handle)
            self._handle = None
