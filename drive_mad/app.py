from __future__ import annotations

import logging

import pygame

from drive_mad import config
from drive_mad.controller import GameController, GamePhase
from drive_mad.entities import PlayingField
from drive_mad.frames import PygameFrameSource
from drive_mad.input_state import LEFT, RIGHT, SteeringInput
from drive_mad.persistence import JsonHighScoreStore
from drive_mad.policy import policy
from drive_mad.render import HudOverlay, RoadRenderer
from drive_mad.spawner import Spawner

logger = logging.getLogger(__name__)

STEER_KEYS = {
    pygame.K_LEFT: LEFT,
    pygame.K_a: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_d: RIGHT,
}

# Window events that mean the game is no longer in front of the player.
FOCUS_LOST_EVENTS = (pygame.WINDOWFOCUSLOST, pygame.WINDOWMINIMIZED, pygame.WINDOWHIDDEN)


class GameApp:
    def __init__(self, *, fps: int = config.FPS, autopilot: bool = False) -> None:
        pygame.init()
        pygame.font.init()
        self.field = PlayingField.default()
        self.screen = pygame.display.set_mode((int(self.field.width), int(self.field.height)))
        pygame.display.set_caption("Drive Mad")

        self.steering = SteeringInput()
        self.frames = PygameFrameSource(fps=fps)
        self.road = RoadRenderer(self.screen, self.field)
        self.hud = HudOverlay(self.screen, self.field)
        self.controller = GameController(
            self.field,
            spawner=Spawner(self.field),
            store=JsonHighScoreStore(),
            frames=self.frames,
            steering=self.steering,
            renderer=self.road,
            listeners=[self.hud, self],
        )
        self.autopilot = autopilot
        # pointer id ("mouse" or ("finger", finger_id)) -> button it is holding
        self._pointers: dict = {}

    def run(self) -> None:
        logger.info("Drive Mad ready (high score %d)", self.controller.high_score)
        self._redraw()
        try:
            self.frames.run(self.handle_event, on_idle=self._redraw)
        finally:
            pygame.quit()

    # GameListener: flip once the HUD has been drawn over the road.
    def on_readout(self, readout) -> None:
        if self.autopilot and readout.phase is GamePhase.RUNNING:
            left, right = policy(self)
            self.steering.set(steer_left=bool(left), steer_right=bool(right))
        pygame.display.flip()

    def on_phase_changed(self, old, new, final_score) -> None:
        if new is GamePhase.GAME_OVER:
            self._release_all()

    # ---------- Input ----------

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            self._on_key_down(event.key)
        elif event.type == pygame.KEYUP:
            if event.key in STEER_KEYS:
                self.steering.release(STEER_KEYS[event.key])
        elif event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            # SDL mirrors touches as mouse clicks; the finger events already cover those.
            if event.button != 1 or getattr(event, "touch", False):
                return
            if event.type == pygame.MOUSEBUTTONDOWN:
                self._pointer_down("mouse", event.pos)
            else:
                self._pointer_up("mouse")
        elif event.type == pygame.FINGERDOWN:
            self._pointer_down(("finger", event.finger_id), self._finger_pos(event))
        elif event.type == pygame.FINGERUP:
            self._pointer_up(("finger", event.finger_id))
        elif event.type in FOCUS_LOST_EVENTS:
            self._release_all()
            self.controller.focus_lost()

    def _on_key_down(self, key: int) -> None:
        c = self.controller
        if key in STEER_KEYS:
            self.steering.press(STEER_KEYS[key])
        elif key in (pygame.K_RETURN, pygame.K_SPACE):
            c.start()
        elif key == pygame.K_p:
            c.toggle_pause()
        elif key == pygame.K_r:
            c.reset()
        elif key == pygame.K_t and c.phase is GamePhase.GAME_OVER:
            c.restart()
        elif key == pygame.K_ESCAPE:
            self.frames.stop()

    def _finger_pos(self, event) -> tuple[int, int]:
        return int(event.x * self.field.width), int(event.y * self.field.height)

    def _pointer_down(self, pointer, pos) -> None:
        name = self.hud.button_at(pos)
        if name is None:
            return
        self._pointer_up(pointer)
        self._pointers[pointer] = name
        self.hud.held[name] = True
        self.steering.press(name)

    def _pointer_up(self, pointer) -> None:
        name = self._pointers.pop(pointer, None)
        # Another finger may still be on the same button.
        if name is None or name in self._pointers.values():
            return
        self.hud.held[name] = False
        self.steering.release(name)

    def _release_all(self) -> None:
        self._pointers.clear()
        for name in self.hud.held:
            self.hud.held[name] = False
        self.steering.release_all()

    def _redraw(self) -> None:
        # Nothing is ticking (idle, paused, game over); keep the last frame and panels up.
        self.controller.present()


def main() -> None:
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    GameApp(autopilot=config.autopilot_enabled()).run()
