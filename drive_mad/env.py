import logging
import os

import gymnasium as gym
import numpy as np
import pygame
from gymnasium.spaces import MultiDiscrete

from drive_mad.controller import GameController, GamePhase
from drive_mad.entities import PlayingField
from drive_mad.frames import ManualFrameSource
from drive_mad.persistence import MemoryHighScoreStore
from drive_mad.render import HudOverlay, RoadRenderer
from drive_mad.spawner import Spawner

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

logger = logging.getLogger(__name__)


class GameEnv(gym.Env):
    """
    Headless Drive Mad: steer a car across three lanes, dodge oncoming
    traffic and grab fuel while the road keeps getting faster.
    """
    metadata = {"render_modes": ["rgb_array"]}

    user_guide = (
        "Controls: action[0] holds steer-left, action[1] holds steer-right. Holding both cancels out."
    )

    game_description = (
        "Arcade lane racer. Dodge oncoming cars, collect fuel to slow the traffic, survive as long as you can."
    )

    auto_advance = True

    MAX_EPISODE_STEPS = 10000

    def __init__(self, render_mode="rgb_array", store=None, max_steps=MAX_EPISODE_STEPS):
        super().__init__()

        self.field = PlayingField.default()
        self.WIDTH, self.HEIGHT = int(self.field.width), int(self.field.height)
        self.max_steps = max_steps

        self.observation_space = gym.spaces.Box(
            low=0, high=255, shape=(self.HEIGHT, self.WIDTH, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([2, 2])

        pygame.init()
        pygame.font.init()
        self.screen = pygame.Surface((self.WIDTH, self.HEIGHT))

        self.render_mode = render_mode
        self.frames = ManualFrameSource()
        self.spawner = Spawner(self.field)
        self.hud = HudOverlay(self.screen, self.field)
        self.road = RoadRenderer(self.screen, self.field)
        self.controller = GameController(
            self.field,
            spawner=self.spawner,
            store=store if store is not None else MemoryHighScoreStore(),
            frames=self.frames,
            listeners=[self.hud],
        )
        self.steps = 0

        self.reset()

        self.validate_implementation()

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)

        self.spawner.reseed(self.np_random)
        self.controller.steering.release_all()
        self.controller.restart()
        self.steps = 0

        return self._get_observation(), self._get_info()

    def step(self, action):
        if self.controller.phase is GamePhase.GAME_OVER:
            return self._get_observation(), 0.0, True, False, self._get_info()

        steer_left, steer_right = (int(a) for a in action)
        self.controller.steering.set(steer_left=steer_left == 1, steer_right=steer_right == 1)

        before = self.controller.state.score
        self.frames.advance()
        self.steps += 1
        reward = float(self.controller.state.score - before)

        terminated = self.controller.phase is GamePhase.GAME_OVER
        truncated = not terminated and self.steps >= self.max_steps

        return self._get_observation(), reward, terminated, truncated, self._get_info()

    def render(self):
        return self._get_observation()

    def _get_observation(self):
        self.road.render(self.controller.state)
        self.hud.on_readout(self.controller.readout())

        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _get_info(self):
        state = self.controller.state
        return {
            "score": state.score,
            "steps": self.steps,
            "frame": state.frame,
            "speed_multiplier": state.speed_multiplier,
            "obstacles": len(state.obstacles),
            "pickups": len(state.pickups),
            "high_score": self.controller.high_score,
            "phase": self.controller.phase.value,
        }

    def close(self):
        pygame.font.quit()
        pygame.quit()

    def validate_implementation(self):
        assert self.action_space.shape == (2,)
        assert self.action_space.nvec.tolist() == [2, 2]

        test_obs = self._get_observation()
        assert test_obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert test_obs.dtype == np.uint8

        obs, info = self.reset()
        assert obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert isinstance(info, dict)

        obs, reward, term, trunc, info = self.step(self.action_space.sample())
        assert obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert isinstance(reward, float)
        assert isinstance(term, bool)
        assert isinstance(trunc, bool)

        self.reset()
        logger.debug("GameEnv implementation validated")
