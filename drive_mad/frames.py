from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from typing import Protocol

import pygame

logger = logging.getLogger(__name__)

TickHandler = Callable[[], None]


class FrameSource(Protocol):
    def request(self, handler: TickHandler) -> int:
        """Invoke `handler` once per frame until the returned handle is cancelled."""
        ...

    def cancel(self, handle: int) -> None:
        ...


class _HandlerRegistry:
    def __init__(self) -> None:
        self._handlers: dict[int, TickHandler] = {}
        self._ids = itertools.count(1)

    def request(self, handler: TickHandler) -> int:
        handle = next(self._ids)
        self._handlers[handle] = handler
        return handle

    def cancel(self, handle: int) -> None:
        self._handlers.pop(handle, None)

    @property
    def active_handles(self) -> int:
        return len(self._handlers)

    def _dispatch(self) -> None:
        # A handler may cancel itself (or request a new one) mid-frame.
        for handle, handler in list(self._handlers.items()):
            if handle in self._handlers:
                handler()


class ManualFrameSource(_HandlerRegistry):
    """Synthetic frames for tests and headless agents."""

    def __init__(self) -> None:
        super().__init__()
        self.frames_fed = 0

    def advance(self, frames: int = 1) -> None:
        for _ in range(frames):
            self.frames_fed += 1
            self._dispatch()


class PygameFrameSource(_HandlerRegistry):
    """Display-rate frames from a pygame clock.

    Events are pumped every frame whether or not a handler is active, so a
    paused or finished game keeps reacting to the keyboard.
    """

    def __init__(self, fps: int = 60) -> None:
        super().__init__()
        self.fps = max(1, fps)
        self.clock = pygame.time.Clock()
        self._stopped = False

    def stop(self) -> None:
        self._stopped = True

    def run(self, on_event: Callable[[pygame.event.Event], None], on_idle: TickHandler | None = None) -> None:
        self._stopped = False
        logger.debug("Frame loop started at %d fps", self.fps)
        while not self._stopped:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._stopped = True
                    break
                on_event(event)
            if self._stopped:
                break

            if self.active_handles:
                self._dispatch()
            elif on_idle is not None:
                on_idle()

            self.clock.tick(self.fps)
        logger.debug("Frame loop stopped")
