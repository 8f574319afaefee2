import os
import unittest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame

from drive_mad.frames import ManualFrameSource, PygameFrameSource
from drive_mad.input_state import InputState, SteeringInput


class TestManualFrameSource(unittest.TestCase):

    def test_handler_runs_each_frame_until_cancelled(self):
        frames = ManualFrameSource()
        calls = []
        handle = frames.request(lambda: calls.append(1))
        frames.advance(3)
        frames.cancel(handle)
        frames.advance(3)
        self.assertEqual(len(calls), 3)
        self.assertEqual(frames.frames_fed, 6)

    def test_cancel_unknown_handle(self):
        frames = ManualFrameSource()
        frames.cancel(99)
        self.assertEqual(frames.active_handles, 0)

    def test_handler_cancelling_itself(self):
        frames = ManualFrameSource()
        calls = []
        handles = {}

        def once():
            calls.append(1)
            frames.cancel(handles["h"])

        handles["h"] = frames.request(once)
        frames.advance(5)
        self.assertEqual(calls, [1])

    def test_handles_are_unique(self):
        frames = ManualFrameSource()
        a = frames.request(lambda: None)
        b = frames.request(lambda: None)
        self.assertNotEqual(a, b)
        self.assertEqual(frames.active_handles, 2)


class TestPygameFrameSource(unittest.TestCase):

    def setUp(self):
        pygame.init()

    def tearDown(self):
        pygame.quit()

    def test_runs_handler_and_stops(self):
        frames = PygameFrameSource(fps=1000)
        ticks = []

        def handler():
            ticks.append(1)
            if len(ticks) == 3:
                frames.stop()

        frames.request(handler)
        frames.run(lambda event: None)
        self.assertEqual(len(ticks), 3)

    def test_idle_callback_without_handler(self):
        frames = PygameFrameSource(fps=1000)
        idles = []

        def on_idle():
            idles.append(1)
            frames.stop()

        frames.run(lambda event: None, on_idle=on_idle)
        self.assertEqual(idles, [1])

    def test_quit_event_stops_loop(self):
        frames = PygameFrameSource(fps=1000)
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        frames.request(lambda: self.fail("ticked after quit"))
        frames.run(lambda event: None)


class TestSteeringInput(unittest.TestCase):

    def test_press_and_release(self):
        s = SteeringInput()
        self.assertEqual(s.sample(), InputState(False, False))
        s.press("left")
        s.press("right")
        self.assertEqual(s.sample(), InputState(True, True))
        s.release("left")
        self.assertEqual(s.sample(), InputState(False, True))
        s.release_all()
        self.assertEqual(s.sample(), InputState())

    def test_unknown_direction_ignored(self):
        s = SteeringInput()
        s.press("up")
        self.assertEqual(s.sample(), InputState())

    def test_set(self):
        s = SteeringInput()
        s.set(steer_left=1, steer_right=0)
        self.assertEqual(s.sample(), InputState(True, False))


if __name__ == "__main__":
    unittest.main()
