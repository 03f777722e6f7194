"""Tests for the debounced reflow pass."""

import unittest
from unittest.mock import Mock

from blankcanvas.reflow import ReflowController


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class TestReflowController(unittest.TestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.callback = Mock()
        self.reflow = ReflowController(self.callback, delay=1.0, clock=self.clock)

    def test_idle(self):
        self.assertFalse(self.reflow.pending)
        self.assertIsNone(self.reflow.remaining())
        self.assertFalse(self.reflow.poll())
        self.callback.assert_not_called()

    def test_fires_once_after_delay(self):
        self.reflow.schedule()
        self.clock.advance(0.5)
        self.assertFalse(self.reflow.poll())
        self.clock.advance(0.5)
        self.assertTrue(self.reflow.poll())
        self.assertFalse(self.reflow.poll())
        self.callback.assert_called_once_with()

    def test_burst_is_coalesced(self):
        for _ in range(5):
            self.reflow.schedule()
            self.clock.advance(0.9)
            self.reflow.poll()
        self.callback.assert_not_called()
        self.clock.advance(0.2)
        self.assertTrue(self.reflow.poll())
        self.callback.assert_called_once_with()

    def test_remaining_counts_down(self):
        self.reflow.schedule()
        self.clock.advance(0.25)
        self.assertAlmostEqual(self.reflow.remaining(), 0.75)
        self.clock.advance(5)
        self.assertEqual(self.reflow.remaining(), 0.0)

    def test_cancel(self):
        self.reflow.schedule()
        self.reflow.cancel()
        self.clock.advance(2)
        self.assertFalse(self.reflow.poll())
        self.callback.assert_not_called()

    def test_flush_runs_now_and_drops_pending(self):
        self.reflow.schedule()
        self.assertTrue(self.reflow.flush())
        self.callback.assert_called_once_with()
        self.clock.advance(2)
        self.assertFalse(self.reflow.poll())
        self.assertEqual(self.callback.call_count, 1)

    def test_schedule_from_callback_rearms(self):
        self.callback.side_effect = self.reflow.schedule
        self.reflow.flush()
        self.assertTrue(self.reflow.pending)
        self.assertAlmostEqual(self.reflow.remaining(), 1.0)
