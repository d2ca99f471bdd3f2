#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from chip8vm.timers import Timers

# A little longer than one 60Hz period, so float rounding never lands just short of it
TICK = 0.017


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def advance(self, seconds=TICK):
        self.now += seconds


class TestTimers(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.timers = Timers(self.clock)

    def test_timers_init(self):
        self.assertEqual(0, self.timers.dt)
        self.assertEqual(0, self.timers.st)

    def test_timers_no_tick_before_interval(self):
        self.timers.set_delay(5)
        self.clock.advance(0.01)
        self.assertFalse(self.timers.tick())
        self.assertEqual(5, self.timers.dt)

    def test_timers_count_down_to_zero(self):
        self.timers.set_delay(3)
        self.timers.set_sound(2)

        for expected_dt, expected_st in (2, 1), (1, 0), (0, 0), (0, 0):
            self.clock.advance()
            self.assertTrue(self.timers.tick())
            self.assertEqual(expected_dt, self.timers.dt)
            self.assertEqual(expected_st, self.timers.st)

    def test_timers_one_decrement_per_tick(self):
        # A long stall only costs one decrement, as the timers are tied to CPU steps
        self.timers.set_delay(10)
        self.clock.advance(1.0)
        self.timers.tick()
        self.assertEqual(9, self.timers.dt)

    def test_timers_interval_restarts_after_tick(self):
        self.timers.set_delay(10)
        self.clock.advance()
        self.timers.tick()
        self.clock.advance(0.01)
        self.assertFalse(self.timers.tick())
        self.assertEqual(9, self.timers.dt)

    def test_timers_byte_values(self):
        self.timers.set_delay(0x1FF)
        self.assertEqual(0xFF, self.timers.dt)

    def test_timers_reset(self):
        self.timers.set_delay(4)
        self.timers.set_sound(4)
        self.timers.reset()
        self.assertEqual((0, 0), (self.timers.dt, self.timers.st))
        self.assertEqual(self.clock.now, self.timers.last_update)
