#!/usr/bin/env python3

"""
Delay and Sound Timers

Both timers count down towards zero at 60Hz of real time, regardless of how
fast the CPU runs.  Rather than needing a second scheduled task, the CPU calls
'tick' after every instruction, and both timers are decremented once if at
least one timer period has passed since the last decrement.

The clock is injectable so tests can step time by hand.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .constants import TIMER_FREQ

TIMER_INTERVAL = 1.0 / TIMER_FREQ


class Timers:
    def __init__(self, clock=perf_counter):
        self.clock = clock
        self.reset()

    def reset(self):
        self.dt = 0  # Delay timer (byte)
        self.st = 0  # Sound timer (byte)
        self.last_update = self.clock()

    def set_delay(self, value):
        self.dt = value & 0xFF

    def set_sound(self, value):
        self.st = value & 0xFF

    def tick(self):
        # Returns True if the timers were decremented
        now = self.clock()

        if now - self.last_update < TIMER_INTERVAL:
            return False

        if self.dt > 0:
            self.dt -= 1

        if self.st > 0:
            self.st -= 1

        self.last_update = now
        return True
