#!/usr/bin/env python3

"""
Keypad Latch

Holds the up/down state of the 16 hexadecimal keys.  Input plugins write to
this, possibly from their own thread, while the CPU polls it between
instructions.

Each key occupies its own list slot, and a single slot assignment or lookup is
atomic, so no locking is needed.  Nothing reads a consistent snapshot across
several keys at once.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import KEY_COUNT


class Keypad:
    def __init__(self):
        self.key_down = [False] * KEY_COUNT

    def set_key(self, key, down):
        self.key_down[key & 0xF] = bool(down)

    def is_key_down(self, key):
        return self.key_down[key & 0xF]

    def get_first_key_down(self):
        # Lowest numbered key currently held, or None
        for key, down in enumerate(self.key_down):
            if down:
                return key

        return None

    def release_all(self):
        for key in range(KEY_COUNT):
            self.key_down[key] = False
