#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

Input plugins translate host keys into the 16 emulated keys, and pass every
press and release straight to the CPU's key latch.  They also handle the host
controls: pausing, single-stepping while paused, and quitting.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from ..constants import CONTROL_PAUSE, CONTROL_STEP


class InputsError(Exception):
    pass


class Inputs:
    def __init__(self, keymap, renderer, cpu, force_lowercase=False, start_paused=False):
        self.keymap_dict = {}
        self.renderer = renderer
        self.cpu = cpu
        keymap_split = keymap.split(",")

        if len(keymap_split) != 0x10:
            raise InputsError("Incorrect number of keys defined -- 16 required.  Use commas to split numbers")

        for key_num, key_defined in enumerate(keymap_split):
            try:
                key_defined_ord = int(key_defined)
            except ValueError:
                raise InputsError("Defined keys are not all integer values") from None

            if force_lowercase:
                # If we are working with characters rather than keyscan codes, we should convert to lowercase
                key_defined_ord = ord(chr(key_defined_ord).lower())

            if key_defined_ord in self.keymap_dict:
                raise InputsError("Duplicate keys defined")

            if key_defined_ord in (CONTROL_PAUSE, CONTROL_STEP):
                raise InputsError("Defined keys clash with the pause or step controls")

            self.keymap_dict[key_defined_ord] = key_num

        self.paused = start_paused
        self.step_requested = False

    def _handle_control(self, key):
        # Returns True if the key was a host control
        if key == CONTROL_PAUSE:
            self.paused = not self.paused
            self.step_requested = False
            return True

        if key == CONTROL_STEP:
            self.step_requested = self.paused
            return True

        return False

    def is_paused(self):
        return self.paused

    def take_step_request(self):
        # Clears the request, so each press of the step key runs exactly one instruction
        requested = self.step_requested
        self.step_requested = False
        return requested

    def process_messages(self):
        return False  # Don't exit the program

    def shutdown(self):
        pass
