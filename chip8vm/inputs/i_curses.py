#!/usr/bin/env python3

"""
Curses TTY Terminal Input Plugin

Uses a thread to trap Terminal inputs and redirects them to the emulator.  Note
that standard TTY Terminals only understand characters, they do not know when
an actual key is 'pressed' or 'released'.

What we can do (for this plugin) is assume a key is held for a very short time,
and then take advantage of keyboard repeats to fake a 'press' and 'release'.

To do this, the last time a character corresponding to a key has been 'seen'
is stored.  If it was last seen a long time ago (when checked), then it has
almost certainly been released, and the release is passed to the CPU.

We will also quit if ESC (char 27) or CTRL+C (char 3) is detected.

Note that using the 'nodelay(True)' setting instead of blocking inside a thread
is slightly slower, and can lag, due to constant external calls.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import queue
from threading import Thread
from time import time
from .i_null import Inputs as InputsBase

# Terminals don't have separate key press/release, so we have to pause after a character is seen.
KEYBOARD_FAKE_KEYDOWN_TIME = 0.2


# For thread safety, use proper queues to exchange information, avoiding shared variables.
def input_thread(thread_quitter_queue, input_queue, curses_screen):
    while thread_quitter_queue.empty():
        # This blocks the thread from proceeding, so it won't get the quit message until at least one key is pressed.
        # However, as a daemon thread, it will be terminated when the main thread shuts down.
        char = curses_screen.getch()

        if char < 0:
            continue

        char = ord(chr(char).lower())

        if char == 27 or char == 3:  # Detect ESC or CTRL+C
            input_queue.put(None, block=True)
            break

        try:
            input_queue.put(char, block=False)
        except queue.Full:
            pass


class Inputs(InputsBase):
    def __init__(self, keymap, renderer, cpu, start_paused=False):
        self.key_timers = [0.0] * 0x10
        super().__init__(keymap, renderer, cpu, force_lowercase=True, start_paused=start_paused)

        self.thread_quitter_queue = queue.Queue(1)  # Used to inform the thread it should quit
        self.input_queue = queue.Queue(16)
        self.thread = Thread(
            target=input_thread,
            args=(
                self.thread_quitter_queue,
                self.input_queue,
                renderer.get_curses_screen()
            )
        )
        # Terminate the thread when the main program quits (even if currently waiting for a keypress)
        self.thread.daemon = True
        self.thread.start()

    def process_messages(self):
        # Deal with any keys pressed
        this_time = time()
        target_time = this_time + KEYBOARD_FAKE_KEYDOWN_TIME

        while True:
            try:
                # Blocking here would lock up the main thread if nothing was pressed
                char = self.input_queue.get(block=False)
            except queue.Empty:
                break

            if char is None:
                return True

            if self._handle_control(char):
                continue

            hex_key = self.keymap_dict.get(char)

            if hex_key is not None:
                if not self.key_timers[hex_key]:
                    self.cpu.set_key(hex_key, True)

                self.key_timers[hex_key] = target_time

        # Release any keys which haven't been repeated recently
        for hex_key, key_time in enumerate(self.key_timers):
            if key_time and key_time <= this_time:
                self.key_timers[hex_key] = 0.0
                self.cpu.set_key(hex_key, False)

        return False

    def shutdown(self):
        try:
            self.thread_quitter_queue.put(None, block=False)
        except queue.Full:
            # Something else has already requested the thread quits
            pass

        # Don't wait for the thread to quit (because this is likely to happen after a keypress)
        super().shutdown()
