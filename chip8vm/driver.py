#!/usr/bin/env python3

"""
CPU Driver

Runs the CPU one step at a time at a fixed clock speed, and connects the
status it reports to the host plugins:
    * The renderer is given the framebuffer when the screen has changed, no
      more often than the 60Hz display refresh.
    * The buzzer is switched on and off as the sound timer starts and stops.
    * Host inputs are processed at 60Hz too, to avoid slowdown.

While paused, the CPU (and therefore its timers) is frozen, apart from single
instructions run on request.

Alterations should be checked against the 'operations per second' count shown
in the title, to ensure any changes are an improvement.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter, sleep
from .constants import APP_NAME, CLOCK_SPEED, DISPLAY_FREQ, STATUS_REDRAW, STATUS_SOUND

DISPLAY_INTERVAL = 1.0 / DISPLAY_FREQ


class Driver:
    def __init__(self, cpu, renderer, inputs, audio, clock_speed=None):
        self.cpu = cpu
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio

        if clock_speed is None:
            clock_speed = CLOCK_SPEED

        # User can specify 0 for uncapped
        self.core_interval = None if clock_speed <= 0 else 1.0 / clock_speed
        self.redraw_pending = True  # Show the blank screen straight away
        self.buzzer_enabled = False

        # Performance-related vars
        self.next_display_update_time = 0
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0
        self.report_perf()

    def run(self):
        while True:
            this_time = perf_counter()  # Do this first for maximum precision

            # Performance counters
            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                # Reporting the performance should be done before a refresh, as refreshing will likely show the report
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            # Prevent unnecessary display rendering in excess of host frame rate
            if this_time >= self.next_display_update_time:
                if self.inputs.process_messages():
                    return

                self.next_display_update_time = this_time + DISPLAY_INTERVAL
                self.refresh_display()
                self.perf_counter_fps += 1

            if self.inputs.is_paused() and not self.inputs.take_step_request():
                self.set_buzzer(False)
                # Nothing to run, so don't hog the host CPU until the next input check
                sleep(max(0.0, self.next_display_update_time - perf_counter()))
                continue

            self.cycle()

            if self.core_interval is not None:
                # Wait for next CPU instruction.  Do this last for maximum precision (takes into account time spent on
                # this instruction)
                next_time = this_time + self.core_interval

                while perf_counter() < next_time:  # Unfortunately we have to do this to get the timing right
                    pass

            self.perf_counter_ops += 1

    def cycle(self):
        status = self.cpu.step()

        if status & STATUS_REDRAW:
            self.redraw_pending = True

        self.set_buzzer(bool(status & STATUS_SOUND))
        return status

    def set_buzzer(self, enabled):
        # Only tell the audio plugin when the state actually changes
        if enabled != self.buzzer_enabled:
            self.audio.enable_buzzer(enabled)
            self.buzzer_enabled = enabled

    def refresh_display(self):
        # Render pending screen updates.  Should be called whenever the display refresh interval expires.
        if self.redraw_pending:
            vid_width, vid_height = self.cpu.framebuffer.get_vid_size()
            self.renderer.render(self.cpu.get_display(), vid_width, vid_height)
            self.redraw_pending = False

        self.renderer.refresh_display()

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)

        if self.inputs.is_paused():
            title += " [PAUSED] PC: 0x{:03x}".format(self.cpu.get_pc())

        self.renderer.set_title(title)
