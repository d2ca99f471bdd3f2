#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the emulated buzzer within PyGame / SDL.

The buzzer simply has an 'on' or 'off' status.  While it is on, a single
period of a square wave is looped, so there is no need to keep feeding the
mixer.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
TONE_FREQUENCY = 440.0
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self):
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()

        # Unsigned 8-bit square wave, high for the first half of the period and low for the second
        period = int(PLAYBACK_FREQUENCY / TONE_FREQUENCY)
        half_period = period // 2
        self.sound = pygame.mixer.Sound(buffer=b"\xFF" * half_period + b"\x00" * (period - half_period))
        self.sound.set_volume(DEFAULT_VOLUME)
        super().__init__()

    def enable_buzzer(self, enabled):
        # If the sound is already playing, it won't be restarted
        if enabled:
            if not self.buzzer_enabled:
                self.sound.play(-1)
        elif self.buzzer_enabled:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        self.sound.stop()
        pygame.mixer.quit()
        super().shutdown()
