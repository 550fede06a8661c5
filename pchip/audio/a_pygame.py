#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the buzzer through PyGame / SDL.

There is simply a buzzer with an 'on' or 'off' status.  Its tone comes from a
1-bit, 16 byte square waveform, which has to be stretched lengthways and have
its offset moved to fit in a modern 8-bit PyGame / SDL buffer.  The sample
is then looped for as long as the buzzer is on.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100.0
DEFAULT_VOLUME = 0.1


class Audio(AudioBase):
    def __init__(self):
        self.orig_buffer = None
        self.sound = None
        self.frequency = None
        self.sample_multiplier = None
        self.resampled_buffer = None
        self.resampled_buffer_size = None
        pygame.mixer.pre_init(int(PLAYBACK_FREQUENCY), size=8, channels=1, buffer=1, allowedchanges=0)
        pygame.mixer.init()
        super().__init__()

    def set_frequency(self, frequency):
        # Setting PyGame's playback rate is very slow, so we must resample audio for it when building the buffer
        if frequency != self.frequency:
            self.frequency = frequency
            self.sample_multiplier = PLAYBACK_FREQUENCY / frequency

            # If there is already a sample in the buffer, resample it now
            if self.orig_buffer is not None:
                self.set_buffer()

    def enable_buzzer(self, enabled):
        # Play or stop buffer playback.  A sample which is already playing won't be restarted.
        if enabled and not self.buzzer_enabled:
            self.sound.play(-1)
        elif not enabled and self.buzzer_enabled:
            self.sound.stop()

        super().enable_buzzer(enabled)

    def set_buffer(self, buffer=None):
        # Copy the bit-level buffer into PyGame as an extended audio sample.  If None is supplied for the buffer (such
        # as when changing sample playback frequency), then the previously supplied one will be used.

        if buffer is None:
            buffer = self.orig_buffer
        else:
            self.orig_buffer = buffer

        sample_multiplier = self.sample_multiplier
        resampled_buffer_size = int(128 * sample_multiplier)  # 16 byte input buffer * 8 bits per byte

        # Resize host audio buffer if necessary
        if resampled_buffer_size != self.resampled_buffer_size:
            self.resampled_buffer = memoryview(bytearray(resampled_buffer_size))
            self.resampled_buffer_size = resampled_buffer_size

        # Resample (stretch the width and height of) the square waveform to fit the host buffer
        for resampled_buffer_pos in range(resampled_buffer_size):
            buffer_byte_pos = resampled_buffer_pos / sample_multiplier
            byte = int(buffer_byte_pos / 8.0)
            bit = 7 - int(buffer_byte_pos % 8.0)
            self.resampled_buffer[resampled_buffer_pos] = ((buffer[byte] >> bit) & 1) * 0xFF

        if self.buzzer_enabled:
            self.sound.stop()

        self.sound = pygame.mixer.Sound(self.resampled_buffer)
        self.sound.set_volume(DEFAULT_VOLUME)

        if self.buzzer_enabled:
            # If the buffer has been replaced while the buzzer is on, play the new sample now
            self.sound.play(-1)

    def shutdown(self):
        if self.sound:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()
