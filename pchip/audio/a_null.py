#!/usr/bin/env python3

"""
Null Audio Plugin

Serves as a base class for other Audio plugins.  Can be used on its own if no
sound is required.

The buzzer has a single pitch and is either on or off.  The host switches it
on for as long as the machine's sound timer is nonzero.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Audio:
    def __init__(self):
        # Buzzer should be disabled (not playing sounds) by default
        self.buzzer_enabled = False

    def set_frequency(self, frequency):
        # Set playback rate in Hz
        pass

    def set_buffer(self, buffer):
        # Change the 1-bit (16 byte) sound sample looped while the buzzer is on
        pass

    def enable_buzzer(self, enabled):
        self.buzzer_enabled = enabled

    def is_buzzer_enabled(self):
        return self.buzzer_enabled

    def shutdown(self):
        pass
