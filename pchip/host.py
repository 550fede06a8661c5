#!/usr/bin/env python3

"""
Host Frame Loop

Drives a Machine from the host devices.  Once per frame this:
    * Processes input messages, and copies the 16 key states into the machine
    * Runs a fixed number of machine instructions
    * Ticks the machine timers once
    * Switches the buzzer on while the sound timer is running
    * Hands the framebuffer to the renderer

Frames are paced at 60Hz using the real-time clock, and the number of frames
and operations completed every second is reported in the window title.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .constants import APP_NAME, DEFAULT_TICKS_PER_FRAME, FRAME_FREQ, NUM_KEYS

FRAME_INTERVAL = 1.0 / FRAME_FREQ


class Host:
    def __init__(self, machine, renderer, inputs, audio, ticks_per_frame=None):
        self.machine = machine
        self.renderer = renderer
        self.inputs = inputs
        self.audio = audio
        self.ticks_per_frame = DEFAULT_TICKS_PER_FRAME if ticks_per_frame is None else ticks_per_frame

        # Performance-related vars
        self.perf_counter_fps = 0
        self.perf_counter_ops = 0
        self.next_perf_report_time = 0
        self.report_perf()

    def run(self):
        next_frame_time = perf_counter()

        while True:
            this_time = perf_counter()

            if this_time >= self.next_perf_report_time:
                self.next_perf_report_time = int(this_time) + 1.0
                self.report_perf(self.perf_counter_fps, self.perf_counter_ops)
                self.perf_counter_ops = 0
                self.perf_counter_fps = 0

            if self.run_frame():
                return

            # Wait for the next frame.  If we've fallen behind, don't try to catch up.
            next_frame_time = max(next_frame_time + FRAME_INTERVAL, this_time)

            while perf_counter() < next_frame_time:  # Unfortunately we have to do this to get the timing right
                pass

    def run_frame(self):
        # Returns True if the host asked to quit
        machine = self.machine
        inputs = self.inputs

        if inputs.process_messages():
            return True

        for key in range(NUM_KEYS):
            machine.keypress(key, inputs.is_key_down(key))

        for _ in range(self.ticks_per_frame):
            machine.tick()

        machine.tick_timers()
        self.audio.enable_buzzer(machine.is_sound_active())
        self.renderer.draw_display(machine.get_display())
        self.perf_counter_ops += self.ticks_per_frame
        self.perf_counter_fps += 1

        return False

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)
        self.renderer.set_title(title)
