#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from pchip.audio.a_null import Audio
from pchip.constants import APP_NAME, DEFAULT_KEYMAP, DISPLAY_WIDTH, DISPLAY_HEIGHT
from pchip.host import Host
from pchip.inputs.i_null import Inputs
from pchip.machine import Machine
from pchip.renderers.r_null import Renderer


class ScriptedInputs(Inputs):
    # Holds a fixed set of keys, and asks to quit after a number of frames
    def __init__(self, keymap, renderer, held_keys=(), quit_after=None):
        super().__init__(keymap, renderer)
        self.held_keys = set(held_keys)
        self.quit_after = quit_after
        self.frames = 0

    def process_messages(self):
        self.frames += 1
        return self.quit_after is not None and self.frames > self.quit_after

    def is_key_down(self, key):
        return key in self.held_keys


class RecordingRenderer(Renderer):
    def __init__(self):
        self.pixels_set = []
        self.refreshes = []
        super().__init__()

    def set_pixel(self, x, y, lit):
        self.pixels_set.append((x, y, lit))

    def refresh_display(self, content_changed=False):
        self.refreshes.append(content_changed)


class TestHost(unittest.TestCase):
    def setUp(self):
        self.machine = Machine()
        self.renderer = RecordingRenderer()
        self.renderer.set_resolution(DISPLAY_WIDTH, DISPLAY_HEIGHT)
        self.audio = Audio()

    def _make_host(self, inputs, ticks_per_frame=None):
        return Host(self.machine, self.renderer, inputs, self.audio, ticks_per_frame=ticks_per_frame)

    def _load_words(self, *words):
        self.machine.load(b"".join(word.to_bytes(2, "big") for word in words))

    def test_host_reports_title(self):
        self._make_host(Inputs(DEFAULT_KEYMAP, self.renderer))
        self.assertEqual("{} - 0 FPS, 0 OPS".format(APP_NAME), self.renderer.title)

    def test_host_frame_runs_ticks_then_timers(self):
        self._load_words(*([0x7001] * 8), 0x1210)  # ADD V0, 1 eight times, then spin
        self.machine.dt = 3
        host = self._make_host(Inputs(DEFAULT_KEYMAP, self.renderer), ticks_per_frame=5)
        self.assertFalse(host.run_frame())
        self.assertEqual(5, self.machine.v[0])
        self.assertEqual(2, self.machine.dt)
        self.assertFalse(host.run_frame())
        self.assertEqual(8, self.machine.v[0])
        self.assertEqual(1, self.machine.dt)
        self.assertEqual(10, host.perf_counter_ops)
        self.assertEqual(2, host.perf_counter_fps)

    def test_host_frame_copies_keys(self):
        self._load_words(0xF50A, 0x1202)
        inputs = ScriptedInputs(DEFAULT_KEYMAP, self.renderer, held_keys=(0x9, 0xC))
        host = self._make_host(inputs, ticks_per_frame=1)
        host.run_frame()
        self.assertEqual(0x9, self.machine.v[5])
        self.assertEqual(0x202, self.machine.pc)
        self.assertTrue(self.machine.keys[0xC])
        self.assertFalse(self.machine.keys[0x0])

        # Released keys are released in the machine too
        inputs.held_keys.clear()
        host.run_frame()
        self.assertEqual([False] * 16, self.machine.keys)

    def test_host_frame_buzzer(self):
        self._load_words(0x6002, 0xF018, 0x1204)  # LD V0, 2; LD ST, V0; spin
        host = self._make_host(Inputs(DEFAULT_KEYMAP, self.renderer), ticks_per_frame=3)
        host.run_frame()
        self.assertEqual(1, self.machine.st)
        self.assertTrue(self.audio.is_buzzer_enabled())
        host.run_frame()
        self.assertEqual(0, self.machine.st)
        self.assertFalse(self.audio.is_buzzer_enabled())

    def test_host_frame_renders_changes(self):
        self._load_words(0xA000, 0xD015, 0x1204)  # Draw the '0' glyph at the origin, then spin
        host = self._make_host(Inputs(DEFAULT_KEYMAP, self.renderer), ticks_per_frame=3)
        host.run_frame()
        self.assertIn((0, 0, True), self.renderer.pixels_set)
        self.assertIn((3, 4, True), self.renderer.pixels_set)
        self.assertEqual(14, len(self.renderer.pixels_set))
        self.assertEqual([True], self.renderer.refreshes)

        # Nothing changes on the next frame, so nothing is redrawn
        host.run_frame()
        self.assertEqual(14, len(self.renderer.pixels_set))
        self.assertEqual([True, False], self.renderer.refreshes)

    def test_host_run_quits(self):
        self._load_words(0x1200)
        inputs = ScriptedInputs(DEFAULT_KEYMAP, self.renderer, quit_after=3)
        host = self._make_host(inputs, ticks_per_frame=2)
        host.run()
        self.assertEqual(4, inputs.frames)
        self.assertEqual(0x200, self.machine.pc)
