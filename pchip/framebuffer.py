#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here by the machine, and are only drawn to the actual
display (the host rendering system) once per frame.  The host reads the
framebuffer through a read-only boolean view, so it never needs to know how
the pixels are stored.

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen by XORing them against the existing pixels.
Each pixel is one byte in a RAM bank, holding 0 (unlit) or 1 (lit).

Sprites wrap around both screen edges rather than being clipped.  Collisions
(where a lit pixel was unset by the XOR) are reported back to the caller.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .ram import RAM


class Framebuffer():
    def __init__(self, vid_width, vid_height):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.ram_bank = RAM()
        self.ram_bank.resize(self.vid_size)
        self.display_view = self.ram_bank.mem.cast("?").toreadonly()

    def clear(self):
        self.ram_bank.clear()

    def xor_pixel(self, x, y):
        # Returns True if a lit pixel was switched off
        x %= self.vid_width
        y %= self.vid_height
        vram_loc = x + y * self.vid_width
        pixel = self.ram_bank.read(vram_loc)
        self.ram_bank.write(vram_loc, pixel ^ 1)

        return pixel != 0

    def get_pixel(self, x, y):
        return self.display_view[x + y * self.vid_width]

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def get_display(self):
        return self.display_view
