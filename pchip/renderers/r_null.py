#!/usr/bin/env python3

"""
Null Renderer Plugin

This serves as a base class for other rendering plugins.

The host hands over the whole framebuffer once per frame via draw_display().
Only pixels which changed since the previous frame are passed on to
set_pixel(), so subclasses can update their surfaces in-place.

This module can be used on its own as a Renderer plugin if you only want to see
debug output.  Without a renderer, performance data will also not be shown.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.title = None
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height
        self.last_display = [False] * (width * height)

    def draw_display(self, display):
        last_display = self.last_display
        width = self.width
        content_changed = False

        for location, lit in enumerate(display):
            if last_display[location] != lit:
                last_display[location] = lit
                self.set_pixel(location % width, location // width, lit)
                content_changed = True

        self.refresh_display(content_changed)

        return content_changed

    def set_pixel(self, x, y, lit):  # pylint: disable=unused-argument
        pass

    def refresh_display(self, content_changed=False):
        pass

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass
