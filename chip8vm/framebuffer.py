#!/usr/bin/env python3

"""
Framebuffer Emulator

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen by XORing pixels, and a collision is reported
whenever a lit pixel is turned off.

Each pixel is held as a 32-bit value: 0xFFFFFFFF when lit, 0 when unlit.  The
buffer is row-major, so a renderer can take it as packed pixel colour without
any translation.

A sprite's origin always wraps around the screen.  What happens to pixels that
run off the right or bottom edge depends on the edge mode:

    * linear - pixels are plotted at (y * width + x) without clipping, so they
               spill into the next row.  Running off the end of the buffer is
               an error, and the whole sprite is rejected before any of it
               is drawn.
    * clip   - pixels outside the screen are dropped.
    * wrap   - pixels wrap around to the opposite edge.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VIDEO_WIDTH, VIDEO_HEIGHT, PIXEL_ON, EDGE_LINEAR, EDGE_CLIP, EDGE_WRAP, EDGE_MODES


class FramebufferError(Exception):
    pass


class Framebuffer:
    def __init__(self, edge_mode=EDGE_LINEAR, vid_width=VIDEO_WIDTH, vid_height=VIDEO_HEIGHT):
        if edge_mode not in EDGE_MODES:
            raise FramebufferError("Unknown edge mode '{}'".format(edge_mode))

        self.edge_mode = edge_mode
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.pixels = memoryview(bytearray(self.vid_size * 4)).cast("I")
        self.changed = True  # Force the first refresh

    def clear(self):
        self.pixels[:] = memoryview(bytearray(self.vid_size * 4)).cast("I")
        self.changed = True

    def locate_pixel(self, x, y):
        # Returns the buffer index for a pixel after the edge mode is applied, or None if the pixel is clipped
        edge_mode = self.edge_mode

        if edge_mode == EDGE_WRAP:
            x %= self.vid_width
            y %= self.vid_height
        elif edge_mode == EDGE_CLIP and (x >= self.vid_width or y >= self.vid_height):
            return None

        vram_loc = y * self.vid_width + x

        if vram_loc >= self.vid_size:
            raise FramebufferError(
                "Pixel ({}, {}) lies outside the {}x{} framebuffer".format(x, y, self.vid_width, self.vid_height)
            )

        return vram_loc

    def xor_pixel(self, x, y):
        # Returns True if a lit pixel was switched off, False if not, and None if the pixel was clipped
        vram_loc = self.locate_pixel(x, y)

        if vram_loc is None:
            return None

        pixel = self.pixels[vram_loc]
        self.pixels[vram_loc] = pixel ^ PIXEL_ON
        self.changed = True

        return pixel == PIXEL_ON

    def get_pixel(self, x, y):
        return self.pixels[y * self.vid_width + x]

    def is_blank(self):
        return not any(self.pixels)

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def to_bytes(self):
        return self.pixels.tobytes()
