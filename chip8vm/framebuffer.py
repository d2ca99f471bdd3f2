#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are only presented by the host rendering system
when the CPU reports that the screen has changed.  The framebuffer never talks
to a renderer itself.

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen using an XOR method, and a collision is
reported whenever a pixel that was set is unset by the XOR.

Only the sprite's starting position wraps around the screen.  Any part of the
sprite running off the right or bottom edge is clipped.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import VID_WIDTH, VID_HEIGHT, SPRITE_WIDTH


class FramebufferError(Exception):
    pass


class Framebuffer:
    def __init__(self, vid_width=VID_WIDTH, vid_height=VID_HEIGHT):
        # Wrapping the sprite origin relies on masking, so sizes must be powers of 2
        for size in vid_width, vid_height:
            if size <= 0 or size & (size - 1):
                raise FramebufferError("Display dimensions must be powers of 2")

        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.cells = memoryview(bytearray(self.vid_size))

    def clear(self):
        self.cells[:] = bytes(self.vid_size)

    def get_pixel(self, x, y):
        return self.cells[y * self.vid_width + x]

    def draw_sprite(self, x, y, rows):
        # XOR a sprite made of 8-pixel wide rows onto the screen.  Returns True if any set pixel was turned off.
        vid_width = self.vid_width
        vid_height = self.vid_height
        cells = self.cells
        start_x = x & (vid_width - 1)
        start_y = y & (vid_height - 1)
        collision = False

        for row, spr_data in enumerate(rows):
            scr_y = start_y + row

            if scr_y >= vid_height:
                break

            row_loc = scr_y * vid_width

            for col in range(SPRITE_WIDTH):
                scr_x = start_x + col

                if scr_x >= vid_width:
                    break

                if spr_data & (0x80 >> col):
                    vram_loc = row_loc + scr_x

                    if cells[vram_loc]:
                        collision = True

                    cells[vram_loc] ^= 1

        return collision

    def get_cells(self):
        # Row-major, one byte per pixel, each 0 or 1
        return self.cells.toreadonly()

    def get_vid_size(self):
        return self.vid_width, self.vid_height
