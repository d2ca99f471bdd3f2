#!/usr/bin/env python3

"""
Curses Renderer Plugin

Draws the framebuffer in a standard Linux-style TTY Terminal, the Windows
Command Prompt, or PowerShell, using inverted spaces to represent each lit
pixel.  The top line of the pad holds the title.

Only pixels which differ from the previous frame are redrawn, as Curses calls
are slow.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
import _curses
from .r_null import Renderer as RendererBase


class Renderer(RendererBase):
    def __init__(self, scale=None, curses_cursor_mode=0, **kwargs):
        if scale is None:
            scale = 2  # Default horizontal stretch if not supplied, or set to default

        self.pixel_char = " " * scale
        self.pad = None
        self.last_cells = b""
        self.last_screen_height = -1
        self.last_screen_width = -1
        self.cursor_mode = curses_cursor_mode
        self.screen = curses.initscr()
        curses.curs_set(self.cursor_mode)
        curses.noecho()
        curses.cbreak()
        super().__init__(scale)

    def set_resolution(self, width, height):
        # We have to allow one extra character, presumably for the cursor, otherwise we can't write the furthest
        # bottom-right pixel.  One extra line holds the title.
        self.pad = curses.newpad(height + 1, width * self.scale + 1)
        self.last_cells = bytes(width * height)
        super().set_resolution(width, height)

    def render(self, cells, width, height):
        super().render(cells, width, height)
        last_cells = self.last_cells

        for vram_loc, cell in enumerate(cells):
            if cell != last_cells[vram_loc]:
                y, x = divmod(vram_loc, width)
                self.pad.addstr(y + 1, x * self.scale, self.pixel_char, curses.A_REVERSE if cell else curses.A_NORMAL)

        self.last_cells = bytes(cells)

    def refresh_display(self):
        screen_height, screen_width = self.screen.getmaxyx()

        if screen_height == self.last_screen_height and screen_width == self.last_screen_width:
            # Fast delta update
            if self.refresh_needed:
                self.pad.refresh(0, 0, 0, 0, screen_height - 1, screen_width - 1)
        else:
            # Screen resolution changed, redraw everything
            self.screen.clear()

            if hasattr(curses, "resizeterm"):
                # This doesn't work on Windows
                curses.resizeterm(screen_height, screen_width)

            self.screen.refresh()
            self.last_screen_height = screen_height
            self.last_screen_width = screen_width

        super().refresh_display()

    def set_title(self, title):
        if self.pad:
            row_width = self.width * self.scale
            title_len = len(title)

            if row_width > title_len:
                self.pad.addstr(0, 0, title + " " * (row_width - title_len), curses.A_REVERSE)
                self.refresh_needed = True

    def shutdown(self):
        curses.nocbreak()
        curses.echo()

        if self.cursor_mode != 1:
            try:
                curses.curs_set(1)
            except _curses.error:
                pass

        curses.endwin()
        super().shutdown()

    # No Superclass for this Curses-specific method

    def get_curses_screen(self):
        return self.screen
