#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the framebuffer onto an SDL window surface via PyGame.  The offscreen
surface is allocated at the emulated screen size, and the contents are
stretched (in the correct aspect ratio using 'Nearest Neighbour' translation)
to fit the window itself.  This means we don't have to draw the same pixel
multiple times.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME

BACKGROUND_COLOUR = 0x222222
FOREGROUND_COLOUR = 0xDDDDDD


class Renderer(RendererBase):
    def __init__(self, scale=None, pygame_palette=None, **kwargs):
        if scale is None:
            scale = 640  # Default window width if not supplied, or set to default

        if scale < 2:
            raise RendererError("Window width is too small.")

        pygame.display.init()
        self.set_title(APP_NAME)
        self.rgb_buffer = None
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        colour_map = [BACKGROUND_COLOUR, FOREGROUND_COLOUR]

        # Override the background and foreground with a user-defined palette, if necessary
        if pygame_palette is not None:
            pygame_palette_split = pygame_palette.split(",")

            if len(pygame_palette_split) > 2:
                raise RendererError("Too many palette colours defined.")

            for pygame_colour_num, pygame_colour in enumerate(pygame_palette_split):
                if len(pygame_colour) != 6:
                    raise RendererError("Palette colours must all be 6 hex digits long.")

                try:
                    colour_map[pygame_colour_num] = int(pygame_colour, 16)
                except ValueError:
                    raise RendererError("Invalid palette colour defined.") from None

        # Split compound RGB values for faster byte-based lookup later
        self.rgb_map = [bytes((i >> 16, (i >> 8) & 0xFF, i & 0xFF)) for i in colour_map]

        super().__init__(scale)

    def set_resolution(self, width, height):
        # Fill the offscreen RGB buffer with the background colour
        self.rgb_buffer = bytearray(self.rgb_map[0] * (width * height))
        super().set_resolution(width, height)

    def render(self, cells, width, height):
        super().render(cells, width, height)
        rgb_map = self.rgb_map
        self.rgb_buffer[:] = b"".join([rgb_map[cell] for cell in cells])

    def refresh_display(self):
        if self.refresh_needed and self.width and self.height:
            # Blit the bytearray straight to the surface, rather than updating pixels one by one
            render_surface = pygame.image.frombuffer(bytes(self.rgb_buffer), (self.width, self.height), "RGB")
            scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
            self.display_surface.blit(scaled_win, (0, 0))
            pygame.display.flip()

        super().refresh_display()

    def set_title(self, title):
        pygame.display.set_caption(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
