#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the framebuffer onto an SDL window surface via PyGame.  The surface is
allocated at the emulated resolution, and then stretched (in the correct
aspect ratio using 'Nearest Neighbour' translation) to fit the window itself.

The framebuffer already holds one packed 32-bit colour per pixel (white when
lit, black when unlit), so it is blitted straight from its bytes with no
palette translation.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME


class Renderer(RendererBase):
    def __init__(self, scale=None, **kwargs):
        if scale is None:
            scale = 512  # Default window width if not supplied

        if scale < 2:
            raise RendererError("Window width must be at least 2 pixels.")

        pygame.display.init()
        self.set_title(APP_NAME)
        self.scaled_size = (scale, scale // 2)
        self.display_surface = pygame.display.set_mode(self.scaled_size)
        super().__init__(scale)

    def refresh_display(self, buffer, content_changed=False):
        if content_changed and self.width and self.height:
            # Blit the packed pixels straight to a surface, avoiding per-pixel PyGame calls
            render_surface = pygame.image.frombuffer(buffer, (self.width, self.height), "RGBX")
            scaled_win = pygame.transform.scale(render_surface, self.scaled_size)
            self.display_surface.blit(scaled_win, (0, 0))
            pygame.display.flip()

        super().refresh_display(buffer, content_changed)

    def set_title(self, title):
        pygame.display.set_caption(title)
        super().set_title(title)

    def shutdown(self):
        # PyGame currently segfaults if display.quit is called via __del__
        pygame.display.quit()
        super().shutdown()
