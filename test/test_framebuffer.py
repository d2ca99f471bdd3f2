#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from chip8vm.framebuffer import Framebuffer, FramebufferError


class TestFrameBuffer(unittest.TestCase):
    def setUp(self):
        self.framebuffer = Framebuffer()
        self.small_framebuffer = Framebuffer(8, 4)

    def _lit_pixels(self, framebuffer):
        vid_width, vid_height = framebuffer.get_vid_size()
        return [
            (x, y) for y in range(vid_height) for x in range(vid_width) if framebuffer.get_pixel(x, y)
        ]

    def test_framebuffer_init(self):
        self.assertEqual((64, 32), self.framebuffer.get_vid_size())
        self.assertEqual(2048, len(self.framebuffer.get_cells()))
        self.assertEqual([], self._lit_pixels(self.framebuffer))

    def test_framebuffer_bad_size(self):
        self.assertRaises(FramebufferError, Framebuffer, 63, 32)
        self.assertRaises(FramebufferError, Framebuffer, 64, 0)

    def test_framebuffer_draw_small(self):
        fb = self.small_framebuffer
        self.assertFalse(fb.draw_sprite(0, 0, [0b10000001, 0b01000000]))
        self.assertEqual(
            "01000000000000010001000000000000" + "0000000000000000" + "0000000000000000",
            fb.cells.hex()
        )

    def test_framebuffer_draw_collision(self):
        fb = self.framebuffer
        self.assertFalse(fb.draw_sprite(10, 5, [0xF0]))
        self.assertTrue(fb.draw_sprite(13, 5, [0xF0]))
        # The overlapping pixel at x=13 has been turned off
        self.assertEqual([(10, 5), (11, 5), (12, 5), (14, 5), (15, 5), (16, 5)], self._lit_pixels(fb))

    def test_framebuffer_draw_twice_restores(self):
        fb = self.framebuffer
        sprite = [0xF0, 0x90, 0x90, 0x90, 0xF0]
        self.assertFalse(fb.draw_sprite(20, 10, sprite))
        self.assertNotEqual([], self._lit_pixels(fb))
        self.assertTrue(fb.draw_sprite(20, 10, sprite))
        self.assertEqual([], self._lit_pixels(fb))

    def test_framebuffer_origin_wraps(self):
        fb = self.framebuffer
        fb.draw_sprite(64 + 2, 32 + 3, [0x80])
        self.assertEqual([(2, 3)], self._lit_pixels(fb))

    def test_framebuffer_clip_right(self):
        fb = self.framebuffer
        fb.draw_sprite(60, 0, [0xFF])
        self.assertEqual([(60, 0), (61, 0), (62, 0), (63, 0)], self._lit_pixels(fb))

    def test_framebuffer_clip_bottom(self):
        fb = self.framebuffer
        fb.draw_sprite(0, 30, [0x80, 0x80, 0x80, 0x80])
        self.assertEqual([(0, 30), (0, 31)], self._lit_pixels(fb))

    def test_framebuffer_clipped_pixels_never_collide(self):
        fb = self.framebuffer
        fb.draw_sprite(0, 0, [0x80])
        # Would wrap onto (0, 0) if clipping didn't apply
        self.assertFalse(fb.draw_sprite(63, 0, [0xC0]))
        self.assertEqual([(0, 0), (63, 0)], self._lit_pixels(fb))

    def test_framebuffer_clear(self):
        fb = self.framebuffer
        fb.draw_sprite(0, 0, [0xFF] * 15)
        fb.clear()
        self.assertEqual([], self._lit_pixels(fb))
        self.assertFalse(fb.draw_sprite(0, 0, [0xFF] * 15))

    def test_framebuffer_cells_read_only(self):
        cells = self.framebuffer.get_cells()
        self.framebuffer.draw_sprite(1, 0, [0x80])
        self.assertEqual(1, cells[1])  # Live view

        with self.assertRaises(TypeError):
            cells[0] = 1
