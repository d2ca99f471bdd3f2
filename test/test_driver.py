#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from chip8vm.constants import DEFAULT_KEYMAP, STATUS_REDRAW, STATUS_SOUND
from chip8vm.cpu import CPU
from chip8vm.debugger import Debugger
from chip8vm.driver import Driver
from chip8vm.framebuffer import Framebuffer
from chip8vm.keypad import Keypad
from chip8vm.ram import RAM
from chip8vm.stack import Stack
from chip8vm.timers import Timers
from chip8vm.audio.a_null import Audio
from chip8vm.inputs.i_null import Inputs
from chip8vm.renderers.r_null import Renderer


class RecordingRenderer(Renderer):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.frames = []
        self.titles = []

    def render(self, cells, width, height):
        super().render(cells, width, height)
        self.frames.append(bytes(cells))

    def set_title(self, title):
        self.titles.append(title)


class RecordingAudio(Audio):
    def __init__(self):
        super().__init__()
        self.calls = []

    def enable_buzzer(self, enabled):
        super().enable_buzzer(enabled)
        self.calls.append(enabled)


class QuittingInputs(Inputs):
    # Quits the second time host messages are processed
    def __init__(self, renderer, cpu, start_paused=False, step_requested=False):
        super().__init__(DEFAULT_KEYMAP, renderer, cpu, start_paused=start_paused)
        self.step_requested = step_requested
        self.message_count = 0

    def process_messages(self):
        self.message_count += 1
        return self.message_count > 1


class TestDriver(unittest.TestCase):
    def setUp(self):
        self.cpu = CPU(RAM(), Stack(), Framebuffer(), Keypad(), Timers(lambda: 0.0), Debugger())  # Timers frozen
        self.renderer = RecordingRenderer()
        self.audio = RecordingAudio()

    def _driver(self, program, start_paused=False, step_requested=False):
        self.cpu.load(program)
        self.inputs = QuittingInputs(self.renderer, self.cpu, start_paused, step_requested)
        return Driver(self.cpu, self.renderer, self.inputs, self.audio, clock_speed=0)

    def test_driver_title(self):
        self._driver(b"\x12\x00")
        self.assertEqual("Emul8 - 0 FPS, 0 OPS", self.renderer.titles[0])

    def test_driver_title_paused(self):
        self._driver(b"\x12\x00", start_paused=True)
        self.assertEqual("Emul8 - 0 FPS, 0 OPS [PAUSED] PC: 0x200", self.renderer.titles[0])

    def test_driver_clock_speed(self):
        self.cpu.load(b"\x12\x00")
        inputs = QuittingInputs(self.renderer, self.cpu)
        self.assertIsNone(Driver(self.cpu, self.renderer, inputs, self.audio, clock_speed=0).core_interval)
        self.assertEqual(0.002, Driver(self.cpu, self.renderer, inputs, self.audio, clock_speed=500).core_interval)
        self.assertIsNotNone(Driver(self.cpu, self.renderer, inputs, self.audio).core_interval)

    def test_driver_cycle_redraw(self):
        driver = self._driver(b"\x00\xe0\x60\x01")
        driver.redraw_pending = False
        self.assertEqual(STATUS_REDRAW, driver.cycle())
        self.assertTrue(driver.redraw_pending)
        driver.refresh_display()
        self.assertFalse(driver.redraw_pending)
        self.assertEqual(1, len(self.renderer.frames))
        self.assertEqual(0, driver.cycle())
        driver.refresh_display()
        self.assertEqual(1, len(self.renderer.frames))

    def test_driver_refresh_size(self):
        driver = self._driver(b"\x12\x00")
        driver.refresh_display()
        self.assertEqual((64, 32), (self.renderer.width, self.renderer.height))
        self.assertEqual(bytes(2048), self.renderer.frames[0])

    def test_driver_buzzer(self):
        # Sound timer set to 1, then a jump to self
        driver = self._driver(b"\x60\x01\xf0\x18\x12\x04")
        driver.cycle()
        self.assertEqual([], self.audio.calls)
        self.assertEqual(STATUS_SOUND, driver.cycle() & STATUS_SOUND)
        self.assertEqual([True], self.audio.calls)
        driver.cycle()
        self.assertEqual([True], self.audio.calls)  # No repeated calls while sounding
        driver.set_buzzer(False)
        driver.set_buzzer(False)
        self.assertEqual([True, False], self.audio.calls)
        self.assertFalse(self.audio.is_buzzer_enabled())

    def test_driver_run(self):
        driver = self._driver(b"\x12\x00")
        driver.run()
        self.assertEqual(2, self.inputs.message_count)
        self.assertGreater(driver.perf_counter_ops, 0)
        self.assertEqual(0x200, self.cpu.get_pc())
        self.assertEqual(1, len(self.renderer.frames))

    def test_driver_run_paused(self):
        driver = self._driver(b"\x60\x01\x60\x02", start_paused=True)
        driver.run()
        self.assertEqual(0, driver.perf_counter_ops)
        self.assertEqual(0x200, self.cpu.get_pc())

    def test_driver_run_single_step(self):
        driver = self._driver(b"\x60\x01\x60\x02", start_paused=True, step_requested=True)
        driver.run()
        self.assertEqual(1, driver.perf_counter_ops)
        self.assertEqual(0x202, self.cpu.get_pc())
        self.assertEqual(0x1, self.cpu.get_register(0x0))
