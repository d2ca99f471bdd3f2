#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from chip8vm.constants import CONTROL_PAUSE, CONTROL_STEP, DEFAULT_KEYMAP
from chip8vm.inputs.i_null import Inputs, InputsError
from chip8vm.renderers.r_null import Renderer

KEYMAP = ",".join(str(key) for key in range(48, 64))


class TestInputs(unittest.TestCase):
    def setUp(self):
        self.inputs = Inputs(KEYMAP, Renderer(), None)

    def test_inputs_keymap(self):
        self.assertEqual(16, len(self.inputs.keymap_dict))
        self.assertEqual(0x0, self.inputs.keymap_dict[48])
        self.assertEqual(0xF, self.inputs.keymap_dict[63])

    def test_inputs_default_keymap(self):
        inputs = Inputs(DEFAULT_KEYMAP, Renderer(), None, force_lowercase=True)
        self.assertEqual(sorted(range(16)), sorted(inputs.keymap_dict.values()))

    def test_inputs_force_lowercase(self):
        keymap = ",".join(str(key) for key in range(65, 81))  # A to P would clash with P once lowercased
        self.assertRaises(InputsError, Inputs, keymap, Renderer(), None, force_lowercase=True)
        keymap = ",".join(str(key) for key in range(65, 81) if key != 80) + ",81"
        inputs = Inputs(keymap, Renderer(), None, force_lowercase=True)
        self.assertEqual(0x0, inputs.keymap_dict[ord("a")])

    def test_inputs_keymap_wrong_count(self):
        self.assertRaises(InputsError, Inputs, "1,2,3", Renderer(), None)

    def test_inputs_keymap_not_integers(self):
        self.assertRaises(InputsError, Inputs, "a," + KEYMAP.split(",", 1)[1], Renderer(), None)

    def test_inputs_keymap_duplicates(self):
        self.assertRaises(InputsError, Inputs, "48," + KEYMAP.split(",", 1)[1].replace("49", "48"), Renderer(), None)

    def test_inputs_keymap_control_clash(self):
        keymap = ",".join(str(key) for key in range(100, 116))  # Includes 'n' and 'p'
        self.assertRaises(InputsError, Inputs, keymap, Renderer(), None)

    def test_inputs_start_paused(self):
        self.assertFalse(self.inputs.is_paused())
        self.assertTrue(Inputs(KEYMAP, Renderer(), None, start_paused=True).is_paused())

    def test_inputs_pause_toggle(self):
        self.assertTrue(self.inputs._handle_control(CONTROL_PAUSE))
        self.assertTrue(self.inputs.is_paused())
        self.assertTrue(self.inputs._handle_control(CONTROL_PAUSE))
        self.assertFalse(self.inputs.is_paused())

    def test_inputs_step(self):
        # Stepping is ignored while running
        self.assertTrue(self.inputs._handle_control(CONTROL_STEP))
        self.assertFalse(self.inputs.take_step_request())
        self.inputs._handle_control(CONTROL_PAUSE)
        self.inputs._handle_control(CONTROL_STEP)
        self.assertTrue(self.inputs.take_step_request())
        self.assertFalse(self.inputs.take_step_request())

    def test_inputs_unpause_drops_step(self):
        self.inputs._handle_control(CONTROL_PAUSE)
        self.inputs._handle_control(CONTROL_STEP)
        self.inputs._handle_control(CONTROL_PAUSE)
        self.assertFalse(self.inputs.take_step_request())

    def test_inputs_not_control(self):
        self.assertFalse(self.inputs._handle_control(48))

    def test_inputs_process_messages(self):
        self.assertFalse(self.inputs.process_messages())
