#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from chip8vm.constants import FONT_SET, EDGE_CLIP
from chip8vm.framebuffer import FramebufferError
from chip8vm.machine import Machine, MachineError


class TestMachine(unittest.TestCase):
    def setUp(self):
        self.machine = Machine()

    def _check_power_on_state(self):
        machine = self.machine
        self.assertEqual(FONT_SET, bytes(machine.ram.read_block(0x050, 80)))
        self.assertEqual(0x200, machine.pc)
        self.assertEqual(0, machine.i)
        self.assertEqual(0, machine.sp)
        self.assertEqual(0, machine.dt)
        self.assertEqual(0, machine.st)
        self.assertEqual(0, machine.opcode)
        self.assertEqual("00" * 16, machine.v.hex())
        self.assertIsNone(machine.keypad.get_pressed())
        self.assertTrue(machine.framebuffer.is_blank())

    def test_machine_init(self):
        self._check_power_on_state()
        # Only the font set is present in RAM
        self.assertEqual("00" * 0x50, machine_hex(self.machine, 0x000, 0x50))
        self.assertEqual("00" * 0xF60, machine_hex(self.machine, 0x0A0, 0xF60))

    def test_machine_load_program(self):
        self.machine.load_program(b"\x00\xE0\x12\x00")
        self.assertEqual("00e01200", machine_hex(self.machine, 0x200, 4))

    def test_machine_load_program_list(self):
        self.machine.load_program([0x6A, 0x05])
        self.assertEqual("6a05", machine_hex(self.machine, 0x200, 2))

    def test_machine_load_program_max_size(self):
        self.machine.load_program(b"\xAA" * 3584)
        self.assertEqual(0xAA, self.machine.ram.read(0xFFF))

    def test_machine_load_program_too_large(self):
        self.assertRaises(MachineError, self.machine.load_program, b"\xAA" * 3585)
        # Memory should be untouched
        self.assertEqual(0x00, self.machine.ram.read(0x200))

    def test_machine_reset(self):
        machine = self.machine
        machine.load_program(b"\x12\x00")
        machine.ram.write(0x050, 0x00)
        machine.v[0x3] = 0x33
        machine.i = 0x345
        machine.pc = 0x456
        machine.dt = 0x10
        machine.st = 0x20
        machine.opcode = 0x1200
        machine.stack.push(0x202)
        machine.keypad.press(0x4)
        machine.framebuffer.xor_pixel(10, 10)
        machine.reset()
        self._check_power_on_state()
        self.assertEqual(0x00, machine.ram.read(0x200))

    def test_machine_edge_mode(self):
        self.assertEqual(EDGE_CLIP, Machine(edge_mode=EDGE_CLIP).framebuffer.edge_mode)
        self.assertRaises(FramebufferError, Machine, "bounce")


def machine_hex(machine, location, size):
    return machine.ram.read_block(location, size).hex()
