#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from contextlib import redirect_stdout
from io import StringIO
from chip8vm.cpu import CPU
from chip8vm.diagnostics import Diagnostics


class TestDiagnostics(unittest.TestCase):
    def setUp(self):
        self.diagnostics = Diagnostics()
        self.cpu = CPU(diagnostics=self.diagnostics)

    def test_diagnostics_live_flag(self):
        self.assertFalse(self.diagnostics.is_live())
        self.diagnostics.set_live(True)
        self.assertTrue(self.diagnostics.is_live())

    def test_diagnostics_dump(self):
        machine = self.cpu.machine
        machine.v[0x0] = 0xAB
        machine.v[0xF] = 0x01
        machine.i = 0x123
        machine.dt = 0x3C
        machine.st = 0x02
        machine.opcode = 0xD015
        self.assertEqual(
            "V: 0x01" + "00" * 14 + "ab I: 0x0123 DT: 0x3c ST: 0x02 PC: 0x200 OP: 0xd015",
            self.diagnostics.dump(self.cpu)
        )

    def test_diagnostics_dump_verbose(self):
        dump = self.diagnostics.dump(self.cpu, verbose=True)
        self.assertIn("\nSP: 0 Stack: (Empty)", dump)
        self.assertIn("\nKeys: (None)", dump)

        machine = self.cpu.machine
        machine.stack.push(0x202)
        machine.stack.push(0x30A)
        machine.keypad.press(0xA)
        machine.keypad.press(0x1)
        dump = self.diagnostics.dump(self.cpu, verbose=True)
        self.assertIn("\nSP: 2 Stack: 0x202 0x30a", dump)
        self.assertIn("\nKeys: 1 a", dump)

    def test_diagnostics_output(self):
        output = StringIO()

        with redirect_stdout(output):
            self.diagnostics.output(self.cpu)

        self.assertEqual(self.diagnostics.dump(self.cpu) + "\n", output.getvalue())
