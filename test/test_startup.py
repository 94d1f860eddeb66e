#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import tempfile
import unittest
from contextlib import redirect_stdout
from io import StringIO
from chip8vm import main, StartupError
from runchip8 import parse_args


class TestStartup(unittest.TestCase):
    def setUp(self):
        self.rom_dir = tempfile.TemporaryDirectory()
        self.filename = os.path.join(self.rom_dir.name, "test.ch8")

    def tearDown(self):
        self.rom_dir.cleanup()

    def _write_rom(self, data):
        with open(self.filename, "wb") as f:
            f.write(data)

    def _args(self, *argv):
        return vars(parse_args(["--renderer", "null", "--clock_speed", "0"] + list(argv) + [self.filename]))

    def test_startup_parse_args_defaults(self):
        args = vars(parse_args([self.filename]))
        self.assertEqual("pygame", args["renderer"])
        self.assertEqual("linear", args["edge_mode"])
        self.assertIsNone(args["clock_speed"])
        self.assertIsNone(args["seed"])
        self.assertIsNone(args["max_ops"])
        self.assertFalse(args["debug"])

    def test_startup_run_headless(self):
        self._write_rom(b"\xC0\xFF\x12\x00")
        output = StringIO()

        with redirect_stdout(output):
            self.assertTrue(main(self._args("--max_ops", "20", "--seed", "7")))

        self.assertIn("Chip8VM Emulator", output.getvalue())

    def test_startup_run_halts(self):
        self._write_rom(b"\xFF\xFF")

        with redirect_stdout(StringIO()):
            self.assertFalse(main(self._args()))

    def test_startup_rom_too_large(self):
        self._write_rom(b"\x00" * 3585)

        with redirect_stdout(StringIO()):
            self.assertRaises(StartupError, main, self._args())

    def test_startup_rom_missing(self):
        with redirect_stdout(StringIO()):
            self.assertRaises(FileNotFoundError, main, self._args())
