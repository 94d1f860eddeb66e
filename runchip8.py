#!/usr/bin/env python3

__author__ = "Gregory Maynard-Hoare"
__copyright__ = "Copyright (C) 2024 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"
__version__ = "1.0.0"

import sys
from argparse import ArgumentParser
from chip8vm import main
from chip8vm.constants import DEFAULT_KEYMAP, EDGE_MODES, EDGE_LINEAR


def parse_args(argv=None):
    parser = ArgumentParser()
    parser.add_argument("filename", help="ROM to execute (normally ending in .ch8 or .c8)")
    parser.add_argument(
        "-c", "--clock_speed", type=int,
        help="set the CPU speed in operations/second (default 1000, 0 = uncapped)"
    )
    parser.add_argument(
        "-r", "--renderer", choices=["pygame", "null"], default="pygame",
        help="set the rendering and input systems (null runs headless)"
    )
    parser.add_argument(
        "-s", "--scale", type=int,
        help="set the window width in PyGame mode (default 512)"
    )
    parser.add_argument(
        "-k", "--keymap", default=DEFAULT_KEYMAP,
        help="redefine the 16 PyGame keyscan codes for keys 0-F.  Separate each decimal with a comma"
    )
    parser.add_argument(
        "-e", "--edge_mode", choices=EDGE_MODES, default=EDGE_LINEAR,
        help=" ".join((
            "control sprite pixels beyond the screen edge: spill into the next row and halt past the end (linear,",
            "default), drop them (clip), or wrap them around (wrap)"
        ))
    )
    parser.add_argument(
        "--seed", type=int,
        help="seed the random number generator, so a run can be repeated exactly"
    )
    parser.add_argument(
        "--max_ops", type=int,
        help="stop after executing this many instructions"
    )
    parser.add_argument(
        "-d", "--debug", action="store_true", default=False,
        help="print the machine state before every instruction.  Slows CPU execution"
    )
    return parser.parse_args(argv)  # Can call sys.exit(2) if args are incorrect


def cli():
    args = vars(parse_args())
    # It is possible to start the emulator from a GUI by calling main with a dictionary
    sys.exit(0 if main(args) else 1)


if __name__ == "__main__":
    cli()
