#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

All options must be supplied.  Defaults can be specified with a 'None'.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from .constants import APP_INTRO, APP_COPYRIGHT, DEFAULT_KEYMAP, EDGE_LINEAR
from .cpu import CPU, CPUError
from .diagnostics import Diagnostics
from .framebuffer import Framebuffer
from .hostio import Loader
from .keypad import Keypad
from .machine import Machine, MachineError
from .session import Session


class StartupError(Exception):
    pass


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    opt_renderer = args["renderer"] or "pygame"

    if opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            raise StartupError(
                "PyGame does not appear to be installed.  Use the null renderer to run without a display."
            )

        from .inputs.i_pygame import Inputs
        from .renderers.r_pygame import Renderer
    elif opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
    else:
        raise StartupError("Unknown renderer '{}'".format(opt_renderer))

    # Power on the machine, with the font set in place, then write the ROM binary into RAM
    machine = Machine(edge_mode=args["edge_mode"] or EDGE_LINEAR)
    loader = Loader()

    try:
        machine.load_program(loader.load_binary(args["filename"]))
    except MachineError as err:
        raise StartupError(str(err)) from err

    # Set up diagnostics and live output if necessary
    diagnostics = Diagnostics()
    diagnostics.set_live(args["debug"])

    # Seed the RND instruction's generator if asked, so runs can be repeated
    cpu = CPU(machine, rng=Random(args["seed"]), diagnostics=diagnostics)

    renderer = Renderer(scale=args["scale"])
    inputs = Inputs(args["keymap"] or DEFAULT_KEYMAP, machine.keypad)
    session = Session(cpu, renderer, inputs, clock_speed=args["clock_speed"])

    try:
        return session.run(args["max_ops"])
    finally:
        # The session has ended, so shut down the host systems.  __del__ cannot be relied upon when using PyPy
        inputs.shutdown()
        renderer.shutdown()
