#!/usr/bin/env python3

"""
Machine State

Everything the CPU reads and mutates: RAM, the call stack, the keypad, the
framebuffer, the V registers, the index register (I), the program counter,
both timers, and the opcode currently being executed.

This holds no behaviour beyond powering on (reset) and loading a program.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import (
    MEMORY_SIZE, START_ADDRESS, FONT_SET_START_ADDRESS, FONT_SET, MAX_PROGRAM_SIZE, NUM_REGISTERS, STACK_LEVELS,
    EDGE_LINEAR
)
from .framebuffer import Framebuffer
from .keypad import Keypad
from .ram import RAM
from .stack import Stack


class MachineError(Exception):
    pass


class Machine:
    def __init__(self, edge_mode=EDGE_LINEAR):
        self.ram = RAM()
        self.ram.resize(MEMORY_SIZE)
        self.stack = Stack(STACK_LEVELS)
        self.keypad = Keypad()
        self.framebuffer = Framebuffer(edge_mode)
        self.v = memoryview(bytearray(NUM_REGISTERS))
        self.reset()

    def reset(self):
        self.ram.clear()
        self.ram.write_block(FONT_SET_START_ADDRESS, FONT_SET)
        self.stack.clear()
        self.keypad.clear()
        self.framebuffer.clear()

        for reg_num in range(NUM_REGISTERS):
            self.v[reg_num] = 0

        self.i = 0       # Index register
        self.pc = START_ADDRESS
        self.dt = 0      # Delay timer
        self.st = 0      # Sound timer
        self.opcode = 0  # Most recently fetched instruction

    @property
    def sp(self):
        return self.stack.sp

    def load_program(self, program):
        program = bytes(program)

        if len(program) > MAX_PROGRAM_SIZE:
            raise MachineError(
                "Program is {} bytes, but only {} bytes are available from 0x{:03x}".format(
                    len(program), MAX_PROGRAM_SIZE, START_ADDRESS
                )
            )

        self.ram.write_block(START_ADDRESS, program)
