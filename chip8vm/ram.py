#!/usr/bin/env python3

"""
RAM Emulator

Supports reading and writing of blocks of memory or individual bytes, plus
zeroing of memory blocks.

Unlike real hardware, every access is checked against the size of the bank.
CHIP-8 defines nothing sensible for a program that strays outside its 4K, so
such accesses raise a RAMError rather than silently wrapping around.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RAMError(Exception):
    pass


class RAM:
    def __init__(self):
        self.resize(0)

    def resize(self, mem_size):
        self.mem = memoryview(bytearray(b"\x00" * mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_overflow(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        self.check_overflow(location)
        self.check_overflow(location + size - 1)
        return self.mem[location:location + size]

    def write(self, location, byte):
        self.check_overflow(location)
        self.mem[location] = byte

    def write_block(self, location, block):
        block_size = len(block)
        block_top = location + block_size
        self.check_overflow(location)
        self.check_overflow(block_top - 1)
        self.mem[location:block_top] = block

    def check_overflow(self, location):
        if location < 0 or location > self.mem_top:
            raise RAMError("Memory access at 0x{:04x} is outside 0x000-0x{:03x}".format(location, self.mem_top))

    def zero_block(self, offset, size):
        block_top = offset + size
        self.check_overflow(block_top - 1)

        for i in range(offset, block_top):
            self.mem[i] = 0x00

    def clear(self):
        self.zero_block(0, self.mem_size)
