#!/usr/bin/env python3

"""
CPU Diagnostics

Produces a one-line dump of the machine state, used for live tracing before
each instruction and in the report printed when the CPU halts:
    * All 16 of the [V] registers, starting with most significant (Vf) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Program counter (address the opcode was fetched from)
    * OP - OpCode number

On a halt, the stack contents and any held keys are added.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_KEYS


class Diagnostics:
    def __init__(self):
        self.live = False

    def dump(self, cpu, verbose=False):
        machine = cpu.machine
        dump_str = (
            "V: 0x" + ("{:02x}" * 16) + " I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: 0x{:04x}"
        ).format(
            *[machine.v[reg_num] for reg_num in range(15, -1, -1)] +
            [machine.i, machine.dt, machine.st, cpu.debug_pc, machine.opcode]
        )

        if verbose:
            stack_items = machine.stack.get_items()
            stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)
            dump_str += "\nSP: {} Stack:{}".format(machine.sp, stack_str or " (Empty)")
            keys_down = [key for key in range(NUM_KEYS) if machine.keypad.is_key_down(key)]
            keys_str = (" {:01x}" * len(keys_down)).format(*keys_down)
            dump_str += "\nKeys:{}".format(keys_str or " (None)")

        return dump_str

    def set_live(self, enabled):
        self.live = enabled

    def is_live(self):
        return self.live

    def output(self, cpu):
        print(self.dump(cpu))
