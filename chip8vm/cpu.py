#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

The interpreter: fetches, decodes and executes one instruction per step,
mutating the attached Machine.  Timing is left to the host, which calls step()
at the desired instruction rate and tick_timers() at 60Hz.

Instructions are found through a dictionary of bound methods keyed on the
first nibble.  Families that share a first nibble (0, 5/8/9 and E/F) are
looked up a second time with the opcode masked down to its identifying bits.

Any fault during a step (unknown opcode, memory or stack out of range, bad key
index, etc.) halts the CPU with a CPUError carrying a dump of the machine
state.  There is no recovery; the CPU refuses to step again until reset.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from .constants import APP_INTRO, FONT_SET_START_ADDRESS, FONT_GLYPH_SIZE, NUM_KEYS
from .diagnostics import Diagnostics
from .framebuffer import FramebufferError
from .keypad import KeypadError
from .machine import Machine
from .ram import RAMError
from .stack import StackError

CPU_ENDIAN = "big"  # CHIP-8 is big-endian
INDEX_BITMASK = 0xFFFF


class CPUError(Exception):
    def __init__(self, message, reason=None, opcode=None, address=None):
        super().__init__(message)
        self.reason = message if reason is None else reason
        self.opcode = opcode
        self.address = address


class CPU:
    def __init__(self, machine=None, rng=None, diagnostics=None):
        self.machine = Machine() if machine is None else machine
        self.rng = Random() if rng is None else rng  # Private, seedable generator for RND
        self.diagnostics = Diagnostics() if diagnostics is None else diagnostics
        self.live_debug = self.diagnostics.is_live()
        self.debug_pc = self.machine.pc
        self.fault = None

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            # Initial lookup for instructions' first nibble
            0x0: self._0nnn,  # Alias for bitmask 0xFFFF
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x5: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x6: self._6xkk,
            0x7: self._7xkk,
            0x8: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x9: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn,
            0xE: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            0xF: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
        }

        # Second-level lookups, keyed on the masked opcode
        self.masked_instructions = {
            # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
            0x00E0: self._00E0,
            0x00EE: self._00EE,
            # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
            0x5000: self._5xy0,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0,
            # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

    def load_program(self, program):
        self.machine.load_program(program)

    def reset(self):
        self.machine.reset()
        self.debug_pc = self.machine.pc
        self.fault = None

    def step(self):
        if self.fault is not None:
            raise CPUError(
                "CPU is halted ({}).  Reset it before stepping again.".format(self.fault.reason),
                reason=self.fault.reason, opcode=self.fault.opcode, address=self.fault.address
            )

        # Keep track of the program counter before altering it in any way for diagnostics
        self.debug_pc = self.machine.pc

        try:
            self.machine.opcode = self.fetch()
            self.inc_pc()  # Program counter updates after fetch, but before execute

            if self.live_debug:
                self.diagnostics.output(self)

            self.decode_exec()
        except (RAMError, StackError, KeypadError, FramebufferError) as err:
            self._halt("{} (instruction at address 0x{:03x}).".format(err, self.debug_pc), err)

    def tick_timers(self):
        machine = self.machine

        if machine.dt > 0:
            machine.dt -= 1

        if machine.st > 0:
            machine.st -= 1

    @property
    def sound_timer(self):
        return self.machine.st

    @property
    def delay_timer(self):
        return self.machine.dt

    def fetch(self):
        return int.from_bytes(self.machine.ram.read_block(self.machine.pc, 2), CPU_ENDIAN, signed=False)

    def decode_exec(self):
        instruction = self.instructions[(0xF000 & self.machine.opcode) >> 12]
        instruction()

    def _call_masked_instruction(self, masked_opcode):
        instruction = self.masked_instructions.get(masked_opcode)

        if instruction is None:
            self._opcode_unsupported()

        instruction()

    def inc_pc(self):
        self.machine.pc += 2

    def dec_pc(self):
        # Only used to re-run an instruction (keypress wait)
        self.machine.pc -= 2

    # References to Vx, Vy, byte and addr are always in the same opcode position throughout all instructions, so avoid
    # excessive code duplication.  Don't reference these more than necessary as they are recalculated each time.
    @property
    def vx(self):
        return (self.machine.opcode & 0xF00) >> 8

    @property
    def vy(self):
        return (self.machine.opcode & 0xF0) >> 4

    @property
    def addr(self):
        return self.machine.opcode & 0xFFF

    @property
    def byte(self):
        return self.machine.opcode & 0xFF

    @property
    def nibble(self):
        return self.machine.opcode & 0xF

    def _halt(self, reason, cause=None):
        opcode = self.machine.opcode
        address = self.debug_pc
        self.fault = CPUError(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\n{}"
            ).format(APP_INTRO, self.diagnostics.dump(self, verbose=True), reason),
            reason=reason, opcode=opcode, address=address
        )
        raise self.fault from cause

    def _opcode_unsupported(self):
        self._halt(
            "Opcode 0x{:04x} at address 0x{:03x} is not a CHIP-8 instruction.".format(
                self.machine.opcode, self.debug_pc
            )
        )

    def _0nnn(self):
        opcode = self.machine.opcode

        if opcode in (0x00E0, 0x00EE):
            self._call_masked_instruction(opcode)

        # Anything else is SYS addr, a call into native code on the original hardware.  It is ignored.

    def _5nnn_8nnn_9nnn(self):
        self._call_masked_instruction(self.machine.opcode & 0xF00F)

    def _Ennn_Fnnn(self):
        self._call_masked_instruction(self.machine.opcode & 0xF0FF)

    def _00E0(self):  # CLS
        self.machine.framebuffer.clear()

    def _00EE(self):  # RET
        self.machine.pc = self.machine.stack.pop()

    def _1nnn(self):  # JP addr
        self.machine.pc = self.addr

    def _2nnn(self):  # CALL addr
        self.machine.stack.push(self.machine.pc)
        self.machine.pc = self.addr

    def _3xkk(self):  # SE Vx, byte
        if self.machine.v[self.vx] == self.byte:
            self.inc_pc()

    def _4xkk(self):  # SNE Vx, byte
        if self.machine.v[self.vx] != self.byte:
            self.inc_pc()

    def _5xy0(self):  # SE Vx, Vy
        v = self.machine.v

        if v[self.vx] == v[self.vy]:
            self.inc_pc()

    def _6xkk(self):  # LD Vx, byte
        self.machine.v[self.vx] = self.byte

    def _7xkk(self):  # ADD Vx, byte
        # Wraps without touching Vf
        vx = self.vx
        self.machine.v[vx] = (self.machine.v[vx] + self.byte) & 0xFF

    def _8xy0(self):  # LD Vx, Vy
        v = self.machine.v
        v[self.vx] = v[self.vy]

    def _8xy1(self):  # OR Vx, Vy
        v = self.machine.v
        v[self.vx] |= v[self.vy]

    def _8xy2(self):  # AND Vx, Vy
        v = self.machine.v
        v[self.vx] &= v[self.vy]

    def _8xy3(self):  # XOR Vx, Vy
        v = self.machine.v
        v[self.vx] ^= v[self.vy]

    # Flagging instructions set Vx before Vf, since Vf may also be one of the operands

    def _8xy4(self):  # ADD Vx, Vy
        v = self.machine.v
        vx = self.vx
        val = v[vx] + v[self.vy]
        v[vx] = val & 0xFF
        v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, minuend, subtrahend):  # Post-SUB/SUBN
        v = self.machine.v
        v[self.vx] = (minuend - subtrahend) & 0xFF
        v[0xF] = int(minuend > subtrahend)  # Vf is set when NOT borrowing

    def _8xy5(self):  # SUB Vx, Vy
        v = self.machine.v
        self._post_8xy5_8xy7(v[self.vx], v[self.vy])

    def _8xy6(self):  # SHR Vx
        v = self.machine.v
        vx = self.vx
        val = v[vx]
        v[vx] = val >> 1
        v[0xF] = val & 1

    def _8xy7(self):  # SUBN Vx, Vy
        v = self.machine.v
        self._post_8xy5_8xy7(v[self.vy], v[self.vx])

    def _8xyE(self):  # SHL Vx
        v = self.machine.v
        vx = self.vx
        val = v[vx]
        v[vx] = (val << 1) & 0xFF
        v[0xF] = val >> 7

    def _9xy0(self):  # SNE Vx, Vy
        v = self.machine.v

        if v[self.vx] != v[self.vy]:
            self.inc_pc()

    def _Annn(self):  # LD I, addr
        self.machine.i = self.addr

    def _Bnnn(self):  # JP V0, addr
        # Not masked.  A target past the end of RAM faults on the next fetch.
        self.machine.pc = self.addr + self.machine.v[0]

    def _Cxkk(self):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.machine.v[self.vx] = self.rng.randint(0, 0xFF) & self.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        machine = self.machine
        v = machine.v
        ram = machine.ram
        framebuffer = machine.framebuffer
        height = self.nibble

        # The sprite's origin always wraps.  Pixels beyond the edges are left to the framebuffer's edge mode.
        vid_width, vid_height = framebuffer.get_vid_size()
        vx_pos = v[self.vx] % vid_width
        vy_pos = v[self.vy] % vid_height
        i = machine.i
        sprite = [ram.read(i + y) for y in range(height)]
        points = []

        for y, spr_data in enumerate(sprite):
            scr_y = y + vy_pos

            for x in range(8):
                if spr_data & (0x80 >> x):
                    points.append((x + vx_pos, scr_y))

        # Nothing is drawn if any pixel falls outside the framebuffer
        for scr_x, scr_y in points:
            framebuffer.locate_pixel(scr_x, scr_y)

        collided = False

        for scr_x, scr_y in points:
            if framebuffer.xor_pixel(scr_x, scr_y):
                # Don't stop drawing.  Set the flag once the whole sprite is done.
                collided = True

        v[0xF] = int(collided)

    def _Ex9E(self):  # SKP Vx
        if self.machine.keypad.is_key_down(self.machine.v[self.vx]):
            self.inc_pc()

    def _ExA1(self):  # SKNP Vx
        if not self.machine.keypad.is_key_down(self.machine.v[self.vx]):
            self.inc_pc()

    def _Fx07(self):  # LD Vx, DT
        self.machine.v[self.vx] = self.machine.dt

    def _Fx0A(self):  # LD Vx, K
        # Waiting must not block the host, since the timers and display still need servicing.  If nothing is held,
        # wind the program counter back so this instruction runs again on the next step.
        key = self.machine.keypad.get_pressed()

        if key is None:
            self.dec_pc()
        else:
            self.machine.v[self.vx] = key

    def _Fx15(self):  # LD DT, Vx
        self.machine.dt = self.machine.v[self.vx]

    def _Fx18(self):  # LD ST, Vx
        self.machine.st = self.machine.v[self.vx]

    def _Fx1E(self):  # ADD I, Vx
        machine = self.machine
        machine.i = (machine.i + machine.v[self.vx]) & INDEX_BITMASK

    def _Fx29(self):  # LD F, Vx
        digit = self.machine.v[self.vx]

        if digit >= NUM_KEYS:
            self._halt(
                "Font digit 0x{:02x} requested at address 0x{:03x} is outside 0x0-0xf.".format(digit, self.debug_pc)
            )

        self.machine.i = FONT_SET_START_ADDRESS + FONT_GLYPH_SIZE * digit

    def _Fx33(self):  # LD B, Vx
        machine = self.machine
        val = machine.v[self.vx]
        i = machine.i
        machine.ram.write(i, val // 100)            # Most-significant digit
        machine.ram.write(i + 1, (val // 10) % 10)  # Middle digit
        machine.ram.write(i + 2, val % 10)          # Least-significant digit

    def _Fx55(self):  # LD [I], Vx
        machine = self.machine
        i = machine.i

        for reg in range(self.vx + 1):
            machine.ram.write(i + reg, machine.v[reg])

    def _Fx65(self):  # LD Vx, [I]
        machine = self.machine
        i = machine.i

        for reg in range(self.vx + 1):
            machine.v[reg] = machine.ram.read(i + reg)
