#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  Each call
to 'step' performs exactly one fetch-decode-execute cycle and returns a status
bitmask so that whatever is driving the CPU knows whether to redraw the screen,
and whether the buzzer should be sounding.  The CPU never draws, plays sounds,
or reads the host keyboard itself.

The program counter always moves past the instruction before it is executed,
so jumps, calls and returns simply overwrite it, skips add another 2, and the
key wait instruction takes 2 away to run itself again on the next step.

The original CHIP-8 behaviour is emulated throughout:
    * OR, AND and XOR reset Vf.
    * SHR and SHL shift Vx in place, ignoring Vy.
    * Loading and storing registers leaves I untouched.
    * Sprites are clipped at the right and bottom edges of the screen.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from .constants import (
    APP_INTRO, REGISTER_COUNT, CARRY_FLAG, INDEX_MASK, FONT_LOC, FONT_GLYPH_SIZE, PROGRAM_LOC, SYSTEM_FONT,
    STATUS_DELAY, STATUS_SOUND, STATUS_REDRAW
)
from .opcode import DecodeError, decode, disassemble, from_bytes
from .stack import StackError


class CPUError(Exception):
    pass


def to_bcd(value):
    # Double dabble: convert a byte into hundreds, tens and ones without any division.  Before each shift, any decimal
    # lane holding 5 or more has 3 added, so that doubling it carries into the next lane.
    value &= 0xFF
    bcd = 0

    for bit in range(7, -1, -1):
        for lane in 0, 4, 8:
            if ((bcd >> lane) & 0xF) >= 5:
                bcd += 3 << lane

        bcd = ((bcd << 1) | ((value >> bit) & 1)) & 0xFFF

    return (bcd >> 8) & 0xF, (bcd >> 4) & 0xF, bcd & 0xF


class CPU:
    def __init__(self, ram, stack, framebuffer, keypad, timers, debugger, rand=None):
        self.ram = ram
        self.stack = stack
        self.framebuffer = framebuffer
        self.keypad = keypad
        self.timers = timers
        self.debugger = debugger
        self.live_debug = self.debugger.is_live()
        self.rand = Random() if rand is None else rand

        # Decoded operation -> handler.  Handlers which change the screen return STATUS_REDRAW.
        self.instructions = {
            "00E0": self._00E0,
            "00EE": self._00EE,
            "1nnn": self._1nnn,
            "2nnn": self._2nnn,
            "3xnn": self._3xnn,
            "4xnn": self._4xnn,
            "5xy0": self._5xy0,
            "6xnn": self._6xnn,
            "7xnn": self._7xnn,
            "8xy0": self._8xy0,
            "8xy1": self._8xy1,
            "8xy2": self._8xy2,
            "8xy3": self._8xy3,
            "8xy4": self._8xy4,
            "8xy5": self._8xy5,
            "8xy6": self._8xy6,
            "8xy7": self._8xy7,
            "8xyE": self._8xyE,
            "9xy0": self._9xy0,
            "Annn": self._Annn,
            "Bnnn": self._Bnnn,
            "Cxnn": self._Cxnn,
            "Dxyn": self._Dxyn,
            "Ex9E": self._Ex9E,
            "ExA1": self._ExA1,
            "Fx07": self._Fx07,
            "Fx0A": self._Fx0A,
            "Fx15": self._Fx15,
            "Fx18": self._Fx18,
            "Fx1E": self._Fx1E,
            "Fx29": self._Fx29,
            "Fx33": self._Fx33,
            "Fx55": self._Fx55,
            "Fx65": self._Fx65
        }

        self.reset()

    def reset(self):
        self.v = memoryview(bytearray(REGISTER_COUNT))  # Mutable bytes, so register updates are fast
        self.i = 0  # Index register
        self.pc = PROGRAM_LOC
        self.debug_pc = PROGRAM_LOC
        self.opcode = 0
        self.ram.clear()
        self.stack.clear()
        self.framebuffer.clear()
        self.keypad.release_all()
        self.timers.reset()

        if self.ram.write_block(FONT_LOC, SYSTEM_FONT) < len(SYSTEM_FONT):
            raise CPUError("Insufficient memory to write the system font")

    def load(self, program):
        if self.ram.write_block(PROGRAM_LOC, program) < len(program):
            raise CPUError(
                "Program is too large.  {} bytes were supplied, but only {} bytes are available from 0x{:03x}".format(
                    len(program), self.ram.mem_limit - PROGRAM_LOC, PROGRAM_LOC
                )
            )

        self.pc = PROGRAM_LOC

    def step(self):
        # Keep track of the program counter before altering it in any way for debugging purposes
        self.debug_pc = self.pc
        self.opcode = None  # Nothing fetched yet, in case the fetch itself fails
        self.opcode = self.fetch()
        self.inc_pc()  # Program counter updates after fetch, but before execute
        status = self.decode_exec() or 0
        timers = self.timers
        timers.tick()

        if timers.st > 0:
            status |= STATUS_SOUND

        if timers.dt > 0:
            status |= STATUS_DELAY

        return status

    def opcode_at(self, location):
        block = self.ram.read_block(location, 2)

        if len(block) < 2:
            self._fatal("Program runaway.  No complete instruction at address 0x{:03x}.".format(location))

        return from_bytes(block)

    def fetch(self):
        return self.opcode_at(self.pc)

    def decode_exec(self):
        try:
            instruction = decode(self.opcode)
        except DecodeError:
            self._fatal("Opcode 0x{:04x} at address 0x{:03x} is not emulated.".format(self.opcode, self.debug_pc))

        if self.live_debug:
            self.debugger.output(self, disassemble(instruction))

        try:
            return self.instructions[instruction.op](instruction)
        except StackError as error:
            self._fatal("{} at address 0x{:03x}.".format(error, self.debug_pc))

    def inc_pc(self):
        self.pc = (self.pc + 2) & 0xFFFF

    def dec_pc(self):
        # Only used to re-run the key wait instruction
        self.pc = (self.pc - 2) & 0xFFFF

    def _fatal(self, reason):
        instruction = "???"

        if self.opcode is not None:
            try:
                instruction = disassemble(self.opcode)
            except DecodeError:
                pass

        raise CPUError(
            "Emulation halted.\n\n{}Debug info:\n{}\n\n{}".format(
                APP_INTRO, self.debugger.debug(self, instruction, verbose=True), reason
            )
        ) from None

    # Host-facing accessors

    def set_key(self, key, down):
        self.keypad.set_key(key, down)

    def get_pc(self):
        return self.pc

    def get_i(self):
        return self.i

    def get_register(self, reg):
        return self.v[reg & 0xF]

    def get_stack_depth(self):
        return self.stack.get_depth()

    def get_display(self):
        return self.framebuffer.get_cells()

    # Instructions

    def _00E0(self, ins):  # CLS
        self.framebuffer.clear()
        return STATUS_REDRAW

    def _00EE(self, ins):  # RET
        self.pc = self.stack.pop()

    def _1nnn(self, ins):  # JP addr
        self.pc = ins.nnn

    def _2nnn(self, ins):  # CALL addr
        self.stack.push(self.pc)
        self.pc = ins.nnn

    def _3xnn(self, ins):  # SE Vx, byte
        if self.v[ins.x] == ins.nn:
            self.inc_pc()

    def _4xnn(self, ins):  # SNE Vx, byte
        if self.v[ins.x] != ins.nn:
            self.inc_pc()

    def _5xy0(self, ins):  # SE Vx, Vy
        if self.v[ins.x] == self.v[ins.y]:
            self.inc_pc()

    def _6xnn(self, ins):  # LD Vx, byte
        self.v[ins.x] = ins.nn

    def _7xnn(self, ins):  # ADD Vx, byte
        # No carry flag for this one
        self.v[ins.x] = (self.v[ins.x] + ins.nn) & 0xFF

    def _8xy0(self, ins):  # LD Vx, Vy
        self.v[ins.x] = self.v[ins.y]

    # OR, AND and XOR reset Vf before the operation, so Vf as an operand reads as zero
    def _8xy1(self, ins):  # OR Vx, Vy
        self.v[CARRY_FLAG] = 0
        self.v[ins.x] |= self.v[ins.y]

    def _8xy2(self, ins):  # AND Vx, Vy
        self.v[CARRY_FLAG] = 0
        self.v[ins.x] &= self.v[ins.y]

    def _8xy3(self, ins):  # XOR Vx, Vy
        self.v[CARRY_FLAG] = 0
        self.v[ins.x] ^= self.v[ins.y]

    # The remaining ALU instructions read both operands before writing anything, then set Vf last, so the flag wins if
    # Vf is also the destination
    def _8xy4(self, ins):  # ADD Vx, Vy
        val = self.v[ins.x] + self.v[ins.y]
        self.v[ins.x] = val & 0xFF
        self.v[CARRY_FLAG] = int(val > 0xFF)

    def _8xy5(self, ins):  # SUB Vx, Vy
        vx = self.v[ins.x]
        vy = self.v[ins.y]
        self.v[ins.x] = (vx - vy) & 0xFF
        self.v[CARRY_FLAG] = int(vx >= vy)  # Vf is set when NOT borrowing

    def _8xy6(self, ins):  # SHR Vx
        val = self.v[ins.x]
        self.v[ins.x] = val >> 1
        self.v[CARRY_FLAG] = val & 1

    def _8xy7(self, ins):  # SUBN Vx, Vy
        vx = self.v[ins.x]
        vy = self.v[ins.y]
        self.v[ins.x] = (vy - vx) & 0xFF
        self.v[CARRY_FLAG] = int(vy >= vx)

    def _8xyE(self, ins):  # SHL Vx
        val = self.v[ins.x]
        self.v[ins.x] = (val << 1) & 0xFF
        self.v[CARRY_FLAG] = val >> 7

    def _9xy0(self, ins):  # SNE Vx, Vy
        if self.v[ins.x] != self.v[ins.y]:
            self.inc_pc()

    def _Annn(self, ins):  # LD I, addr
        self.i = ins.nnn

    def _Bnnn(self, ins):  # JP V0, addr
        self.pc = ins.nnn + self.v[0]

    def _Cxnn(self, ins):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[ins.x] = self.rand.randint(0, 0xFF) & ins.nn

    def _Dxyn(self, ins):  # DRW Vx, Vy, nibble
        # Coordinates are read before the collision flag is reset, in case either comes from Vf
        vx_pos = self.v[ins.x]
        vy_pos = self.v[ins.y]
        self.v[CARRY_FLAG] = 0
        i = self.i
        rows = [self.ram.read(i + row) for row in range(ins.n)]
        self.v[CARRY_FLAG] = int(self.framebuffer.draw_sprite(vx_pos, vy_pos, rows))
        return STATUS_REDRAW

    def _Ex9E(self, ins):  # SKP Vx
        if self.keypad.is_key_down(self.v[ins.x]):
            self.inc_pc()

    def _ExA1(self, ins):  # SKNP Vx
        if not self.keypad.is_key_down(self.v[ins.x]):
            self.inc_pc()

    def _Fx07(self, ins):  # LD Vx, DT
        self.v[ins.x] = self.timers.dt

    def _Fx0A(self, ins):  # LD Vx, K
        # Rather than blocking, come back here on the next step until a key is held.  The timers keep running and the
        # driver keeps servicing the host in the meantime.
        key = self.keypad.get_first_key_down()

        if key is None:
            self.dec_pc()
        else:
            self.v[ins.x] = key

    def _Fx15(self, ins):  # LD DT, Vx
        self.timers.set_delay(self.v[ins.x])

    def _Fx18(self, ins):  # LD ST, Vx
        self.timers.set_sound(self.v[ins.x])

    def _Fx1E(self, ins):  # ADD I, Vx
        self.i = (self.i + self.v[ins.x]) & INDEX_MASK

    def _Fx29(self, ins):  # LD F, Vx
        self.i = FONT_LOC + (self.v[ins.x] & 0xF) * FONT_GLYPH_SIZE

    def _Fx33(self, ins):  # LD B, Vx
        i = self.i

        for offset, digit in enumerate(to_bcd(self.v[ins.x])):  # Hundreds, tens, then ones
            self.ram.write(i + offset, digit)

    def _Fx55(self, ins):  # LD [I], Vx
        i = self.i

        # Vx itself is included
        for reg in range(ins.x + 1):
            self.ram.write(i + reg, self.v[reg])

    def _Fx65(self, ins):  # LD Vx, [I]
        i = self.i

        for reg in range(ins.x + 1):
            self.v[reg] = self.ram.read(i + reg)
