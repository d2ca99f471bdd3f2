#!/usr/bin/env python3

"""
Instruction Decoder

Every instruction is a 16-bit big-endian word.  The first nibble selects one of
16 groups, and some groups are split further by a second bitmask:

    * 0x0          : Whole word must match (0xFFFF)
    * 0x5, 0x8, 0x9: First and last nibbles (0xF00F)
    * 0xE, 0xF     : First nibble and last byte (0xF0FF)
    * Others       : First nibble only (0xF000)

Decoding splits the word into all of its operand fields and names the
operation using its conventional pattern (e.g. '8xy4'), which the CPU then uses
to look up the handler.  The table is closed, so anything which does not match
is rejected rather than skipped.

Operand naming:
    * x/y = register (0-15)
    * n   = nibble
    * nn  = byte
    * nnn = address
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple

CPU_ENDIAN = "big"  # CHIP-8 is big-endian

Instruction = namedtuple("Instruction", ["op", "opcode", "kind", "x", "y", "n", "nn", "nnn"])

SUB_OPCODE_MASKS = {
    0x0: 0xFFFF,
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF
}

# Masked opcode -> (operation, disassembly format)
INSTRUCTIONS = {
    0x00E0: ("00E0", "CLS"),
    0x00EE: ("00EE", "RET"),
    0x1000: ("1nnn", "JP 0x{nnn:03x}"),
    0x2000: ("2nnn", "CALL 0x{nnn:03x}"),
    0x3000: ("3xnn", "SE V{x:01x}, 0x{nn:02x}"),
    0x4000: ("4xnn", "SNE V{x:01x}, 0x{nn:02x}"),
    0x5000: ("5xy0", "SE V{x:01x}, V{y:01x}"),
    0x6000: ("6xnn", "LD V{x:01x}, 0x{nn:02x}"),
    0x7000: ("7xnn", "ADD V{x:01x}, 0x{nn:02x}"),
    0x8000: ("8xy0", "LD V{x:01x}, V{y:01x}"),
    0x8001: ("8xy1", "OR V{x:01x}, V{y:01x}"),
    0x8002: ("8xy2", "AND V{x:01x}, V{y:01x}"),
    0x8003: ("8xy3", "XOR V{x:01x}, V{y:01x}"),
    0x8004: ("8xy4", "ADD V{x:01x}, V{y:01x}"),
    0x8005: ("8xy5", "SUB V{x:01x}, V{y:01x}"),
    0x8006: ("8xy6", "SHR V{x:01x}"),
    0x8007: ("8xy7", "SUBN V{x:01x}, V{y:01x}"),
    0x800E: ("8xyE", "SHL V{x:01x}"),
    0x9000: ("9xy0", "SNE V{x:01x}, V{y:01x}"),
    0xA000: ("Annn", "LD I, 0x{nnn:03x}"),
    0xB000: ("Bnnn", "JP V0, 0x{nnn:03x}"),
    0xC000: ("Cxnn", "RND V{x:01x}, 0x{nn:02x}"),
    0xD000: ("Dxyn", "DRW V{x:01x}, V{y:01x}, 0x{n:01x}"),
    0xE09E: ("Ex9E", "SKP V{x:01x}"),
    0xE0A1: ("ExA1", "SKNP V{x:01x}"),
    0xF007: ("Fx07", "LD V{x:01x}, DT"),
    0xF00A: ("Fx0A", "LD V{x:01x}, K"),
    0xF015: ("Fx15", "LD DT, V{x:01x}"),
    0xF018: ("Fx18", "LD ST, V{x:01x}"),
    0xF01E: ("Fx1E", "ADD I, V{x:01x}"),
    0xF029: ("Fx29", "LD F, V{x:01x}"),
    0xF033: ("Fx33", "LD B, V{x:01x}"),
    0xF055: ("Fx55", "LD [I], V{x:01x}"),
    0xF065: ("Fx65", "LD V{x:01x}, [I]")
}

OPERATIONS = {op: fmt for op, fmt in INSTRUCTIONS.values()}


class DecodeError(Exception):
    pass


def from_bytes(block):
    # Two sequential memory bytes, high byte first
    return int.from_bytes(block, CPU_ENDIAN, signed=False)


def mask_opcode(opcode):
    kind = (opcode & 0xF000) >> 12
    return opcode & SUB_OPCODE_MASKS.get(kind, 0xF000)


def decode(opcode):
    if not 0 <= opcode <= 0xFFFF:
        raise DecodeError("Opcode 0x{:x} is not a 16-bit word".format(opcode))

    entry = INSTRUCTIONS.get(mask_opcode(opcode))

    if entry is None:
        raise DecodeError("Unknown opcode 0x{:04x}".format(opcode))

    return Instruction(
        op=entry[0],
        opcode=opcode,
        kind=(opcode & 0xF000) >> 12,
        x=(opcode & 0xF00) >> 8,
        y=(opcode & 0xF0) >> 4,
        n=opcode & 0xF,
        nn=opcode & 0xFF,
        nnn=opcode & 0xFFF
    )


def disassemble(opcode):
    if isinstance(opcode, Instruction):
        instruction = opcode
    else:
        instruction = decode(opcode)

    return OPERATIONS[instruction.op].format(**instruction._asdict())
