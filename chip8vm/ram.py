#!/usr/bin/env python3

"""
RAM Emulator

A flat 4K bank holding the system font and the loaded program.  Supports
reading and writing of blocks of memory or individual bytes, and zeroing the
whole bank on reset.

Block transfers never fault.  They stop before the last address of the bank
and report how many bytes were actually moved, so callers that need the whole
block (program loading, font loading, instruction fetches) can decide whether a
short transfer is fatal.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE, MEM_LIMIT


class RAMError(Exception):
    pass


class RAM:
    def __init__(self, mem_size=MEM_SIZE, mem_limit=MEM_LIMIT):
        if mem_size <= 0 or mem_size & (mem_size - 1):
            raise RAMError("Memory size must be a power of 2")

        if mem_limit > mem_size:
            raise RAMError("Transfer limit lies outside of memory")

        self.mem = memoryview(bytearray(mem_size))
        self.mem_size = mem_size
        self.mem_limit = mem_limit
        self.addr_mask = mem_size - 1

    def read(self, location):
        # Single byte accesses wrap around the bank
        return self.mem[location & self.addr_mask]

    def write(self, location, byte):
        self.mem[location & self.addr_mask] = byte

    def _transfer_size(self, location, size):
        if location < 0:
            raise RAMError("Negative memory address")

        return max(0, min(size, self.mem_limit - location))

    def read_block(self, location, size=1):
        # May return fewer bytes than requested if the block runs into the limit
        return bytes(self.mem[location:location + self._transfer_size(location, size)])

    def write_block(self, location, block):
        # Returns the number of bytes written
        written = self._transfer_size(location, len(block))
        self.mem[location:location + written] = block[:written]
        return written

    def clear(self):
        self.mem[:] = bytes(self.mem_size)
