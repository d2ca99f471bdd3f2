#!/usr/bin/env python3

"""
Stack Emulator

The call stack has no specified location in system RAM, and there is no stack
pointer (SP) register exposed to the running program, so it is kept in host
memory as a fixed set of slots with a depth counter.

The number of slots is a limit of the original hardware, so programs which
nest calls too deeply must fail rather than grow the stack.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import STACK_SIZE


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size=STACK_SIZE):
        self.items = [0] * size
        self.size = size
        self.depth = 0

    def push(self, item):
        depth = self.depth

        if depth >= self.size:
            raise StackError("Stack overflow")

        self.items[depth] = item
        self.depth = depth + 1

    def pop(self):
        if self.depth == 0:
            raise StackError("Stack underflow")

        self.depth -= 1
        return self.items[self.depth]

    def clear(self):
        self.items[:] = [0] * self.size
        self.depth = 0

    def get_depth(self):
        return self.depth

    def get_items(self):
        # For debugging
        return self.items[:self.depth]
