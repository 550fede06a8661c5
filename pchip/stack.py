#!/usr/bin/env python3

"""
Stack Emulator

There is no specified location for the call stack in memory, and no stack
pointer register is exposed to the running program, so the stack lives
outside of RAM and simply wraps a list.  The stack pointer is the number of
return addresses currently held.

Nesting deeper than the stack size, or returning with nothing on the stack,
is a fault rather than a silent wraparound.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size):
        self.items = []
        self.size = size

    def push(self, item):
        # Fetching the stack size with 'len' should be immediate, so no slow loop
        if len(self.items) >= self.size:
            raise StackError("Stack overflow")

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("Stack underflow") from None

    def get_pointer(self):
        return len(self.items)

    def get_items(self):
        # For diagnostics
        return self.items

    def clear(self):
        self.items.clear()
