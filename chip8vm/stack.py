#!/usr/bin/env python3

"""
Stack Emulator

The CHIP-8 call stack has no specified location in RAM, and programs cannot
reach it other than through CALL and RET, so it is held separately as a list.
The stack pointer (SP) is simply the number of return addresses held.

Pushing onto a full stack, or popping an empty one, raises a StackError.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size):
        self.items = []
        self.size = size

    @property
    def sp(self):
        return len(self.items)

    def push(self, item):
        if len(self.items) >= self.size:
            raise StackError("Stack overflow (more than {} nested calls)".format(self.size))

        self.items.append(item)

    def pop(self):
        try:
            return self.items.pop()
        except IndexError:
            raise StackError("Stack underflow (return with no active call)") from None

    def clear(self):
        self.items.clear()

    def get_items(self):
        # For diagnostics
        return self.items
