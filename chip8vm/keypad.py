#!/usr/bin/env python3

"""
Keypad Emulator

Sixteen keys, 0-F, each held as a single byte: 1 when pressed, 0 when
released.  The host writes key state here (usually through an Inputs plugin)
and the CPU reads it back.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_KEYS


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.keys = memoryview(bytearray(NUM_KEYS))

    def check_key(self, key):
        if key < 0 or key >= NUM_KEYS:
            raise KeypadError("Key 0x{:02x} is outside the keypad range 0x0-0xf".format(key))

    def press(self, key):
        self.check_key(key)
        self.keys[key] = 1

    def release(self, key):
        self.check_key(key)
        self.keys[key] = 0

    def set_state(self, states):
        # Replace the whole keypad at once from 16 pressed/released values
        if len(states) != NUM_KEYS:
            raise KeypadError("Keypad state must have exactly {} entries".format(NUM_KEYS))

        for key, state in enumerate(states):
            self.keys[key] = int(bool(state))

    def is_key_down(self, key):
        self.check_key(key)
        return self.keys[key] != 0

    def get_pressed(self):
        # Lowest pressed key, or None
        for key in range(NUM_KEYS):
            if self.keys[key]:
                return key

        return None

    def clear(self):
        for key in range(NUM_KEYS):
            self.keys[key] = 0
