#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "Chip8VM Emulator"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map
MEMORY_SIZE = 0x1000
START_ADDRESS = 0x200
FONT_SET_START_ADDRESS = 0x50
MAX_PROGRAM_SIZE = MEMORY_SIZE - START_ADDRESS

# Register file, stack and keypad
NUM_REGISTERS = 0x10
STACK_LEVELS = 16
NUM_KEYS = 0x10

# Display
VIDEO_WIDTH = 64
VIDEO_HEIGHT = 32
PIXEL_ON = 0xFFFFFFFF  # Packed 32-bit colour, so the buffer can be blitted as-is
PIXEL_OFF = 0x00000000

# How sprite pixels beyond the right or bottom edge are handled.  The sprite's origin always wraps.
EDGE_LINEAR = "linear"  # Plot at y * width + x with no clipping.  Pixels past the buffer end are an error
EDGE_CLIP = "clip"      # Drop pixels outside the screen
EDGE_WRAP = "wrap"      # Wrap every pixel around the screen
EDGE_MODES = [EDGE_LINEAR, EDGE_CLIP, EDGE_WRAP]

# Timing
DEFAULT_CLOCK_SPEED = 1000  # Instructions per second
TIMER_FREQ = 60.0

# Default mappings for keys 0-F (PyGame keyscan codes, which match ASCII on a UK QWERTY keyboard)
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# 16 glyphs, 0-F, 5 bytes (rows) each
FONT_SET = bytes((
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
))
FONT_GLYPH_SIZE = 5
