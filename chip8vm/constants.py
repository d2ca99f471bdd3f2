#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "Emul8"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map
MEM_SIZE = 0x1000
MEM_LIMIT = 0xFFF  # Block transfers stop before this address
FONT_LOC = 0x50
PROGRAM_LOC = 0x200

# Registers
REGISTER_COUNT = 16
CARRY_FLAG = 0xF
INDEX_MASK = 0xFFFF

# Stack depth is a hardware limit, not a tuning value
STACK_SIZE = 16

# Input latch
KEY_COUNT = 16

# Display
VID_WIDTH = 64
VID_HEIGHT = 32
SPRITE_WIDTH = 8

# Timing
TIMER_FREQ = 60.0   # 60Hz timer decay
DISPLAY_FREQ = 60.0  # 60Hz host display refresh
CLOCK_SPEED = 700    # Default instructions per second

# Status flags returned from each CPU step
STATUS_DELAY = 1 << 0
STATUS_SOUND = 1 << 1
STATUS_REDRAW = 1 << 2

# Default mappings for keys 0-F.  Note that the keyscans (on a UK QWERTY keyboard) and ASCII characters for these are
# the same code, laid out as 1234/QWER/ASDF/ZXCV
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# Host control keys, as lowercase ASCII (also matching PyGame keyscans)
CONTROL_PAUSE = ord("p")
CONTROL_STEP = ord("n")

# Hexadecimal digit glyphs, 5 rows each
SYSTEM_FONT = bytes((
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
