from __future__ import annotations

"""NGEN NSL script constants.

Byte values for the NSL binary script format as read by the NGEN firmware.
Keep format constants here so the rest of the codebase doesn't duplicate them.
"""


class NslCommandCodes:
    # Assignment / housekeeping
    NSLC_SET = 0xA1
    NSLC_COPY = 0xA2
    NSLC_CLEAR_TRACK = 0xA3
    NSLC_CLEAR_MEMORY = 0xA4
    NSLC_CLEAR_ALL = 0xA5

    # Arithmetic and generators
    NSLC_ADD = 0xB0
    NSLC_SUBTRACT = 0xB1
    NSLC_MULTIPLY = 0xB2
    NSLC_DIVIDE = 0xB3
    NSLC_QUANTIZE_PITCH = 0xB4
    NSLC_GENERATE_PROGRESSION = 0xB5
    NSLC_GENERATE_EUCLIDEAN = 0xB6

    # Flow control
    NSLC_LOOP_SET = 0xC0
    NSLC_LOOP_END = 0xC1
    NSLC_JUMP = 0xC2

    # Conditionals
    NSLC_COND_E = 0xD0
    NSLC_COND_NE = 0xD1
    NSLC_COND_GT = 0xD2
    NSLC_COND_LT = 0xD3
    NSLC_COND_GTE = 0xD4
    NSLC_COND_LTE = 0xD5
    NSLC_COND_END = 0xD6

    NSLC_END = 0xFF


class NslSourceCodes:
    """First byte of every two-byte operand."""

    SRC_CONSTANT = 0x00
    SRC_RANDOM = 0x01
    SRC_STEP_PITCH = 0x02
    SRC_STEP_VELOCITY = 0x03
    SRC_STEP_LENGTH = 0x04
    SRC_STEP_DENSITY = 0x05
    SRC_MEMORY_BUFFER = 0x06
    SRC_PARAMS = 0x07
    SRC_SCALE = 0x08
    SRC_FULL_SCALE = 0x09
    SRC_RANDOM_NOTE = 0x0A


# "NSL" followed by the format version.
NSL_MAGIC = b"NSL"
NSL_FORMAT_VERSION = 0x01
NSL_HEADER = NSL_MAGIC + bytes([NSL_FORMAT_VERSION])

# Value byte: 0x00..0x7F is an immediate number, 0x80 + i reads memory buffer slot i.
BUFFER_REF_FLAG = 0x80
MAX_IMMEDIATE_VALUE = 0x7F

MAX_STEP_INDEX = 31
MAX_MEMORY_SLOT = 31
MAX_PARAM_INDEX = 3
MAX_RANDOM_NOTE = 100

MAX_JUMP_ADDRESS = 0xFFFF
