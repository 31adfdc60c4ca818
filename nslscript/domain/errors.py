from __future__ import annotations


class NslError(Exception):
    """Base class for everything this package raises on bad script input."""


class NslRangeError(NslError, ValueError):
    """An immediate value does not fit the field the device reads it from."""


class NslAddressingError(NslError, ValueError):
    """A step, memory slot or parameter index is outside the device's tables."""


class NslStructureError(NslError, TypeError):
    """A command was given operands its opcode cannot carry."""


class NslDecodeError(NslError, ValueError):
    """A byte string is not a well-formed NSL script."""
