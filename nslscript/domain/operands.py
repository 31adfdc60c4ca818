from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from nslscript.domain.errors import NslAddressingError, NslRangeError, NslStructureError
from nslscript.protocol.codes import (
    BUFFER_REF_FLAG,
    MAX_IMMEDIATE_VALUE,
    MAX_MEMORY_SLOT,
    MAX_PARAM_INDEX,
    MAX_RANDOM_NOTE,
    MAX_STEP_INDEX,
    NslSourceCodes,
)


class SourceKind(Enum):
    """Where an operand reads (or writes) its value.

    The enum value is the source byte written in front of the value byte.
    """

    CONSTANT = NslSourceCodes.SRC_CONSTANT
    RANDOM = NslSourceCodes.SRC_RANDOM
    STEP_PITCH = NslSourceCodes.SRC_STEP_PITCH
    STEP_VELOCITY = NslSourceCodes.SRC_STEP_VELOCITY
    STEP_LENGTH = NslSourceCodes.SRC_STEP_LENGTH
    STEP_DENSITY = NslSourceCodes.SRC_STEP_DENSITY
    MEMORY_BUFFER = NslSourceCodes.SRC_MEMORY_BUFFER
    PARAMS = NslSourceCodes.SRC_PARAMS
    SCALE = NslSourceCodes.SRC_SCALE
    FULL_SCALE = NslSourceCodes.SRC_FULL_SCALE
    RANDOM_NOTE = NslSourceCodes.SRC_RANDOM_NOTE

    @property
    def max_value(self) -> int:
        return _MAX_VALUE[self]

    @property
    def is_address(self) -> bool:
        """True when the value indexes a device table rather than being a quantity."""
        return self in _ADDRESS_KINDS

    @property
    def is_writable(self) -> bool:
        return self in _WRITABLE_KINDS

    @classmethod
    def from_code(cls, code: int) -> SourceKind | None:
        try:
            return cls(code)
        except ValueError:
            return None


_MAX_VALUE: dict[SourceKind, int] = {
    SourceKind.CONSTANT: MAX_IMMEDIATE_VALUE,
    SourceKind.RANDOM: MAX_IMMEDIATE_VALUE,
    SourceKind.STEP_PITCH: MAX_STEP_INDEX,
    SourceKind.STEP_VELOCITY: MAX_STEP_INDEX,
    SourceKind.STEP_LENGTH: MAX_STEP_INDEX,
    SourceKind.STEP_DENSITY: MAX_STEP_INDEX,
    SourceKind.MEMORY_BUFFER: MAX_MEMORY_SLOT,
    SourceKind.PARAMS: MAX_PARAM_INDEX,
    SourceKind.SCALE: MAX_IMMEDIATE_VALUE,
    SourceKind.FULL_SCALE: MAX_IMMEDIATE_VALUE,
    SourceKind.RANDOM_NOTE: MAX_RANDOM_NOTE,
}

_ADDRESS_KINDS = frozenset(
    {
        SourceKind.STEP_PITCH,
        SourceKind.STEP_VELOCITY,
        SourceKind.STEP_LENGTH,
        SourceKind.STEP_DENSITY,
        SourceKind.MEMORY_BUFFER,
        SourceKind.PARAMS,
    }
)

# Step sequences and the memory buffer are the only state a script can assign to.
_WRITABLE_KINDS = frozenset(
    {
        SourceKind.STEP_PITCH,
        SourceKind.STEP_VELOCITY,
        SourceKind.STEP_LENGTH,
        SourceKind.STEP_DENSITY,
        SourceKind.MEMORY_BUFFER,
    }
)


def _require_int(value: object, what: str) -> int:
    # bool is an int subclass; True/False as a step index is always a mistake.
    if isinstance(value, bool) or not isinstance(value, int):
        raise NslStructureError(f"{what} must be an int, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class BufferRef:
    """Indirect value: whatever memory buffer slot `slot` holds when the script runs."""

    slot: int

    def __post_init__(self) -> None:
        slot = _require_int(self.slot, "memory buffer slot")
        if not 0 <= slot <= MAX_MEMORY_SLOT:
            raise NslAddressingError(f"memory buffer slot must be 0..{MAX_MEMORY_SLOT}, got {slot}")

    def code(self) -> int:
        return BUFFER_REF_FLAG + self.slot

    def __str__(self) -> str:
        return f"buffer({self.slot})"


def buffer(slot: int) -> BufferRef:
    return BufferRef(slot)


@dataclass(frozen=True)
class Operand:
    """A two-byte NSL data source: `[kind code, value byte]`.

    `value` is either an immediate int, bounded by the kind's maximum, or a
    `BufferRef`. Immediates at or above 0x80 would read as buffer references,
    so every value is range-checked here.
    """

    kind: SourceKind
    value: int | BufferRef

    def __post_init__(self) -> None:
        if not isinstance(self.kind, SourceKind):
            raise NslStructureError(f"operand kind must be a SourceKind, got {self.kind!r}")

        if isinstance(self.value, BufferRef):
            return

        value = _require_int(self.value, f"{self.kind.name.lower()} value")
        max_value = self.kind.max_value
        if not 0 <= value <= max_value:
            error_cls = NslAddressingError if self.kind.is_address else NslRangeError
            raise error_cls(f"{self.kind.name.lower()} value must be 0..{max_value}, got {value}")

    @property
    def is_buffer_ref(self) -> bool:
        return isinstance(self.value, BufferRef)

    def value_code(self) -> int:
        if isinstance(self.value, BufferRef):
            return self.value.code()
        return self.value

    def code(self) -> bytes:
        return bytes([self.kind.value, self.value_code()])

    def __str__(self) -> str:
        return f"{self.kind.name.lower()}({self.value})"


def decode_value_byte(value_byte: int) -> int | BufferRef:
    """Split a raw value byte into an immediate or a buffer reference."""

    if value_byte & BUFFER_REF_FLAG:
        return BufferRef(value_byte - BUFFER_REF_FLAG)
    return value_byte


def constant(value: int | BufferRef) -> Operand:
    return Operand(SourceKind.CONSTANT, value)


def random(value: int | BufferRef) -> Operand:
    """Random value between 0 and `value`."""
    return Operand(SourceKind.RANDOM, value)


def step_pitch(index: int | BufferRef) -> Operand:
    return Operand(SourceKind.STEP_PITCH, index)


def step_velocity(index: int | BufferRef) -> Operand:
    return Operand(SourceKind.STEP_VELOCITY, index)


def step_length(index: int | BufferRef) -> Operand:
    return Operand(SourceKind.STEP_LENGTH, index)


def step_density(index: int | BufferRef) -> Operand:
    return Operand(SourceKind.STEP_DENSITY, index)


def memory_buffer(slot: int | BufferRef) -> Operand:
    return Operand(SourceKind.MEMORY_BUFFER, slot)


def params(index: int | BufferRef) -> Operand:
    """User parameter 1..4, zero indexed."""
    return Operand(SourceKind.PARAMS, index)


def scale(value: int | BufferRef) -> Operand:
    return Operand(SourceKind.SCALE, value)


def full_scale(value: int | BufferRef) -> Operand:
    return Operand(SourceKind.FULL_SCALE, value)


def random_note(value: int | BufferRef) -> Operand:
    return Operand(SourceKind.RANDOM_NOTE, value)
