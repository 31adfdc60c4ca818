from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from nslscript.domain.errors import NslRangeError, NslStructureError
from nslscript.domain.operands import Operand
from nslscript.protocol.codes import MAX_JUMP_ADDRESS, NslCommandCodes


@dataclass(frozen=True)
class Command:
    """Base of every NSL instruction.

    Subclasses fix the opcode and the operand shape, so a command with the
    wrong arity can't be built: the dataclass constructor rejects it.
    Encoded form is `[opcode] + operand bytes`.
    """

    opcode: ClassVar[int]
    length: ClassVar[int] = 1

    def __post_init__(self) -> None:
        if not hasattr(type(self), "opcode"):
            raise NslStructureError(f"{type(self).__name__} has no opcode and cannot be encoded")

    def operands(self) -> tuple[Operand, ...]:
        return ()

    def code(self) -> bytes:
        out = bytearray([self.opcode])
        for operand in self.operands():
            out.extend(operand.code())
        return bytes(out)

    def __str__(self) -> str:
        args = ", ".join(str(op) for op in self.operands())
        return f"{type(self).__name__}({args})"


def _check_operand(command: Command, slot: str, value: object) -> None:
    if not isinstance(value, Operand):
        raise NslStructureError(
            f"{type(command).__name__}.{slot} must be an Operand, got {type(value).__name__}"
        )


@dataclass(frozen=True)
class _AssignCommand(Command):
    """`destination <op>= source`.

    The destination must be a step sequence or memory buffer slot. The firmware
    format itself does not forbid other sources here; this library refuses them
    at construction, and the decoder rejects files that use them.
    """

    destination: Operand
    source: Operand

    length: ClassVar[int] = 5

    def __post_init__(self) -> None:
        super().__post_init__()
        _check_operand(self, "destination", self.destination)
        _check_operand(self, "source", self.source)
        if not self.destination.kind.is_writable:
            raise NslStructureError(
                f"{type(self).__name__} cannot write to {self.destination}: "
                "destination must be a step sequence or memory buffer slot"
            )

    def operands(self) -> tuple[Operand, ...]:
        return (self.destination, self.source)


@dataclass(frozen=True)
class _PairCommand(Command):
    x: Operand
    y: Operand

    length: ClassVar[int] = 5

    def __post_init__(self) -> None:
        super().__post_init__()
        _check_operand(self, "x", self.x)
        _check_operand(self, "y", self.y)

    def operands(self) -> tuple[Operand, ...]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Set(_AssignCommand):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_SET


@dataclass(frozen=True)
class Copy(_PairCommand):
    """Copies x to y."""

    opcode: ClassVar[int] = NslCommandCodes.NSLC_COPY


@dataclass(frozen=True)
class ClearTrack(Command):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_CLEAR_TRACK


@dataclass(frozen=True)
class ClearMemory(Command):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_CLEAR_MEMORY


@dataclass(frozen=True)
class ClearAll(Command):
    """Clears all tracks and the memory buffer."""

    opcode: ClassVar[int] = NslCommandCodes.NSLC_CLEAR_ALL


@dataclass(frozen=True)
class Add(_AssignCommand):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_ADD


@dataclass(frozen=True)
class Subtract(_AssignCommand):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_SUBTRACT


@dataclass(frozen=True)
class Multiply(_AssignCommand):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_MULTIPLY


@dataclass(frozen=True)
class Divide(_AssignCommand):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_DIVIDE


@dataclass(frozen=True)
class QuantizePitch(Command):
    """Quantizes every step of the active track's pitch sequence."""

    opcode: ClassVar[int] = NslCommandCodes.NSLC_QUANTIZE_PITCH


@dataclass(frozen=True)
class GenerateProgression(Command):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_GENERATE_PROGRESSION


@dataclass(frozen=True)
class GenerateEuclidean(_PairCommand):
    """Writes a Euclidean rhythm into the active track's velocity sequence."""

    opcode: ClassVar[int] = NslCommandCodes.NSLC_GENERATE_EUCLIDEAN


@dataclass(frozen=True)
class LoopSet(Command):
    count: Operand

    opcode: ClassVar[int] = NslCommandCodes.NSLC_LOOP_SET
    length: ClassVar[int] = 3

    def __post_init__(self) -> None:
        super().__post_init__()
        _check_operand(self, "count", self.count)

    def operands(self) -> tuple[Operand, ...]:
        return (self.count,)


@dataclass(frozen=True)
class LoopEnd(Command):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_LOOP_END


@dataclass(frozen=True)
class Jump(Command):
    """Jump to a byte address, sent as a 16-bit big-endian word."""

    address: int

    opcode: ClassVar[int] = NslCommandCodes.NSLC_JUMP
    length: ClassVar[int] = 3

    def __post_init__(self) -> None:
        super().__post_init__()
        if isinstance(self.address, bool) or not isinstance(self.address, int):
            raise NslStructureError(f"Jump.address must be an int, got {type(self.address).__name__}")
        if not 0 <= self.address <= MAX_JUMP_ADDRESS:
            raise NslRangeError(f"Jump.address must be 0..0x{MAX_JUMP_ADDRESS:X}, got {self.address}")

    def code(self) -> bytes:
        return bytes([self.opcode]) + self.address.to_bytes(2, "big")

    def __str__(self) -> str:
        return f"Jump(0x{self.address:04X})"


@dataclass(frozen=True)
class CondE(_PairCommand):
    """Runs the following block while x == y."""

    opcode: ClassVar[int] = NslCommandCodes.NSLC_COND_E


@dataclass(frozen=True)
class CondNE(_PairCommand):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_COND_NE


@dataclass(frozen=True)
class CondGT(_PairCommand):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_COND_GT


@dataclass(frozen=True)
class CondLT(_PairCommand):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_COND_LT


@dataclass(frozen=True)
class CondGTE(_PairCommand):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_COND_GTE


@dataclass(frozen=True)
class CondLTE(_PairCommand):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_COND_LTE


@dataclass(frozen=True)
class CondEnd(Command):
    opcode: ClassVar[int] = NslCommandCodes.NSLC_COND_END


@dataclass(frozen=True)
class End(Command):
    """Ends the script."""

    opcode: ClassVar[int] = NslCommandCodes.NSLC_END


COMMANDS_BY_OPCODE: dict[int, type[Command]] = {
    cls.opcode: cls
    for cls in (
        Set,
        Copy,
        ClearTrack,
        ClearMemory,
        ClearAll,
        Add,
        Subtract,
        Multiply,
        Divide,
        QuantizePitch,
        GenerateProgression,
        GenerateEuclidean,
        LoopSet,
        LoopEnd,
        Jump,
        CondE,
        CondNE,
        CondGT,
        CondLT,
        CondGTE,
        CondLTE,
        CondEnd,
        End,
    )
}
