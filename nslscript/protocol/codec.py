from __future__ import annotations

import logging

from nslscript.domain.commands import COMMANDS_BY_OPCODE, Command, Jump
from nslscript.domain.errors import NslDecodeError, NslError
from nslscript.domain.operands import Operand, SourceKind, decode_value_byte
from nslscript.protocol.codes import NSL_HEADER, NSL_MAGIC


logger = logging.getLogger(__name__)


def format_nsl_bytes(data: bytes | bytearray | list[int], *, max_len: int | None = None) -> str:
    """Format bytes as upper-case hex pairs, e.g. `A1 02 00 00 24`.

    With `max_len`, output is truncated for logs.
    """

    raw = bytes(data)
    if max_len is None or len(raw) <= max_len:
        return " ".join(f"{b:02X}" for b in raw)

    hex_part = " ".join(f"{b:02X}" for b in raw[:max_len])
    return f"{hex_part} ...(+{len(raw) - max_len} bytes)"


def encode_commands(commands: list[Command] | tuple[Command, ...]) -> bytes:
    """Header followed by every command's bytes, in order."""

    out = bytearray(NSL_HEADER)
    for command in commands:
        cmd_code = command.code()
        logger.debug("Command: %s > %s", command, format_nsl_bytes(cmd_code))
        out.extend(cmd_code)
    return bytes(out)


def _decode_operand(data: bytes, offset: int) -> Operand:
    kind = SourceKind.from_code(data[offset])
    if kind is None:
        raise NslDecodeError(f"Unknown data source 0x{data[offset]:02X} at offset {offset}")
    return Operand(kind, decode_value_byte(data[offset + 1]))


def decode_command(data: bytes, offset: int) -> Command:
    """Decode the single instruction starting at `offset`."""

    opcode = data[offset]
    cls = COMMANDS_BY_OPCODE.get(opcode)
    if cls is None:
        raise NslDecodeError(f"Unknown opcode 0x{opcode:02X} at offset {offset}")

    end = offset + cls.length
    if end > len(data):
        raise NslDecodeError(
            f"Truncated {cls.__name__} at offset {offset}: needs {cls.length} bytes, "
            f"{len(data) - offset} left"
        )

    try:
        if cls is Jump:
            return Jump(int.from_bytes(data[offset + 1 : end], "big"))

        operands = [_decode_operand(data, pos) for pos in range(offset + 1, end, 2)]
        return cls(*operands)
    except NslDecodeError:
        raise
    except NslError as exc:
        raise NslDecodeError(f"Invalid {cls.__name__} at offset {offset}: {exc}") from exc


def decode_commands(data: bytes | bytearray) -> list[Command]:
    """Parse a complete NSL script (header included) into commands.

    Raises `NslDecodeError` on a missing header, an unknown opcode or data
    source, a truncated instruction, or an operand outside its range.
    """

    raw = bytes(data)
    logger.info("Decoding NSL script, size=%d", len(raw))

    if len(raw) < len(NSL_HEADER) or raw[: len(NSL_MAGIC)] != NSL_MAGIC:
        raise NslDecodeError(f"Missing NSL header: {format_nsl_bytes(raw, max_len=len(NSL_HEADER))!r}")

    version = raw[len(NSL_MAGIC)]
    if raw[: len(NSL_HEADER)] != NSL_HEADER:
        # Only version 1 is known; later versions are decoded as if they were 1.
        logger.warning("Unexpected NSL format version 0x%02X", version)

    commands: list[Command] = []
    offset = len(NSL_HEADER)
    while offset < len(raw):
        command = decode_command(raw, offset)
        logger.debug("Decoded offset %d: %s", offset, command)
        commands.append(command)
        offset += command.length

    return commands
