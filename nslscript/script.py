from __future__ import annotations

from collections.abc import Iterable, Iterator
import logging
from pathlib import Path

from nslscript.domain.commands import Command, End
from nslscript.domain.errors import NslStructureError
from nslscript.protocol.codec import decode_commands, encode_commands, format_nsl_bytes
from nslscript.protocol.codes import NSL_HEADER


logger = logging.getLogger(__name__)


class NslScript:
    """An ordered, append-only list of NSL commands.

    Append order is execution order on the device. Encoding never consumes or
    freezes the script: `code()` can be called any number of times, between
    appends, and always reflects the commands present at that moment.

    A script is not required to finish with `End`, and commands after `End`
    are kept; the firmware stops at the first `End` it reaches.

    `Set` and the arithmetic commands only accept a step sequence or memory
    buffer slot as destination. That rule belongs to this library, not to the
    firmware, so `from_bytes` refuses some files the device would load.
    """

    def __init__(self, commands: Iterable[Command] = ()) -> None:
        self._commands: list[Command] = []
        self.add_commands(commands)

    @property
    def commands(self) -> tuple[Command, ...]:
        return tuple(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(tuple(self._commands))

    def __repr__(self) -> str:
        return f"NslScript(commands={len(self._commands)})"

    def add_command(self, command: Command) -> None:
        if not isinstance(command, Command):
            raise NslStructureError(f"Expected a Command, got {type(command).__name__}")

        if self._commands and isinstance(self._commands[-1], End):
            logger.debug("Appending %s after End; the device will not reach it", command)
        self._commands.append(command)

    def add_commands(self, commands: Iterable[Command]) -> None:
        for command in commands:
            self.add_command(command)

    def code(self) -> bytes:
        """Encode to the binary format the NGEN loads: `NSL\\x01` + instructions."""

        logger.debug("Encoding NSL script with %d commands", len(self._commands))
        return encode_commands(self._commands)

    def listing(self) -> str:
        """Hex listing: the header line, then one line per command."""

        lines = [format_nsl_bytes(NSL_HEADER)]
        lines.extend(format_nsl_bytes(command.code()) for command in self._commands)
        return "\n".join(lines) + "\n"

    def describe(self) -> None:
        """Log every command at INFO."""

        offset = len(NSL_HEADER)
        for command in self._commands:
            logger.info(">> %04X %s", offset, command)
            offset += command.length

    def export(self, path: Path | str) -> None:
        """Write the encoded script to `path`, replacing any existing file.

        OS errors propagate unchanged; nothing is retried.
        """

        code = self.code()
        Path(path).write_bytes(code)
        logger.info("Exported NSL script to %s (%d bytes, %d commands)", path, len(code), len(self))

    def export_listing(self, path: Path | str) -> None:
        Path(path).write_text(self.listing(), encoding="utf-8")
        logger.info("Exported NSL listing to %s", path)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> NslScript:
        return cls(decode_commands(data))

    @classmethod
    def import_file(cls, path: Path | str) -> NslScript:
        data = Path(path).read_bytes()
        logger.info("Read %d bytes from %s", len(data), path)
        return cls.from_bytes(data)


def new_script() -> NslScript:
    return NslScript()
