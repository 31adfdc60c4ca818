from __future__ import annotations

import logging

import pytest

from nslscript.domain.commands import CondEnd, End, LoopEnd, LoopSet, Set
from nslscript.domain.errors import NslStructureError
from nslscript.domain.operands import constant, memory_buffer, step_pitch, step_velocity
from nslscript.script import NslScript, new_script


def _hello_script() -> NslScript:
    script = new_script()
    script.add_command(Set(step_pitch(0), constant(36)))
    script.add_command(Set(step_velocity(0), constant(100)))
    script.add_command(End())
    return script


def test_hello_script_encoding():
    code = _hello_script().code()
    assert code == bytes(
        [
            0x4E, 0x53, 0x4C, 0x01,
            0xA1, 0x02, 0x00, 0x00, 0x24,
            0xA1, 0x03, 0x00, 0x00, 0x64,
            0xFF,
        ]
    )


def test_hello_script_listing_has_one_line_per_command():
    lines = _hello_script().listing().splitlines()
    assert lines == [
        "4E 53 4C 01",
        "A1 02 00 00 24",
        "A1 03 00 00 64",
        "FF",
    ]


def test_empty_script_is_header_only():
    script = NslScript()
    assert len(script) == 0
    assert script.code() == b"NSL\x01"
    assert script.listing() == "4E 53 4C 01\n"


def test_code_is_deterministic_and_non_consuming():
    script = _hello_script()
    first = script.code()
    assert script.code() == first
    assert len(script) == 3


def test_code_reflects_appends_between_calls():
    script = NslScript()
    script.add_command(LoopSet(constant(4)))
    before = script.code()
    script.add_command(LoopEnd())
    after = script.code()
    assert after == before + b"\xc1"


def test_order_is_preserved():
    cmds = [Set(memory_buffer(i), constant(i)) for i in range(10)]
    script = NslScript()
    script.add_commands(cmds)

    assert script.commands == tuple(cmds)
    assert list(script) == cmds
    lines = script.listing().splitlines()[1:]
    assert lines == [f"A1 06 {i:02X} 00 {i:02X}" for i in range(10)]


def test_commands_snapshot_is_read_only():
    script = _hello_script()
    snapshot = script.commands
    script.add_command(CondEnd())
    assert len(snapshot) == 3
    assert len(script.commands) == 4


def test_commands_after_end_are_kept(caplog):
    script = _hello_script()
    with caplog.at_level(logging.DEBUG, logger="nslscript.script"):
        script.add_command(End())
    assert script.code().endswith(b"\xff\xff")
    assert any("after End" in rec.getMessage() for rec in caplog.records)


def test_add_command_rejects_non_commands():
    script = NslScript()
    with pytest.raises(NslStructureError):
        script.add_command(constant(1))  # type: ignore[arg-type]
    assert len(script) == 0


def test_export_writes_binary_and_overwrites(tmp_path):
    path = tmp_path / "hello.nsl"
    path.write_bytes(b"old content that is longer than the script")

    script = _hello_script()
    script.export(path)
    first = path.read_bytes()
    script.export(str(path))

    assert first == script.code()
    assert path.read_bytes() == first


def test_export_listing(tmp_path):
    path = tmp_path / "hello.txt"
    script = _hello_script()
    script.export_listing(path)
    assert path.read_text(encoding="utf-8") == script.listing()


def test_export_propagates_os_errors(tmp_path):
    missing = tmp_path / "no_such_dir" / "out.nsl"
    with pytest.raises(OSError):
        _hello_script().export(missing)
    assert not missing.exists()


def test_import_file_round_trip(tmp_path):
    path = tmp_path / "hello.nsl"
    script = _hello_script()
    script.export(path)

    loaded = NslScript.import_file(path)
    assert loaded.commands == script.commands


def test_describe_logs_offsets(caplog):
    with caplog.at_level(logging.INFO, logger="nslscript.script"):
        _hello_script().describe()
    messages = [rec.getMessage() for rec in caplog.records]
    assert messages == [
        ">> 0004 Set(step_pitch(0), constant(36))",
        ">> 0009 Set(step_velocity(0), constant(100))",
        ">> 000E End()",
    ]
