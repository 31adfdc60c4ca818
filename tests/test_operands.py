from __future__ import annotations

import pytest

from nslscript.domain.errors import NslAddressingError, NslRangeError, NslStructureError
from nslscript.domain.operands import (
    BufferRef,
    Operand,
    SourceKind,
    buffer,
    constant,
    decode_value_byte,
    full_scale,
    memory_buffer,
    params,
    random,
    random_note,
    scale,
    step_density,
    step_length,
    step_pitch,
    step_velocity,
)


def test_constant_encodes_as_source_byte_then_value():
    assert constant(36).code() == bytes([0x00, 0x24])
    assert constant(0).code() == bytes([0x00, 0x00])


def test_every_constructor_uses_its_source_code():
    cases = [
        (constant, 0x00),
        (random, 0x01),
        (step_pitch, 0x02),
        (step_velocity, 0x03),
        (step_length, 0x04),
        (step_density, 0x05),
        (memory_buffer, 0x06),
        (params, 0x07),
        (scale, 0x08),
        (full_scale, 0x09),
        (random_note, 0x0A),
    ]
    for ctor, code in cases:
        assert ctor(1).code() == bytes([code, 0x01])


def test_buffer_reference_sets_high_bit():
    assert step_pitch(buffer(0)).code() == bytes([0x02, 0x80])
    assert scale(buffer(1)).code() == bytes([0x08, 0x81])
    assert constant(buffer(31)).code() == bytes([0x00, 0x9F])


def test_constant_range_boundary():
    assert constant(127).value == 127
    with pytest.raises(NslRangeError):
        constant(128)
    with pytest.raises(NslRangeError):
        constant(-1)


def test_step_index_boundary():
    for ctor in (step_pitch, step_velocity, step_length, step_density):
        assert ctor(31).code()[1] == 31
        with pytest.raises(NslAddressingError):
            ctor(32)


def test_kind_specific_limits():
    assert params(3).value == 3
    with pytest.raises(NslAddressingError):
        params(4)

    assert random_note(100).value == 100
    with pytest.raises(NslRangeError):
        random_note(101)

    with pytest.raises(NslAddressingError):
        memory_buffer(32)


def test_buffer_slot_boundary():
    assert buffer(31).code() == 0x9F
    with pytest.raises(NslAddressingError):
        buffer(32)
    with pytest.raises(NslAddressingError):
        buffer(-1)


def test_errors_are_value_errors():
    # Callers that only know the builtin exceptions still catch these.
    with pytest.raises(ValueError):
        constant(200)
    with pytest.raises(ValueError):
        step_pitch(40)


def test_non_int_values_are_rejected():
    with pytest.raises(NslStructureError):
        constant("36")  # type: ignore[arg-type]
    with pytest.raises(NslStructureError):
        step_pitch(True)  # type: ignore[arg-type]
    with pytest.raises(NslStructureError):
        Operand("pitch", 1)  # type: ignore[arg-type]


def test_operands_are_immutable_and_comparable():
    op = step_velocity(3)
    with pytest.raises(AttributeError):
        op.value = 4  # type: ignore[misc]
    assert op == step_velocity(3)
    assert hash(op) == hash(step_velocity(3))
    assert op != step_pitch(3)


def test_decode_value_byte():
    assert decode_value_byte(0x24) == 36
    assert decode_value_byte(0x81) == BufferRef(1)


def test_source_kind_lookup():
    assert SourceKind.from_code(0x02) is SourceKind.STEP_PITCH
    assert SourceKind.from_code(0x0B) is None
    assert SourceKind.MEMORY_BUFFER.is_writable
    assert not SourceKind.CONSTANT.is_writable
    assert SourceKind.PARAMS.is_address
    assert not SourceKind.PARAMS.is_writable


def test_str_is_readable():
    assert str(step_pitch(0)) == "step_pitch(0)"
    assert str(constant(buffer(2))) == "constant(buffer(2))"
